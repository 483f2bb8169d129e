from __future__ import annotations

from enum import Enum


class ResizeError(Exception):
    """
    Base class for every failure the resizer reports.

    Each error carries a short human-readable summary plus the underlying
    cause, printed as two lines:

        <message>
        Reason: <reason>
    """

    def __init__(self, message: str, reason: object = "") -> None:
        super().__init__(message)
        self.message = message
        self.reason = str(reason)

    def describe(self) -> str:
        return f"{self.message}\nReason: {self.reason}"

    def __str__(self) -> str:
        return self.describe()


class ArgumentError(ResizeError):
    pass


class DimensionError(ResizeError):
    """Malformed WIDTHxHEIGHT string."""


class InvalidDimensionsFormat(DimensionError):
    pass


class InvalidWidth(DimensionError):
    pass


class InvalidHeight(DimensionError):
    pass


class OpenErrorKind(str, Enum):
    IO = "io"
    UNSUPPORTED = "unsupported"
    DECODE = "decode"
    ENCODE = "encode"


class OpenError(ResizeError):
    def __init__(self, message: str, reason: object = "", kind: OpenErrorKind = OpenErrorKind.IO) -> None:
        super().__init__(message, reason)
        self.kind = kind


class SaveError(ResizeError):
    pass


class DirectoryCreateError(ResizeError):
    pass


class DirectoryReadError(ResizeError):
    pass
