from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    COMMAND_LINE = "command-line"
    PARSING = "parsing"
    IMAGE_FORMAT = "image-format"
    IO = "io"


class StitchError(RuntimeError):
    """
    Base class for every failure of a stitch run.

    Subclasses pin `kind`, so callers can branch either on the exception type
    or on `err.kind`. Nothing is retried: the error travels to the CLI, which
    renders it and exits non-zero.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CommandLineError(StitchError):
    """Coordinate counts do not match the image count, or an input file is missing."""

    kind = ErrorKind.COMMAND_LINE


class ParsingError(StitchError):
    """A coordinate is not a non-negative 64-bit integer."""

    kind = ErrorKind.PARSING


class ImageFormatError(StitchError):
    """An input file exists but Pillow cannot decode it."""

    kind = ErrorKind.IMAGE_FORMAT


class OutputIOError(StitchError):
    """The output canvas could not be encoded or written."""

    kind = ErrorKind.IO
