"""Exceptions raised while decoding gem metadata and rendering gemspecs."""

from enum import Enum


class JemError(Exception):
    """Base class for jem failures."""


class DecodeErrorKind(Enum):
    """Cause of a decode failure."""

    IO = "io"
    SYNTAX = "syntax"
    SCHEMA = "schema"


class DecodeError(JemError):
    """Gem metadata could not be read or parsed."""

    def __init__(self, message: str, kind: DecodeErrorKind, source: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.source = source


class RenderError(JemError):
    """A gem record could not be rendered as a gemspec."""
