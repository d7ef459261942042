"""jem: Convert gem metadata descriptors into Ruby gemspec stubs."""

from jem.config import __version__
from jem.errors import DecodeError, DecodeErrorKind, JemError, RenderError
from jem.logging_config import get_logger
from jem.models.gem import Gem, Version
from jem.parsers.gem_metadata import (
    decode,
    decode_file,
    decode_gem_archive,
    decode_path,
    decode_stream,
)
from jem.renderers.gemspec import render_gemspec

__all__ = [
    "__version__",
    "DecodeError",
    "DecodeErrorKind",
    "Gem",
    "JemError",
    "RenderError",
    "Version",
    "decode",
    "decode_file",
    "decode_gem_archive",
    "decode_path",
    "decode_stream",
    "get_logger",
    "render_gemspec",
]
