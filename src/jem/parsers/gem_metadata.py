"""Parser for gem metadata descriptors (metadata.gz / YAML)."""

import gzip
import os
import tarfile
import zlib
from pathlib import Path
from typing import IO, Any

import yaml

from jem.config import METADATA_MEMBER
from jem.errors import DecodeError, DecodeErrorKind
from jem.logging_config import get_logger
from jem.models.gem import Gem

logger = get_logger(__name__)


class GemMetadataLoader(yaml.SafeLoader):
    """Safe YAML loader that reads Ruby-tagged nodes as plain data.

    RubyGems dumps its specification with local tags such as
    ``!ruby/object:Gem::Specification``. They are constructed as ordinary
    mappings, sequences and scalars; no objects are instantiated.

    Plain scalars keep their source text, the way RubyGems reads them back:
    ``1.10`` stays ``"1.10"`` and ``2020-01-01`` stays a string. Only null
    (and the ``<<`` merge key) are still resolved implicitly.
    """

    yaml_implicit_resolvers = {
        first: [
            (tag, regexp)
            for tag, regexp in resolvers
            if tag in ("tag:yaml.org,2002:null", "tag:yaml.org,2002:merge")
        ]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def _construct_local_tag(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.MappingNode):
        return loader.construct_mapping(node, deep=True)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_scalar(node)


GemMetadataLoader.add_multi_constructor("!", _construct_local_tag)


def decode_stream(stream: IO[bytes], source: str = "<stream>") -> Gem:
    """Decode gem metadata from an already-open stream.

    The stream is read to the end but not closed; the caller owns it.

    Args:
        stream: Binary (or text) stream holding the YAML document
        source: Description of the stream used in error messages

    Returns:
        Decoded Gem

    Raises:
        DecodeError: On read failure, malformed YAML, or a document that
            does not describe a gem
    """
    try:
        data = yaml.load(stream, Loader=GemMetadataLoader)
    except (OSError, EOFError, zlib.error) as e:
        raise DecodeError(
            f"Failed to read gem metadata from {source}: {e}", DecodeErrorKind.IO, source
        ) from e
    except yaml.YAMLError as e:
        raise DecodeError(
            f"Malformed gem metadata in {source}: {e}", DecodeErrorKind.SYNTAX, source
        ) from e

    if data is None:
        raise DecodeError(f"Gem metadata in {source} is empty", DecodeErrorKind.SYNTAX, source)
    if not isinstance(data, dict):
        raise DecodeError(
            f"Gem metadata in {source} must be a mapping, got {type(data).__name__}",
            DecodeErrorKind.SCHEMA,
            source,
        )

    try:
        return Gem.from_dict(data)
    except ValueError as e:
        raise DecodeError(
            f"Invalid gem metadata in {source}: {e}", DecodeErrorKind.SCHEMA, source
        ) from e


def decode_file(file: Path) -> Gem | None:
    """Decode gem metadata from a file.

    Args:
        file: Path to a plain YAML metadata file

    Returns:
        Decoded Gem, or None if the file does not exist
    """
    if not file.exists():
        logger.debug(f"No gem metadata at {file}")
        return None

    try:
        with open(file, "rb") as stream:
            return decode_stream(stream, source=str(file))
    except OSError as e:
        raise DecodeError(
            f"Failed to read gem metadata from {file}: {e}", DecodeErrorKind.IO, str(file)
        ) from e


def decode_path(path: str) -> Gem | None:
    """Decode gem metadata from a path string. See decode_file."""
    return decode_file(Path(path))


def decode_gem_archive(archive: Path) -> Gem | None:
    """Decode the metadata.gz member of a packaged .gem archive.

    Args:
        archive: Path to the .gem file (a tar archive)

    Returns:
        Decoded Gem, or None if the archive does not exist

    Raises:
        DecodeError: If the archive is unreadable, has no metadata member,
            or the metadata itself fails to decode
    """
    if not archive.exists():
        logger.debug(f"No gem archive at {archive}")
        return None

    source = f"{archive}:{METADATA_MEMBER}"
    try:
        with tarfile.open(archive, "r") as tar:
            try:
                member = tar.getmember(METADATA_MEMBER)
            except KeyError as e:
                raise DecodeError(
                    f"Gem archive {archive} has no {METADATA_MEMBER}",
                    DecodeErrorKind.IO,
                    str(archive),
                ) from e

            extracted = tar.extractfile(member)
            if extracted is None:
                raise DecodeError(
                    f"{METADATA_MEMBER} in {archive} is not a regular file",
                    DecodeErrorKind.IO,
                    str(archive),
                )

            logger.debug(f"Reading {source}")
            with extracted, gzip.GzipFile(fileobj=extracted) as stream:
                return decode_stream(stream, source=source)
    except (OSError, tarfile.TarError) as e:
        raise DecodeError(
            f"Failed to read gem archive {archive}: {e}", DecodeErrorKind.IO, str(archive)
        ) from e


def decode(source: object) -> Gem | None:
    """Decode gem metadata from a path string, path object, or open stream.

    Unrecognized source types yield None, the same as a missing file.
    """
    if isinstance(source, str):
        return decode_path(source)
    if isinstance(source, os.PathLike):
        return decode_file(Path(source))
    if hasattr(source, "read"):
        return decode_stream(source)  # type: ignore[arg-type]
    return None
