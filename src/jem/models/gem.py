"""Gem metadata models."""

from dataclasses import dataclass, field
from typing import Any

from jem.config import DEFAULT_PLATFORM


def _as_str(key: str, value: Any) -> str | None:
    """Coerce a scalar to a string, rejecting mappings and sequences."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")


def _as_str_list(key: str, value: Any) -> list[str]:
    """Coerce a sequence of scalars to a list of strings. Null becomes empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a sequence, got {type(value).__name__}")
    if any(item is None for item in value):
        raise ValueError(f"'{key}' must not contain null entries")
    return [_as_str(key, item) for item in value]


def _as_int(key: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"'{key}' must be an integer, got {value!r}") from e


def _as_email(value: Any) -> Any:
    """Keep strings and string lists as-is; anything else stays the raw value."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return value


@dataclass(frozen=True)
class Version:
    """Gem version, stored the way RubyGems nests it (``version: {version: ...}``)."""

    version: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Version":
        """Create Version from a decoded mapping."""
        if not isinstance(data, dict):
            raise ValueError(
                f"'version' must be a mapping with a 'version' key, got {type(data).__name__}"
            )
        return cls(version=_as_str("version.version", data.get("version")))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"version": self.version}


@dataclass(frozen=True)
class Gem:
    """Metadata enumerated by a gem's metadata descriptor.

    Only the fields below are read from the descriptor; any other key
    (dependencies, date, cert_chain, ...) is dropped on decode.
    """

    name: str | None = None
    """Gem name (e.g., 'rake')"""

    version: Version | None = None
    """Nested version record"""

    description: str | None = None

    platform: str = DEFAULT_PLATFORM
    """Target platform tag (e.g., 'ruby', 'java')"""

    email: Any = None
    """Author email: a string, a list of strings, or whatever the descriptor holds"""

    homepage: str | None = None

    authors: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    test_files: list[str] = field(default_factory=list)
    executables: list[str] = field(default_factory=list)

    bindir: str | None = None

    require_paths: list[str] = field(default_factory=list)
    """Directories added to the load path when the gem is activated"""

    licenses: list[str] = field(default_factory=list)

    specification_version: int | None = None
    """Version of the gemspec format the descriptor was written with"""

    rubygems_version: str | None = None
    """RubyGems version that built the gem"""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Gem":
        """Create Gem from a decoded metadata mapping.

        Raises:
            ValueError: If a known field has the wrong shape
        """
        version = data.get("version")
        return cls(
            name=_as_str("name", data.get("name")),
            version=Version.from_dict(version) if version is not None else None,
            description=_as_str("description", data.get("description")),
            platform=_as_str("platform", data.get("platform")) or DEFAULT_PLATFORM,
            email=_as_email(data.get("email")),
            homepage=_as_str("homepage", data.get("homepage")),
            authors=_as_str_list("authors", data.get("authors")),
            files=_as_str_list("files", data.get("files")),
            test_files=_as_str_list("test_files", data.get("test_files")),
            executables=_as_str_list("executables", data.get("executables")),
            bindir=_as_str("bindir", data.get("bindir")),
            require_paths=_as_str_list("require_paths", data.get("require_paths")),
            licenses=_as_str_list("licenses", data.get("licenses")),
            specification_version=_as_int(
                "specification_version", data.get("specification_version")
            ),
            rubygems_version=_as_str("rubygems_version", data.get("rubygems_version")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using the descriptor's key names."""
        return {
            "name": self.name,
            "version": self.version.to_dict() if self.version else None,
            "description": self.description,
            "platform": self.platform,
            "email": self.email,
            "homepage": self.homepage,
            "authors": self.authors,
            "files": self.files,
            "test_files": self.test_files,
            "executables": self.executables,
            "bindir": self.bindir,
            "require_paths": self.require_paths,
            "licenses": self.licenses,
            "specification_version": self.specification_version,
            "rubygems_version": self.rubygems_version,
        }

    @property
    def full_name(self) -> str:
        """RubyGems full name: ``name-version``, plus ``-platform`` when not 'ruby'."""
        version = self.version.version if self.version else None
        full_name = f"{self.name}-{version}"
        if self.platform != DEFAULT_PLATFORM:
            full_name = f"{full_name}-{self.platform}"
        return full_name
