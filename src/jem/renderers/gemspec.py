"""Gemspec stub renderer.

Produces the stub layout RubyGems writes into ``specifications/``, with the
header line RubyGems reads back without evaluating the file.
"""

import json
import os
import re
from typing import Any

from jem.config import GEMSPEC_SUFFIX, GENERATOR_NAME, GENERATOR_URL
from jem.errors import RenderError
from jem.models.gem import Gem

# Ruby interpolates "#{...}", "#@ivar" and "#$gvar" inside double-quoted strings
RUBY_INTERPOLATION = re.compile(r"#(?=[{@$])")


def sanitize(value: Any) -> str:
    """Convert a field value into a safe Ruby literal.

    Compact JSON is a valid Ruby literal for strings, numbers, arrays and
    hashes. Interpolation markers are escaped so string contents stay inert.

    Raises:
        RenderError: If the value cannot be serialized
    """
    try:
        literal = json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise RenderError(f"Cannot render {value!r} as a Ruby literal: {e}") from e

    return RUBY_INTERPOLATION.sub(r"\\#", literal)


def _stub_value(label: str, value: Any) -> str:
    if not isinstance(value, str):
        raise RenderError(f"Gem {label} must be a string, got {value!r}")
    if "\n" in value or "\r" in value:
        raise RenderError(f"Gem {label} must not contain line breaks: {value!r}")
    return value


def _stub_line(gem: Gem, version: str) -> str:
    require_paths = "\0".join(_stub_value("require path", path) for path in gem.require_paths)
    return " ".join(
        [
            "# stub:",
            _stub_value("name", gem.name),
            _stub_value("version", version),
            _stub_value("platform", gem.platform),
            require_paths,
        ]
    )


def render_gemspec(gem: Gem) -> str:
    """Render a gem record as a Ruby gemspec stub.

    Args:
        gem: Decoded gem metadata

    Returns:
        The stub text, every line terminated by the platform line separator

    Raises:
        RenderError: If name or version is missing, or a value cannot be
            rendered
    """
    if gem.name is None:
        raise RenderError("Gem metadata has no name")
    if gem.version is None or gem.version.version is None:
        raise RenderError(f"Gem metadata for {gem.name} has no version")

    version = gem.version.version
    lines = [
        "# -*- encoding: utf-8 -*-",
        "#",
        _stub_line(gem, version),
        "#",
        f"# NOTE: This specification was generated by `{GENERATOR_NAME}`",
        f"#  <{GENERATOR_URL}>",
        "",
        "Gem::Specification.new do |s|",
        f"  s.name = {sanitize(gem.name)}",
        f"  s.version = {sanitize(version)}",
        f"  s.description = {sanitize(gem.description)}",
        f"  s.homepage = {sanitize(gem.homepage)}",
        f"  s.authors = {sanitize(gem.authors)}",
        f"  s.email = {sanitize(gem.email)}",
        f"  s.licenses = {sanitize(gem.licenses)}",
        "",
        f"  s.platform = {sanitize(gem.platform)}",
        f"  s.require_paths = {sanitize(gem.require_paths)}",
        f"  s.executables = {sanitize(gem.executables)}",
        f"  s.rubygems_version = {sanitize(gem.rubygems_version)}",
        "end",
    ]

    return "".join(f"{line}{os.linesep}" for line in lines)


def gemspec_filename(gem: Gem) -> str:
    """File name RubyGems uses for an installed specification."""
    return f"{gem.full_name}{GEMSPEC_SUFFIX}"
