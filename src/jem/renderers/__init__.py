"""Renderers that turn decoded gem metadata into text documents."""

from jem.renderers.gemspec import gemspec_filename, render_gemspec, sanitize

__all__ = ["gemspec_filename", "render_gemspec", "sanitize"]
