"""Configuration constants for jem."""

# Version
__version__ = "0.1.0"

# Gem archive layout
METADATA_MEMBER = "metadata.gz"
"""Name of the gzipped YAML metadata member inside a .gem archive"""

GEM_SUFFIX = ".gem"
"""File suffix of packaged gem archives"""

GZIP_MAGIC = b"\x1f\x8b"
"""Leading bytes of a gzip stream"""

# Gem defaults
DEFAULT_PLATFORM = "ruby"
"""Platform RubyGems assigns to pure-Ruby gems"""

# Rendering
GEMSPEC_SUFFIX = ".gemspec"
"""File suffix for rendered specification stubs"""

GENERATOR_NAME = "jem"
GENERATOR_URL = "https://github.com/jruby-gradle/jem"
