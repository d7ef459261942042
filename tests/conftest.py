"""Pytest configuration and fixtures for jem tests."""

import gzip
import io
import logging
import tarfile
from pathlib import Path

import pytest

RAKE_METADATA = """\
--- !ruby/object:Gem::Specification
name: rake
version: !ruby/object:Gem::Version
  version: 10.4.2
platform: ruby
authors:
- Hiroshi SHIBATA
- Eric Hodel
- Jim Weirich
autorequire:
bindir: bin
cert_chain: []
date: 2014-12-02 00:00:00.000000000 Z
dependencies:
- !ruby/object:Gem::Dependency
  name: minitest
  requirement: !ruby/object:Gem::Requirement
    requirements:
    - - "~>"
      - !ruby/object:Gem::Version
        version: '5.4'
  type: :development
  prerelease: false
  version_requirements: !ruby/object:Gem::Requirement
    requirements:
    - - "~>"
      - !ruby/object:Gem::Version
        version: '5.4'
description: Rake is a Make-like program implemented in Ruby.
email:
- hsbt@ruby-lang.org
- drbrain@segment7.net
executables:
- rake
extensions: []
extra_rdoc_files: []
files:
- History.rdoc
- bin/rake
- lib/rake.rb
homepage: https://github.com/ruby/rake
licenses:
- MIT
metadata: {}
post_install_message:
rdoc_options:
- "--main"
- README.rdoc
require_paths:
- lib
required_ruby_version: !ruby/object:Gem::Requirement
  requirements:
  - - ">="
    - !ruby/object:Gem::Version
      version: 1.9.3
rubyforge_project: rake
rubygems_version: 2.4.5
signing_key:
specification_version: 4
summary: Rake is a Make-like program implemented in Ruby
test_files:
- test/test_rake.rb
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration after each test.

    This ensures that tests which call setup_logging() don't affect
    other tests that rely on caplog fixture for log capture.
    """
    yield

    logger = logging.getLogger("jem")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def rake_metadata() -> str:
    """Metadata descriptor as RubyGems writes it for rake 10.4.2."""
    return RAKE_METADATA


@pytest.fixture
def metadata_file(tmp_path: Path, rake_metadata: str) -> Path:
    """Plain YAML metadata file on disk."""
    path = tmp_path / "metadata"
    path.write_text(rake_metadata, encoding="utf-8")
    return path


@pytest.fixture
def make_gem_archive(tmp_path: Path):
    """Factory building a .gem archive, optionally without metadata.gz."""

    def _make(metadata: str | None = RAKE_METADATA, filename: str = "rake-10.4.2.gem") -> Path:
        path = tmp_path / filename
        with tarfile.open(path, "w") as tar:
            members = {"data.tar.gz": gzip.compress(b"")}
            if metadata is not None:
                members["metadata.gz"] = gzip.compress(metadata.encode("utf-8"))

            for name, payload in members.items():
                info = tarfile.TarInfo(name)
                info.size = len(payload)
                tar.addfile(info, io.BytesIO(payload))

        return path

    return _make
