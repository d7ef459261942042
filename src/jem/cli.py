"""Command-line interface for jem."""

import gzip
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from jem.config import GEM_SUFFIX, GZIP_MAGIC, __version__
from jem.console import console, success, warning
from jem.errors import JemError
from jem.logging_config import get_logger, setup_logging
from jem.models.gem import Gem
from jem.parsers.gem_metadata import decode_file, decode_gem_archive, decode_stream
from jem.renderers.gemspec import gemspec_filename, render_gemspec

logger = get_logger(__name__)


def _is_gzip(path: Path) -> bool:
    try:
        with open(path, "rb") as f:
            return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC
    except OSError:
        return False


class JemCLI:
    """Command-line interface orchestrator for jem."""

    def load_gem(self, source: Path) -> Gem | None:
        """Decode gem metadata from a .gem archive, metadata.gz, or plain YAML.

        Args:
            source: Path given on the command line

        Returns:
            Decoded Gem, or None if the source does not exist

        Raises:
            DecodeError: If the metadata cannot be read or parsed
        """
        if source.suffix == GEM_SUFFIX:
            return decode_gem_archive(source)

        if source.is_file() and _is_gzip(source):
            logger.debug(f"Reading gzipped metadata from {source}")
            with gzip.open(source, "rb") as stream:
                return decode_stream(stream, source=str(source))

        return decode_file(source)

    def resolve_output(self, gem: Gem, output: Path, force: bool) -> Path:
        """Determine the gemspec file to write.

        Args:
            gem: Decoded gem, used to name the file inside a directory
            output: Output file, or an existing directory
            force: Allow overwriting an existing file

        Returns:
            Path of the gemspec file

        Raises:
            FileExistsError: If the file exists and force is not set
        """
        target = output / gemspec_filename(gem) if output.is_dir() else output

        if target.exists():
            if not force:
                raise FileExistsError(f"{target} already exists (use --force to overwrite)")
            warning(f"Overwriting {escape(str(target))}")

        return target

    def execute_gemspec(self, source: Path, output: Path | None, force: bool) -> int:
        """Render the gemspec stub for a source.

        Args:
            source: Gem archive or metadata file
            output: Optional output file or directory (stdout when None)
            force: Overwrite an existing output file

        Returns:
            Exit code (0 for success, 1 for error)
        """
        try:
            gem = self.load_gem(source)
            if gem is None:
                logger.error(f"No gem metadata found at {source}")
                return 1

            gemspec = render_gemspec(gem)

            if output is None:
                click.echo(gemspec, nl=False)
                return 0

            target = self.resolve_output(gem, output, force)
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(gemspec)

            success(f"Generated: {escape(str(target))}")
            return 0

        except JemError as e:
            logger.error(str(e))
            logger.debug("Traceback:", exc_info=True)
            return 1
        except OSError as e:
            logger.error(f"Error: {e}")
            logger.debug("Traceback:", exc_info=True)
            return 1

    def execute_info(self, source: Path) -> int:
        """Print decoded gem metadata as a table.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        try:
            gem = self.load_gem(source)
        except (JemError, OSError) as e:
            logger.error(str(e))
            return 1

        if gem is None:
            logger.error(f"No gem metadata found at {source}")
            return 1

        table = Table(title=escape(gem.full_name))
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        for key, value in gem.to_dict().items():
            if key == "version":
                value = gem.version.version if gem.version else None
            if isinstance(value, list):
                value = ", ".join(str(item) for item in value)
            table.add_row(key, "" if value is None else escape(str(value)))

        console.print(table)
        return 0


@click.group()
@click.version_option(__version__, prog_name="jem")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output (DEBUG level)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Show only warnings and errors",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Explicit log level (overrides -v/-q)",
)
def cli(verbose, quiet, log_level):
    """Convert gem metadata into Ruby gemspec stubs."""
    if sum([verbose, quiet, log_level is not None]) > 1:
        raise click.UsageError("--verbose, --quiet, and --log-level are mutually exclusive")

    setup_logging(verbose=verbose, quiet=quiet, log_level=log_level)


@cli.command(name="gemspec")
@click.argument("source", type=click.Path(path_type=Path))  # type: ignore[type-var]
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),  # type: ignore[type-var]
    default=None,
    help="Output file, or directory to write NAME-VERSION.gemspec into (default: stdout)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing output file")
def gemspec(source, output, force):
    """Render the gemspec stub for a .gem archive or metadata file."""
    exit_code = JemCLI().execute_gemspec(source=source, output=output, force=force)

    raise SystemExit(exit_code)


@cli.command(name="info")
@click.argument("source", type=click.Path(path_type=Path))  # type: ignore[type-var]
def info(source):
    """Show the metadata decoded from a .gem archive or metadata file."""
    exit_code = JemCLI().execute_info(source=source)

    raise SystemExit(exit_code)


def main():
    """Entry point for jem command."""
    cli()


if __name__ == "__main__":
    main()
