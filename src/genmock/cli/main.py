"""genmock CLI - generate a ut-based mock for a Go interface."""

from __future__ import annotations

import click
from rich.markup import escape

from genmock import __version__
from genmock.config.models import GenerateOptions
from genmock.core.errors import ConfigError, GenmockError
from genmock.core.logging import configure_logging
from genmock.core.progress import pluralize, status
from genmock.mockgen.generator import generate_mock, write_mock


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="genmock")
@click.option(
    "--package",
    "package",
    required=True,
    help="The package that contains the interface definition. "
    "You can also provide a path to a Go file containing the interface.",
)
@click.option(
    "--interface",
    "interface",
    required=True,
    help="The interface that we should create a mock for.",
)
@click.option(
    "--mock-package",
    "mock_package",
    required=True,
    help="Package name to use for the mock file.",
)
@click.option(
    "--outfile",
    default=None,
    help="The file to create the mock in. By default will use mock<interface>.go "
    "in the current directory.",
)
@click.option(
    "--mock",
    "mock_name",
    default=None,
    help="The name for the mock class. By default will use Mock<interface>.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    package: str,
    interface: str,
    mock_package: str,
    outfile: str | None,
    mock_name: str | None,
    verbose: bool,
) -> None:
    """Generate a mock implementation of a Go interface."""
    configure_logging(level="DEBUG" if verbose else "WARNING")

    try:
        options = GenerateOptions.build(
            package=package,
            interface=interface,
            mock_package=mock_package,
            outfile=outfile,
            mock_name=mock_name,
        )
    except ConfigError as e:
        raise click.UsageError(e.message, ctx=ctx) from e

    try:
        mock = generate_mock(options)
        write_mock(mock, options.outfile)
    except GenmockError as e:
        status(escape(e.message), style="error")
        ctx.exit(e.exit_code)

    for skipped in mock.skipped:
        status(escape(skipped.message), style="warning")
    if not mock.complete:
        status("Mock is incomplete: skipped methods are missing", style="warning")

    status(
        f"Wrote {escape(str(options.outfile))} "
        f"({pluralize(mock.methods, 'method')} for {escape(mock.interface.name)})",
        style="success",
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
