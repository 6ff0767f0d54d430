"""Root CLI application for apkbadge."""

import typer

from apkbadge import __version__
from apkbadge.cli import apk
from apkbadge.utils.log import setup_logging

app = typer.Typer(
    name="apkbadge",
    help="Read package metadata, icons and signatures from Android APKs.",
    no_args_is_help=True,
)

# Register subcommands
app.add_typer(apk.app, name="apk", help="Inspect APK files")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apkbadge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log what apkbadge is doing to stderr.",
    ),
) -> None:
    """apkbadge - Android package metadata extractor."""
    setup_logging("WARNING", debug=verbose)


if __name__ == "__main__":
    app()
