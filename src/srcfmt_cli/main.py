import logging
from pathlib import Path
from typing import List, Optional

import typer
from srcfmt.errors import FatalError, InvalidArgumentError
from srcfmt.models import FormatterConfiguration
from srcfmt.registry import create_formatters
from srcfmt.traversal import TraversalEngine

from .config import DEFAULT_CONFIG_FILE, load_project_settings, parse_line_separator, resolve_configuration

logger = logging.getLogger(__name__)

EXIT_FATAL = 2
EXIT_MISSING_PATH = 255

app = typer.Typer(
    help="Apply source formatters to a file or to every file of a directory tree",
    add_completion=False,
    rich_markup_mode=None,
    context_settings={"help_option_names": []},
)


def show_help(ctx: typer.Context) -> None:
    typer.echo(ctx.get_help())
    typer.echo()
    typer.echo("Available source formatters : ")
    for fmt in create_formatters(FormatterConfiguration()):
        typer.echo(f"\t* {fmt.name} ({fmt.short_description})")


def _help_callback(ctx: typer.Context, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        show_help(ctx)
        raise typer.Exit()


@app.command(context_settings={"help_option_names": []})
def run(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="File or directory to format", show_default=False),
    conf: Optional[str] = typer.Option(
        None, "-c", "--conf", metavar="eclipseConf", help="Eclipse configuration file to use"
    ),
    level: Optional[str] = typer.Option(None, "-l", "--level", metavar="javaVersion", help="Source level"),
    header: Optional[Path] = typer.Option(None, "-H", "--header", metavar="txtFile", help="Source file header"),
    encoding: Optional[str] = typer.Option(None, "-e", "--encoding", metavar="charset", help="Source encoding"),
    linesep: Optional[str] = typer.Option(
        None, "-s", "--linesep", metavar="crlf_value", help="Line separator: lf, cr or crlf"
    ),
    jobs: Optional[int] = typer.Option(None, "-j", "--jobs", help="Number of files formatted in parallel"),
    exclude: Optional[List[str]] = typer.Option(
        None, "-x", "--exclude", help="Glob pattern of files or directories to leave alone"
    ),
    config_file: Path = typer.Option(DEFAULT_CONFIG_FILE, "--config-file", help="Path to config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
    show_help_: bool = typer.Option(
        False,
        "-h",
        "--help",
        is_eager=True,
        expose_value=False,
        callback=_help_callback,
        help="Shows this help",
    ),
):
    """Format a Java file, or every Java file below a directory, in place"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if linesep is not None:
            parse_line_separator(linesep)

        if path is None:
            typer.echo("Missing file or directory parameter.")
            show_help(ctx)
            raise typer.Exit(code=EXIT_MISSING_PATH)

        project = load_project_settings(config_file)
        config = resolve_configuration(
            conf=conf, level=level, header=header, encoding=encoding, linesep=linesep, project=project
        )
        formatters = create_formatters(config)

        workers = jobs if jobs is not None else (project.jobs or 1)
        if workers < 1:
            raise InvalidArgumentError("jobs : must be at least 1")

        logger.debug("Registered formatters : %s", ", ".join(f.name for f in formatters))
        engine = TraversalEngine(
            config, formatters, jobs=workers, exclude=[*project.exclude, *(exclude or [])]
        )
        summary = engine.visit(path)
    except FatalError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_FATAL)

    for outcome in summary.failures:
        typer.echo(f"FAILED: {outcome.path} - {outcome.error}", err=True)

    typer.echo(
        f"{summary.visited} files visited: {summary.changed} changed, {summary.unchanged} unchanged, "
        f"{summary.skipped} skipped, {summary.failed} failed"
    )

    if summary.exit_code:
        raise typer.Exit(code=summary.exit_code)


if __name__ == "__main__":
    app()
