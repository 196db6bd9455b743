"""Click-based CLI for generating, exporting and diffing design tokens."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .colors import FINE_SCALE, generate_shades, shade_description
from .config import StudioConfig, load_config
from .errors import TokenStudioError, ValidationError, handle_exception
from .export import ExportOptions, export_css, export_json
from .generators import SCALES, generate_all
from .store import TokenStore
from .sync.diff import change_display_name, compute_diff, format_value
from .sync.messages import parse_host_snapshot
from .sync.models import ChangeType, PluginVariable
from .themes import ThemeRegistry
from .token_logging import setup_logging

CHANGE_MARKERS = {
    ChangeType.ADD: "+",
    ChangeType.UPDATE: "~",
    ChangeType.DELETE: "-",
}


def common_options(f: Any) -> Any:
    """Options shared by every command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    return f


def _setup(verbose: bool, quiet: bool, config: StudioConfig | None = None) -> None:
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        sys.exit(1)

    logging_settings = config.logging if config else None
    setup_logging(
        level=logging_settings.level if logging_settings else "INFO",
        quiet=quiet,
        verbose=verbose,
        log_file=logging_settings.log_file if logging_settings else None,
        log_format=logging_settings.log_format if logging_settings else "text",
    )


def _fail(error: Exception, verbose: bool) -> None:
    message, exit_code = handle_exception(
        error, use_color=sys.stderr.isatty(), verbose=verbose
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Token Studio - design token generation and host sync."""


@cli.command()
@click.argument("base_hex")
@click.option("--name", "-n", default="brand", help="Palette name")
@click.option(
    "--scale",
    type=click.Choice(sorted(SCALES)),
    default="fine",
    help="Shade scale",
)
@common_options
def palette(base_hex: str, name: str, scale: str, verbose: bool, quiet: bool) -> None:
    """Print every shade of BASE_HEX."""
    _setup(verbose, quiet)
    try:
        shades = generate_shades(base_hex, SCALES.get(scale, FINE_SCALE))
    except TokenStudioError as e:
        _fail(e, verbose)
        return

    for step, value in shades.items():
        if quiet:
            click.echo(f"{name}-{step} {value.hex}")
        else:
            click.echo(f"{name}-{step:<4} {value.hex}  {shade_description(name, step)}")


@cli.command()
@click.option(
    "--config", "config_path", type=click.Path(exists=True), help="Configuration file path"
)
@click.option("--output", "-o", type=click.Path(), help="Write the export to a file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "css"]),
    default=None,
    help="Export format (defaults to the configured format)",
)
@click.option(
    "--semantic/--no-semantic",
    default=True,
    help="Also generate semantic and component tokens",
)
@common_options
def generate(
    config_path: str | None,
    output: str | None,
    output_format: str | None,
    semantic: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Run every token pipeline and export the result."""
    _setup(verbose, quiet)
    try:
        config = load_config(Path.cwd(), Path(config_path) if config_path else None)
        _setup(verbose, quiet, config)

        store = TokenStore(settings=config.settings)
        registry = ThemeRegistry()
        for theme in config.themes:
            registry.create(**theme.model_dump())

        result = generate_all(
            store,
            registry.themes,
            config.generators,
            include_semantic=semantic,
            include_components=semantic,
            breakpoints=config.breakpoints.to_config(),
        )

        output_format = output_format or config.settings.export_format
        options = ExportOptions(
            format=output_format,
            separator=store.separator,
            case_style=config.settings.case_style,
        )
        if output_format == "css":
            rendered = export_css(store, options)
        else:
            rendered = json.dumps(export_json(store, options), indent=2) + "\n"
    except TokenStudioError as e:
        _fail(e, verbose)
        return

    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        if not quiet:
            click.echo(f"Wrote {len(store)} tokens to {output}")
    else:
        click.echo(rendered, nl=False)

    if not quiet and output:
        for pipeline, count in result.primitives.items():
            click.echo(f"  {pipeline}: {count}")
        reports = [("semantic", result.semantic), ("components", result.components)]
        reports.extend(result.responsive.items())
        for label, report in reports:
            if report is not None:
                click.echo(
                    f"  {label}: {report.created} created, {report.updated} updated, "
                    f"{len(report.placeholders)} placeholders"
                )


@cli.command()
@click.argument("local_json", type=click.Path(exists=True))
@click.argument("host_json", type=click.Path(exists=True))
@click.option("--collection", "-c", default=None, help="Collection name to report")
@click.option(
    "--include-deletes", is_flag=True, help="Report host-only variables as deletions"
)
@click.option("--json", "as_json", is_flag=True, help="Print the diff as JSON")
@common_options
def diff(
    local_json: str,
    host_json: str,
    collection: str | None,
    include_deletes: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Diff local variables (LOCAL_JSON) against a host snapshot (HOST_JSON).

    LOCAL_JSON holds a list of variables (or {"variables": [...]});
    HOST_JSON holds {"collection": {...}, "variables": [...]}.
    """
    _setup(verbose, quiet)
    try:
        local_data = _read_json(local_json)
        if isinstance(local_data, dict):
            local_data = local_data.get("variables", [])
        try:
            local = [PluginVariable.from_dict(item) for item in local_data]
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid local variable in {local_json}: {e}") from e

        host_collection, host_variables = parse_host_snapshot(_read_json(host_json))
    except TokenStudioError as e:
        _fail(e, verbose)
        return

    name = collection or (host_collection.name if host_collection else "Tokens")
    result = compute_diff(
        name, local, host_collection, host_variables, include_deletes=include_deletes
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    summary = result.summary
    click.echo(
        f"{name}: +{summary.add} ~{summary.update} -{summary.delete} "
        f"={summary.unchanged}"
    )
    if result.modes_to_add:
        click.echo(f"Modes to add: {', '.join(result.modes_to_add)}")
    if result.modes_to_remove:
        click.echo(f"Modes to remove: {', '.join(result.modes_to_remove)}")
    if quiet:
        return

    for change in result.changes:
        marker = CHANGE_MARKERS.get(change.type)
        if marker is None:
            continue
        display = change_display_name(change)
        if change.type is ChangeType.UPDATE:
            for mode_change in change.mode_changes:
                click.echo(
                    f"  {marker} {display} [{mode_change.mode_name}] "
                    f"{format_value(mode_change.old_value)} -> "
                    f"{format_value(mode_change.new_value)}"
                )
        elif change.type is ChangeType.ADD:
            click.echo(f"  {marker} {display} {format_value(change.new_value)}")
        else:
            click.echo(f"  {marker} {display} {format_value(change.old_value)}")


if __name__ == "__main__":
    cli()
