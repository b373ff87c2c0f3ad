from __future__ import annotations

from pathlib import Path

import typer
import yaml

from relcfg.cli.commands._helpers import load_or_exit
from relcfg.cli.context import build_context
from relcfg.core.errors import ErrorCode
from relcfg.core.result import Err
from relcfg.output.errors import load_error_exit_code, print_load_error
from relcfg.release.formats import dump_config, write_config_file
from relcfg.release.model import CONFIG_FORMATS, ConfigFormat


def _parse_format(value: str | None) -> ConfigFormat | None:
    if value is None:
        return None
    for fmt in CONFIG_FORMATS:
        if fmt == value:
            return fmt
    raise typer.BadParameter(f"expected one of: {', '.join(CONFIG_FORMATS)}")


def convert(
    source: Path = typer.Argument(Path("."), help="Config file or project directory"),
    to: str | None = typer.Option(
        None,
        "--to",
        help="Output format: json|yaml|js|package-json (default: from --out, else source format)",
    ),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write to file instead of stdout"),
) -> None:
    """Re-serialize a release config, optionally into another format."""
    ctx = build_context()
    config = load_or_exit(source, ctx)
    fmt = _parse_format(to)

    if out is not None:
        written = write_config_file(config, out, fmt, ctx.settings.output)
        if isinstance(written, Err):
            print_load_error(written.error, ctx.console)
            raise typer.Exit(code=load_error_exit_code(written.error))
        ctx.console.success(f"{out} ({written.value})")
        return

    if fmt is None:
        fmt = config.source.format if config.source is not None else "json"
    try:
        text = dump_config(config, fmt, ctx.settings.output)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        ctx.console.error(f"cannot write as {fmt}: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    ctx.console.raw(text)
