from __future__ import annotations

from dataclasses import dataclass
import ast
import logging
from pathlib import Path
import sys
from typing import NoReturn, Optional

import typer

from nativejson.config import EncoderConfig, resolve_encoder_config
from nativejson.conversion_table import check_table_path, report_json
from nativejson.decoder import decode
from nativejson.encoder import encode
from nativejson.errors import to_host_error
from nativejson.exceptions import NeverThrown
from nativejson.result import Err
from nativejson.text_io import parse_json_text, render_json_text

app = typer.Typer(add_completion=False, help="Convert Python literals to JSON values and back.")

_STDIN_ALIAS = "-"


@dataclass(frozen=True)
class CliState:
    encoder_config: EncoderConfig


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if isinstance(state, CliState):
        return state
    return CliState(encoder_config=resolve_encoder_config())


def _fail(exc: BaseException) -> NoReturn:
    typer.echo(f"{type(exc).__name__}: {exc}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="Path to nativejson.toml."),
    key_policy: Optional[str] = typer.Option(
        None,
        "--key-policy",
        help="Mapping key handling: strict or stringify.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    _configure_logging(verbose)
    try:
        encoder_config = resolve_encoder_config(config_path=config, key_policy=key_policy)
    except NeverThrown as exc:
        raise typer.BadParameter(str(exc), param_hint="--key-policy") from exc
    ctx.obj = CliState(encoder_config=encoder_config)


@app.command("encode")
def encode_command(
    ctx: typer.Context,
    literal: str = typer.Argument(..., help="A Python literal, e.g. \"{'a': [1, None]}\"."),
    pretty: bool = typer.Option(False, "--pretty"),
) -> None:
    """Encode a Python literal and print it as JSON text."""
    try:
        value = ast.literal_eval(literal)
    except (ValueError, SyntaxError, TypeError) as exc:
        raise typer.BadParameter(f"not a Python literal: {exc}", param_hint="LITERAL") from exc
    result = encode(value, config=_state(ctx).encoder_config)
    if isinstance(result, Err):
        _fail(to_host_error(result.error))
    typer.echo(render_json_text(result.value, pretty=pretty))


@app.command("decode")
def decode_command(
    text: str = typer.Argument(..., help="JSON text, or '-' to read standard input."),
) -> None:
    """Decode JSON text and print the repr of the resulting Python value."""
    source = sys.stdin.read() if text == _STDIN_ALIAS else text
    try:
        value = parse_json_text(source)
    except (ValueError, TypeError) as exc:
        _fail(exc)
    result = decode(value)
    if isinstance(result, Err):
        _fail(to_host_error(result.error))
    typer.echo(repr(result.value))


@app.command("check-table")
def check_table_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    json_output: bool = typer.Option(False, "--json", help="Print the full report as JSON."),
) -> None:
    """Check a tab-separated conversion table."""
    try:
        report = check_table_path(path, config=_state(ctx).encoder_config)
    except NeverThrown as exc:
        typer.echo(f"invalid conversion table: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    if json_output:
        typer.echo(report_json(report))
    else:
        for failure in report.failures:
            typer.echo(
                f"{path}:{failure.line}: {failure.direction} {failure.source!r}: {failure.message}"
            )
        typer.echo(
            f"{report.rows_read} rows, {report.checks_run} checks, "
            f"{len(report.failures)} failures"
        )
    if not report.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
