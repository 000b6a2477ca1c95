"""Command line wrapper that runs the normalizer over JSON documents."""

from __future__ import annotations

import json
from typing import Any

import typer
from loguru import logger

from slack_normalizer.errors import ValidationError
from slack_normalizer.logging_utils import configure_logging
from slack_normalizer.normalizer import normalize, validate

app = typer.Typer(
    name="slack-normalizer",
    help="Convert conversation engine output into Slack chat API messages.",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(profile="cli", level="DEBUG" if verbose else None)


def _load_params(source: typer.FileText) -> Any:
    try:
        return json.load(source)
    except json.JSONDecodeError as exc:
        typer.echo(f"error: input is not valid JSON: {exc.msg} (line {exc.lineno})", err=True)
        raise typer.Exit(2) from exc


def _report(exc: ValidationError) -> None:
    field = f" field={exc.field}" if exc.field else ""
    typer.echo(f"error: {exc.reason}{field}: {exc}", err=True)


@app.command("normalize")
def normalize_command(
    source: typer.FileText = typer.Argument("-", help="Invocation input JSON file, '-' for stdin"),  # noqa: B008
    compact: bool = typer.Option(False, "--compact", help="Emit single-line JSON"),
) -> None:
    """Normalize one invocation input and print the outbound message."""

    params = _load_params(source)
    try:
        message = normalize(params)
    except ValidationError as exc:
        logger.debug("cli.normalize.rejected reason={}", exc.reason)
        _report(exc)
        raise typer.Exit(1) from exc
    typer.echo(json.dumps(message, ensure_ascii=False, indent=None if compact else 2))


@app.command("validate")
def validate_command(
    source: typer.FileText = typer.Argument("-", help="Invocation input JSON file, '-' for stdin"),  # noqa: B008
) -> None:
    """Only run the validation pass and report the result."""

    params = _load_params(source)
    try:
        request = validate(params)
    except ValidationError as exc:
        _report(exc)
        raise typer.Exit(1) from exc
    typer.echo(f"ok shape={request.shape} inbound={request.source.kind} url={request.source.url}")
