"""Typer-based command line interface for scrub_core."""
from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import click
import typer

from ..config import AppConfig, dump_default_config, load_config
from ..errors import ParseError
from ..logging import configure_logging
from ..redactor.engines import RedactionEngine

app = typer.Typer(help="scrub_core command line interface")


@dataclass(slots=True)
class CLIState:
    config: AppConfig
    engine: RedactionEngine


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        app_config = load_config(config)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc
    engine = RedactionEngine.from_config(app_config)
    configure_logging(app_config.logging.normalized_level(), scrub=app_config.logging.scrub, engine=engine)
    ctx.obj = CLIState(config=app_config, engine=engine)


def _state() -> CLIState:
    return click.get_current_context().obj


def _read_input(path: Optional[Path]) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return path.read_bytes()


@app.command()
def scan(path: Optional[Path] = typer.Argument(None, exists=True, readable=True, dir_okay=False)) -> None:
    """Replace detector matches in a text file (stdin when PATH is omitted)."""
    text = _read_input(path).decode("utf-8", errors="replace")
    typer.echo(_state().engine.scan_text(text), nl=False)


@app.command()
def find(path: Optional[Path] = typer.Argument(None, exists=True, readable=True, dir_okay=False)) -> None:
    """List detector matches as JSON, without the matched values."""
    text = _read_input(path).decode("utf-8", errors="replace")
    detections = _state().engine.scanner.find(text)
    typer.echo(json.dumps([asdict(det) for det in detections], ensure_ascii=False, indent=2))


@app.command()
def classify(key: str = typer.Argument(...), value: str = typer.Argument(...)) -> None:
    """Redact VALUE as if it were stored under KEY."""
    typer.echo(_state().engine.classify_keyed(key, value))


@app.command("json")
def redact_json(
    path: Optional[Path] = typer.Argument(None, exists=True, readable=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write redacted output here"),
) -> None:
    """Redact a JSON document (stdin when PATH is omitted)."""
    try:
        redacted = _state().engine.redact_json_bytes(_read_input(path))
    except ParseError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    if output is None:
        typer.echo(redacted.decode("utf-8"))
    else:
        output.write_bytes(redacted)
        typer.echo(f"Redacted output written to {output}", err=True)


@app.command()
def rules() -> None:
    """Show the effective name rules and detectors."""
    engine = _state().engine
    document = {
        "hashed_names": sorted(engine.classifier.hashed_names),
        "redacted_names": list(engine.classifier.redacted_patterns),
        "detectors": [
            {"name": detector.name, "pattern": detector.pattern.pattern, "strategy": detector.strategy.value}
            for detector in engine.scanner.detectors
        ],
    }
    typer.echo(json.dumps(document, ensure_ascii=False, indent=2))


@app.command("init-config")
def init_config(
    destination: Path = typer.Argument(..., help="Where to write the default configuration"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    if destination.exists() and not force:
        typer.echo(f"{destination} already exists; pass --force to overwrite", err=True)
        raise typer.Exit(code=1)
    dump_default_config(destination)
    typer.echo(f"Default configuration written to {destination}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
