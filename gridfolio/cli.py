"""Typer based command line entry points for Gridfolio."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from gridfolio.config import DEFAULT_THEME, EditorConfig, load_editor_config
from gridfolio.core.errors import ConfigError, GridfolioError
from gridfolio.core.logger import enable_console, get_logger
from gridfolio.services.arrange import arrange_grid, render_ascii
from gridfolio.services.cards import CardStore
from gridfolio.services.session import EditingSession
from gridfolio_persist import DocumentStore, StoreError

INTERACTIVE_COMMANDS = {"edit"}

app = typer.Typer(help="Edit a profile + showcase card document in the terminal.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger.setLevel(level_value)
    if ctx.invoked_subcommand not in INTERACTIVE_COMMANDS:
        enable_console(logger)


def _fail(message: str) -> typer.Exit:
    typer.secho(message, err=True, fg=typer.colors.RED)
    return typer.Exit(code=1)


def _load_config(config: Optional[Path], theme: str) -> EditorConfig:
    try:
        return load_editor_config(config, theme=theme)
    except ConfigError as exc:
        raise _fail(f"Config error: {exc}") from exc


def _load_cards(document: Path, editor_config: EditorConfig) -> CardStore:
    try:
        return DocumentStore(document, editor_config.catalog).load()
    except StoreError as exc:
        raise _fail(f"Load error: {exc}") from exc


@app.command("edit")
def edit(
    document: Optional[Path] = typer.Argument(None, help="JSON document to edit; omit to start from a blank profile."),
    config: Optional[Path] = typer.Option(None, "--config", help="metadata.yaml describing card types and shapes."),
    theme: str = typer.Option(DEFAULT_THEME, "--theme", help="Colour theme name from the metadata file."),
    save_as: Optional[Path] = typer.Option(None, "--save-as", help="Write the result here instead of DOCUMENT."),
) -> None:
    """Open the interactive editor; the document is saved when it quits."""

    from gridfolio.app_tui.main_tui import run_editor

    logger = get_logger()
    editor_config = _load_config(config, theme)
    cards = _load_cards(document, editor_config) if document else CardStore()
    session = EditingSession(cards, editor_config.catalog, grid=editor_config.grid)
    target = save_as or document

    logger.info("Start editing %s", document or "<new document>")
    saved = True
    try:
        run_editor(session)
    finally:
        saved = _save_on_exit(session, target, editor_config)
    if not saved:
        raise typer.Exit(code=1)


def _save_on_exit(session: EditingSession, target: Optional[Path], editor_config: EditorConfig) -> bool:
    logger = get_logger()
    if target is None:
        logger.warning("No document path given; changes were not saved")
        typer.secho("No document path given (use --save-as); changes were not saved.", err=True, fg=typer.colors.YELLOW)
        return True
    try:
        path = DocumentStore(target, editor_config.catalog).save(session.store)
    except StoreError as exc:
        logger.error("Error saving data: %s", exc)
        typer.secho(f"Error saving data: {exc}", err=True, fg=typer.colors.RED)
        return False
    typer.echo(f"Saved {len(session.store)} cards to {path}")
    return True


@app.command("preview")
def preview(
    document: Path = typer.Argument(..., help="JSON document to lay out."),
    config: Optional[Path] = typer.Option(None, "--config", help="metadata.yaml describing card types and shapes."),
    rows: Optional[int] = typer.Option(None, "--rows", min=1, help="Grid rows (defaults to the metadata file)."),
    cols: Optional[int] = typer.Option(None, "--cols", min=1, help="Grid columns (defaults to the metadata file)."),
) -> None:
    """Print the showcase arrangement as ASCII plus a placement table."""

    editor_config = _load_config(config, DEFAULT_THEME)
    cards = _load_cards(document, editor_config)
    grid_rows = rows or editor_config.grid[0]
    grid_cols = cols or editor_config.grid[1]
    pairs = cards.shape_pairs()
    try:
        placements = arrange_grid((grid_rows, grid_cols), pairs)
    except GridfolioError as exc:
        raise _fail(f"Arrange error: {exc}") from exc

    for line in render_ascii(placements, grid_rows, grid_cols):
        typer.echo(line)
    typer.echo("")
    for idx, placement in enumerate(placements, start=1):
        typer.echo(
            f"{idx:>3}  {placement.card_type:<12} {placement.height}x{placement.width:<4}"
            f" row={placement.start_row:<3} col={placement.start_col}"
        )
    skipped = len(pairs) - len(placements)
    if skipped:
        typer.secho(f"{skipped} card(s) did not fit the {grid_rows}x{grid_cols} grid", fg=typer.colors.YELLOW)


@app.command("check")
def check(
    document: Path = typer.Argument(..., help="JSON document to validate."),
    config: Optional[Path] = typer.Option(None, "--config", help="metadata.yaml describing card types and shapes."),
) -> None:
    """Validate every card against its schema; exit 1 if any is invalid."""

    editor_config = _load_config(config, DEFAULT_THEME)
    catalog = editor_config.catalog
    cards = _load_cards(document, editor_config)
    invalid = 0
    for index, card in enumerate(cards):
        result = catalog.validate(card.text, card.title)
        if result.ok:
            typer.echo(f"ok       {card.label(index)}")
        else:
            invalid += 1
            typer.secho(f"invalid  {card.label(index)}: {result.message}", fg=typer.colors.RED)
    if invalid:
        raise typer.Exit(code=1)
    typer.echo(f"All {len(cards)} cards are valid")


if __name__ == "__main__":
    app()
