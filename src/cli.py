#!/usr/bin/env python3
"""Command Line Interface for the NYC property contacts service.

Usage:
    cd src
    python cli.py contacts dedupe contacts.json      # Format, merge and tag a parcel's contacts
    python cli.py contacts categorize dof latest_sale
    python cli.py server                             # Start API server
    python cli.py info                               # Show configuration
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
import uvicorn

from core.config import get_settings
from core.exceptions import ContactsError, InputFileError
from core.logging_config import configure_logging, get_logger

LOGGER = get_logger(__name__)

app = typer.Typer(help="NYC property owner contacts CLI")
contacts_app = typer.Typer(help="Owner contact commands")
app.add_typer(contacts_app, name="contacts")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Normalize, deduplicate and categorize NYC property owner contacts."""
    configure_logging(get_settings(), verbose=verbose)


def load_contacts_file(path: Path) -> tuple[Optional[str], List[Any]]:
    """
    Read contacts from a JSON file.

    The file holds either a list of contact objects or an object with a
    `contacts` list and an optional `bbl`.

    Raises:
        InputFileError: If the file is missing, not JSON, or has the wrong shape.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InputFileError(f"Input file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputFileError(f"{path} is not valid JSON: {e}") from e

    bbl: Optional[str] = None
    if isinstance(payload, dict):
        bbl = payload.get("bbl")
        payload = payload.get("contacts")
    if not isinstance(payload, list):
        raise InputFileError(f"{path} must contain a list of contacts or an object with a 'contacts' list")
    if bbl is not None and not isinstance(bbl, str):
        bbl = str(bbl)
    return bbl, payload


# =============================================================================
# Contact Commands
# =============================================================================


@contacts_app.command("dedupe")
def dedupe_contacts(
    file_path: Path = typer.Argument(..., help="JSON file with the parcel's contacts"),
    threshold: Optional[float] = typer.Option(None, "--threshold", "-t", help="Merge threshold in [0, 1]"),
    bbl: Optional[str] = typer.Option(None, "--bbl", help="Parcel BBL, overrides the one in the file"),
    respect_source_groups: Optional[bool] = typer.Option(
        None,
        "--respect-source-groups/--ignore-source-groups",
        help="Only merge contacts from the same agency/source (default: RESPECT_SOURCE_GROUPS)",
    ),
    explain: bool = typer.Option(False, "--explain", help="Include the input indices of each cluster"),
) -> None:
    """Format, deduplicate and categorize contacts, printing JSON."""
    from contacts.pipeline import process_contacts

    try:
        file_bbl, raw_contacts = load_contacts_file(file_path)
        result = process_contacts(
            raw_contacts,
            threshold,
            bbl=bbl or file_bbl,
            respect_source_groups=respect_source_groups,
        )
    except ContactsError as e:
        LOGGER.error(f"Contact processing failed: {e}")
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.to_dict(include_clusters=explain), indent=2, default=str))


@contacts_app.command("categorize")
def categorize_pair(
    agency: str = typer.Argument(..., help="Reporting agency, e.g. dof"),
    source: str = typer.Argument("", help="Source dataset, e.g. latest_sale"),
) -> None:
    """Show the category an agency/source pair maps to."""
    from contacts.categories import categorize, category_metadata

    category = categorize({"agency": agency, "source": source})
    meta = category_metadata(category)
    typer.echo(f"{category.value} ({meta.label}, {meta.abbreviation})")


@contacts_app.command("categories")
def list_categories() -> None:
    """List categories in display order."""
    from contacts.categories import CATEGORY_ORDER, category_metadata

    for tag in CATEGORY_ORDER:
        meta = category_metadata(tag)
        visibility = "shown" if meta.default_visible else "hidden"
        typer.echo(f"  {meta.abbreviation:<4} {tag.value:<18} {meta.label} ({visibility} by default)")


# =============================================================================
# Server / Info
# =============================================================================


@app.command("server")
def run_server(
    host: str = typer.Option("0.0.0.0", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    typer.echo(f"Starting API server on {host}:{port}...")
    uvicorn.run("api.app:app", host=host, port=port, reload=reload)


@app.command("info")
def show_info() -> None:
    """Show application configuration info."""
    settings = get_settings()
    typer.echo("NYC Property Contacts - Configuration")
    typer.echo("=" * 40)
    for key, value in settings.as_public_dict().items():
        typer.echo(f"  {key}: {value}")


if __name__ == "__main__":
    app()
