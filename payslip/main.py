from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from . import notifications
from .models import reset_engine
from .pipeline.ingest import load_batch
from .pipeline.render_pdf import PayslipPDF
from .pipeline.run import run_batch

app = typer.Typer(help="Payslip PDF generation")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _use_out_dir(out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()


@app.command()
def render(
    record_json: Path = typer.Argument(..., help="JSON file holding one payroll record"),
    org: Optional[str] = typer.Option(None, "--org", help="Organization name"),
    out: Path = typer.Option(Path("payslip.pdf"), "--out", help="Output PDF path"),
    data_uri: bool = typer.Option(False, "--data-uri", help="Print a data URI instead of writing a file"),
) -> None:
    batch = load_batch(record_json)
    if len(batch.records) != 1:
        typer.echo(f"Expected one record, found {len(batch.records)}; use 'batch'", err=True)
        raise typer.Exit(code=2)
    document = PayslipPDF().compose(batch.records[0], org or batch.organization_name)
    if data_uri:
        typer.echo(document.to_data_uri())
        return
    path = document.save(out)
    typer.echo(f"Wrote {path}")


@app.command()
def batch(
    records_json: Path = typer.Argument(..., help="JSON file holding payroll records"),
    org: Optional[str] = typer.Option(None, "--org", help="Organization name"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    notify: bool = typer.Option(True, "--notify/--no-notify", help="Notify employees"),
    preview: bool = typer.Option(True, "--preview/--no-preview", help="Render PNG previews"),
) -> None:
    _use_out_dir(out)
    loaded = load_batch(records_json)
    results = run_batch(
        loaded.records,
        organization_name=org or loaded.organization_name,
        notify=notify,
        preview=preview,
    )
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")
    if results["FAILED"]:
        raise typer.Exit(code=1)


@app.command("notifications")
def list_notifications(
    user_id: str = typer.Argument(..., help="User id"),
    unread: bool = typer.Option(False, "--unread", help="Unread only"),
    limit: int = typer.Option(20, "--limit", help="Maximum rows"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory holding the database"),
) -> None:
    _use_out_dir(out)
    rows = notifications.get_for_user(user_id, limit=limit, unread_only=unread)
    if not rows:
        typer.echo("No notifications")
        return
    for row in rows:
        marker = " " if row.is_read else "*"
        typer.echo(f"{marker} [{row.id}] {row.title}: {row.message}")


if __name__ == "__main__":
    app()
