"""
Snapshot Commands.
"""

import typer

from mizban.cli.client import extract
from mizban.cli.context import get_client
from mizban.cli.output import (
    FORCE_OPTION,
    JSON_OPTION,
    confirmed,
    console,
    handle_errors,
    print_details,
    print_json,
    print_table,
    success,
    truncate,
)
from mizban.schemas.cloud import Snapshot, SnapshotCreateRequest

app = typer.Typer(help="Create and manage server snapshots")

SNAPSHOTS_PATH = "/v1/cloud/snapshots"

SNAPSHOT_ID = typer.Argument(..., help="Snapshot ID")


@app.command("list")
def list_snapshots(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all snapshots."""
    with handle_errors():
        snapshots = extract(get_client(ctx).get(SNAPSHOTS_PATH), list[Snapshot])

    if json_output:
        print_json(snapshots)
        return

    if not snapshots:
        console.print("No snapshots found")
        return

    print_table(
        ["ID", "Name", "Size (GB)", "Status", "Created"],
        [(s.id, truncate(s.name, 25), s.size, s.status, s.created_at) for s in snapshots],
    )


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Snapshot name"),
    server: int = typer.Option(..., "--server", help="Server ID to snapshot"),
) -> None:
    """Create a snapshot of a server."""
    with handle_errors():
        envelope = get_client(ctx).post(
            SNAPSHOTS_PATH, SnapshotCreateRequest(name=name, server_id=server),
        )
        snapshot = extract(envelope, Snapshot)

    success("Snapshot created successfully!")
    print_details([("ID", snapshot.id), ("Name", snapshot.name)])


@app.command()
def get(ctx: typer.Context, snapshot_id: str = SNAPSHOT_ID, json_output: bool = JSON_OPTION) -> None:
    """Get snapshot details."""
    with handle_errors():
        snapshot = extract(get_client(ctx).get(f"{SNAPSHOTS_PATH}/{snapshot_id}"), Snapshot)

    if json_output:
        print_json(snapshot)
        return

    print_details([
        ("ID", snapshot.id),
        ("Name", snapshot.name),
        ("Size", f"{snapshot.size} GB"),
        ("Status", snapshot.status),
        ("Server ID", snapshot.server_id),
        ("Created", snapshot.created_at),
    ])


@app.command()
def delete(ctx: typer.Context, snapshot_id: str = SNAPSHOT_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a snapshot."""
    if not confirmed(force, f"Are you sure you want to delete snapshot {snapshot_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{SNAPSHOTS_PATH}/{snapshot_id}")

    success("Snapshot deleted successfully")
