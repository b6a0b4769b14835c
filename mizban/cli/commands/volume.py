"""
Volume Commands.

Block storage volumes: create, attach to servers, resize.
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
from mizban.schemas.cloud import (
    Volume,
    VolumeAttachRequest,
    VolumeCreateRequest,
    VolumeResizeRequest,
)

app = typer.Typer(help="Create and manage block storage volumes")

VOLUMES_PATH = "/v1/cloud/volumes"

VOLUME_ID = typer.Argument(..., help="Volume ID")


@app.command("list")
def list_volumes(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all volumes."""
    with handle_errors():
        volumes = extract(get_client(ctx).get(VOLUMES_PATH), list[Volume])

    if json_output:
        print_json(volumes)
        return

    if not volumes:
        console.print("No volumes found")
        return

    print_table(
        ["ID", "Name", "Size (GB)", "Status", "Server"],
        [
            (v.id, truncate(v.name, 25), v.size, v.status, v.server_id if v.server_id > 0 else None)
            for v in volumes
        ],
    )


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Volume name"),
    size: int = typer.Option(10, "--size", help="Volume size in GB"),
    datacenter: int = typer.Option(1, "--datacenter", help="Datacenter ID"),
) -> None:
    """Create a new volume."""
    body = VolumeCreateRequest(name=name, size=size, datacenter_id=datacenter)

    with handle_errors():
        volume = extract(get_client(ctx).post(VOLUMES_PATH, body), Volume)

    success("Volume created successfully!")
    print_details([
        ("ID", volume.id),
        ("Name", volume.name),
        ("Size", f"{volume.size} GB"),
    ])


@app.command()
def get(ctx: typer.Context, volume_id: str = VOLUME_ID, json_output: bool = JSON_OPTION) -> None:
    """Get volume details."""
    with handle_errors():
        volume = extract(get_client(ctx).get(f"{VOLUMES_PATH}/{volume_id}"), Volume)

    if json_output:
        print_json(volume)
        return

    print_details([
        ("ID", volume.id),
        ("Name", volume.name),
        ("Size", f"{volume.size} GB"),
        ("Status", volume.status),
        ("Server ID", volume.server_id if volume.server_id > 0 else None),
        ("Created", volume.created_at),
    ])


@app.command()
def delete(ctx: typer.Context, volume_id: str = VOLUME_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a volume."""
    if not confirmed(force, f"Are you sure you want to delete volume {volume_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{VOLUMES_PATH}/{volume_id}")

    success("Volume deleted successfully")


@app.command()
def attach(
    ctx: typer.Context,
    volume_id: str = VOLUME_ID,
    server: int = typer.Option(..., "--server", help="Server ID to attach to"),
) -> None:
    """Attach a volume to a server."""
    with handle_errors():
        get_client(ctx).post(
            f"{VOLUMES_PATH}/attach",
            VolumeAttachRequest(volume_id=volume_id, server_id=server),
        )

    success("Volume attached successfully")


@app.command()
def detach(
    ctx: typer.Context,
    volume_id: str = VOLUME_ID,
    server: int = typer.Option(..., "--server", help="Server ID to detach from"),
) -> None:
    """Detach a volume from a server."""
    with handle_errors():
        get_client(ctx).post(
            f"{VOLUMES_PATH}/detach",
            VolumeAttachRequest(volume_id=volume_id, server_id=server),
        )

    success("Volume detached successfully")


@app.command()
def resize(
    ctx: typer.Context,
    volume_id: str = VOLUME_ID,
    size: int = typer.Option(..., "--size", help="New size in GB"),
) -> None:
    """Resize a volume."""
    with handle_errors():
        get_client(ctx).put(f"{VOLUMES_PATH}/{volume_id}", VolumeResizeRequest(size=size))

    success(f"Volume resized to {size} GB")
