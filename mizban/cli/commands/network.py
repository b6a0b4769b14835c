"""
Private Network Commands.
"""

from typing import Optional

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
from mizban.schemas.cloud import NetworkAttachRequest, NetworkCreateRequest, PrivateNetwork

app = typer.Typer(help="Manage private networks between servers")

NETWORKS_PATH = "/v1/cloud/private-networks"

NETWORK_ID = typer.Argument(..., help="Network ID")


@app.command("list")
def list_networks(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all private networks."""
    with handle_errors():
        networks = extract(get_client(ctx).get(NETWORKS_PATH), list[PrivateNetwork])

    if json_output:
        print_json(networks)
        return

    if not networks:
        console.print("No private networks found")
        return

    print_table(
        ["ID", "Name", "CIDR", "Gateway", "Servers"],
        [(n.id, truncate(n.name, 20), n.cidr, n.gateway, len(n.servers)) for n in networks],
    )


@app.command()
def get(ctx: typer.Context, network_id: str = NETWORK_ID, json_output: bool = JSON_OPTION) -> None:
    """Get private network details."""
    with handle_errors():
        network = extract(get_client(ctx).get(f"{NETWORKS_PATH}/{network_id}"), PrivateNetwork)

    if json_output:
        print_json(network)
        return

    print_details([
        ("ID", network.id),
        ("Name", network.name),
        ("CIDR", network.cidr),
        ("Gateway", network.gateway),
        ("Servers", ", ".join(str(s) for s in network.servers)),
        ("Created", network.created_at),
    ])


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Network name"),
    cidr: str = typer.Option("10.0.0.0/24", "--cidr", help="Network CIDR (e.g., 10.0.0.0/24)"),
    datacenter: int = typer.Option(1, "--datacenter", help="Datacenter ID"),
) -> None:
    """Create a private network."""
    body = NetworkCreateRequest(name=name, cidr=cidr, datacenter_id=datacenter)

    with handle_errors():
        network = extract(get_client(ctx).post(NETWORKS_PATH, body), PrivateNetwork)

    success("Private network created successfully!")
    print_details([
        ("ID", network.id),
        ("Name", network.name),
        ("CIDR", network.cidr),
        ("Gateway", network.gateway),
    ])


@app.command()
def delete(ctx: typer.Context, network_id: str = NETWORK_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a private network."""
    if not confirmed(force, f"Are you sure you want to delete network {network_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{NETWORKS_PATH}/{network_id}")

    success("Private network deleted successfully")


@app.command()
def attach(
    ctx: typer.Context,
    network_id: str = NETWORK_ID,
    server: int = typer.Option(..., "--server", help="Server ID"),
    ip: Optional[str] = typer.Option(None, "--ip", help="Specific IP address (optional)"),
) -> None:
    """Attach a server to a private network."""
    body = NetworkAttachRequest(network_id=network_id, server_id=server, ip=ip or None)

    with handle_errors():
        get_client(ctx).post(f"{NETWORKS_PATH}/attach", body)

    success("Server attached to network successfully")


@app.command()
def detach(
    ctx: typer.Context,
    network_id: str = NETWORK_ID,
    server: int = typer.Option(..., "--server", help="Server ID"),
) -> None:
    """Detach a server from a private network."""
    with handle_errors():
        get_client(ctx).post(
            f"{NETWORKS_PATH}/detach",
            NetworkAttachRequest(network_id=network_id, server_id=server),
        )

    success("Server detached from network successfully")
