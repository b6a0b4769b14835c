"""
Server Commands.

Create, manage, and monitor cloud servers.
"""

import typer
from rich.markup import escape

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
    RebuildRequest,
    RenameRequest,
    Server,
    ServerCreateRequest,
    ServerLog,
    VNCAccess,
)

app = typer.Typer(help="Create, manage, and monitor your cloud servers")
power_app = typer.Typer(help="Power management commands")
rescue_app = typer.Typer(help="Rescue mode commands")
app.add_typer(power_app, name="power")
app.add_typer(rescue_app, name="rescue")

SERVERS_PATH = "/v1/cloud/servers"

SERVER_ID = typer.Argument(..., help="Server ID")


@app.command("list")
def list_servers(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all servers."""
    with handle_errors():
        servers = extract(get_client(ctx).get(SERVERS_PATH), list[Server])

    if json_output:
        print_json(servers)
        return

    if not servers:
        console.print("No servers found")
        return

    print_table(
        ["ID", "Name", "Status", "CPU", "RAM", "IP", "OS"],
        [
            (s.id, truncate(s.name, 20), s.status, s.cpu, s.ram, s.public_ip, truncate(s.os, 12))
            for s in servers
        ],
    )


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Server name"),
    os: str = typer.Option(..., "--os", help="Operating system (e.g., ubuntu-22.04)"),
    cpu: int = typer.Option(1, "--cpu", help="Number of CPU cores"),
    ram: int = typer.Option(1024, "--ram", help="RAM in MB"),
    storage: int = typer.Option(20, "--storage", help="Storage in GB"),
    datacenter: int = typer.Option(1, "--datacenter", help="Datacenter ID"),
    ssh_key: int = typer.Option(0, "--ssh-key", help="SSH key ID"),
) -> None:
    """
    Create a new server.

    Examples:
        mizban server create --name web-1 --os ubuntu-22.04
        mizban server create --name db-1 --os debian-12 --cpu 4 --ram 8192 --ssh-key 7
    """
    body = ServerCreateRequest(
        name=name,
        os=os,
        cpu=cpu,
        ram=ram,
        storage=storage,
        datacenter_id=datacenter,
        ssh_key_id=ssh_key if ssh_key > 0 else None,
    )

    with handle_errors():
        server = extract(get_client(ctx).post(SERVERS_PATH, body), Server)

    success("Server created successfully!")
    print_details([
        ("ID", server.id),
        ("Name", server.name),
        ("Status", server.status),
    ])


@app.command()
def get(ctx: typer.Context, server_id: str = SERVER_ID, json_output: bool = JSON_OPTION) -> None:
    """Get server details."""
    with handle_errors():
        server = extract(get_client(ctx).get(f"{SERVERS_PATH}/{server_id}"), Server)

    if json_output:
        print_json(server)
        return

    print_details([
        ("ID", server.id),
        ("Name", server.name),
        ("Status", server.status),
        ("CPU", f"{server.cpu} cores"),
        ("RAM", f"{server.ram} MB"),
        ("Storage", f"{server.storage} GB"),
        ("OS", server.os),
        ("Public IP", server.public_ip),
        ("Private IP", server.private_ip),
        ("Created", server.created_at),
    ])


@app.command()
def delete(ctx: typer.Context, server_id: str = SERVER_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a server."""
    if not confirmed(force, f"Are you sure you want to delete server {server_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{SERVERS_PATH}/{server_id}")

    success("Server deleted successfully")


def _power(ctx: typer.Context, server_id: str, action: str, message: str) -> None:
    with handle_errors():
        get_client(ctx).put(f"{SERVERS_PATH}/{server_id}/power/{action}")
    success(message)


@power_app.command("on")
def power_on(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Power on server."""
    _power(ctx, server_id, "on", "Server powering on...")


@power_app.command("off")
def power_off(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Power off server."""
    _power(ctx, server_id, "off", "Server powering off...")


@power_app.command("reboot")
def power_reboot(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Reboot server."""
    _power(ctx, server_id, "reboot", "Server rebooting...")


@power_app.command("restart")
def power_restart(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Restart server."""
    _power(ctx, server_id, "restart", "Server restarting...")


@app.command()
def rename(
    ctx: typer.Context,
    server_id: str = SERVER_ID,
    name: str = typer.Option(..., "--name", help="New server name"),
) -> None:
    """Rename a server."""
    with handle_errors():
        get_client(ctx).post(f"{SERVERS_PATH}/{server_id}/rename", RenameRequest(name=name))

    success(f"Server renamed to {name}")


@app.command()
def vnc(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Get VNC console URL."""
    with handle_errors():
        access = extract(get_client(ctx).get(f"{SERVERS_PATH}/{server_id}/access/vnc"), VNCAccess)

    console.print(f"VNC Console URL: {escape(access.url)}")


@app.command()
def logs(ctx: typer.Context, server_id: str = SERVER_ID, json_output: bool = JSON_OPTION) -> None:
    """Get server action logs."""
    with handle_errors():
        entries = extract(get_client(ctx).get(f"{SERVERS_PATH}/{server_id}/logs"), list[ServerLog])

    if json_output:
        print_json(entries)
        return

    if not entries:
        console.print("No logs found")
        return

    print_table(
        ["Action", "Status", "Date"],
        [(entry.action, entry.status, entry.created_at) for entry in entries],
    )


@app.command()
def reports(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Get server performance reports (raw JSON)."""
    with handle_errors():
        envelope = get_client(ctx).get(f"{SERVERS_PATH}/{server_id}/reports")

    print_json(envelope.data)


@app.command()
def rebuild(
    ctx: typer.Context,
    server_id: str = SERVER_ID,
    os: str = typer.Option(..., "--os", help="New operating system"),
    force: bool = FORCE_OPTION,
) -> None:
    """
    Rebuild server with a new OS.

    All data on the server's disk is lost.
    """
    if not confirmed(force, f"Are you sure you want to rebuild server {server_id} with {os}?"):
        return

    with handle_errors():
        get_client(ctx).put(f"{SERVERS_PATH}/{server_id}/rebuild/software", RebuildRequest(os=os))

    success("Server rebuild initiated...")


@rescue_app.command("enable")
def rescue_enable(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Enable rescue mode."""
    with handle_errors():
        get_client(ctx).post(f"{SERVERS_PATH}/{server_id}/rescue")
    success("Rescue mode enabled")


@rescue_app.command("disable")
def rescue_disable(ctx: typer.Context, server_id: str = SERVER_ID) -> None:
    """Disable rescue mode."""
    with handle_errors():
        get_client(ctx).post(f"{SERVERS_PATH}/{server_id}/unrescue")
    success("Rescue mode disabled")
