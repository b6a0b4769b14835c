"""
Cloud Firewall Commands.

Security groups for cloud servers: rules and server attachments.
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
    Firewall,
    FirewallAttachRequest,
    FirewallCreateRequest,
    FirewallRuleCreateRequest,
)

app = typer.Typer(help="Manage cloud firewalls (security groups)")
rule_app = typer.Typer(help="Manage firewall rules")
app.add_typer(rule_app, name="rule")

FIREWALL_PATH = "/v1/cloud/firewall"

FIREWALL_ID = typer.Argument(..., help="Firewall ID")


@app.command("list")
def list_firewalls(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all firewalls."""
    with handle_errors():
        firewalls = extract(get_client(ctx).get(FIREWALL_PATH), list[Firewall])

    if json_output:
        print_json(firewalls)
        return

    if not firewalls:
        console.print("No firewalls found")
        return

    print_table(
        ["ID", "Name", "Rules", "Servers"],
        [(f.id, truncate(f.name, 25), len(f.rules), len(f.servers)) for f in firewalls],
    )


@app.command()
def get(ctx: typer.Context, firewall_id: str = FIREWALL_ID, json_output: bool = JSON_OPTION) -> None:
    """Get firewall details and rules."""
    with handle_errors():
        firewall = extract(get_client(ctx).get(f"{FIREWALL_PATH}/{firewall_id}"), Firewall)

    if json_output:
        print_json(firewall)
        return

    print_details([
        ("ID", firewall.id),
        ("Name", firewall.name),
        ("Servers", ", ".join(str(s) for s in firewall.servers)),
        ("Created", firewall.created_at),
    ])

    if not firewall.rules:
        console.print("No rules defined")
        return

    print_table(
        ["ID", "Direction", "Protocol", "Ports", "Remote IP"],
        [
            (r.id, r.direction, r.protocol, _port_range(r.port_min, r.port_max), r.remote_ip)
            for r in firewall.rules
        ],
        title="Rules",
    )


def _port_range(port_min: int, port_max: int) -> str:
    if port_max and port_max != port_min:
        return f"{port_min}-{port_max}"
    return str(port_min)


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Firewall name"),
) -> None:
    """Create a new firewall."""
    with handle_errors():
        envelope = get_client(ctx).post(FIREWALL_PATH, FirewallCreateRequest(name=name))
        firewall = extract(envelope, Firewall)

    success("Firewall created successfully!")
    print_details([("ID", firewall.id), ("Name", firewall.name)])


@app.command()
def delete(ctx: typer.Context, firewall_id: str = FIREWALL_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a firewall."""
    if not confirmed(force, f"Are you sure you want to delete firewall {firewall_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{FIREWALL_PATH}/{firewall_id}")

    success("Firewall deleted successfully")


@rule_app.command("add")
def add_rule(
    ctx: typer.Context,
    firewall: int = typer.Option(..., "--firewall", help="Firewall ID"),
    direction: str = typer.Option("ingress", "--direction", help="Rule direction (ingress/egress)"),
    protocol: str = typer.Option("tcp", "--protocol", help="Protocol (tcp/udp/icmp)"),
    port_min: int = typer.Option(..., "--port-min", help="Minimum port"),
    port_max: int = typer.Option(0, "--port-max", help="Maximum port (default: same as port-min)"),
    remote_ip: str = typer.Option("0.0.0.0/0", "--remote-ip", help="Remote IP CIDR"),
) -> None:
    """
    Add a firewall rule.

    Examples:
        mizban firewall rule add --firewall 3 --port-min 22
        mizban firewall rule add --firewall 3 --port-min 8000 --port-max 8100 --protocol udp
    """
    body = FirewallRuleCreateRequest(
        firewall_id=firewall,
        direction=direction,
        protocol=protocol,
        port_min=port_min,
        port_max=port_max or port_min,
        remote_ip=remote_ip,
    )

    with handle_errors():
        get_client(ctx).post(f"{FIREWALL_PATH}/rule", body)

    success("Firewall rule added successfully")


@rule_app.command("delete")
def delete_rule(
    ctx: typer.Context,
    rule_id: str = typer.Argument(..., help="Rule ID"),
    force: bool = FORCE_OPTION,
) -> None:
    """Delete a firewall rule."""
    if not confirmed(force, f"Are you sure you want to delete firewall rule {rule_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{FIREWALL_PATH}/rule/{rule_id}")

    success("Firewall rule deleted successfully")


@app.command()
def attach(
    ctx: typer.Context,
    firewall_id: str = FIREWALL_ID,
    server: int = typer.Option(..., "--server", help="Server ID"),
) -> None:
    """Attach a firewall to a server."""
    with handle_errors():
        get_client(ctx).post(
            f"{FIREWALL_PATH}/attach",
            FirewallAttachRequest(firewall_id=firewall_id, server_id=server),
        )

    success("Firewall attached successfully")


@app.command()
def detach(
    ctx: typer.Context,
    firewall_id: str = FIREWALL_ID,
    server: int = typer.Option(..., "--server", help="Server ID"),
) -> None:
    """Detach a firewall from a server."""
    with handle_errors():
        get_client(ctx).post(
            f"{FIREWALL_PATH}/detach",
            FirewallAttachRequest(firewall_id=firewall_id, server_id=server),
        )

    success("Firewall detached successfully")
