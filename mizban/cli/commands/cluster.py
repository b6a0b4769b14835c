"""
Load Balancer Cluster Commands.

Cluster pools, their origin servers, and pool-to-path assignments for a
CDN domain. Every command takes `--domain`.
"""

import typer
from rich.markup import escape

from mizban.cli.client import extract
from mizban.cli.commands.domain import DOMAIN_OPTION, domain_path
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
from mizban.schemas.cdn import (
    ClusterAssignment,
    ClusterAssignRequest,
    ClusterPool,
    ClusterRequest,
    ClusterServerRequest,
)

app = typer.Typer(help="Configure load balancer pools and servers for your domains")
server_app = typer.Typer(help="Manage cluster servers")
app.add_typer(server_app, name="server")
app.add_typer(server_app, name="servers", hidden=True)

CLUSTER_OPTION = typer.Option(..., "--cluster", help="Cluster ID")


def _cluster_body(
    name: str,
    port: int,
    method: str,
    description: str,
    hash_key: str,
    error_reporting: bool,
) -> ClusterRequest:
    return ClusterRequest(
        name=name,
        port=port,
        method=method,
        description=description,
        error_reporting=error_reporting,
        hash_key=hash_key or None,
    )


@app.command("list")
def list_pools(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List cluster pools and their servers."""
    with handle_errors():
        pools = extract(get_client(ctx).get(domain_path(domain, "cluster")), list[ClusterPool])

    if json_output:
        print_json(pools)
        return

    if not pools:
        console.print("No cluster pools found")
        return

    for pool in pools:
        console.print(f"[bold]Pool: {escape(pool.name)}[/bold] (ID: {pool.id})")
        rows: list[tuple[str, object]] = [
            ("Method", pool.method),
            ("Port", pool.port),
            ("Error Reporting", pool.error_reporting),
            ("Monitoring", pool.monitoring),
        ]
        if pool.description:
            rows.append(("Description", pool.description))
        print_details(rows)

        if pool.servers:
            print_table(
                ["ID", "Address", "Port", "Weight", "Protocol", "Status"],
                [
                    (
                        s.id,
                        s.address,
                        s.port,
                        s.weight,
                        s.protocol,
                        "Backup" if s.is_backup else "Active",
                    )
                    for s in pool.servers
                ],
            )
        else:
            console.print("Servers: (none)")
        console.print()


@app.command()
def assignments(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List cluster-to-path assignments."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain, "cluster", "assignments"))
        found = extract(envelope, list[ClusterAssignment])

    if json_output:
        print_json(found)
        return

    if not found:
        console.print("No cluster assignments found")
        return

    print_table(
        ["Cluster ID", "Cluster Name", "Path ID", "Path"],
        [
            (a.cluster_id, truncate(a.cluster_name, 20), a.path_id, truncate(a.path, 30))
            for a in found
        ],
    )


@app.command()
def add(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    name: str = typer.Option(..., "--name", help="Pool name"),
    port: int = typer.Option(443, "--port", help="Backend port"),
    method: str = typer.Option(
        "roundrobin", "--method", help="Load balancing method (roundrobin/leastconn/iphash)",
    ),
    description: str = typer.Option("", "--description", help="Pool description"),
    hash_key: str = typer.Option("", "--hash-key", help="Hash key for iphash method"),
    error_reporting: bool = typer.Option(
        True, "--error-reporting/--no-error-reporting", help="Enable error reporting",
    ),
) -> None:
    """Create a cluster pool."""
    body = _cluster_body(name, port, method, description, hash_key, error_reporting)

    with handle_errors():
        pool = extract(get_client(ctx).post(domain_path(domain, "cluster"), body), ClusterPool)

    success("Cluster pool created successfully!")
    print_details([("ID", pool.id), ("Name", pool.name), ("Method", pool.method)])


@app.command()
def update(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    name: str = typer.Option("", "--name", help="Pool name"),
    port: int = typer.Option(443, "--port", help="Backend port"),
    method: str = typer.Option("roundrobin", "--method", help="Load balancing method"),
    description: str = typer.Option("", "--description", help="Pool description"),
    hash_key: str = typer.Option("", "--hash-key", help="Hash key for iphash method"),
    error_reporting: bool = typer.Option(
        True, "--error-reporting/--no-error-reporting", help="Enable error reporting",
    ),
) -> None:
    """Update a cluster pool. The full pool definition is sent."""
    body = _cluster_body(name, port, method, description, hash_key, error_reporting)

    with handle_errors():
        get_client(ctx).put(domain_path(domain, "cluster", cluster), body)

    success("Cluster pool updated successfully")


@app.command()
def delete(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Delete a cluster pool."""
    if not confirmed(force, f"Are you sure you want to delete cluster {cluster}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "cluster", cluster))

    success("Cluster pool deleted successfully")


@server_app.command("add")
def add_server(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    address: str = typer.Option(..., "--address", help="Server address (IP or hostname)"),
    port: int = typer.Option(443, "--port", help="Server port"),
    weight: int = typer.Option(100, "--weight", help="Server weight (1-100)"),
    priority: int = typer.Option(1, "--priority", help="Server priority (-1 for backup)"),
    protocol: str = typer.Option("HTTPS", "--protocol", help="Protocol (HTTP/HTTPS)"),
    host_header: str = typer.Option("", "--host-header", help="Custom host header"),
) -> None:
    """Add an origin server to a cluster."""
    body = ClusterServerRequest(
        address=address,
        port=port,
        weight=weight,
        priority=priority,
        protocol=protocol,
        host_header=host_header or None,
    )

    with handle_errors():
        get_client(ctx).post(domain_path(domain, "cluster", cluster, "servers"), body)

    success(f"Server {address} added to cluster successfully")


@server_app.command("delete")
def delete_server(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    server: int = typer.Option(..., "--server", help="Server ID"),
    force: bool = FORCE_OPTION,
) -> None:
    """Remove an origin server from a cluster."""
    if not confirmed(force, f"Are you sure you want to remove server {server}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "cluster", cluster, "servers", server))

    success("Server removed from cluster successfully")


@app.command()
def assign(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    path: int = typer.Option(..., "--path", help="Path ID to assign the cluster to"),
) -> None:
    """Route a page-rule path to a cluster."""
    with handle_errors():
        get_client(ctx).post(
            domain_path(domain, "cluster", cluster, "assign"), ClusterAssignRequest(path_id=path),
        )

    success(f"Cluster {cluster} assigned to path {path} successfully")


@app.command()
def unassign(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cluster: int = CLUSTER_OPTION,
    path: int = typer.Option(..., "--path", help="Path ID to unassign the cluster from"),
) -> None:
    """Remove a cluster from a page-rule path."""
    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "cluster", cluster, "assign", path))

    success(f"Cluster {cluster} unassigned from path {path} successfully")
