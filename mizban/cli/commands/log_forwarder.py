"""
Log Forwarder Commands.

Ship a domain's CDN access logs to external services such as
Elasticsearch, S3-compatible storage, an HTTP webhook or Datadog.
"""

import json
from typing import Optional

import typer

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
from mizban.core.exceptions import DecodeError, InvalidInputError
from mizban.schemas.cdn import LogForwarder, LogForwarderCreateRequest, LogForwarderUpdateRequest

app = typer.Typer(help="Configure log forwarding to external services")

ENABLED_OPTION = typer.Option(True, "--enabled/--disabled", help="Enable forwarder")


@app.command("list")
def list_forwarders(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List log forwarders."""
    with handle_errors():
        forwarders = extract(
            get_client(ctx).get(domain_path(domain, "log-forwarders")), list[LogForwarder],
        )

    if json_output:
        print_json(forwarders)
        return

    if not forwarders:
        console.print("No log forwarders configured")
        return

    print_table(
        ["ID", "Name", "Type", "Endpoint", "Enabled"],
        [
            (f.id, truncate(f.name, 20), f.type, truncate(f.endpoint, 35), f.enabled)
            for f in forwarders
        ],
    )


@app.command()
def add(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    name: str = typer.Option(..., "--name", help="Forwarder name"),
    forwarder_type: str = typer.Option(
        ..., "--type", help="Forwarder type (elasticsearch/s3/http/datadog)",
    ),
    endpoint: str = typer.Option(..., "--endpoint", help="Destination endpoint URL"),
    enabled: bool = ENABLED_OPTION,
    config: Optional[str] = typer.Option(None, "--config", help="Additional config as a JSON object"),
) -> None:
    """Add a log forwarder."""
    with handle_errors():
        extra = None
        if config:
            try:
                extra = json.loads(config)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"invalid config JSON: {e}") from e
            if not isinstance(extra, dict):
                raise InvalidInputError("invalid config JSON: expected an object")

        body = LogForwarderCreateRequest(
            name=name,
            type=forwarder_type,
            endpoint=endpoint,
            enabled=enabled,
            config=extra,
        )
        envelope = get_client(ctx).post(domain_path(domain, "log-forwarders"), body)

    try:
        created = extract(envelope, LogForwarder)
    except DecodeError:
        success("Log forwarder added successfully")
        return

    success("Log forwarder added successfully!")
    print_details([("ID", created.id), ("Name", created.name), ("Type", created.type)])


@app.command()
def update(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    forwarder: int = typer.Option(..., "--forwarder", help="Forwarder ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Forwarder name"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Destination endpoint URL"),
    enabled: bool = ENABLED_OPTION,
) -> None:
    """Update a log forwarder. Only the given fields change, except `enabled` which is always sent."""
    body = LogForwarderUpdateRequest(name=name or None, endpoint=endpoint or None, enabled=enabled)

    with handle_errors():
        get_client(ctx).put(domain_path(domain, "log-forwarders", forwarder), body)

    success("Log forwarder updated successfully")


@app.command()
def delete(
    ctx: typer.Context,
    forwarder_id: str = typer.Argument(..., help="Forwarder ID"),
    domain: int = DOMAIN_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Delete a log forwarder."""
    if not confirmed(force, f"Are you sure you want to delete forwarder {forwarder_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "log-forwarders", forwarder_id))

    success("Log forwarder deleted successfully")
