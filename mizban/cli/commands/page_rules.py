"""
Page Rule Commands.

Path patterns (globs such as /api/* or *.js) and the per-path rules attached
to them: cache, waf, ratelimit, ddos and firewall.
"""

import json
from typing import Any

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
from mizban.schemas.cdn import PageRulePath, PageRuleRequest, PathCreateRequest

app = typer.Typer(help="Configure path-based rules for caching, security, and more")

PATH_ID_OPTION = typer.Option(..., "--path", help="Path ID")


def _parse_settings(raw: str) -> dict[str, Any]:
    try:
        settings = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"invalid settings JSON: {e}") from e
    if not isinstance(settings, dict):
        raise InvalidInputError("invalid settings JSON: expected an object")
    return settings


@app.command("list")
def list_paths(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    rule_type: str = typer.Option(
        "all", "--type", help="Rule type filter (all/waf/ratelimit/ddos/firewall)",
    ),
    json_output: bool = JSON_OPTION,
) -> None:
    """List page rule paths, optionally only those with a given rule type."""
    if rule_type and rule_type != "all":
        path = domain_path(domain, "paths", rule_type)
    else:
        path = domain_path(domain, "paths")

    with handle_errors():
        paths = extract(get_client(ctx).get(path), list[PageRulePath])

    if json_output:
        print_json(paths)
        return

    if not paths:
        console.print("No page rules found")
        return

    print_table(
        ["ID", "Path", "Priority"],
        [(p.id, truncate(p.path, 40), p.priority) for p in paths],
    )


@app.command("add-path")
def add_path(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    path: str = typer.Option(..., "--path", help="URL path pattern"),
    priority: int = typer.Option(10, "--priority", help="Rule priority (lower = higher priority)"),
) -> None:
    """
    Add a page rule path.

    Examples:
        mizban page-rules add-path --domain 7 --path "/api/*"
        mizban page-rules add-path --domain 7 --path "/images/**" --priority 5
    """
    with handle_errors():
        envelope = get_client(ctx).post(
            domain_path(domain, "paths"), PathCreateRequest(path=path, priority=priority),
        )

    try:
        created = extract(envelope, PageRulePath)
    except DecodeError:
        success("Path added successfully")
        return

    success("Path added successfully!")
    print_details([("ID", created.id), ("Path", created.path), ("Priority", created.priority)])


@app.command("delete-path")
def delete_path(
    ctx: typer.Context,
    path_id: str = typer.Argument(..., help="Path ID"),
    domain: int = DOMAIN_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Delete a page rule path."""
    if not confirmed(force, f"Are you sure you want to delete path {path_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "paths", path_id))

    success("Path deleted successfully")


@app.command("set-rule")
def set_rule(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    path: int = PATH_ID_OPTION,
    rule_type: str = typer.Option(..., "--type", help="Rule type (cache/waf/ratelimit/ddos/firewall)"),
    settings: str = typer.Option("{}", "--settings", help="Rule settings as a JSON object"),
) -> None:
    """
    Set a rule on a path.

    Examples:
        mizban page-rules set-rule --domain 7 --path 3 --type cache --settings '{"ttl": 600}'
    """
    with handle_errors():
        body = PageRuleRequest(type=rule_type, settings=_parse_settings(settings))
        get_client(ctx).post(domain_path(domain, "paths", path, "rules"), body)

    success(f"Rule '{rule_type}' set for path {path} successfully")


@app.command("delete-rule")
def delete_rule(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    path: int = PATH_ID_OPTION,
    rule_type: str = typer.Option(..., "--type", help="Rule type"),
) -> None:
    """Remove a rule from a path."""
    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "paths", path, "rules", rule_type))

    success(f"Rule '{rule_type}' deleted from path {path}")
