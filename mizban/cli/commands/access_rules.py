"""
Access Rule Commands.

IP and country based allow/block/challenge rules for a CDN domain.
"""

import typer

from mizban.cli.client import extract
from mizban.cli.commands.domain import DOMAIN_OPTION, domain_path
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    console,
    handle_errors,
    print_json,
    print_table,
    success,
)
from mizban.schemas.cdn import AccessRule, AccessRuleRequest, AccessRules

app = typer.Typer(help="Configure IP and country-based access rules for your domains")

ACTION_HELP = "Action (block/allow/challenge)"


def _print_rules(title: str, value_column: str, rules: list[AccessRule]) -> None:
    if not rules:
        console.print(f"{title}: (none)")
        return
    print_table(["ID", value_column, "Action"], [(r.id, r.value, r.action) for r in rules], title=title)


def _submit(ctx: typer.Context, domain: int, body: AccessRuleRequest) -> None:
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "firewall"), body)


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show IP and country rules."""
    with handle_errors():
        rules = extract(get_client(ctx).get(domain_path(domain, "firewall")), AccessRules)

    if json_output:
        print_json(rules)
        return

    _print_rules("IP Rules", "IP/CIDR", rules.ip_rules)
    _print_rules("Country Rules", "Country", rules.country_rules)


@app.command("add-ip")
def add_ip(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    ip: str = typer.Option(..., "--ip", help="IP address or CIDR range"),
    action: str = typer.Option("block", "--action", help=ACTION_HELP),
) -> None:
    """
    Add an IP rule.

    block rejects the address, allow whitelists it, challenge shows a captcha.
    """
    _submit(ctx, domain, AccessRuleRequest(type="ip", ip=ip, action=action))
    success(f"IP rule added: {ip} -> {action}")


@app.command("remove-ip")
def remove_ip(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    ip: str = typer.Option(..., "--ip", help="IP address"),
) -> None:
    """Remove an IP rule."""
    _submit(ctx, domain, AccessRuleRequest(type="ip", ip=ip, action="remove"))
    success(f"IP rule removed: {ip}")


@app.command("add-country")
def add_country(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    country: str = typer.Option(..., "--country", help="Country code (e.g., US, DE, IR)"),
    action: str = typer.Option("block", "--action", help=ACTION_HELP),
) -> None:
    """Add a country rule."""
    _submit(ctx, domain, AccessRuleRequest(type="country", country=country, action=action))
    success(f"Country rule added: {country} -> {action}")


@app.command("remove-country")
def remove_country(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    country: str = typer.Option(..., "--country", help="Country code"),
) -> None:
    """Remove a country rule."""
    _submit(ctx, domain, AccessRuleRequest(type="country", country=country, action="remove"))
    success(f"Country rule removed: {country}")
