"""
WAF Commands.

Web Application Firewall state, rules and rule groups for a CDN domain,
plus quick IP/country blocking. Every command takes `--domain`.
"""

import typer

from mizban.cli.client import extract
from mizban.cli.commands.domain import DOMAIN_OPTION, domain_path
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    console,
    handle_errors,
    print_details,
    print_json,
    print_table,
    status_text,
    success,
    truncate,
)
from mizban.schemas.cdn import (
    AccessRuleRequest,
    WAFGroupToggleRequest,
    WAFLayer,
    WAFRule,
    WAFRuleToggleRequest,
    WAFStatus,
    WAFUpdateRequest,
)

app = typer.Typer(help="Configure WAF rules and settings for your domains")
rules_app = typer.Typer(help="Manage WAF rules")
groups_app = typer.Typer(help="Manage WAF rule groups")
firewall_app = typer.Typer(help="Manage IP/country firewall rules")
app.add_typer(rules_app, name="rules")
app.add_typer(groups_app, name="groups")
app.add_typer(firewall_app, name="firewall")


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show WAF status."""
    with handle_errors():
        waf = extract(get_client(ctx).get(domain_path(domain, "waf")), WAFStatus)

    if json_output:
        print_json(waf)
        return

    print_details([("WAF Status", status_text(waf.enabled)), ("Mode", waf.mode)])


@app.command()
def enable(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    mode: str = typer.Option("block", "--mode", help="WAF mode (block/simulate)"),
) -> None:
    """Enable the WAF."""
    with handle_errors():
        get_client(ctx).put(domain_path(domain, "waf"), WAFUpdateRequest(enabled=True, mode=mode))

    success(f"WAF enabled (mode: {mode})")


@app.command()
def disable(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Disable the WAF."""
    with handle_errors():
        get_client(ctx).put(domain_path(domain, "waf"), WAFUpdateRequest(enabled=False))

    success("WAF disabled")


@app.command()
def layers(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List WAF layers."""
    with handle_errors():
        found = extract(get_client(ctx).get(domain_path(domain, "waf", "layers")), list[WAFLayer])

    if json_output:
        print_json(found)
        return

    if not found:
        console.print("No WAF layers found")
        return

    print_table(
        ["ID", "Name", "Enabled"],
        [(layer.id, truncate(layer.name, 30), layer.enabled) for layer in found],
    )


@rules_app.command("list")
def list_rules(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List WAF rules."""
    with handle_errors():
        rules = extract(get_client(ctx).get(domain_path(domain, "waf", "rules")), list[WAFRule])

    if json_output:
        print_json(rules)
        return

    if not rules:
        console.print("No WAF rules found")
        return

    print_table(
        ["ID", "Name", "Enabled"],
        [(r.id, truncate(r.name, 30), r.enabled) for r in rules],
    )


@rules_app.command("disabled")
def disabled_rules(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List disabled WAF rules."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain, "waf", "disabled-rules"))
        rules = extract(envelope, list[WAFRule])

    if json_output:
        print_json(rules)
        return

    if not rules:
        console.print("No disabled WAF rules")
        return

    print_table(["ID", "Name"], [(r.id, truncate(r.name, 40)) for r in rules])


@rules_app.command("toggle")
def toggle_rule(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    rule: str = typer.Option(..., "--rule", help="Rule ID"),
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable/disable rule"),
) -> None:
    """Enable or disable a single WAF rule."""
    with handle_errors():
        get_client(ctx).put(
            domain_path(domain, "waf", "switch-rule"),
            WAFRuleToggleRequest(rule_id=rule, enabled=enabled),
        )

    success(f"WAF rule {rule} {'enabled' if enabled else 'disabled'}")


@groups_app.command("toggle")
def toggle_group(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    group: str = typer.Option(..., "--group", help="Group ID"),
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable/disable group"),
) -> None:
    """Enable or disable a WAF rule group."""
    with handle_errors():
        get_client(ctx).put(
            domain_path(domain, "waf", "switch-group"),
            WAFGroupToggleRequest(group_id=group, enabled=enabled),
        )

    success(f"WAF group {group} {'enabled' if enabled else 'disabled'}")


# =============================================================================
# IP / country blocking
# =============================================================================


def _firewall(ctx: typer.Context, domain: int, body: AccessRuleRequest) -> None:
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "firewall"), body)


@firewall_app.command("block-ip")
def block_ip(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    ip: str = typer.Option(..., "--ip", help="IP address or CIDR"),
    action: str = typer.Option("block", "--action", help="Action (block/allow/challenge)"),
) -> None:
    """Add an IP rule."""
    _firewall(ctx, domain, AccessRuleRequest(ip=ip, action=action))
    success(f"IP {ip} added with action: {action}")


@firewall_app.command("unblock-ip")
def unblock_ip(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    ip: str = typer.Option(..., "--ip", help="IP address"),
) -> None:
    """Remove an IP rule."""
    _firewall(ctx, domain, AccessRuleRequest(ip=ip, action="remove"))
    success(f"IP {ip} removed from firewall")


@firewall_app.command("block-country")
def block_country(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    country: str = typer.Option(..., "--country", help="Country code (e.g., US, DE)"),
) -> None:
    """Block a country."""
    _firewall(ctx, domain, AccessRuleRequest(country=country, action="block"))
    success(f"Country {country} blocked")


@firewall_app.command("unblock-country")
def unblock_country(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    country: str = typer.Option(..., "--country", help="Country code"),
) -> None:
    """Unblock a country."""
    _firewall(ctx, domain, AccessRuleRequest(country=country, action="remove"))
    success(f"Country {country} unblocked")
