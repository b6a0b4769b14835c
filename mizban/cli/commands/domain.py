"""
CDN Domain Commands.

Add domains to the CDN and inspect them. Also holds the `--domain` option
and path helper shared by every per-domain command group.
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
    format_bytes,
    handle_errors,
    print_details,
    print_json,
    print_table,
    success,
    truncate,
)
from mizban.core.exceptions import DecodeError
from mizban.schemas.cdn import (
    Domain,
    DomainCreateRequest,
    DomainReport,
    DomainUsage,
    ModeRequest,
    PeriodRequest,
    WhoisInfo,
)

app = typer.Typer(help="Add and manage domains in the CDN service")

DOMAINS_PATH = "/v1/cdn/ng/domains"

DOMAIN_OPTION = typer.Option(..., "--domain", help="Domain ID")
DOMAIN_ID = typer.Argument(..., help="Domain ID")


def domain_path(domain_id: int | str, *parts: object) -> str:
    """
    Build a per-domain API path.

    Examples:
        domain_path(7)                  -> /v1/cdn/ng/domains/7
        domain_path(7, "dns", 12)       -> /v1/cdn/ng/domains/7/dns/12
    """
    return "/".join([DOMAINS_PATH, str(domain_id), *(str(part) for part in parts)])


@app.command("list")
def list_domains(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all domains."""
    with handle_errors():
        domains = extract(get_client(ctx).get(DOMAINS_PATH), list[Domain])

    if json_output:
        print_json(domains)
        return

    if not domains:
        console.print("No domains found")
        return

    print_table(
        ["ID", "Domain", "Status", "Plan", "WAF"],
        [
            (d.id, truncate(d.display_name, 30), d.status, d.plan_display_name, d.waf_enabled)
            for d in domains
        ],
    )


@app.command()
def add(
    ctx: typer.Context,
    domain: str = typer.Option(..., "--domain", help="Domain name (e.g., example.com)"),
) -> None:
    """
    Add a domain to the CDN.

    Point the domain at the printed nameservers to activate it.
    """
    with handle_errors():
        envelope = get_client(ctx).post(DOMAINS_PATH, DomainCreateRequest(domain=domain))
        created = extract(envelope, Domain)

    success("Domain added successfully!")
    print_details([
        ("ID", created.id),
        ("Domain", created.display_name),
        ("Status", created.status),
    ])

    if created.nameservers is not None:
        console.print()
        console.print("Nameservers (point your domain to these):")
        console.print(f"  NS1: {escape(created.nameservers.ns1)}")
        console.print(f"  NS2: {escape(created.nameservers.ns2)}")


@app.command()
def get(ctx: typer.Context, domain_id: str = DOMAIN_ID, json_output: bool = JSON_OPTION) -> None:
    """Get domain details."""
    with handle_errors():
        domain = extract(get_client(ctx).get(domain_path(domain_id)), Domain)

    if json_output:
        print_json(domain)
        return

    print_details([
        ("ID", domain.id),
        ("Domain", domain.display_name),
        ("Status", domain.status),
        ("Plan", f"{domain.plan} ({domain.plan_display_name})"),
        ("WAF", domain.waf_enabled),
        ("DNSSEC", domain.dnssec_enabled),
        ("HTTP/3", domain.h3_enabled),
        ("WebSocket", domain.supports_websocket),
        ("Added", domain.added_at),
    ])

    if domain.current_nameservers is not None:
        print_details(
            [("NS1", domain.current_nameservers.ns1), ("NS2", domain.current_nameservers.ns2)],
            title="Current Nameservers",
        )

    if domain.nameservers is not None:
        print_details(
            [("NS1", domain.nameservers.ns1), ("NS2", domain.nameservers.ns2)],
            title="Target Nameservers",
        )


@app.command()
def delete(ctx: typer.Context, domain_id: str = DOMAIN_ID, force: bool = FORCE_OPTION) -> None:
    """Delete a domain from the CDN."""
    if not confirmed(force, f"Are you sure you want to delete domain {domain_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain_id))

    success("Domain deleted successfully")


@app.command()
def usage(ctx: typer.Context, domain_id: str = DOMAIN_ID, json_output: bool = JSON_OPTION) -> None:
    """Show domain traffic usage."""
    with handle_errors():
        stats = extract(get_client(ctx).get(domain_path(domain_id, "usage")), DomainUsage)

    if json_output:
        print_json(stats)
        return

    print_details([
        ("Traffic", format_bytes(stats.traffic)),
        ("Requests", stats.requests),
        ("Bandwidth", f"{format_bytes(stats.bandwidth)}/s"),
    ])


@app.command()
def whois(ctx: typer.Context, domain_id: str = DOMAIN_ID, json_output: bool = JSON_OPTION) -> None:
    """Show WHOIS information for a domain."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain_id, "whois"))

    if json_output:
        print_json(envelope.data)
        return

    try:
        info = extract(envelope, WhoisInfo)
    except DecodeError:
        print_json(envelope.data)
        return

    print_details(
        [
            ("Registrar", info.registrar),
            ("Created", info.creation_date),
            ("Expires", info.expiry_date),
            ("Status", info.status),
        ],
        title="WHOIS Information",
    )
    if info.nameservers:
        console.print("Nameservers:")
        for nameserver in info.nameservers:
            console.print(f"  - {escape(nameserver)}")


@app.command()
def reports(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    period: str = typer.Option("day", "--period", help="Time period (hour/day/week/month)"),
    json_output: bool = JSON_OPTION,
) -> None:
    """Show traffic reports for a domain."""
    with handle_errors():
        envelope = get_client(ctx).post(domain_path(domain, "reports"), PeriodRequest(period=period))

    if json_output:
        print_json(envelope.data)
        return

    try:
        report = extract(envelope, DomainReport)
    except DecodeError:
        print_json(envelope.data)
        return

    print_details(
        [
            ("Total Traffic", format_bytes(report.total_traffic)),
            ("Total Requests", report.total_requests),
            ("Cache Hit Ratio", f"{report.cache_hit_ratio * 100:.2f}%"),
            ("Bandwidth Peak", f"{format_bytes(report.bandwidth_peak)}/s"),
        ],
        title=f"Domain Reports ({period})",
    )


@app.command("redirect-mode")
def redirect_mode(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    mode: str = typer.Option("none", "--mode", help="Redirect mode (none/www/naked)"),
) -> None:
    """Set www / naked-domain redirect mode."""
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "redirect-mode"), ModeRequest(mode=mode))

    success(f"Redirect mode set to: {mode}")
