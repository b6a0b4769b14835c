"""
Rate Limit Commands.

The rate limit endpoint replaces the whole configuration on every POST, so
`disable` re-sends the current limits with the switch turned off.
"""

from typing import Optional

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
    split_csv,
    success,
)
from mizban.schemas.cdn import RateLimitRequest, RateLimitSettings

app = typer.Typer(help="Configure rate limiting settings for your domains")

REQUEST_COUNT_OPTION = typer.Option(100, "--request-count", help="Max requests per second (1-1000)")
BLOCK_TIME_OPTION = typer.Option(60, "--block-time", help="Block duration in seconds (1-1000)")


def _joined(values: list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show rate limit settings."""
    with handle_errors():
        settings = extract(get_client(ctx).get(domain_path(domain, "ratelimit")), RateLimitSettings)

    if json_output:
        print_json(settings)
        return

    print_details(
        [
            ("Enabled", settings.enabled),
            ("Request Limit", f"{settings.limit} req/s"),
            ("Block Duration", f"{settings.block} seconds"),
            ("Allowed Methods", _joined(settings.allow_methods, "(all)")),
            ("Whitelisted IPs", _joined(settings.whitelist, "(none)")),
            ("Allowed Countries", _joined(settings.allow_countries, "(all)")),
        ],
        title="Rate Limit Settings",
    )


@app.command("set")
def set_limits(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable/disable rate limiting"),
    request_count: int = REQUEST_COUNT_OPTION,
    block_time: int = BLOCK_TIME_OPTION,
    methods: Optional[list[str]] = typer.Option(None, "--methods", help="Whitelisted HTTP methods"),
    ips: Optional[list[str]] = typer.Option(None, "--ips", help="Whitelisted IP addresses"),
    countries: Optional[list[str]] = typer.Option(
        None, "--countries", help="Whitelisted country codes (e.g., US,DE)",
    ),
) -> None:
    """
    Replace the rate limit configuration.

    List options accept comma-separated values or can be repeated.

    Examples:
        mizban ratelimit set --domain 7 --request-count 50 --block-time 120
        mizban ratelimit set --domain 7 --methods GET,HEAD --ips 203.0.113.4
    """
    method_list, ip_list, country_list = split_csv(methods), split_csv(ips), split_csv(countries)
    body = RateLimitRequest(
        mode=enabled,
        request_count=request_count,
        block_time=block_time,
        methods=method_list,
        ips=ip_list,
        countries=country_list,
    )

    with handle_errors():
        get_client(ctx).post(domain_path(domain, "ratelimit"), body)

    success(f"Rate limiting {'enabled' if enabled else 'disabled'}")
    console.print(f"Request limit: {request_count} req/s")
    console.print(f"Block duration: {block_time} seconds")
    if method_list:
        console.print(f"Whitelisted methods: {', '.join(method_list)}", markup=False)
    if ip_list:
        console.print(f"Whitelisted IPs: {', '.join(ip_list)}", markup=False)
    if country_list:
        console.print(f"Whitelisted countries: {', '.join(country_list)}", markup=False)


@app.command()
def enable(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    request_count: int = REQUEST_COUNT_OPTION,
    block_time: int = BLOCK_TIME_OPTION,
) -> None:
    """Enable rate limiting with empty whitelists."""
    body = RateLimitRequest(
        mode=True,
        request_count=request_count,
        block_time=block_time,
        methods=[],
        ips=[],
        countries=[],
    )

    with handle_errors():
        get_client(ctx).post(domain_path(domain, "ratelimit"), body)

    success("Rate limiting enabled")
    console.print(f"Request limit: {request_count} req/s")
    console.print(f"Block duration: {block_time} seconds")


@app.command()
def disable(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Disable rate limiting, keeping the configured limits and whitelists."""
    path = domain_path(domain, "ratelimit")

    with handle_errors():
        client = get_client(ctx)
        current = extract(client.get(path), RateLimitSettings)
        client.post(
            path,
            RateLimitRequest(
                mode=False,
                request_count=current.limit,
                block_time=current.block,
                methods=current.allow_methods,
                ips=current.whitelist,
                countries=current.allow_countries,
            ),
        )

    success("Rate limiting disabled")
