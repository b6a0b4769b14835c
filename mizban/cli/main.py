"""
MizbanCloud CLI entry point.

Usage:
    mizban --help                                   # Show help
    mizban login                                    # Save an API token

    # Cloud
    mizban server list                              # List servers
    mizban server create --name web-1 --os ubuntu-22.04
    mizban volume attach 12 --server 3

    # CDN
    mizban domain add --domain example.com
    mizban dns add --domain 7 --type A --name www --destination 203.0.113.10
    mizban cache purge --domain 7 --all

    # Support
    mizban ticket create --subject "Billing" --message "..."

Options:
    --verbose, -v     Enable verbose output (INFO level logging)
    --debug, -d       Enable debug mode (DEBUG level logging)
    --log-format      Log output format (console/json)
    --version         Show version and exit
"""

from typing import Optional

import typer
from rich.console import Console

from mizban import __version__
from mizban.cli.commands import (
    access_rules_app,
    cache_app,
    cluster_app,
    custom_pages_app,
    ddos_app,
    dns_app,
    domain_app,
    firewall_app,
    log_forwarder_app,
    login,
    logout,
    network_app,
    page_rules_app,
    plan_app,
    profile_app,
    ratelimit_app,
    server_app,
    snapshot_app,
    ssh_app,
    ssl_app,
    ticket_app,
    volume_app,
    waf_app,
)
from mizban.cli.context import CLIState
from mizban.core.config import Config
from mizban.core.logging import get_logger, log_with_source, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="mizban",
    help="MizbanCloud CLI - Manage your cloud infrastructure.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console(stderr=True)

# (group, primary name, hidden aliases)
COMMAND_GROUPS: list[tuple[typer.Typer, str, tuple[str, ...]]] = [
    (profile_app, "profile", ()),
    # Cloud
    (server_app, "server", ("srv", "servers")),
    (volume_app, "volume", ("vol", "volumes")),
    (snapshot_app, "snapshot", ("snap", "snapshots")),
    (ssh_app, "ssh-key", ("ssh", "sshkey")),
    (firewall_app, "firewall", ("fw", "sg")),
    (network_app, "network", ("net", "networks")),
    # CDN
    (domain_app, "domain", ("domains",)),
    (dns_app, "dns", ()),
    (ssl_app, "ssl", ("https", "certificate", "cert")),
    (cache_app, "cache", ()),
    (waf_app, "waf", ()),
    (cluster_app, "cluster", ("clusters", "pool", "pools")),
    (ddos_app, "ddos", ()),
    (ratelimit_app, "ratelimit", ("rate-limit", "rl")),
    (access_rules_app, "access-rules", ("acl", "ip-access")),
    (custom_pages_app, "custom-pages", ("pages", "error-pages")),
    (page_rules_app, "page-rules", ("rules", "paths")),
    (log_forwarder_app, "log-forwarder", ("logs", "log-forwarders")),
    (plan_app, "plan", ("plans",)),
    # Support
    (ticket_app, "ticket", ("tickets", "support")),
]

app.command()(login)
app.command()(logout)

for group, name, aliases in COMMAND_GROUPS:
    app.add_typer(group, name=name)
    for alias in aliases:
        app.add_typer(group, name=alias, hidden=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mizban version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    log_format: Optional[str] = typer.Option(
        None,
        "--log-format",
        help="Log output format (console/json)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    MizbanCloud CLI.

    Manage cloud servers, CDN domains and support tickets from the terminal.
    Run `mizban login` first to store an API token.
    """
    if log_format is not None and log_format not in ("console", "json"):
        raise typer.BadParameter("must be 'console' or 'json'", param_hint="--log-format")

    if debug:
        setup_logging(level="DEBUG", format_type=log_format)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type=log_format)
    else:
        setup_logging(format_type=log_format)

    state = CLIState(Config.load())
    ctx.obj = state
    ctx.call_on_close(state.close)

    log_with_source(
        logger,
        "cli",
        "debug",
        "CLI invoked",
        command=ctx.invoked_subcommand,
        logged_in=state.config.is_logged_in,
    )


if __name__ == "__main__":
    app()
