"""
Cache Commands.

Edge and browser caching, purging, and asset/image acceleration for a CDN
domain. Every command takes `--domain`.
"""

from typing import Optional

import typer

from mizban.cli.client import extract
from mizban.cli.commands.domain import DOMAIN_OPTION, domain_path
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    handle_errors,
    print_details,
    print_json,
    split_csv,
    success,
)
from mizban.core.exceptions import InvalidInputError
from mizban.schemas.base import EnabledRequest
from mizban.schemas.cdn import (
    CacheSettings,
    MinifyRequest,
    ModeRequest,
    ModeTTLRequest,
    PurgeRequest,
    TTLRequest,
    WebPRequest,
)

app = typer.Typer(help="Configure caching settings for your domains")
settings_app = typer.Typer(help="Manage cache settings")
image_app = typer.Typer(help="Configure image optimization")
app.add_typer(settings_app, name="settings")
settings_app.add_typer(image_app, name="image")

CACHE_MODE_HELP = "Cache mode (standard/aggressive/no-cache)"


def _post(ctx: typer.Context, domain: int, path: str, body: object) -> None:
    with handle_errors():
        get_client(ctx).post(domain_path(domain, *path.split("/")), body)


def _state(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show cache settings."""
    with handle_errors():
        settings = extract(get_client(ctx).get(domain_path(domain, "cache")), CacheSettings)

    if json_output:
        print_json(settings)
        return

    print_details(
        [
            ("Mode", settings.cache_mode),
            ("TTL", f"{settings.cache_ttl} seconds"),
            ("Developer Mode", settings.developer_mode),
            ("Always Online", settings.always_online),
            ("Cache Cookies", settings.cache_cookies),
        ],
        title="Edge Cache",
    )
    print_details(
        [
            ("Mode", settings.browser_cache_mode),
            ("TTL", f"{settings.browser_cache_ttl} seconds"),
        ],
        title="Browser Cache",
    )
    print_details(
        [
            ("Error Cache TTL", f"{settings.errors_cache_ttl} seconds"),
            ("Minify HTML", settings.minify_html),
            ("Minify CSS", settings.minify_css),
            ("Minify JS", settings.minify_js),
            ("Image Optimization", settings.image_optimization),
        ],
        title="Acceleration",
    )


@app.command()
def purge(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    url: Optional[list[str]] = typer.Option(None, "--url", help="URL to purge (repeatable)"),
    purge_all: bool = typer.Option(False, "--all", help="Purge all cache"),
) -> None:
    """
    Purge cached content.

    Examples:
        mizban cache purge --domain 7 --all
        mizban cache purge --domain 7 --url https://example.com/app.js --url https://example.com/app.css
    """
    urls = split_csv(url)

    with handle_errors():
        if purge_all:
            body = PurgeRequest(domain_id=domain, purge_all=True)
        elif urls:
            body = PurgeRequest(domain_id=domain, urls=urls)
        else:
            raise InvalidInputError("specify --all or --url")
        get_client(ctx).post(domain_path(domain, "cache", "edge", "purge-cache"), body)

    if purge_all:
        success("All cache purged successfully")
    else:
        success(f"Purged {len(urls)} URL(s) successfully")


@app.command()
def mode(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cache_mode: str = typer.Option("aggressive", "--mode", help=CACHE_MODE_HELP),
) -> None:
    """Set the edge cache mode."""
    _post(ctx, domain, "cache/edge/change-mode", ModeRequest(mode=cache_mode))
    success(f"Cache mode set to: {cache_mode}")


@app.command("dev-mode")
def dev_mode(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable developer mode"),
) -> None:
    """Enable or disable developer mode (bypasses the cache)."""
    _post(ctx, domain, "cache/edge/developer-mode", EnabledRequest(enabled=enabled))
    success("Developer mode enabled (cache bypassed)" if enabled else "Developer mode disabled")


@app.command("always-online")
def always_online(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable always online"),
) -> None:
    """Serve cached content while the origin is unavailable."""
    _post(ctx, domain, "cache/edge/always-online", EnabledRequest(enabled=enabled))
    success(f"Always online mode {_state(enabled)}")


@app.command("cache-cookies")
def cache_cookies(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable cookie caching"),
) -> None:
    """Cache responses even when cookies are present."""
    _post(ctx, domain, "cache/edge/cache-cookies", EnabledRequest(enabled=enabled))
    success(f"Cookie caching {_state(enabled)}")


# =============================================================================
# Settings
# =============================================================================


@settings_app.command()
def ttl(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cache_mode: str = typer.Option("aggressive", "--mode", help=CACHE_MODE_HELP),
    seconds: int = typer.Option(86400, "--ttl", help="TTL in seconds"),
) -> None:
    """Set the edge cache TTL."""
    _post(ctx, domain, "cache/edge/change-ttl", ModeTTLRequest(mode=cache_mode, ttl=seconds))
    success(f"Cache TTL set to {seconds} seconds (mode: {cache_mode})")


@settings_app.command()
def browser(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    browser_mode: str = typer.Option("respect", "--mode", help="Mode (respect/override)"),
    seconds: int = typer.Option(86400, "--ttl", help="TTL in seconds"),
) -> None:
    """Set the browser cache mode and TTL."""
    _post(ctx, domain, "cache/browser/change-mode", ModeTTLRequest(mode=browser_mode, ttl=seconds))
    success(f"Browser cache set (mode: {browser_mode}, TTL: {seconds})")


@settings_app.command("errors-ttl")
def errors_ttl(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    seconds: int = typer.Option(300, "--ttl", help="TTL in seconds"),
) -> None:
    """Set how long error responses are cached."""
    _post(ctx, domain, "cache/errors/cache-ttl", TTLRequest(ttl=seconds))
    success(f"Error responses cache TTL set to {seconds} seconds")


@settings_app.command()
def minify(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    html: bool = typer.Option(False, "--html", help="Minify HTML"),
    css: bool = typer.Option(False, "--css", help="Minify CSS"),
    js: bool = typer.Option(False, "--js", help="Minify JavaScript"),
) -> None:
    """Configure asset minification. Omitted types are turned off."""
    _post(ctx, domain, "acceleration/assets/minify", MinifyRequest(html=html, css=css, js=js))
    success("Minification settings updated")


@image_app.command()
def webp(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable WebP"),
) -> None:
    """Enable or disable WebP conversion."""
    _post(ctx, domain, "acceleration/images/optimize", WebPRequest(webp=enabled))
    success(f"WebP conversion {_state(enabled)}")


@image_app.command()
def resize(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable image resizing"),
) -> None:
    """Enable or disable image resizing."""
    _post(ctx, domain, "acceleration/images/resize", EnabledRequest(enabled=enabled))
    success(f"Image resizing {_state(enabled)}")
