"""
DDoS Protection Commands.
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
    success,
)
from mizban.schemas.cdn import CaptchaModuleRequest, DDoSSettings, ModeRequest, TTLRequest

app = typer.Typer(help="Configure DDoS protection settings for your domains")
ttl_app = typer.Typer(help="Set challenge TTL values")
app.add_typer(ttl_app, name="ttl")

MODE_DESCRIPTIONS = {
    "off": "Protection disabled",
    "normal": "Standard protection",
    "high": "High protection",
    "under_attack": "Maximum protection (Under Attack mode)",
}

TTL_OPTION = typer.Option(3600, "--ttl", help="TTL in seconds")


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show DDoS protection settings."""
    with handle_errors():
        settings = extract(get_client(ctx).get(domain_path(domain, "ddos")), DDoSSettings)

    if json_output:
        print_json(settings)
        return

    print_details(
        [
            ("Mode", settings.mode),
            ("Under Attack", settings.under_attack),
            ("JS Challenge", settings.js_challenge),
            ("Captcha Challenge", settings.captcha_challenge),
            ("Captcha Module", settings.captcha_module),
        ],
        title="DDoS Protection Settings",
    )
    print_details(
        [
            ("Cookie TTL", f"{settings.cookie_ttl} seconds"),
            ("JS TTL", f"{settings.js_ttl} seconds"),
            ("Captcha TTL", f"{settings.captcha_ttl} seconds"),
        ],
        title="TTL Settings",
    )


@app.command()
def mode(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    protection: str = typer.Option(
        "normal", "--mode", help="Protection mode (off/normal/high/under_attack)",
    ),
) -> None:
    """
    Set the DDoS protection mode.

    Use under_attack only while an attack is in progress.
    """
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "ddos"), ModeRequest(mode=protection))

    success(f"DDoS protection mode set to: {protection}")
    if protection in MODE_DESCRIPTIONS:
        console.print(f"Description: {MODE_DESCRIPTIONS[protection]}")


@app.command()
def captcha(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    module: str = typer.Option(
        "recaptcha", "--module", help="Captcha module (recaptcha/hcaptcha/turnstile)",
    ),
) -> None:
    """Choose the captcha provider shown to challenged visitors."""
    with handle_errors():
        get_client(ctx).post(
            domain_path(domain, "ddos", "captcha-module"), CaptchaModuleRequest(module=module),
        )

    success(f"Captcha module set to: {module}")


def _set_ttl(ctx: typer.Context, domain: int, challenge: str, ttl: int, label: str) -> None:
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "ddos", "set-ttl", challenge), TTLRequest(ttl=ttl))
    success(f"{label} challenge TTL set to: {ttl} seconds")


@ttl_app.command()
def cookie(ctx: typer.Context, domain: int = DOMAIN_OPTION, ttl: int = TTL_OPTION) -> None:
    """Set the cookie challenge TTL."""
    _set_ttl(ctx, domain, "cookie", ttl, "Cookie")


@ttl_app.command()
def js(ctx: typer.Context, domain: int = DOMAIN_OPTION, ttl: int = TTL_OPTION) -> None:
    """Set the JavaScript challenge TTL."""
    _set_ttl(ctx, domain, "js", ttl, "JavaScript")


@ttl_app.command("captcha")
def captcha_ttl(ctx: typer.Context, domain: int = DOMAIN_OPTION, ttl: int = TTL_OPTION) -> None:
    """Set the captcha challenge TTL."""
    _set_ttl(ctx, domain, "captcha", ttl, "Captcha")
