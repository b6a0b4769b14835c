"""
SSL / HTTPS Commands.

Certificates and HTTPS settings for a CDN domain. Every command takes
`--domain`.
"""

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
    split_csv,
    success,
    truncate,
)
from mizban.core.exceptions import DecodeError, InvalidInputError
from mizban.schemas.base import EnabledRequest
from mizban.schemas.cdn import (
    BackendProtocolRequest,
    CertificateAttachRequest,
    CustomCertificateRequest,
    HSTSRequest,
    SSLCertificate,
    SSLConfigs,
    SSLInfo,
    TLSVersionRequest,
)

app = typer.Typer(help="Request and manage SSL certificates for your domains")
settings_app = typer.Typer(help="Manage SSL settings")
app.add_typer(settings_app, name="settings")

RECORDS_OPTION = typer.Option(..., "--records", help="DNS record IDs (repeatable or comma-separated)")


def _record_ids(values: list[str]) -> list[int]:
    ids = split_csv(values)
    if not ids:
        raise InvalidInputError("at least one record ID is required")
    try:
        return [int(item) for item in ids]
    except ValueError as e:
        raise InvalidInputError(f"invalid record ID: {e}") from e


def _https_path(domain: int, *parts: object) -> str:
    return domain_path(domain, "https", *parts)


@app.command("list")
def list_certificates(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List SSL certificates."""
    with handle_errors():
        certificates = extract(get_client(ctx).get(_https_path(domain, "ssl")), list[SSLCertificate])

    if json_output:
        print_json(certificates)
        return

    if not certificates:
        console.print("No SSL certificates found")
        return

    print_table(
        ["ID", "Type", "Status", "Expires", "Domains"],
        [
            (c.id, c.type, c.status, c.expires_at, truncate(", ".join(c.domains), 30))
            for c in certificates
        ],
    )


@app.command()
def status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show SSL/HTTPS settings."""
    with handle_errors():
        configs = extract(
            get_client(ctx).get(_https_path(domain, "ssl", "get-configs")), SSLConfigs,
        )

    if json_output:
        print_json(configs)
        return

    print_details(
        [
            ("TLS Version", configs.tls_version),
            ("HTTPS Redirect", configs.https_redirect),
            ("Backend Protocol", configs.backend_protocol),
            ("HTTP/3 (QUIC)", configs.h3_enabled),
            ("CSP Override", configs.csp_override),
        ],
        title="SSL/HTTPS Settings",
    )

    hsts: list[tuple[str, object]] = [("Enabled", configs.hsts_enabled)]
    if configs.hsts_enabled:
        hsts += [
            ("Max Age", f"{configs.hsts_max_age} seconds"),
            ("Subdomains", configs.hsts_include_subdomains),
            ("Preload", configs.hsts_preload),
        ]
    print_details(hsts, title="HSTS")


@app.command()
def info(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show the certificate currently served for the domain."""
    with handle_errors():
        envelope = get_client(ctx).get(_https_path(domain, "ssl", "get-info"))

    if json_output:
        print_json(envelope.data)
        return

    try:
        cert = extract(envelope, SSLInfo)
    except DecodeError:
        print_json(envelope.data)
        return

    rows: list[tuple[str, object]] = [("Has SSL", cert.has_ssl)]
    if cert.has_ssl:
        rows += [
            ("Issuer", cert.issuer),
            ("Valid From", cert.valid_from),
            ("Valid To", cert.valid_to),
            ("Fingerprint", cert.fingerprint),
        ]
        if cert.domains:
            rows.append(("Domains", ", ".join(cert.domains)))
    print_details(rows, title="SSL Certificate Info")


@app.command("request-free")
def request_free(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Request a free Let's Encrypt certificate."""
    with handle_errors():
        get_client(ctx).post(_https_path(domain, "ssl", "free"))

    success("SSL certificate request submitted successfully!")
    console.print("The certificate will be issued within a few minutes.")


@app.command("add-custom")
def add_custom(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cert: str = typer.Option(..., "--cert", help="Certificate PEM content"),
    key: str = typer.Option(..., "--key", help="Private key PEM content"),
    chain: Optional[str] = typer.Option(None, "--chain", help="Certificate chain PEM content"),
) -> None:
    """Upload a custom certificate."""
    body = CustomCertificateRequest(certificate=cert, private_key=key, chain=chain or None)

    with handle_errors():
        get_client(ctx).post(_https_path(domain, "ssl", "add"), body)

    success("Custom SSL certificate added successfully!")


@app.command()
def delete(
    ctx: typer.Context,
    cert_id: str = typer.Argument(..., help="Certificate ID"),
    domain: int = DOMAIN_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Delete an SSL certificate."""
    if not confirmed(force, f"Are you sure you want to delete certificate {cert_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(_https_path(domain, "ssl", cert_id))

    success("SSL certificate deleted successfully")


@app.command()
def attach(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    cert: int = typer.Option(..., "--cert", help="Certificate ID"),
    records: list[str] = RECORDS_OPTION,
) -> None:
    """Attach a certificate to DNS records."""
    with handle_errors():
        body = CertificateAttachRequest(certificate_id=cert, record_ids=_record_ids(records))
        get_client(ctx).post(_https_path(domain, "attach"), body)

    success("SSL certificate attached successfully")


@app.command()
def detach(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    records: list[str] = RECORDS_OPTION,
) -> None:
    """Detach certificates from DNS records."""
    with handle_errors():
        body = CertificateAttachRequest(record_ids=_record_ids(records))
        get_client(ctx).post(_https_path(domain, "detach"), body)

    success("SSL certificate detached successfully")


@app.command("attach-default")
def attach_default(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Attach the shared MizbanCloud certificate."""
    with handle_errors():
        get_client(ctx).post(_https_path(domain, "attach-default"))

    success("Default SSL certificate attached successfully")


@app.command("detach-default")
def detach_default(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Detach the shared MizbanCloud certificate."""
    with handle_errors():
        get_client(ctx).post(_https_path(domain, "detach-default"))

    success("Default SSL certificate detached successfully")


# =============================================================================
# Settings
# =============================================================================


@settings_app.command("tls-version")
def tls_version(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    version: str = typer.Option("1.2", "--version", help="Minimum TLS version (1.0, 1.1, 1.2, 1.3)"),
) -> None:
    """Set the minimum TLS version."""
    with handle_errors():
        get_client(ctx).post(
            _https_path(domain, "ssl", "tls-version"), TLSVersionRequest(min_version=version),
        )

    success(f"Minimum TLS version set to {version}")


@settings_app.command()
def hsts(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable HSTS"),
    max_age: int = typer.Option(31536000, "--max-age", help="Max age in seconds"),
    include_subdomains: bool = typer.Option(False, "--include-subdomains", help="Include subdomains"),
    preload: bool = typer.Option(False, "--preload", help="Enable preload"),
) -> None:
    """Configure HSTS."""
    body = HSTSRequest(
        enabled=enabled,
        max_age=max_age,
        include_subdomains=include_subdomains,
        preload=preload,
    )

    with handle_errors():
        get_client(ctx).post(_https_path(domain, "hsts"), body)

    success("HSTS enabled successfully" if enabled else "HSTS disabled successfully")


def _toggle(ctx: typer.Context, domain: int, setting: str, enabled: bool, label: str) -> None:
    with handle_errors():
        get_client(ctx).post(_https_path(domain, setting), EnabledRequest(enabled=enabled))
    success(f"{label} {'enabled' if enabled else 'disabled'}")


@settings_app.command()
def redirect(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable HTTPS redirect"),
) -> None:
    """Enable or disable HTTP to HTTPS redirect."""
    _toggle(ctx, domain, "redirect", enabled, "HTTPS redirect")


@settings_app.command()
def h3(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable HTTP/3"),
) -> None:
    """Enable or disable HTTP/3 (QUIC)."""
    _toggle(ctx, domain, "h3", enabled, "HTTP/3 (QUIC)")


@settings_app.command("csp-override")
def csp_override(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Enable CSP override"),
) -> None:
    """
    Enable or disable Content Security Policy override.

    When enabled, the CDN rewrites CSP headers to allow CDN resources.
    """
    _toggle(ctx, domain, "csp-override", enabled, "CSP override")


@settings_app.command("backend-protocol")
def backend_protocol(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    protocol: str = typer.Option("https", "--protocol", help="Protocol (http/https/auto)"),
) -> None:
    """
    Set the protocol used to reach the origin.

    http connects over HTTP, https over HTTPS, and auto follows each DNS
    record's own setting.
    """
    with handle_errors():
        get_client(ctx).post(
            _https_path(domain, "backend-protocol"), BackendProtocolRequest(protocol=protocol),
        )

    success(f"Backend protocol set to: {protocol}")
