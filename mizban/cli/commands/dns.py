"""
DNS Commands.

DNS records, zone import/export, custom nameservers and DNSSEC for a CDN
domain. Every command takes `--domain`.
"""

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
from mizban.core.exceptions import DecodeError
from mizban.schemas.base import EnabledRequest
from mizban.schemas.cdn import (
    CustomNameservers,
    CustomNameserversRequest,
    DNSRecord,
    DNSRecordRequest,
    DNSSECStatus,
    FetchedRecords,
    ZoneExport,
    ZoneImportRequest,
)

app = typer.Typer(help="Create and manage DNS records for your domains")
custom_ns_app = typer.Typer(help="Manage custom (vanity) nameservers")
dnssec_app = typer.Typer(help="Manage DNSSEC settings")
app.add_typer(custom_ns_app, name="custom-ns")
app.add_typer(dnssec_app, name="dnssec")

RECORD_ID = typer.Argument(..., help="DNS record ID")


def _protocol_label(record: DNSRecord) -> str:
    protocol = record.protocol if record.protocol not in ("", "DEFAULT") else "-"
    if record.port > 0:
        return f"{protocol}:{record.port}"
    return protocol


def _optional_positive(value: int) -> int | None:
    return value if value > 0 else None


@app.command("list")
def list_records(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List DNS records."""
    with handle_errors():
        records = extract(get_client(ctx).get(domain_path(domain, "dns")), list[DNSRecord])

    if json_output:
        print_json(records)
        return

    if not records:
        console.print("No DNS records found")
        return

    print_table(
        ["ID", "Type", "Name", "Content", "TTL", "Protocol", "Proxied"],
        [
            (
                r.id,
                r.type,
                truncate(r.name, 25),
                truncate(r.content, 40),
                r.ttl,
                _protocol_label(r),
                r.proxied,
            )
            for r in records
        ],
    )


@app.command()
def get(
    ctx: typer.Context,
    record_id: str = RECORD_ID,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Get a single DNS record."""
    with handle_errors():
        record = extract(get_client(ctx).get(domain_path(domain, "dns", record_id)), DNSRecord)

    if json_output:
        print_json(record)
        return

    rows = [
        ("ID", record.id),
        ("Type", record.type),
        ("Name", record.name),
        ("Content", record.content),
        ("TTL", record.ttl),
    ]
    if record.priority > 0:
        rows.append(("Priority", record.priority))
    if record.port > 0:
        rows.append(("Port", record.port))
    if record.protocol not in ("", "DEFAULT"):
        rows.append(("Protocol", record.protocol))
    rows.append(("Proxied", record.proxy))
    print_details(rows, title="DNS Record Details")


@app.command()
def proxiable(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """List records that can be proxied through the CDN (includes trashed records)."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain, "dns", "proxiable"))
        records = extract(envelope, list[DNSRecord])

    if json_output:
        print_json(records)
        return

    if not records:
        console.print("No proxiable DNS records found")
        return

    print_table(
        ["ID", "Type", "Name", "Content", "Proxied"],
        [
            (r.id, r.type, truncate(r.name, 25), truncate(r.content, 40), r.proxied)
            for r in records
        ],
    )


@app.command()
def add(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    record_type: str = typer.Option(..., "--type", help="Record type (A, AAAA, CNAME, MX, TXT, etc.)"),
    name: str = typer.Option(..., "--name", help="Record name (@ for root)"),
    destination: str = typer.Option(..., "--destination", help="Record destination/value"),
    ttl: int = typer.Option(3600, "--ttl", help="TTL in seconds"),
    priority: int = typer.Option(0, "--priority", help="Priority (for MX records)"),
    port: int = typer.Option(0, "--port", help="Port (for proxied records with custom port)"),
    protocol: str = typer.Option("DEFAULT", "--protocol", help="Protocol (DEFAULT/HTTPS/HTTP)"),
    proxy: bool = typer.Option(False, "--proxy", help="Enable CDN proxy"),
) -> None:
    """
    Add a DNS record.

    Examples:
        mizban dns add --domain 7 --type A --name www --destination 203.0.113.10 --proxy
        mizban dns add --domain 7 --type MX --name @ --destination mail.example.com --priority 10
    """
    body = DNSRecordRequest(
        type=record_type,
        name=name,
        destination=destination,
        ttl=ttl,
        protocol=protocol,
        proxy=proxy,
        priority=_optional_positive(priority),
        port=_optional_positive(port),
    )

    with handle_errors():
        record = extract(get_client(ctx).post(domain_path(domain, "dns"), body), DNSRecord)

    success("DNS record added successfully!")
    print_details([
        ("ID", record.id),
        ("Type", record.type),
        ("Name", record.name),
        ("Content", record.content),
    ])


@app.command()
def update(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    record: int = typer.Option(..., "--record", help="Record ID"),
    record_type: str = typer.Option("", "--type", help="Record type"),
    name: str = typer.Option("", "--name", help="Record name"),
    destination: str = typer.Option("", "--destination", help="Record destination/value"),
    ttl: int = typer.Option(3600, "--ttl", help="TTL in seconds"),
    priority: int = typer.Option(0, "--priority", help="Priority (for MX records)"),
    port: int = typer.Option(0, "--port", help="Port (for proxied records with custom port)"),
    protocol: str = typer.Option("DEFAULT", "--protocol", help="Protocol (DEFAULT/HTTPS/HTTP)"),
    proxy: bool = typer.Option(False, "--proxy", help="Enable CDN proxy"),
) -> None:
    """Update a DNS record. The full record is sent."""
    body = DNSRecordRequest(
        record_id=record,
        type=record_type,
        name=name,
        destination=destination,
        ttl=ttl,
        protocol=protocol,
        proxy=proxy,
        priority=_optional_positive(priority),
        port=_optional_positive(port),
    )

    with handle_errors():
        get_client(ctx).put(domain_path(domain, "dns", record), body)

    success("DNS record updated successfully")


@app.command()
def delete(
    ctx: typer.Context,
    record_id: str = RECORD_ID,
    domain: int = DOMAIN_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Delete a DNS record."""
    if not confirmed(force, f"Are you sure you want to delete DNS record {record_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "dns", record_id))

    success("DNS record deleted successfully")


@app.command("import")
def import_zone(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    zone: str = typer.Option(..., "--zone", help="Zone file content"),
) -> None:
    """Import a DNS zone file."""
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "dns", "import"), ZoneImportRequest(zone=zone))

    success("DNS zone imported successfully")


@app.command()
def export(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Export the DNS zone file."""
    with handle_errors():
        exported = extract(get_client(ctx).get(domain_path(domain, "dns", "export")), ZoneExport)

    console.print(exported.zone, markup=False, highlight=False)


@app.command("fetch-records")
def fetch_records(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Discover and import records from the current authoritative nameservers."""
    with handle_errors():
        envelope = get_client(ctx).post(domain_path(domain, "dns", "fetch-records"))

    try:
        fetched = extract(envelope, FetchedRecords)
    except DecodeError:
        success("DNS records fetched successfully")
        return

    success(f"Fetched {fetched.count} DNS records from authoritative nameservers")
    if fetched.records:
        print_table(
            ["ID", "Type", "Name", "Content"],
            [
                (r.id, r.type, truncate(r.name, 25), truncate(r.content, 40))
                for r in fetched.records
            ],
        )


# =============================================================================
# Custom nameservers
# =============================================================================


@custom_ns_app.command("get")
def custom_ns_get(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show custom nameserver configuration."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain, "dns", "custom-ns"))

    if json_output:
        print_json(envelope.data)
        return

    try:
        nameservers = extract(envelope, CustomNameservers)
    except DecodeError:
        print_json(envelope.data)
        return

    rows: list[tuple[str, object]] = [("Enabled", nameservers.enabled)]
    if nameservers.ns1:
        rows.append(("NS1", nameservers.ns1))
    if nameservers.ns2:
        rows.append(("NS2", nameservers.ns2))
    print_details(rows, title="Custom Nameservers")


@custom_ns_app.command("set")
def custom_ns_set(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    ns1: str = typer.Option(..., "--ns1", help="Primary nameserver"),
    ns2: str = typer.Option(..., "--ns2", help="Secondary nameserver"),
) -> None:
    """Set custom nameservers."""
    with handle_errors():
        get_client(ctx).post(
            domain_path(domain, "dns", "custom-ns"),
            CustomNameserversRequest(ns1=ns1, ns2=ns2),
        )

    success("Custom nameservers configured successfully")
    print_details([("NS1", ns1), ("NS2", ns2)])


@custom_ns_app.command("delete")
def custom_ns_delete(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Remove custom nameservers."""
    with handle_errors():
        get_client(ctx).delete(domain_path(domain, "dns", "custom-ns"))

    success("Custom nameservers removed successfully")


# =============================================================================
# DNSSEC
# =============================================================================


@dnssec_app.command("status")
def dnssec_status(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show DNSSEC status."""
    with handle_errors():
        envelope = get_client(ctx).get(domain_path(domain, "dns", "dnssec"))

    if json_output:
        print_json(envelope.data)
        return

    try:
        dnssec = extract(envelope, DNSSECStatus)
    except DecodeError:
        print_json(envelope.data)
        return

    rows: list[tuple[str, object]] = [("Enabled", dnssec.enabled)]
    if dnssec.enabled:
        rows += [
            ("Algorithm", dnssec.algorithm),
            ("Key Tag", dnssec.key_tag),
            ("Digest Type", dnssec.digest_type),
            ("Digest", dnssec.digest),
        ]
    print_details(rows, title="DNSSEC Configuration")
    if dnssec.enabled and dnssec.ds:
        console.print("\nDS Record:")
        console.print(dnssec.ds, markup=False, highlight=False)


@dnssec_app.command("enable")
def dnssec_enable(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Enable DNSSEC and print the DS record for the registrar."""
    with handle_errors():
        envelope = get_client(ctx).post(
            domain_path(domain, "dns", "dnssec"), EnabledRequest(enabled=True),
        )

    try:
        ds = extract(envelope, DNSSECStatus).ds
    except DecodeError:
        ds = ""

    if not ds:
        success("DNSSEC enabled successfully")
        return

    success("DNSSEC enabled successfully!")
    console.print("\nAdd this DS record to your registrar:")
    console.print(ds, markup=False, highlight=False)


@dnssec_app.command("disable")
def dnssec_disable(ctx: typer.Context, domain: int = DOMAIN_OPTION) -> None:
    """Disable DNSSEC."""
    with handle_errors():
        get_client(ctx).post(domain_path(domain, "dns", "dnssec"), EnabledRequest(enabled=False))

    success("DNSSEC disabled successfully")
    console.print("Remember to remove the DS record from your registrar")

