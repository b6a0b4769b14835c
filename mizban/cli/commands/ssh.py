"""
SSH Key Commands.
"""

import typer

from mizban.cli.client import extract
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
    warning,
)
from mizban.schemas.cloud import GeneratedSSHKey, SSHKey, SSHKeyCreateRequest

app = typer.Typer(help="Manage SSH keys for server access")

SSH_PATH = "/v1/cloud/ssh"

KEY_ID = typer.Argument(..., help="SSH key ID")


@app.command("list")
def list_keys(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List all SSH keys."""
    with handle_errors():
        keys = extract(get_client(ctx).get(SSH_PATH), list[SSHKey])

    if json_output:
        print_json(keys)
        return

    if not keys:
        console.print("No SSH keys found")
        return

    print_table(
        ["ID", "Name", "Fingerprint"],
        [(k.id, truncate(k.name, 20), k.fingerprint) for k in keys],
    )


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Key name"),
    key: str = typer.Option(..., "--key", help="Public key content"),
) -> None:
    """Add an existing public key."""
    with handle_errors():
        envelope = get_client(ctx).post(SSH_PATH, SSHKeyCreateRequest(name=name, public_key=key))
        created = extract(envelope, SSHKey)

    success("SSH key added successfully!")
    print_details([
        ("ID", created.id),
        ("Name", created.name),
        ("Fingerprint", created.fingerprint),
    ])


@app.command()
def get(ctx: typer.Context, key_id: str = KEY_ID, json_output: bool = JSON_OPTION) -> None:
    """Get SSH key details."""
    with handle_errors():
        key = extract(get_client(ctx).get(f"{SSH_PATH}/{key_id}"), SSHKey)

    if json_output:
        print_json(key)
        return

    print_details([
        ("ID", key.id),
        ("Name", key.name),
        ("Fingerprint", key.fingerprint),
    ])
    console.print("Public Key:")
    console.print(key.public_key, markup=False, highlight=False)


@app.command()
def delete(ctx: typer.Context, key_id: str = KEY_ID, force: bool = FORCE_OPTION) -> None:
    """Delete an SSH key."""
    if not confirmed(force, f"Are you sure you want to delete SSH key {key_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{SSH_PATH}/{key_id}")

    success("SSH key deleted successfully")


@app.command()
def generate(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Key name"),
) -> None:
    """
    Generate a new SSH key pair.

    The private key is printed once and is not stored by MizbanCloud.
    """
    with handle_errors():
        pair = extract(get_client(ctx).get(f"{SSH_PATH}/random"), GeneratedSSHKey)

    success(f"SSH key pair '{name}' generated successfully!")
    console.print(f"ID: {pair.id}")
    console.print()
    warning("Private Key (save this securely):")
    console.print(pair.private_key, markup=False, highlight=False)
    console.print()
    console.print("Public Key:")
    console.print(pair.public_key, markup=False, highlight=False)
