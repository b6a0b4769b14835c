"""
Profile Commands.

View and update the account profile and manage API keys.
"""

from typing import Optional

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
    warning,
)
from mizban.core.exceptions import InvalidInputError
from mizban.schemas.auth import APIKey, APIKeyCreateRequest, Profile, ProfileUpdateRequest

app = typer.Typer(help="View and manage your MizbanCloud profile settings")
api_keys_app = typer.Typer(help="Manage API keys")
app.add_typer(api_keys_app, name="api-keys")

PROFILE_PATH = "/v1/auth/profile"
API_TOKEN_PATH = "/v1/auth/api-token"
TOKEN_PREVIEW_LENGTH = 20


@app.command()
def show(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """Show profile information."""
    with handle_errors():
        profile = extract(get_client(ctx).get(PROFILE_PATH), Profile)

    if json_output:
        print_json(profile)
        return

    print_details([
        ("Name", profile.name),
        ("Email", profile.email),
        ("Phone", profile.phone_number),
        ("2FA Enabled", profile.tfa_enabled),
    ])


@app.command()
def update(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Update name"),
    phone: Optional[str] = typer.Option(None, "--phone", help="Update phone number"),
) -> None:
    """
    Update profile information.

    Only the fields given are sent.
    """
    with handle_errors():
        body = ProfileUpdateRequest(name=name or None, phone_number=phone or None)
        if body.is_empty:
            raise InvalidInputError("no fields to update")
        get_client(ctx).put(PROFILE_PATH, body)

    success("Profile updated successfully")


@api_keys_app.command("list")
def list_api_keys(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List API keys."""
    with handle_errors():
        keys = extract(get_client(ctx).get(API_TOKEN_PATH), list[APIKey])

    if json_output:
        print_json(keys)
        return

    if not keys:
        console.print("No API keys found")
        return

    print_table(
        ["ID", "Name", "Token", "Created"],
        [
            (key.id, key.name, _token_preview(key.token), key.created_at)
            for key in keys
        ],
    )


def _token_preview(token: str) -> str:
    if len(token) <= TOKEN_PREVIEW_LENGTH:
        return token
    return token[:TOKEN_PREVIEW_LENGTH] + "..."


@api_keys_app.command("create")
def create_api_key(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Name for the API key"),
) -> None:
    """
    Create a new API key.

    The token is shown once; save it immediately.
    """
    with handle_errors():
        if not name:
            raise InvalidInputError("name is required")
        envelope = get_client(ctx).post(API_TOKEN_PATH, APIKeyCreateRequest(name=name))
        key = extract(envelope, APIKey)

    success("API key created successfully!")
    console.print(f"Token: {key.token}", markup=False)
    console.print()
    warning("Warning: Save this token now. You won't be able to see it again!")


@api_keys_app.command("delete")
def delete_api_key(
    ctx: typer.Context,
    key_id: str = typer.Argument(..., help="API key ID"),
    force: bool = FORCE_OPTION,
) -> None:
    """Delete an API key."""
    if not confirmed(force, f"Are you sure you want to delete API key {key_id}?"):
        return

    with handle_errors():
        get_client(ctx).delete(f"{API_TOKEN_PATH}/{key_id}")

    success("API key deleted successfully")
