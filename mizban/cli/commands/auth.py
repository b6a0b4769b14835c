"""
Authentication Commands.

`mizban login` verifies a token against the profile endpoint before saving
it; `mizban logout` clears the stored token.
"""

from typing import Optional

import typer
from rich.markup import escape

from mizban.cli.client import extract
from mizban.cli.context import get_state
from mizban.cli.output import console, handle_errors
from mizban.core.exceptions import DecodeError, InvalidInputError
from mizban.core.logging import get_logger, log_with_source
from mizban.schemas.auth import Profile

logger = get_logger(__name__)

PROFILE_PATH = "/v1/auth/profile"


def login(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help="API token"),
    url: Optional[str] = typer.Option(
        None, "--url", help="API base URL (e.g., http://127.0.0.1:8003/api)",
    ),
) -> None:
    """
    Login to MizbanCloud.

    Authenticate with your API token. The token is checked against your
    profile and saved only if the API accepts it.

    Examples:
        mizban login --token YOUR_TOKEN
        mizban login
    """
    state = get_state(ctx)

    with handle_errors():
        if url:
            state.config.base_url = url

        if token is None:
            token = typer.prompt("Enter your API token", default="", hide_input=True, show_default=False)
        token = token.strip()

        if not token:
            raise InvalidInputError("token cannot be empty")

        state.config.token = token

        envelope = state.client.get(PROFILE_PATH)
        state.config.save()

        try:
            profile = extract(envelope, Profile)
        except DecodeError as e:
            log_with_source(logger, "cli", "debug", "Profile not decodable after login", error=e.message)
            profile = Profile()

    log_with_source(logger, "cli", "info", "Logged in", base_url=state.config.base_url)
    console.print(
        f"[green]Successfully logged in as {escape(profile.name)} ({escape(profile.email)})[/green]"
    )


def logout(ctx: typer.Context) -> None:
    """
    Logout from MizbanCloud.

    Clears the saved token from the config file.
    """
    state = get_state(ctx)

    with handle_errors():
        state.config.logout()

    log_with_source(logger, "cli", "info", "Logged out")
    console.print("[green]Successfully logged out[/green]")
