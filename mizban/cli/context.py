"""
Command Context.

The root command loads the configuration once and stores a CLIState on the
Typer context. Commands reach the API client through `get_client(ctx)`;
the client is created on first use and closed when the root context closes.
"""

import typer

from mizban.cli.client import APIClient
from mizban.core.config import Config


class CLIState:
    """Per-invocation state: the loaded config and a lazily created client."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._client: APIClient | None = None

    @property
    def client(self) -> APIClient:
        if self._client is None:
            self._client = APIClient(self.config)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def get_state(ctx: typer.Context) -> CLIState:
    """Return the CLIState for this invocation, creating it if the root callback did not run."""
    root = ctx.find_root()
    if not isinstance(root.obj, CLIState):
        root.obj = CLIState(Config.load())
        root.call_on_close(root.obj.close)
    return root.obj


def get_client(ctx: typer.Context) -> APIClient:
    """Return the API client for this invocation."""
    return get_state(ctx).client
