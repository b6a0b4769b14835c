"""
CDN Plan Commands.
"""

import typer

from mizban.cli.client import extract
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    console,
    format_bytes,
    handle_errors,
    print_json,
    print_table,
    truncate,
)
from mizban.schemas.cdn import CDNPlan

app = typer.Typer(help="View available CDN plans")

PLANS_PATH = "/v1/cdn/ng/plans"


@app.command("list")
def list_plans(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List available CDN plans."""
    with handle_errors():
        plans = extract(get_client(ctx).get(PLANS_PATH), list[CDNPlan])

    if json_output:
        print_json(plans)
        return

    if not plans:
        console.print("No plans available")
        return

    print_table(
        ["ID", "Name", "Display Name", "Traffic", "Price", "Features"],
        [
            (
                p.id,
                p.name,
                truncate(p.display_name, 20),
                format_bytes(p.traffic),
                p.price_label,
                ", ".join(p.features),
            )
            for p in plans
        ],
    )
