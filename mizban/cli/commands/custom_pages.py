"""
Custom Error Page Commands.
"""

import typer

from mizban.cli.client import extract
from mizban.cli.commands.domain import DOMAIN_OPTION, domain_path
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    handle_errors,
    print_details,
    print_json,
    success,
)
from mizban.core.exceptions import InvalidInputError
from mizban.schemas.cdn import CUSTOM_PAGE_CODES, CustomPageRequest, CustomPages

app = typer.Typer(help="Configure custom HTML pages for CDN error responses")

PAGE_LABELS = {
    403: "403 Forbidden",
    404: "404 Not Found",
    500: "500 Internal Server Error",
    502: "502 Bad Gateway",
    503: "503 Service Unavailable",
    504: "504 Gateway Timeout",
}

CODE_OPTION = typer.Option(..., "--code", help="Error code (403, 404, 500, 502, 503, 504)")


def _check_code(code: int) -> None:
    if code not in CUSTOM_PAGE_CODES:
        valid = ", ".join(str(c) for c in CUSTOM_PAGE_CODES)
        raise InvalidInputError(f"invalid error code: {code} (valid: {valid})")


@app.command()
def get(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Show which error pages are customized."""
    with handle_errors():
        pages = extract(get_client(ctx).get(domain_path(domain, "custom-pages")), CustomPages)

    if json_output:
        print_json(pages)
        return

    print_details(
        [
            (label, "Custom" if getattr(pages, f"error_{code}") else "Default")
            for code, label in PAGE_LABELS.items()
        ],
        title="Custom Error Pages",
    )


@app.command("set")
def set_page(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    code: int = CODE_OPTION,
    html: str = typer.Option(..., "--html", help="HTML content for the error page"),
) -> None:
    """Set the HTML served for an error code."""
    with handle_errors():
        _check_code(code)
        get_client(ctx).post(
            domain_path(domain, "custom-pages"), CustomPageRequest(error_code=code, content=html),
        )

    success(f"Custom page for error {code} set successfully")


@app.command()
def delete(
    ctx: typer.Context,
    domain: int = DOMAIN_OPTION,
    code: int = CODE_OPTION,
) -> None:
    """Restore the default page for an error code."""
    with handle_errors():
        _check_code(code)
        get_client(ctx).delete(domain_path(domain, "custom-pages"))

    success(f"Custom page for error {code} deleted (restored to default)")
