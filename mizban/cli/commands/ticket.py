"""
Support Ticket Commands.
"""

from typing import Optional

import httpx
import typer
from rich.markup import escape

from mizban.cli.client import extract
from mizban.cli.context import get_client
from mizban.cli.output import (
    JSON_OPTION,
    console,
    handle_errors,
    print_details,
    print_json,
    print_table,
    success,
    truncate,
)
from mizban.schemas.ticket import (
    Department,
    Ticket,
    TicketCreateRequest,
    TicketReplyRequest,
    TicketStatusRequest,
    TicketThread,
)

app = typer.Typer(help="Create and manage support tickets")

TICKETS_PATH = "/v1/support/tickets"

TICKET_ID = typer.Argument(..., help="Ticket ID")


@app.command("list")
def list_tickets(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status (open/closed/pending)"),
    json_output: bool = JSON_OPTION,
) -> None:
    """List tickets."""
    path = TICKETS_PATH
    if status:
        params = httpx.QueryParams({"status": status})
        path = f"{path}?{params}"

    with handle_errors():
        tickets = extract(get_client(ctx).get(path), list[Ticket])

    if json_output:
        print_json(tickets)
        return

    if not tickets:
        console.print("No tickets found")
        return

    print_table(
        ["ID", "Subject", "Status", "Priority", "Department"],
        [(t.id, truncate(t.subject, 35), t.status, t.priority, t.department) for t in tickets],
    )


@app.command()
def create(
    ctx: typer.Context,
    subject: str = typer.Option(..., "--subject", help="Ticket subject"),
    message: str = typer.Option(..., "--message", help="Ticket message"),
    department: str = typer.Option("support", "--department", help="Department (support/billing/technical)"),
    priority: str = typer.Option("normal", "--priority", help="Priority (low/normal/high/urgent)"),
) -> None:
    """Open a new support ticket."""
    body = TicketCreateRequest(
        subject=subject,
        message=message,
        department=department,
        priority=priority,
    )

    with handle_errors():
        ticket = extract(get_client(ctx).post(TICKETS_PATH, body), Ticket)

    success("Ticket created successfully!")
    print_details([("ID", ticket.id), ("Subject", ticket.subject), ("Status", ticket.status)])


@app.command()
def get(ctx: typer.Context, ticket_id: str = TICKET_ID, json_output: bool = JSON_OPTION) -> None:
    """Show a ticket and its replies."""
    with handle_errors():
        thread = extract(get_client(ctx).get(f"{TICKETS_PATH}/{ticket_id}"), TicketThread)

    if json_output:
        print_json(thread)
        return

    ticket = thread.ticket
    print_details([
        ("ID", ticket.id),
        ("Subject", ticket.subject),
        ("Status", ticket.status),
        ("Priority", ticket.priority),
        ("Department", ticket.department),
        ("Created", ticket.created_at),
        ("Updated", ticket.updated_at),
    ])

    if not thread.replies:
        return

    console.print("\n[bold]--- Replies ---[/bold]")
    for reply in thread.replies:
        author_type = "Staff" if reply.is_staff else "Customer"
        console.print(
            f"\n[dim]\\[{escape(reply.created_at)}][/dim] "
            f"[bold]{escape(reply.author)}[/bold] ({author_type}):"
        )
        console.print(reply.body, markup=False, highlight=False)


@app.command()
def reply(
    ctx: typer.Context,
    ticket_id: str = TICKET_ID,
    message: str = typer.Option(..., "--message", help="Reply message"),
) -> None:
    """Reply to a ticket."""
    with handle_errors():
        get_client(ctx).post(f"{TICKETS_PATH}/{ticket_id}/replies", TicketReplyRequest(message=message))

    success("Reply sent successfully")


@app.command()
def close(ctx: typer.Context, ticket_id: str = TICKET_ID) -> None:
    """Close a ticket."""
    with handle_errors():
        get_client(ctx).post(f"{TICKETS_PATH}/{ticket_id}/status", TicketStatusRequest(status="closed"))

    success("Ticket closed successfully")


@app.command()
def departments(ctx: typer.Context, json_output: bool = JSON_OPTION) -> None:
    """List support departments."""
    with handle_errors():
        found = extract(get_client(ctx).get(f"{TICKETS_PATH}/departments"), list[Department])

    if json_output:
        print_json(found)
        return

    print_table(["ID", "Name"], [(d.id, d.name) for d in found])
