"""Unit tests for support ticket commands."""

from typer.testing import CliRunner

from mizban.cli.main import app

T = "/v1/support/tickets"


class TestTicketCommands:
    """Tests for ticket commands."""

    def test_list(self, runner: CliRunner, api):
        api.add("GET", T, [{"id": 42, "subject": "Billing", "status": "open", "priority": "normal"}])
        result = runner.invoke(app, ["ticket", "list"])
        assert result.exit_code == 0
        assert "Billing" in result.output

    def test_list_null_data(self, runner: CliRunner, api):
        api.add("GET", T, None)
        result = runner.invoke(app, ["ticket", "list"])
        assert result.exit_code == 0
        assert "No tickets found" in result.output

    def test_list_with_status_filter(self, runner: CliRunner, api):
        api.add("GET", f"{T}?status=closed", [])
        result = runner.invoke(app, ["tickets", "list", "--status", "closed"])
        assert result.exit_code == 0
        assert api.last.url.params["status"] == "closed"
        assert "No tickets found" in result.output

    def test_create(self, runner: CliRunner, api):
        api.add("POST", T, {"id": 42, "subject": "Billing", "status": "open"})
        result = runner.invoke(app, ["ticket", "create", "--subject", "Billing", "--message", "Invoice is wrong"])
        assert result.exit_code == 0
        assert "Ticket created successfully!" in result.output
        assert api.last_json() == {
            "subject": "Billing",
            "message": "Invoice is wrong",
            "department": "support",
            "priority": "normal",
        }

    def test_get_shows_replies(self, runner: CliRunner, api):
        api.add("GET", f"{T}/42", {
            "ticket": {"id": 42, "subject": "Billing", "status": "open"},
            "replies": [
                {"author": "Sara", "is_staff": 0, "message": "Invoice is wrong", "created_at": "2024-01-01"},
                {"author": "Support", "is_staff": 1, "content": "Fixed [now]", "created_at": "2024-01-02"},
            ],
        })
        result = runner.invoke(app, ["ticket", "get", "42"])
        assert result.exit_code == 0
        assert "--- Replies ---" in result.output
        assert "Sara" in result.output
        assert "(Customer)" in result.output
        assert "(Staff)" in result.output
        assert "Fixed [now]" in result.output

    def test_reply(self, runner: CliRunner, api):
        api.add("POST", f"{T}/42/replies")
        result = runner.invoke(app, ["ticket", "reply", "42", "--message", "Thanks"])
        assert api.last_json() == {"message": "Thanks"}
        assert "Reply sent successfully" in result.output

    def test_close(self, runner: CliRunner, api):
        api.add("POST", f"{T}/42/status")
        result = runner.invoke(app, ["support", "close", "42"])
        assert api.last_json() == {"status": "closed"}
        assert "Ticket closed successfully" in result.output

    def test_departments(self, runner: CliRunner, api):
        api.add("GET", f"{T}/departments", [{"id": 1, "name": "Billing"}, {"id": 2, "name": "Technical"}])
        result = runner.invoke(app, ["ticket", "departments"])
        assert "Technical" in result.output

    def test_not_found_shows_server_message(self, runner: CliRunner, api):
        api.add("GET", f"{T}/99", status=404, success=False, message="Ticket not found")
        result = runner.invoke(app, ["ticket", "get", "99"])
        assert result.exit_code == 1
        assert "Error: Ticket not found" in result.output
