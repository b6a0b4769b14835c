"""
Support Ticket Schemas.
"""

from pydantic import Field

from mizban.schemas.base import RequestBody, Resource, TolerantBool


class Ticket(Resource):
    id: int = 0
    subject: str = ""
    status: str = ""
    priority: str = ""
    department: str = ""
    department_id: int = 0
    user_id: int = 0
    is_closed: TolerantBool = False
    created_at: str = ""
    updated_at: str = ""


class TicketReply(Resource):
    id: int = 0
    ticket_id: int = 0
    message: str = ""
    content: str = ""
    author: str = ""
    user_id: int = 0
    is_staff: TolerantBool = False
    created_at: str = ""

    @property
    def body(self) -> str:
        """Reply text; older replies carry it in `content`."""
        return self.message or self.content


class TicketThread(Resource):
    ticket: Ticket = Field(default_factory=Ticket)
    replies: list[TicketReply] = Field(default_factory=list)


class Department(Resource):
    id: int = 0
    name: str = ""


class TicketCreateRequest(RequestBody):
    subject: str
    message: str
    department: str
    priority: str


class TicketReplyRequest(RequestBody):
    message: str


class TicketStatusRequest(RequestBody):
    status: str
