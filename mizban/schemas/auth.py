"""
Account Schemas.

Profile and API token resources under /v1/auth.
"""

from mizban.schemas.base import RequestBody, Resource


class Profile(Resource):
    id: int = 0
    name: str = ""
    email: str = ""
    phone_number: str = ""
    national_id: str = ""
    tfa_enabled: bool = False


class APIKey(Resource):
    id: int = 0
    name: str = ""
    token: str = ""
    created_at: str = ""


class ProfileUpdateRequest(RequestBody):
    name: str | None = None
    phone_number: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.phone_number is None


class APIKeyCreateRequest(RequestBody):
    name: str
