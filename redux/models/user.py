"""User record."""

from datetime import datetime

from pydantic import Field

from redux.models.base import RecordModel


class User(RecordModel):
    """The account owning the current session."""

    id: int
    username: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    created: datetime | None = None
    permitted_services: list[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        """First and last name joined, skipping missing parts."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)
