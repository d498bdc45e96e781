"""Shared Pydantic base models."""

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """Immutable record mapped from API JSON.

    Unknown fields are ignored so that additions on the server side do not
    break older clients.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)
