"""Admin settings schemas."""

from pydantic import BaseModel, Field


class LeadTimeSetting(BaseModel):
    hours: float = Field(ge=0)
