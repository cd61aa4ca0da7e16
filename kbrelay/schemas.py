from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRequest(BaseModel):
    """
    Incoming chat payload.

    Wrongly typed values are dropped instead of rejected: a non-string
    sessionId starts a new session, and a non-string query is reported
    as a missing query by the relay.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    @field_validator("query", "session_id", mode="before")
    @classmethod
    def _drop_non_strings(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    citations: List[Dict[str, Any]] = []


class ErrorResponse(BaseModel):
    error: str
    stack: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
