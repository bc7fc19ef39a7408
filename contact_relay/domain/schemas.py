from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from contact_relay.utils.contact_validation import field_text

DEFAULT_SUBJECT = "New contact message"


class SubmissionOutcome(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class SubmissionForm(BaseModel):
    """Client-side form state for one page visit. ``website`` is the honeypot."""

    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""
    website: str = ""

    def clear(self) -> None:
        for field in type(self).model_fields:
            setattr(self, field, "")


class SubmissionStatus(BaseModel):
    outcome: SubmissionOutcome = SubmissionOutcome.IDLE
    message: str = ""

    @property
    def ok(self) -> Optional[bool]:
        """None while idle/pending, otherwise whether the attempt succeeded."""
        if self.outcome == SubmissionOutcome.SUCCESS:
            return True
        if self.outcome == SubmissionOutcome.FAILURE:
            return False
        return None


class RelayPayload(BaseModel):
    """JSON body posted by the controller to the relay endpoint."""

    name: str
    email: str
    subject: str = ""
    message: str

    @classmethod
    def from_body(cls, body: Any) -> "RelayPayload":
        """
        Lenient extraction: anything that is not an object, and any field
        that is missing or not a string, reads as an empty string.
        """
        data: Mapping[str, Any] = body if isinstance(body, Mapping) else {}
        return cls(
            name=field_text(data, "name"),
            email=field_text(data, "email"),
            subject=field_text(data, "subject"),
            message=field_text(data, "message"),
        )


class RelayResult(BaseModel):
    """Outcome of one relay call, mapped 1:1 onto the HTTP response."""

    status_code: int = Field(..., ge=100, le=599)
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, message: str) -> "RelayResult":
        return cls(status_code=200, message=message)

    @classmethod
    def failure(cls, status_code: int, error: str) -> "RelayResult":
        return cls(status_code=status_code, error=error)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_body(self) -> Dict[str, str]:
        if self.ok:
            return {"message": self.message or ""}
        return {"error": self.error or ""}
