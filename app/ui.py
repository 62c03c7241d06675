from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, Optional

# form field name -> element id on the page
FIELD_IDS: Dict[str, str] = {
    "sender_name": "senderName",
    "sender_email": "senderEmail",
    "recipient_email": "recipientEmail",
    "title": "title",
    "datetime": "datetime",
    "meeting_link": "meetingLink",
    "message": "message",
}

SEND_LABEL = "Send Invite"
SENDING_LABEL = "Sending..."


def error_id(name: str) -> str:
    return FIELD_IDS[name] + "Error"


def min_datetime(now: datetime | None = None) -> str:
    """Local time to the minute, as a datetime-local input expects it."""
    now = now or datetime.now()
    return now.isoformat(timespec="minutes")


class FormUI(ABC):
    """Page surface the invite form controller reads from and renders into."""

    @abstractmethod
    def read_field(self, name: str) -> Optional[str]: ...

    @abstractmethod
    def set_field_error(self, name: str, message: Optional[str]) -> None: ...

    @abstractmethod
    def clear_field_errors(self) -> None: ...

    @abstractmethod
    def set_button(self, enabled: bool, label: str) -> None: ...

    @abstractmethod
    def set_status(self, message: str, is_success: bool) -> None: ...

    @abstractmethod
    def clear_status(self) -> None: ...

    @abstractmethod
    def reset_fields(self) -> None: ...


@dataclass
class Status:
    message: str
    is_success: bool


@dataclass
class InvitePage(FormUI):
    """
    In-memory state of the invite page: field values, visible field errors,
    submit button and status banner. Rendered by app.page.render_page.
    """
    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    button_enabled: bool = True
    button_label: str = SEND_LABEL
    status: Optional[Status] = None
    min_datetime: str = field(default_factory=min_datetime)

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "InvitePage":
        # unknown keys are dropped, missing ones stay absent like an empty FormData entry
        return cls(values={k: v for k, v in form.items() if k in FIELD_IDS})

    def read_field(self, name: str) -> Optional[str]:
        return self.values.get(name)

    def set_field_error(self, name: str, message: Optional[str]) -> None:
        if message:
            self.errors[name] = message
        else:
            self.errors.pop(name, None)

    def clear_field_errors(self) -> None:
        self.errors.clear()

    def set_button(self, enabled: bool, label: str) -> None:
        self.button_enabled = enabled
        self.button_label = label

    def set_status(self, message: str, is_success: bool) -> None:
        self.status = Status(message, is_success)

    def clear_status(self) -> None:
        self.status = None

    def reset_fields(self) -> None:
        self.values = {name: "" for name in FIELD_IDS}
