import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping

from app.invite_client import InviteClient, ServerRejected, TransportFailed
from app.schemas import InviteRequest
from app.ui import SEND_LABEL, SENDING_LABEL, FormUI

logger = logging.getLogger(__name__)

# Shape check only: something@something.something, no whitespace, single @
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVALID_EMAIL = "Please enter a valid email address"
SUCCESS_MESSAGE = "Meeting invite sent successfully! 🎉"


class SubmissionState(Enum):
    IDLE = "idle"
    SENDING = "sending"


@dataclass
class SubmitEvent:
    values: Mapping[str, str] = field(default_factory=dict)
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class InviteFormController:
    """
    Validates the invite form, posts it to the invite API and reflects the
    outcome on the page through a FormUI adapter.
    """

    def __init__(self, ui: FormUI, client: InviteClient):
        self.ui = ui
        self.client = client
        self.state = SubmissionState.IDLE

    def _field(self, name: str) -> str:
        return self.ui.read_field(name) or ""

    def validation_errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        sender_email = self._field("sender_email").strip()
        if not sender_email:
            errors["sender_email"] = "Your email is required"
        elif not EMAIL_RE.fullmatch(sender_email):
            errors["sender_email"] = INVALID_EMAIL

        recipient_email = self._field("recipient_email").strip()
        if not recipient_email:
            errors["recipient_email"] = "Recipient email is required"
        elif not EMAIL_RE.fullmatch(recipient_email):
            errors["recipient_email"] = INVALID_EMAIL

        if not self._field("datetime"):
            errors["datetime"] = "Meeting date and time is required"

        return errors

    def validate(self) -> bool:
        self.ui.clear_field_errors()
        errors = self.validation_errors()
        for name, message in errors.items():
            self.ui.set_field_error(name, message)
        if errors:
            logger.info("Invite form invalid: %s", ", ".join(errors))
        return not errors

    def build_request(self) -> InviteRequest:
        # Emails and datetime go out exactly as typed; only validation trims.
        return InviteRequest(
            sender_name=self._field("sender_name"),
            sender_email=self._field("sender_email"),
            recipient_email=self._field("recipient_email"),
            title=self._field("title"),
            datetime=self._field("datetime"),
            meeting_link=self._field("meeting_link"),
            message=self._field("message"),
        )

    def show_status(self, message: str, is_success: bool = False) -> None:
        self.ui.set_status(message, is_success)

    def hide_status(self) -> None:
        self.ui.clear_status()

    def _set_state(self, state: SubmissionState) -> None:
        self.state = state
        if state is SubmissionState.SENDING:
            self.ui.set_button(False, SENDING_LABEL)
        else:
            self.ui.set_button(True, SEND_LABEL)

    async def submit(self, event: SubmitEvent) -> None:
        event.prevent_default()
        if self.state is SubmissionState.SENDING:
            # the submit control is disabled while a request is in flight
            return

        self.hide_status()
        if not self.validate():
            return

        self._set_state(SubmissionState.SENDING)
        try:
            invite = self.build_request()
            logger.info("Sending invite from %s to %s", invite.sender_email, invite.recipient_email)
            await self.client.send_invite(invite)
            self.show_status(SUCCESS_MESSAGE, True)
            self.ui.reset_fields()
        except ServerRejected as e:
            logger.warning("Invite rejected with status %s", e.status_code)
            self.show_status(f"Failed to send invite: {e.text or 'Server error'}")
        except TransportFailed as e:
            self.show_status(f"Network error: {e}")
        except Exception as e:
            logger.exception("Unexpected failure while sending invite")
            self.show_status(f"Network error: {e}")
        finally:
            self._set_state(SubmissionState.IDLE)
