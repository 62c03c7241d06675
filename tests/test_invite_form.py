"""Tests for the invite form controller."""

import asyncio
import json

import httpx
import pytest

from app.invite_client import InviteClient
from app.invite_form import InviteFormController, SubmissionState, SubmitEvent
from app.ui import InvitePage

VALID = {
    "sender_email": "a@b.co",
    "recipient_email": "c@d.co",
    "datetime": "2030-05-01T10:30",
}


def make_controller(values, handler=None):
    page = InvitePage.from_form(values)
    transport = httpx.MockTransport(handler or (lambda request: httpx.Response(200)))
    client = InviteClient("http://invite.test", transport=transport)
    return page, InviteFormController(page, client)


class TestValidate:
    """Tests for field validation."""

    def test_valid_form(self):
        page, controller = make_controller(VALID)
        assert controller.validate() is True
        assert page.errors == {}

    def test_missing_sender_email(self):
        page, controller = make_controller({**VALID, "sender_email": "   "})
        assert controller.validate() is False
        assert page.errors == {"sender_email": "Your email is required"}

    def test_missing_recipient_email(self):
        page, controller = make_controller({**VALID, "recipient_email": ""})
        assert controller.validate() is False
        assert page.errors == {"recipient_email": "Recipient email is required"}

    @pytest.mark.parametrize("email", ["ab.co", "a@bco", "a b@c.co", "a@@b.co", "a@b.co x"])
    def test_invalid_email_shape(self, email):
        page, controller = make_controller({**VALID, "sender_email": email, "recipient_email": email})
        assert controller.validate() is False
        assert page.errors["sender_email"] == "Please enter a valid email address"
        assert page.errors["recipient_email"] == "Please enter a valid email address"

    def test_missing_datetime(self):
        page, controller = make_controller({**VALID, "datetime": ""})
        assert controller.validate() is False
        assert page.errors == {"datetime": "Meeting date and time is required"}

    def test_all_failures_reported_together(self):
        page, controller = make_controller({"recipient_email": "c@d.co"})
        assert controller.validate() is False
        assert page.errors == {
            "sender_email": "Your email is required",
            "datetime": "Meeting date and time is required",
        }

    def test_errors_do_not_carry_over(self):
        page, controller = make_controller({**VALID, "sender_email": ""})
        controller.validate()
        assert set(page.errors) == {"sender_email"}

        page.values.update(sender_email="a@b.co", datetime="")
        assert controller.validate() is False
        assert page.errors == {"datetime": "Meeting date and time is required"}

    def test_padded_email_passes(self):
        page, controller = make_controller({**VALID, "sender_email": "  a@b.co  "})
        assert controller.validate() is True


class TestSubmit:
    """Tests for the submission flow."""

    @pytest.mark.asyncio
    async def test_success_resets_form(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"message": "Invites sent successfully"})

        page, controller = make_controller({**VALID, "title": "Sync"}, handler)
        event = SubmitEvent(page.values)
        await controller.submit(event)

        assert event.default_prevented is True
        assert len(requests) == 1
        assert str(requests[0].url) == "http://invite.test/api/invite"
        assert requests[0].method == "POST"
        assert requests[0].headers["content-type"] == "application/json"
        assert page.status.is_success is True
        assert page.status.message == "Meeting invite sent successfully! 🎉"
        assert all(v == "" for v in page.values.values())
        assert page.button_enabled is True
        assert page.button_label == "Send Invite"

    @pytest.mark.asyncio
    async def test_body_has_all_fields_with_defaults(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        page, controller = make_controller(VALID, handler)
        await controller.submit(SubmitEvent())

        assert bodies == [
            {
                "sender_name": "",
                "sender_email": "a@b.co",
                "recipient_email": "c@d.co",
                "title": "",
                "datetime": "2030-05-01T10:30",
                "meeting_link": "",
                "message": "",
            }
        ]

    @pytest.mark.asyncio
    async def test_padded_email_sent_untrimmed(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        page, controller = make_controller({**VALID, "recipient_email": " c@d.co "}, handler)
        await controller.submit(SubmitEvent())

        assert bodies[0]["recipient_email"] == " c@d.co "

    @pytest.mark.asyncio
    async def test_server_rejection_shows_body(self):
        page, controller = make_controller(VALID, lambda request: httpx.Response(409, text="duplicate invite"))
        await controller.submit(SubmitEvent())

        assert page.status.is_success is False
        assert "duplicate invite" in page.status.message
        assert page.values["sender_email"] == "a@b.co"
        assert page.button_enabled is True
        assert page.button_label == "Send Invite"

    @pytest.mark.asyncio
    async def test_server_rejection_empty_body(self):
        page, controller = make_controller(VALID, lambda request: httpx.Response(500))
        await controller.submit(SubmitEvent())

        assert page.status.message == "Failed to send invite: Server error"

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        page, controller = make_controller(VALID, handler)
        await controller.submit(SubmitEvent())

        assert page.status.is_success is False
        assert page.status.message == "Network error: offline"
        assert page.values["recipient_email"] == "c@d.co"
        assert page.button_enabled is True
        assert page.button_label == "Send Invite"

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_contained(self):
        class BrokenClient:
            async def send_invite(self, invite):
                raise RuntimeError("boom")

        page = InvitePage.from_form(VALID)
        controller = InviteFormController(page, BrokenClient())
        await controller.submit(SubmitEvent())

        assert page.status.message == "Network error: boom"
        assert controller.state is SubmissionState.IDLE
        assert page.button_enabled is True

    @pytest.mark.asyncio
    async def test_invalid_form_makes_no_request(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        page, controller = make_controller({**VALID, "datetime": ""}, handler)
        page.set_status("old banner", True)
        await controller.submit(SubmitEvent())

        assert requests == []
        assert page.status is None
        assert page.button_label == "Send Invite"

    @pytest.mark.asyncio
    async def test_button_disabled_while_sending(self):
        release = asyncio.Event()
        started = asyncio.Event()
        seen = []

        async def handler(request):
            seen.append((page.button_enabled, page.button_label))
            started.set()
            await release.wait()
            return httpx.Response(200)

        page, controller = make_controller(VALID, handler)
        first = asyncio.create_task(controller.submit(SubmitEvent()))
        await asyncio.wait_for(started.wait(), timeout=5)

        assert controller.state is SubmissionState.SENDING
        second = SubmitEvent()
        await controller.submit(second)
        assert second.default_prevented is True

        release.set()
        await first

        assert seen == [(False, "Sending...")]
        assert controller.state is SubmissionState.IDLE
        assert page.button_enabled is True
