"""
Tests for the Mailgun client: form encoding, auth, dry-run and failure handling.
"""

import httpx
import pytest

from app.api.errors import ProviderDispatchFailure
from app.schemas.reminders import OutboundEmail
from app.services.messaging.mailgun import encode_form_body, send_scheduled_email


@pytest.fixture
def email():
    return OutboundEmail(
        sender="noreply@churrito.fi",
        to="a+b@c.com",
        subject="Reminder from ChurritoFi!",
        text="Hey! 100% ready, cheers.",
        delivery_time="Thu, 13 Oct 2011 18:02:00 +0000",
    )


def test_encode_form_body_matches_encode_uri_component():
    body = encode_form_body({"o:deliverytime": "Thu, 13 Oct 2011 18:02:00 +0000", "a b": "x&y=z"})

    assert body == "o%3Adeliverytime=Thu%2C%2013%20Oct%202011%2018%3A02%3A00%20%2B0000&a%20b=x%26y%3Dz"


def test_encode_form_body_keeps_unreserved_characters():
    assert encode_form_body({"t": "A-z_0.9!~*'()"}) == "t=A-z_0.9!~*'()"


def test_encode_form_body_utf8():
    assert encode_form_body({"text": "café"}) == "text=caf%C3%A9"


def test_outbound_email_field_order(email):
    assert list(email.to_form_fields()) == ["from", "to", "subject", "text", "o:deliverytime"]


@pytest.mark.asyncio
async def test_send_scheduled_email_success(settings, mailgun, email):
    async with mailgun.client() as client:
        result = await send_scheduled_email(email, settings, client=client)

    assert result["status"] == "scheduled"
    assert result["status_code"] == 200
    assert result["message_id"] == mailgun.json["id"]
    body = mailgun.requests[0].content.decode()
    assert body.startswith("from=noreply%40churrito.fi&to=a%2Bb%40c.com&")


@pytest.mark.asyncio
async def test_send_scheduled_email_non_2xx(settings, mailgun, email):
    mailgun.status_code = 401
    mailgun.json = {"message": "Forbidden"}

    async with mailgun.client() as client:
        with pytest.raises(ProviderDispatchFailure) as exc_info:
            await send_scheduled_email(email, settings, client=client)

    assert exc_info.value.provider_status == 401
    assert exc_info.value.detail == "Error sending email: Unauthorized"


@pytest.mark.asyncio
async def test_send_scheduled_email_transport_error(settings, email):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
        with pytest.raises(ProviderDispatchFailure) as exc_info:
            await send_scheduled_email(email, settings, client=client)

    assert exc_info.value.provider_status is None
    assert "connection refused" in exc_info.value.detail


@pytest.mark.asyncio
async def test_send_scheduled_email_non_json_reply(settings, email):
    def plain(request):
        return httpx.Response(200, text="Queued")

    async with httpx.AsyncClient(transport=httpx.MockTransport(plain)) as client:
        result = await send_scheduled_email(email, settings, client=client)

    assert result["message_id"] is None


@pytest.mark.asyncio
async def test_dry_run_makes_no_request(settings, mailgun, email):
    settings.mailgun_dry_run = True

    async with mailgun.client() as client:
        result = await send_scheduled_email(email, settings, client=client)

    assert result["status"] == "dry_run"
    assert mailgun.requests == []


def test_messages_url_strips_trailing_slash(settings):
    settings.mailgun_api_base_url = "https://api.mailgun.net/v3/mg.example.com/"

    assert settings.mailgun_messages_url == "https://api.mailgun.net/v3/mg.example.com/messages"
