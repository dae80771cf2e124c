from unittest.mock import MagicMock

import pytest

from orgauth.adapter.email import (
    ConsoleEmailDispatcher,
    ResendEmailDispatcher,
    build_email_dispatcher,
)
from orgauth.adapter.email import resend_dispatcher
from orgauth.app.services.email_dispatcher import EmailDispatchError, EmailMessage

MESSAGE = EmailMessage(to="bob@example.com", subject="Hello", html="<p>Hi</p>")


@pytest.mark.asyncio
async def test_resend_dispatcher_sends(monkeypatch):
    send = MagicMock(return_value={"id": "email_123"})
    monkeypatch.setattr(resend_dispatcher.resend.Emails, "send", send)

    await ResendEmailDispatcher(api_key="re_test_key", sender="noreply@example.com").send_email(
        MESSAGE
    )

    params = send.call_args.args[0]
    assert params == {
        "from": "noreply@example.com",
        "to": ["bob@example.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }


@pytest.mark.asyncio
async def test_resend_failure_becomes_dispatch_error(monkeypatch):
    monkeypatch.setattr(
        resend_dispatcher.resend.Emails, "send", MagicMock(side_effect=RuntimeError("503"))
    )

    with pytest.raises(EmailDispatchError):
        await ResendEmailDispatcher(api_key="re_test_key", sender="noreply@example.com").send_email(
            MESSAGE
        )


@pytest.mark.asyncio
async def test_resend_without_api_key():
    with pytest.raises(EmailDispatchError):
        await ResendEmailDispatcher(api_key=None, sender="noreply@example.com").send_email(MESSAGE)


@pytest.mark.asyncio
async def test_console_dispatcher_records():
    dispatcher = ConsoleEmailDispatcher()

    await dispatcher.send_email(MESSAGE)

    assert dispatcher.sent == [MESSAGE]


def test_build_email_dispatcher():
    config = MagicMock(EMAIL_BACKEND="console")
    assert isinstance(build_email_dispatcher(config), ConsoleEmailDispatcher)

    config = MagicMock(EMAIL_BACKEND="resend", RESEND_API_KEY="k", EMAIL_FROM="a@b.c")
    assert isinstance(build_email_dispatcher(config), ResendEmailDispatcher)

    with pytest.raises(ValueError):
        build_email_dispatcher(MagicMock(EMAIL_BACKEND="carrier-pigeon"))
