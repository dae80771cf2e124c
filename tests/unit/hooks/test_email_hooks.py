from unittest.mock import AsyncMock

import pytest

from orgauth.app.hooks import UserLinkEmailData, build_auth_hooks
from orgauth.app.hooks.email_hooks import RESET_SUBJECT, VERIFY_SUBJECT


@pytest.mark.asyncio
async def test_verification_email():
    dispatcher = AsyncMock()
    hooks = build_auth_hooks("https://app.example.com", dispatcher)
    url = "https://app.example.com/api/auth/verify-email?token=abc&callback_url=%2F"

    await hooks.send_verification_email(
        UserLinkEmailData(email="alice@example.com", name="Alice", url=url)
    )

    message = dispatcher.send_email.call_args.args[0]
    assert message.to == "alice@example.com"
    assert message.subject == VERIFY_SUBJECT
    # autoescaped inside the href attribute
    assert url.replace("&", "&amp;") in message.html


@pytest.mark.asyncio
async def test_reset_password_email():
    dispatcher = AsyncMock()
    hooks = build_auth_hooks("https://app.example.com", dispatcher)
    url = "https://app.example.com/reset-password?token=xyz"

    await hooks.send_reset_password(
        UserLinkEmailData(email="alice@example.com", name="Alice", url=url)
    )

    message = dispatcher.send_email.call_args.args[0]
    assert message.subject == RESET_SUBJECT
    assert url in message.html
