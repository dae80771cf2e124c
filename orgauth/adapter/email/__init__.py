from .console_dispatcher import ConsoleEmailDispatcher
from .resend_dispatcher import ResendEmailDispatcher


def build_email_dispatcher(app_config):
    """Pick the dispatcher named by EMAIL_BACKEND ("resend" or "console")"""
    backend = (app_config.EMAIL_BACKEND or "resend").lower()
    if backend == "console":
        return ConsoleEmailDispatcher()
    if backend == "resend":
        return ResendEmailDispatcher(
            api_key=app_config.RESEND_API_KEY, sender=app_config.EMAIL_FROM
        )
    raise ValueError(f"Unknown EMAIL_BACKEND: {backend!r}")


__all__ = ["ConsoleEmailDispatcher", "ResendEmailDispatcher", "build_email_dispatcher"]
