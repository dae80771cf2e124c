from urllib.parse import urlencode


def verification_url(config, token: str, callback_url: str = "/") -> str:
    query = urlencode({"token": token, "callback_url": callback_url or "/"})
    return config.url(f"/api/auth/verify-email?{query}")


def reset_password_url(config, token: str) -> str:
    return config.url(f"/reset-password?{urlencode({'token': token})}")
