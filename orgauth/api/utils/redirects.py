from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_REDIRECT = "/dashboard"


def safe_redirect_target(target: Optional[str], default: str = DEFAULT_REDIRECT) -> str:
    """
    Validate a post-login redirect target. Only relative paths are accepted.

    "https://attacker.example" and "//attacker.example" both fall back to
    default, which keeps redirects on this site.
    """
    if target and target.startswith("/") and not target.startswith("//") and "\\" not in target:
        return target
    return default


def with_query_param(url: str, name: str, value: str) -> str:
    """Set one query parameter, keeping the others and the fragment"""
    parts = urlsplit(url)
    query = [(key, val) for key, val in parse_qsl(parts.query, keep_blank_values=True) if key != name]
    query.append((name, value))
    return urlunsplit(parts._replace(query=urlencode(query)))
