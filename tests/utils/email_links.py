import html
import re
from urllib.parse import parse_qs, urlparse

HREF_PATTERN = re.compile(r'href="([^"]+)"')


def find_link(body: str, contains: str) -> str:
    """First href in an email body containing the given fragment"""
    for href in HREF_PATTERN.findall(body):
        url = html.unescape(href)
        if contains in url:
            return url
    raise AssertionError(f"No link containing {contains!r} in email")


def query_param(url: str, name: str) -> str:
    return parse_qs(urlparse(url).query)[name][0]
