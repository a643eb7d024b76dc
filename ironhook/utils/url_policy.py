"""URL validation and target URL building for webhook endpoints."""

import posixpath
import re
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from ironhook.utils.errors import (
    EmptyHostError,
    EmptyURLError,
    MalformedURLError,
    MissingSchemeError,
    UnsupportedSchemeError,
)


SUPPORTED_SCHEMES = ("http", "https")

VERIFICATION_PATH = "verification"
NOTIFICATION_PATH = "notification"
VERIFICATION_QUERY_PARAM = "id"

UNSAFE_CHARACTERS = re.compile(r"[\s\x00-\x1f\x7f]")


def _parse(raw_url: str) -> SplitResult:
    """Parse and check a URL, returning its components."""
    if not raw_url:
        raise EmptyURLError()

    if raw_url[0].isspace():
        raise MissingSchemeError(details={"url": raw_url})

    # urlsplit strips these silently
    if UNSAFE_CHARACTERS.search(raw_url):
        raise MalformedURLError(details={"url": raw_url, "reason": "whitespace or control character"})

    # [scheme:][//[userinfo@]host][/]path[?query][#fragment]
    try:
        parts = urlsplit(raw_url)
        parts.port  # malformed ports only surface on access
    except ValueError as e:
        raise MissingSchemeError(details={"url": raw_url, "reason": str(e)}) from e

    if not parts.scheme:
        raise MissingSchemeError(details={"url": raw_url})

    if parts.scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedSchemeError(details={"url": raw_url, "scheme": parts.scheme})

    if not parts.hostname:
        raise EmptyHostError(details={"url": raw_url})

    try:
        httpx.URL(raw_url)
    except httpx.InvalidURL as e:
        raise MalformedURLError(details={"url": raw_url, "reason": str(e)}) from e

    return parts


def _join_path(path: str, segment: str) -> str:
    """Append a segment to a URL path, cleaning the result."""
    return posixpath.normpath(posixpath.join("/", path.lstrip("/"), segment))


def validate_url(raw_url: str) -> str:
    """
    Validate an endpoint URL.

    Accepts absolute http/https URLs with a host. Returns the URL
    with scheme, host and path unchanged.

    Raises:
        EmptyURLError: the URL is empty
        MissingSchemeError: the URL is not absolute
        UnsupportedSchemeError: the scheme is not http or https
        EmptyHostError: the host is empty
        MalformedURLError: the URL holds whitespace, control characters
            or components an HTTP client can't request
    """
    return _parse(raw_url).geturl()


def build_verification_url(base_url: str, endpoint_id: str) -> str:
    """Append /verification?id=<endpoint_id> to the endpoint URL."""
    parts = _parse(base_url)

    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != VERIFICATION_QUERY_PARAM
    ]
    query.append((VERIFICATION_QUERY_PARAM, endpoint_id))
    query.sort(key=lambda item: item[0])

    return urlunsplit(parts._replace(
        path=_join_path(parts.path, VERIFICATION_PATH),
        query=urlencode(query),
    ))


def build_notification_url(base_url: str) -> str:
    """Append /notification to the endpoint URL."""
    parts = _parse(base_url)
    return urlunsplit(parts._replace(path=_join_path(parts.path, NOTIFICATION_PATH)))
