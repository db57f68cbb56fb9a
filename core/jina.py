# =============================================================================
# core/jina.py  -  Jina.ai Search Request Translator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a SearchOptions into an HTTP request against the Jina.ai search
#   endpoint, performs it, and turns the response into the text handed back
#   to the MCP caller.
#
#   build_search_url()  →  https://s.jina.ai/<percent-encoded query>
#   build_headers()     →  Authorization + Accept + one header per set option
#   build_request()     →  both of the above as an UpstreamRequest
#   search()            →  POST it, check the status, format the body
#
# THE HEADER TABLE:
#   Every optional tool argument maps to exactly one header through
#   HEADER_RULES.  build_headers() walks that table once; adding a new
#   upstream switch means adding one row (and one schema property in
#   tools/mcp_server.py).
#
# ERRORS:
#   search() raises; it never returns an error string.  Non-2xx responses
#   become JinaAPIError (message = upstream body), transport failures surface
#   as httpx.HTTPError and malformed JSON as json.JSONDecodeError.  The MCP
#   layer is responsible for turning those into flagged tool results.
# =============================================================================

import json
import logging
from typing import Optional
from urllib.parse import quote

import httpx

from core.models import HeaderRule, SearchOptions, UpstreamRequest

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "https://s.jina.ai/"

# Characters a URI-component encoder leaves alone on top of quote()'s
# always-safe set ("_.-~").
_URI_COMPONENT_SAFE = "!*'()"

# Integral JSON floats below this magnitude are written without a fraction.
_PLAIN_INTEGER_LIMIT = 1e21


HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule("no_cache", "X-No-Cache"),
    HeaderRule("token_budget", "X-Token-Budget", kind="value"),
    HeaderRule("browser_locale", "X-Locale", kind="value"),
    HeaderRule("stream", "X-Stream"),
    HeaderRule("gather_links", "X-With-Links-Summary"),
    HeaderRule("gather_images", "X-With-Images-Summary"),
    HeaderRule("image_caption", "X-With-Generated-Alt"),
    HeaderRule("enable_iframe", "X-With-Iframe"),
    HeaderRule("enable_shadow_dom", "X-With-Shadow-Dom"),
    HeaderRule("resolve_redirects", "X-No-Redirect", kind="negated_flag"),
)


class JinaAPIError(Exception):
    """The search endpoint answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_search_url(query: str) -> str:
    """Percent-encode ``query`` into the search endpoint path."""
    return SEARCH_ENDPOINT + quote(query, safe=_URI_COMPONENT_SAFE)


def build_headers(options: SearchOptions, api_key: str) -> dict[str, str]:
    """Build the request headers for ``options``.

    Authorization and Accept are always present.  Each row of HEADER_RULES
    contributes at most one more header, and only when its option is set.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Accept": options.accept,
    }
    for rule in HEADER_RULES:
        value = rule.render(options)
        if value is not None:
            headers[rule.header] = value
    return headers


def build_request(options: SearchOptions, api_key: str) -> UpstreamRequest:
    return UpstreamRequest(
        url=build_search_url(options.query),
        headers=build_headers(options, api_key),
    )


def _parse_number(literal: str):
    """Parse a JSON float literal, collapsing integral values to int.

    JSON has a single number type, so 1.0 and 1e2 are the same values as 1
    and 100; they are re-serialized in that plain form.  Magnitudes from
    1e21 upward keep their float form.
    """
    value = float(literal)
    if value.is_integer() and abs(value) < _PLAIN_INTEGER_LIMIT:
        return int(value)
    return value


def format_body(options: SearchOptions, body: str) -> str:
    """Shape a successful response body for the caller.

    JSON responses are parsed and re-serialized with a 2-space indent; text
    responses pass through untouched.
    """
    if options.format == "json":
        parsed = json.loads(body, parse_float=_parse_number)
        return json.dumps(parsed, indent=2, ensure_ascii=False)
    return body


async def search(
    options: SearchOptions,
    api_key: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Run one search against Jina.ai and return the formatted body.

    Args:
        options: The validated tool arguments.
        api_key: Bearer token for the upstream API.
        transport: Optional httpx transport (tests pass an httpx.MockTransport).

    Returns:
        The response text, pretty-printed when ``options.format == "json"``.

    Raises:
        JinaAPIError: the endpoint returned a non-2xx status.
        httpx.HTTPError: the request could not be completed.
        json.JSONDecodeError: a JSON response body did not parse.
    """
    request = build_request(options, api_key)
    logger.debug(
        "POST %s (optional headers: %s)",
        request.url,
        sorted(set(request.headers) - {"Authorization", "Accept"}),
    )

    # One client per call: no pooling, no retries, httpx's default timeout.
    async with httpx.AsyncClient(transport=transport) as client:
        response = await client.request(
            request.method, request.url, headers=request.headers
        )

    if not response.is_success:
        logger.debug("Upstream returned HTTP %s", response.status_code)
        raise JinaAPIError(response.text, status_code=response.status_code)

    return format_body(options, response.text)
