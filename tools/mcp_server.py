# =============================================================================
# tools/mcp_server.py  -  MCP Server exposing the Jina.ai "search" tool
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes ONE tool ("search") over the Model Context Protocol and routes
#   calls to core/jina.py.  This module owns everything MCP-specific: the
#   tool descriptor, list/call dispatch, how failures are reported back to
#   the client, logging, and the process entry point.
#
# HOW IT WORKS (the flow):
#   1. The client lists tools and receives SEARCH_TOOL
#   2. It calls "search" with arguments matching SEARCH_TOOL.inputSchema
#   3. run_search() validates the arguments against that schema
#   4. core.jina.search() POSTs to https://s.jina.ai/<query>
#   5. The body (or the failure) goes back as a CallToolResult
#
# TWO KINDS OF ERRORS:
#   - Unknown tool name  →  McpError(METHOD_NOT_FOUND).  The MCP session turns
#                           this into a JSON-RPC error response: the client
#                           learns that no such tool exists.
#   - Search failed      →  a NORMAL CallToolResult with isError=True and the
#                           text "Jina.ai API error: <message>".  The tool
#                           exists, it just could not deliver.
#   The call-tool handler is registered directly in request_handlers (rather
#   than via Server.call_tool(), which folds every exception into isError)
#   so the first kind stays a protocol error.
#
# RUNNING THIS SERVER:
#   a) Installed:   jina-search-mcp
#   b) From source: python -m tools.mcp_server
#   Both need JINAAI_API_KEY in the environment (or in .env).
# =============================================================================

import asyncio
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Any, Optional

import httpx
import jsonschema
from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from core.config import MissingCredentialError, load_settings
from core.jina import JinaAPIError, search
from core.models import SearchOptions

# =============================================================================
# Logging Setup
# =============================================================================
# Everything goes to STDERR: STDOUT is the MCP transport, and a stray log
# line there would corrupt the JSON-RPC stream.
#
#   CYAN    incoming tool calls with their parameters
#   YELLOW  intermediate status
#   GREEN   responses (truncated)
#   RED     errors, both flagged tool errors and protocol errors
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

_PREVIEW_CHARS = 200

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("jina_search_mcp")


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: types.CallToolResult) -> types.CallToolResult:
    """Log a preview of the tool result in GREEN (or RED when flagged), then return it."""
    text = result.content[0].text if result.content else ""
    preview = text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "…"
    color = _RED if result.isError else _GREEN
    logger.info(f"{color}  ← {tool_name} response: {json.dumps(preview)}{_RESET}")
    return result


def _log_protocol_error(message: str) -> None:
    logger.error(f"{_RED}[MCP Error] {message}{_RESET}")


# =============================================================================
# Tool Descriptor
# =============================================================================
# Returned verbatim from tools/list.  The schema is also what run_search()
# validates against, so a constraint added here (e.g. a minimum) is enforced
# before any request is built.
# =============================================================================
SEARCH_TOOL = types.Tool(
    name="search",
    description=(
        "Search the web and get clean, LLM-friendly content using Jina.ai Reader"
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query",
            },
            "format": {
                "type": "string",
                "description": "Response format (json or text)",
                "enum": ["json", "text"],
                "default": "text",
            },
            "no_cache": {
                "type": "boolean",
                "description": "Bypass cache for fresh results",
                "default": False,
            },
            "token_budget": {
                "type": "number",
                "description": "Maximum number of tokens for this request",
                "minimum": 1,
            },
            "browser_locale": {
                "type": "string",
                "description": "Browser locale for rendering content",
            },
            "stream": {
                "type": "boolean",
                "description": "Enable stream mode for large pages",
                "default": False,
            },
            "gather_links": {
                "type": "boolean",
                "description": "Gather all links at the end of the response",
                "default": False,
            },
            "gather_images": {
                "type": "boolean",
                "description": "Gather all images at the end of the response",
                "default": False,
            },
            "image_caption": {
                "type": "boolean",
                "description": "Caption images in the content",
                "default": False,
            },
            "enable_iframe": {
                "type": "boolean",
                "description": "Extract content from iframes",
                "default": False,
            },
            "enable_shadow_dom": {
                "type": "boolean",
                "description": "Extract content from shadow DOM",
                "default": False,
            },
            "resolve_redirects": {
                "type": "boolean",
                "description": "Follow redirect chains to the final URL",
                "default": True,
            },
        },
        "required": ["query"],
    },
)


def _server_version() -> str:
    """Version advertised in the MCP handshake, from installed package metadata."""
    try:
        return package_version("jina-search-mcp")
    except PackageNotFoundError:
        return "0.0.0"


def _text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def _describe(exc: BaseException) -> str:
    # An upstream error body is reported as-is, even when empty.  Only
    # transport errors (some httpx exceptions carry no message) fall back
    # to the class name.
    if isinstance(exc, JinaAPIError):
        return str(exc)
    return str(exc) or type(exc).__name__


def _announce(message: str) -> None:
    """Write a lifecycle line straight to stderr, whatever MCP_LOG_LEVEL is."""
    print(message, file=sys.stderr, flush=True)


# =============================================================================
# The search tool
# =============================================================================
async def run_search(
    arguments: dict[str, Any],
    api_key: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> types.CallToolResult:
    """Execute the ``search`` tool and wrap the outcome as a CallToolResult.

    Never raises for tool-execution failures: bad arguments, network errors,
    non-2xx upstream responses and malformed JSON all come back as a result
    with ``isError=True``.

    Args:
        arguments: Raw tool arguments from the client.
        api_key: Jina.ai bearer token.
        transport: Optional httpx transport, forwarded to core.jina.search().
    """
    _log_request("search", arguments)

    try:
        jsonschema.validate(instance=arguments, schema=SEARCH_TOOL.inputSchema)
    except jsonschema.ValidationError as exc:
        _log_status("Arguments rejected by input schema")
        return _log_response(
            "search", _text_result(f"Input validation error: {exc.message}", is_error=True)
        )

    try:
        options = SearchOptions.from_arguments(arguments)
        text = await search(options, api_key, transport=transport)
    except Exception as exc:
        logger.debug("search failed", exc_info=True)
        return _log_response(
            "search", _text_result(f"Jina.ai API error: {_describe(exc)}", is_error=True)
        )

    _log_status(f"Received {len(text)} characters ({options.format})")
    return _log_response("search", _text_result(text))


# =============================================================================
# Server wiring
# =============================================================================
def build_server(
    api_key: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Server:
    """Create the low-level MCP server with list/call handlers installed.

    Args:
        api_key: Jina.ai bearer token, fixed for the life of the server.
        transport: Optional httpx transport used for every upstream call.
    """
    server = Server("jina-search-mcp", version=_server_version())

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [SEARCH_TOOL]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        if name != SEARCH_TOOL.name:
            message = f"Unknown tool: {name}"
            _log_protocol_error(message)
            raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=message))

        result = await run_search(
            request.params.arguments or {}, api_key, transport=transport
        )
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(api_key: str) -> None:
    """Run the server over stdin/stdout until the client disconnects."""
    server = build_server(api_key)
    async with stdio_server() as (read_stream, write_stream):
        _announce("Jina Search MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Console entry point: load config, then serve MCP on stdio.

    Exits with status 1 when JINAAI_API_KEY is missing or the transport
    fails to start.
    """
    load_dotenv()

    try:
        settings = load_settings()
    except MissingCredentialError as exc:
        _announce(f"{_RED}{exc}{_RESET}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    try:
        asyncio.run(serve(settings.api_key))
    except Exception as exc:
        _announce(f"{_RED}Failed to start server: {exc}{_RESET}")
        sys.exit(1)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
