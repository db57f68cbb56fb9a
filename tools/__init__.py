# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP server for the Jina.ai search tool.
#
# ARCHITECTURAL ROLE:
#   tools/ is the layer between an MCP client and core/.  mcp_server.py:
#     1. Declares the "search" tool descriptor (name, description, schema)
#     2. Dispatches tools/list and tools/call requests
#     3. Calls core.jina.search() for the actual upstream request
#     4. Reports failures as flagged results or protocol errors
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP headers or URLs (that's in core/)
#   - They do NOT know about Google ADK (the agent/ package is one client
#     among many)
# =============================================================================
