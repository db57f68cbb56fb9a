# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains a Google ADK agent that USES the search tool.
#
# ARCHITECTURAL ROLE:
#   The agent is an MCP client.  It:
#     1. Receives the user's question
#     2. Decides whether live web content is needed
#     3. Calls "search" on tools/mcp_server.py (spawned over stdio)
#     4. Answers from the results, citing sources
#
#   It contains no search logic of its own: the request translation lives in
#   core/, the MCP surface in tools/.
# =============================================================================
