# =============================================================================
# core/__init__.py
# =============================================================================
# Pure translation logic for the Jina.ai search tool.
#
# ARCHITECTURAL ROLE:
#   core/ knows how to talk to Jina.ai and nothing about MCP.  It:
#     1. Describes a search invocation (models.SearchOptions)
#     2. Maps its options onto HTTP headers (jina.HEADER_RULES)
#     3. Performs the upstream POST and formats the body (jina.search)
#     4. Reads the API key from the environment (config.load_settings)
#
#   tools/ imports from here; core/ never imports from tools/ or agent/.
# =============================================================================
