# =============================================================================
# agent/search_agent.py  -  Google ADK Agent wired to the search MCP server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates a Google ADK agent whose only tool source is our MCP server
#   (tools/mcp_server.py).  ADK spawns the server as a subprocess and talks
#   to it over stdio, exactly as any other MCP client would.
#
#   ┌──────────────────────────┐   stdio (MCP)   ┌──────────────────────┐
#   │  ADK Agent (LiteLlm)     │ ──────────────▶ │  tools/mcp_server.py │
#   │  agent/search_agent.py   │ ◀────────────── │  "search" tool       │
#   └──────────────────────────┘                 └──────────┬───────────┘
#                                                           │ HTTPS POST
#                                                           ▼
#                                                ┌──────────────────────┐
#                                                │  https://s.jina.ai/  │
#                                                └──────────────────────┘
#
# MODEL:
#   LiteLlm model string, default "openrouter/openai/gpt-4o".  Override with
#   SEARCH_AGENT_MODEL.  LiteLlm reads the provider key (OPENROUTER_API_KEY
#   for the default) from the environment.
#
# SUBPROCESS ENVIRONMENT:
#   The MCP stdio client only passes a minimal whitelist of variables (PATH,
#   HOME, ...) to the child process.  JINAAI_API_KEY is therefore forwarded
#   explicitly, otherwise the server would exit at startup.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_search_assistant_prompt
from core.config import API_KEY_ENV, load_settings

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
MODEL_ENV = "SEARCH_AGENT_MODEL"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def build_server_params() -> StdioServerParameters:
    """Describe how ADK should launch the search MCP server.

    The server runs under the current interpreter as ``-m tools.mcp_server``
    from the project root, so it sees the same virtual environment and
    packages as the agent.

    Raises:
        MissingCredentialError: if JINAAI_API_KEY is not configured.  Failing
            here gives a clear message instead of a dead subprocess.
    """
    settings = load_settings()
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        env={API_KEY_ENV: settings.api_key},
        cwd=PROJECT_ROOT,
    )


def create_agent() -> Agent:
    """Create the research assistant agent.

    Returns:
        A configured Google ADK Agent with the Jina.ai search toolset.
    """
    search_tools = MCPToolset(connection_params=build_server_params())

    return Agent(
        name="web_search_assistant",
        model=LiteLlm(model=os.environ.get(MODEL_ENV, DEFAULT_MODEL)),
        instruction=get_search_assistant_prompt(),
        tools=[search_tools],
    )
