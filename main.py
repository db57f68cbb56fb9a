# =============================================================================
# main.py  -  Interactive client for the Jina.ai search MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (JINAAI_API_KEY, OPENROUTER_API_KEY, SEARCH_AGENT_MODEL)
#   2. Creates the ADK agent (agent/search_agent.py), which spawns
#      tools/mcp_server.py as a stdio subprocess
#   3. Reads questions from the terminal and streams the agent's events
#   4. Prints each "search" call and the final answer
#
# To run only the MCP server (for another MCP client), use
#   jina-search-mcp      or      python -m tools.mcp_server
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# LiteLlm and the MCP subprocess both read their keys from the environment,
# so .env has to be loaded before the agent is created.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.search_agent import create_agent
from core.config import MissingCredentialError

APP_NAME = "jina_search_assistant"
USER_ID = "local_user"
EXIT_COMMANDS = ("quit", "exit", "q")


def _format_call(function_call) -> str:
    args = function_call.args or {}
    query = args.get("query")
    return f"{function_call.name}({query!r})" if query else function_call.name


async def run_agent() -> None:
    """Run the search assistant until the user quits."""
    print("=" * 70)
    print("  WEB SEARCH ASSISTANT")
    print("  Google ADK + LiteLlm + Jina.ai search over MCP")
    print("=" * 70)

    try:
        agent = create_agent()
    except MissingCredentialError as exc:
        print(f"\n❌ {exc}", file=sys.stderr)
        sys.exit(1)

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent ready. Ask anything (type 'quit' to exit).")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in EXIT_COMMANDS:
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Searching...\n")

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not (event.content and event.content.parts):
                continue
            for part in event.content.parts:
                if getattr(part, "function_call", None):
                    print(f"  🔧 {_format_call(part.function_call)}")
                if getattr(part, "text", None):
                    final_response = part.text

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Assistant:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. Check the server log above for errors.")


if __name__ == "__main__":
    asyncio.run(run_agent())
