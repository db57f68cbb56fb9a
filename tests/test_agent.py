from __future__ import annotations

import os
import sys
from datetime import date

import pytest

pytest.importorskip("google.adk")

from agent import search_agent
from agent.prompt import get_search_assistant_prompt
from core.config import MissingCredentialError


def test_prompt_mentions_tool_and_today():
    prompt = get_search_assistant_prompt()

    assert date.today().isoformat() in prompt
    assert '"search"' in prompt
    assert "Jina.ai API error:" in prompt


def test_server_params_launch_module_with_key(monkeypatch):
    monkeypatch.setenv("JINAAI_API_KEY", "jina_test_key")

    params = search_agent.build_server_params()

    assert params.command == sys.executable
    assert params.args == ["-m", "tools.mcp_server"]
    assert params.env == {"JINAAI_API_KEY": "jina_test_key"}
    assert os.path.isfile(os.path.join(str(params.cwd), "tools", "mcp_server.py"))


def test_server_params_require_key():
    with pytest.raises(MissingCredentialError):
        search_agent.build_server_params()


def test_create_agent_uses_model_override(monkeypatch):
    monkeypatch.setenv("JINAAI_API_KEY", "jina_test_key")
    monkeypatch.setenv("SEARCH_AGENT_MODEL", "openrouter/openai/gpt-4o-mini")

    agent = search_agent.create_agent()

    assert agent.name == "web_search_assistant"
    assert agent.model.model == "openrouter/openai/gpt-4o-mini"
    assert len(agent.tools) == 1
