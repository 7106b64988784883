"""Integration tests for the MindGuard Wellness MCP server."""

from __future__ import annotations

import asyncio
import json
import logging

import pytest
from fastmcp import Client

from mindguard.core.config.settings import Settings
from mindguard.core.llm.providers.mock import MockProvider
from mindguard.core.server import main as server_main
from mindguard.core.server.app import _resolve_provider, create_app
from mindguard.core.server.main import _is_loopback_host, _provider_summary


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


ALL_EXPECTED_TOOLS = [
    "health_check",
    "analyze_voice",
    "analyze_face",
    "chat",
    "wellness_report",
    "session_overview",
    "dismiss_crisis",
    "reset_session",
]


@pytest.fixture
def client():
    """Create an MCP client connected to a server backed by the mock provider."""
    mcp = create_app(provider_override=MockProvider())
    return Client(mcp)


def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    """health_check tool should return status ok and the loaded instruction kinds."""
    async def _check():
        async with client:
            result = await client.call_tool("health_check", {})
            data = json.loads(result.content[0].text)
            assert data["status"] == "ok"
            assert data["llm_provider"] == "override"
            assert data["instructions_loaded"] == 4
            assert data["analysis_kinds"] == ["chat", "face", "fusion", "voice"]
    _run(_check())


def test_resources_and_prompts_registered(client):
    async def _check():
        async with client:
            resources = await client.list_resources()
            uris = {str(r.uri) for r in resources}
            assert "wellness://crisis/resources" in uris
            assert "instruction://wellness/registry" in uris

            prompts = await client.list_prompts()
            names = {p.name for p in prompts}
            assert {"wellness_check_in_prompt", "supportive_chat_prompt"} <= names
    _run(_check())


def test_custom_instruction_dir(tmp_path):
    (tmp_path / "voice.yaml").write_text(
        "id: custom.voice\nversion: '2.0'\nkind: voice\n"
        "display_name: Custom voice\ninstruction: Listen closely.\n"
    )
    settings = Settings(instructions_dir=str(tmp_path), llm_provider="mock")
    mcp = create_app(settings_override=settings)

    async def _check():
        async with Client(mcp) as client:
            result = await client.call_tool("health_check", {})
            data = json.loads(result.content[0].text)
            assert data["llm_provider"] == "mock"
            assert data["analysis_kinds"] == ["voice"]
    _run(_check())


class TestProviderResolution:
    def test_missing_key_falls_back_to_mock(self):
        name, provider = _resolve_provider(Settings(llm_provider="gemini", gemini_api_key=""))
        assert name == "mock"
        assert isinstance(provider, MockProvider)

    def test_explicit_mock(self):
        name, _ = _resolve_provider(Settings(llm_provider="mock"))
        assert name == "mock"


@pytest.mark.parametrize(
    ("host", "expected"),
    [("127.0.0.1", True), ("localhost", True), ("::1", True), ("0.0.0.0", False), ("example.com", False)],
)
def test_loopback_detection(host, expected):
    assert _is_loopback_host(host) is expected


class TestEntryPoint:
    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            ({"llm_provider": "mock"}, "mock"),
            ({"llm_provider": "gemini", "gemini_api_key": ""}, "mock (no API key for gemini)"),
            (
                {"llm_provider": "openai", "openai_api_key": "sk-test", "openai_model": "gpt-4o"},
                "openai (gpt-4o)",
            ),
        ],
    )
    def test_provider_summary(self, overrides, expected):
        assert _provider_summary(Settings(**overrides)) == expected

    def test_run_logs_provider_and_serves_http(self, monkeypatch, caplog):
        started = {}

        class _FakeServer:
            def run(self, **kwargs):
                started.update(kwargs)

        monkeypatch.setenv("MINDGUARD_HOST", "127.0.0.1")
        monkeypatch.setenv("MINDGUARD_PORT", "8001")
        monkeypatch.setattr(server_main, "create_app", lambda settings_override: _FakeServer())
        caplog.set_level(logging.INFO, logger="mindguard.core.server.main")

        server_main.run()

        assert started == {"transport": "streamable-http", "host": "127.0.0.1", "port": 8001}
        assert "Model oracle: mock" in caplog.text

    def test_run_refuses_public_bind(self, monkeypatch):
        monkeypatch.setenv("MINDGUARD_HOST", "0.0.0.0")
        monkeypatch.setenv("MINDGUARD_ALLOW_INSECURE_BIND", "false")
        monkeypatch.setattr(
            server_main, "create_app", lambda settings_override: pytest.fail("server built")
        )

        with pytest.raises(RuntimeError, match="non-loopback"):
            server_main.run()
