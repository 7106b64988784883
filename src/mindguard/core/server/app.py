"""MindGuard Wellness MCP Server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from mindguard.core.config.settings import Settings, get_settings
from mindguard.core.instructions.loader import load_instruction_directory
from mindguard.core.instructions.registry import InstructionRegistry
from mindguard.core.llm.client import OracleClient
from mindguard.core.llm.provider import LLMProvider, create_provider
from mindguard.domains.wellness.domain_logic.analyzer import WellnessAnalyzer
from mindguard.domains.wellness.prompts.wellness_prompts import register_wellness_prompts
from mindguard.domains.wellness.resources.wellness_resources import (
    register_wellness_resources,
)
from mindguard.domains.wellness.session.controller import WellnessSession
from mindguard.domains.wellness.tools.wellness_tools import register_wellness_tools

logger = logging.getLogger(__name__)

# Instruction YAML definitions live under src/mindguard/domains/wellness/instructions/
_INSTRUCTION_DIR = (
    Path(__file__).resolve().parent.parent.parent / "domains" / "wellness" / "instructions"
)


def _resolve_provider(settings: Settings) -> tuple[str, LLMProvider]:
    """Pick the configured provider, falling back to mock without an API key."""
    if settings.llm_provider == "mock":
        provider_name, api_key, model = "mock", "", ""
    elif settings.llm_provider == "gemini":
        api_key = settings.gemini_api_key
        model = settings.gemini_model
        provider_name = "gemini" if api_key else "mock"
    elif settings.llm_provider == "anthropic":
        api_key = settings.anthropic_api_key
        model = settings.anthropic_model
        provider_name = "anthropic" if api_key else "mock"
    elif settings.llm_provider == "openai":
        api_key = settings.openai_api_key
        model = settings.openai_model
        provider_name = "openai" if api_key else "mock"
    else:  # pragma: no cover
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider!r}")

    if provider_name == "mock" and settings.llm_provider != "mock":
        logger.warning(
            "No API key configured for provider '%s'; falling back to mock provider",
            settings.llm_provider,
        )

    return provider_name, create_provider(provider_name=provider_name, api_key=api_key, model=model)


def create_app(
    *,
    provider_override: LLMProvider | None = None,
    settings_override: Settings | None = None,
) -> FastMCP:
    """Create and configure the MindGuard wellness MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the instruction templates for each analysis kind
    3. Creates the model oracle client around the configured provider
    4. Creates the wellness session (in-memory result store)
    5. Registers all tools, resources, and prompts
    """
    settings = settings_override or get_settings()

    # --- Server instance ---
    server = FastMCP(
        "MindGuard Wellness",
        instructions=(
            "MindGuard — multimodal mental wellness check-ins. Analyzes a voice "
            "sample, a facial photo, and a supportive chat with a generative model, "
            "then fuses them into one wellness report. AI indicators only, not a "
            "medical diagnosis. Always surface crisis resources when a result is "
            "flagged as a crisis."
        ),
    )

    # --- Instruction templates ---
    registry = InstructionRegistry()
    instruction_dir = _INSTRUCTION_DIR
    if settings.instructions_dir:
        instruction_dir = Path(settings.instructions_dir).expanduser()
    instruction_count = load_instruction_directory(instruction_dir, registry)
    logger.info("Loaded %d instruction templates from %s", instruction_count, instruction_dir)

    # --- Model oracle ---
    if provider_override is not None:
        provider_name, provider = "override", provider_override
    else:
        provider_name, provider = _resolve_provider(settings)
    oracle = OracleClient(
        provider=provider,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )

    # --- Session ---
    session = WellnessSession(WellnessAnalyzer(oracle, registry))

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "MindGuard Wellness",
            "version": "0.1.0",
            "llm_provider": provider_name,
            "instructions_loaded": instruction_count,
            "analysis_kinds": registry.kinds(),
        }

    register_wellness_tools(server, session, settings)
    logger.info("Wellness tools registered")

    # --- Register resources ---
    register_wellness_resources(server, registry)

    # --- Register prompts ---
    register_wellness_prompts(server)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
