"""MCP Prompts — pre-built interaction templates for wellness check-ins."""

from __future__ import annotations

from fastmcp import FastMCP


def register_wellness_prompts(mcp: FastMCP) -> None:
    """Register wellness MCP prompts."""

    @mcp.prompt()
    def wellness_check_in_prompt() -> str:
        """Prompt template for a full multimodal check-in."""
        return """I'd like to do a mental wellness check-in. Please:

1. Record a short voice sample and run analyze_voice on it
2. Take a photo of my face and run analyze_face on it
3. Chat with me for a few messages about how I'm feeling
4. Finish with wellness_report and walk me through it gently

These are AI indicators only, not a diagnosis."""

    @mcp.prompt()
    def supportive_chat_prompt(feeling: str = "a bit overwhelmed") -> str:
        """Prompt template for opening a supportive conversation."""
        return f"""I'm feeling {feeling} today. Can we talk for a while?

Please pass what I say to the chat tool and share its replies with me. If anything \
comes back flagged as a crisis, show me the crisis resources right away."""
