"""MindGuard server entry point — ``python -m mindguard.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from mindguard.core.config.settings import Settings, get_settings
from mindguard.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _provider_summary(settings: Settings) -> str:
    """Describe which model oracle the server will talk to."""
    name = settings.llm_provider
    if name == "mock":
        return "mock"
    api_key = getattr(settings, f"{name}_api_key")
    model = getattr(settings, f"{name}_model")
    if not api_key:
        return f"mock (no API key for {name})"
    return f"{name} ({model})"


def run() -> None:
    """Start the MindGuard MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.mindguard_log_level.upper(), logging.INFO)
    )

    logger = logging.getLogger(__name__)
    if not settings.mindguard_allow_insecure_bind and not _is_loopback_host(settings.mindguard_host):
        raise RuntimeError(
            "Refusing to bind MindGuard server to a non-loopback host without an auth layer. "
            "Set MINDGUARD_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting MindGuard Wellness server on %s:%d",
        settings.mindguard_host,
        settings.mindguard_port,
    )
    logger.info("Model oracle: %s", _provider_summary(settings))

    mcp = create_app(settings_override=settings)
    mcp.run(
        transport="streamable-http",
        host=settings.mindguard_host,
        port=settings.mindguard_port,
    )


if __name__ == "__main__":
    run()
