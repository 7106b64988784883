"""MCP Resources for crisis support and instruction discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from mindguard.domains.wellness.session.crisis import CRISIS_RESOURCES, DISCLAIMER

if TYPE_CHECKING:
    from mindguard.core.instructions.registry import InstructionRegistry


def register_wellness_resources(mcp: FastMCP, registry: InstructionRegistry) -> None:
    """Register wellness resources on the MCP server."""

    @mcp.resource("wellness://crisis/resources")
    def crisis_resources() -> str:
        """Emergency contacts shown whenever a result is flagged as a crisis."""
        return json.dumps({**CRISIS_RESOURCES, "disclaimer": DISCLAIMER}, indent=2)

    @mcp.resource("instruction://wellness/registry")
    def instruction_registry_resource() -> str:
        """Discover the instruction templates used for each analysis kind."""
        templates = registry.all()
        return json.dumps(
            {
                "domain": "mental_wellness",
                "instruction_count": len(templates),
                "instructions": [
                    {
                        "id": t.id,
                        "version": t.version,
                        "kind": t.kind,
                        "display_name": t.display_name,
                        "description": t.description,
                        "tags": t.tags,
                    }
                    for t in templates
                ],
            },
            indent=2,
        )
