"""Data models for analysis instruction templates."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InstructionTemplate:
    """The fixed prompt text for one analysis kind.

    ``instruction`` leads the request; ``closing`` (fusion only) follows the
    modality data; ``system_instruction`` (chat only) is sent as the system
    prompt.
    """

    id: str
    version: str
    kind: str
    display_name: str
    description: str
    instruction: str
    closing: str = ""
    system_instruction: str = ""
    tags: list[str] = field(default_factory=list)
