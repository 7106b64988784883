"""Instruction registry — in-memory index for loaded instruction templates."""

from __future__ import annotations

import logging

from mindguard.core.instructions.models import InstructionTemplate

logger = logging.getLogger(__name__)


class InstructionRegistry:
    """In-memory registry of instruction templates, one active per kind."""

    def __init__(self) -> None:
        self._templates: dict[str, InstructionTemplate] = {}
        self._by_kind: dict[str, str] = {}

    def register(self, template: InstructionTemplate) -> None:
        """Add a template; the kind index keeps the first template per kind."""
        if template.id in self._templates:
            raise ValueError(f"Duplicate instruction id registered: {template.id!r}")
        self._templates[template.id] = template
        if template.kind in self._by_kind:
            logger.warning(
                "Instruction %s shadowed by %s for kind %r",
                template.id,
                self._by_kind[template.kind],
                template.kind,
            )
        else:
            self._by_kind[template.kind] = template.id

    def get(self, template_id: str) -> InstructionTemplate | None:
        """Look up a template by ID."""
        return self._templates.get(template_id)

    def for_kind(self, kind: str) -> InstructionTemplate:
        """Return the active template for an analysis kind."""
        template_id = self._by_kind.get(kind)
        if template_id is None:
            raise KeyError(f"No instruction template registered for kind {kind!r}")
        return self._templates[template_id]

    def kinds(self) -> list[str]:
        return sorted(self._by_kind)

    def all(self) -> list[InstructionTemplate]:
        """Return all registered templates."""
        return list(self._templates.values())
