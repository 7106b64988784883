"""Instruction loader — reads YAML instruction templates from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from mindguard.core.instructions.models import InstructionTemplate
from mindguard.core.instructions.registry import InstructionRegistry

logger = logging.getLogger(__name__)


def load_instruction_directory(directory: str | Path, registry: InstructionRegistry) -> int:
    """Load all YAML instruction templates from a directory (recursively).

    Returns the number of templates loaded.
    Skips files starting with underscore.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Instruction directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        try:
            template = load_instruction_file(path)
            registry.register(template)
            count += 1
            logger.info("Loaded instruction: %s (v%s)", template.id, template.version)
        except Exception:
            logger.exception("Failed to load instruction template from %s", path)
    return count


def load_instruction_file(path: Path) -> InstructionTemplate:
    """Parse a YAML file into an InstructionTemplate."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f)

    return InstructionTemplate(
        id=data["id"],
        version=str(data["version"]),
        kind=data["kind"],
        display_name=data["display_name"],
        description=data.get("description", "").strip(),
        instruction=data.get("instruction", "").strip(),
        closing=data.get("closing", "").strip(),
        system_instruction=data.get("system_instruction", "").strip(),
        tags=data.get("tags", []),
    )
