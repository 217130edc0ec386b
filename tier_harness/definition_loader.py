"""Load suite definitions from YAML files."""

import asyncio
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tier_harness.models.definition import SuiteDefinition


async def load_suite_definition(path: Path) -> SuiteDefinition:
    """Load and validate a suite definition.

    Args:
        path: Path to the suite YAML file

    Returns:
        Parsed suite definition

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or not a valid suite

    """
    if not path.is_file():
        raise FileNotFoundError(f"Suite file not found: {path}")

    content = await asyncio.to_thread(path.read_text)
    return parse_suite_definition(content, source=str(path))


def parse_suite_definition(content: str, source: str = "<string>") -> SuiteDefinition:
    """Parse a suite definition from YAML text."""
    try:
        data: Any = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {source}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Suite definition in {source} must be a mapping")

    try:
        return SuiteDefinition.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid suite definition in {source}: {exc}") from exc
