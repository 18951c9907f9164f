"""Loads the static content tables (items, buffs, rooms, quests) from YAML."""

import logging
import os
import yaml
from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from quest_rewards.models.content import ContentTables

logger = logging.getLogger(__name__)

CONTENT_ENV_VAR = "QUEST_REWARDS_CONTENT"
DEFAULT_CONTENT_PATH = Path(__file__).parent.parent / "content.yaml"


def load_content(content_path: Optional[str] = None) -> ContentTables:
    """
    Parse a content YAML file into ContentTables.

    Raises:
        FileNotFoundError: If the content file doesn't exist
        ValueError: If the file is not valid YAML or doesn't match the content schema
    """
    if content_path is None:
        content_path = os.environ.get(CONTENT_ENV_VAR) or str(DEFAULT_CONTENT_PATH)

    if not os.path.exists(content_path):
        raise FileNotFoundError(f"Content file not found: {content_path}")

    try:
        with open(content_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in content file: {str(e)}")

    try:
        content = ContentTables.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid content tables in {content_path}: {str(e)}")

    logger.debug(
        "Loaded content from %s: %d items, %d buffs, %d rooms",
        content_path, len(content.items), len(content.temporary_buffs), len(content.dungeon_rooms),
    )
    return content


@lru_cache(maxsize=1)
def get_content() -> ContentTables:
    """Shared content tables, loaded once."""
    return load_content()


def reload_content() -> ContentTables:
    get_content.cache_clear()
    return get_content()
