import logging
import os
import time
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "QUEST_REWARDS_CONFIG"

_config_file_path: Optional[str] = None
_config_last_modified: float = 0
_config_cache: Optional[Dict[str, Any]] = None

DEFAULT_CONFIG: Dict[str, Any] = {
    "policy_version": "v1",
    "rewards": {
        "extra_credit": {"paper_scraps": 10},
        "organize_the_stacks": {"xp": 15, "ink_drops": 10},
        "default_fallback": {"ink_drops": 10},
        "encounter": {
            "Monster": {"xp": 30},
            "Friendly Creature": {"ink_drops": 10},
            "Familiar": {"paper_scraps": 5},
        },
    },
    "backgrounds": {
        "modifier_bonus": {
            "names": ["Archivist Bonus", "Prophet Bonus", "Cartographer Bonus"],
            "ink_drops": 10,
        },
        "biblioslinker": {"label": "Biblioslinker", "paper_scraps": 3},
    },
    "schools": {
        "enchantment": {"label": "School of Enchantment", "befriend_xp_multiplier": 1.5},
    },
    "end_of_month": {
        "book_completion_xp": 15,
        "journal_entry": {
            "base_paper_scraps": 5,
            "scribe_bonus": 3,
            "scribe_label": "Scribe's Acolyte",
        },
    },
    "atmospheric": {"base_value": 1, "sanctum_bonus": 2},
    "blueprints": {"default_genre_reward": 3, "extra_credit_reward": 10},
    "hot_reload_interval": 3600,
}


def load_config(config_path: str = None, force_reload: bool = False) -> Dict[str, Any]:
    """
    Load game-balance configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, uses $QUEST_REWARDS_CONFIG
            or the config.yaml shipped beside the package.
        force_reload: If True, reload even if file hasn't changed

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid
    """
    global _config_file_path, _config_last_modified, _config_cache

    if config_path is None and _config_file_path is not None:
        config_path = _config_file_path
    elif config_path is None:
        possible_paths = [
            os.environ.get(CONFIG_ENV_VAR),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path and os.path.exists(path):
                config_path = str(path)
                break

        if config_path is None:
            raise FileNotFoundError(
                "Config file not found. Tried: " + ", ".join([str(p) for p in possible_paths if p])
            )

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Unchanged file: serve the parsed copy
    current_mtime = os.path.getmtime(config_path)
    if (
        not force_reload
        and config_path == _config_file_path
        and current_mtime <= _config_last_modified
        and _config_cache is not None
    ):
        return _config_cache

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {str(e)}")
    except OSError as e:
        raise ValueError(f"Error loading config file: {str(e)}")

    if not isinstance(config, dict):
        raise ValueError("Config file is empty or invalid")

    _config_file_path = config_path
    _config_last_modified = current_mtime
    _config_cache = config
    return config


try:
    CONFIG: Dict[str, Any] = dict(load_config())
except (FileNotFoundError, ValueError) as e:
    CONFIG = dict(DEFAULT_CONFIG)
    logger.warning("Failed to load config file, using defaults: %s", e)


def reload_config() -> Dict[str, Any]:
    """
    Reload configuration from file (for hot-reload).

    The shared CONFIG dict is updated in place so modules that imported it
    see the new values.

    Returns:
        Updated configuration dictionary
    """
    try:
        new_config = load_config(force_reload=True)
    except (FileNotFoundError, ValueError) as e:
        logger.warning("Failed to reload config: %s. Keeping existing configuration.", e)
        return CONFIG

    CONFIG.clear()
    CONFIG.update(new_config)
    logger.info("Configuration reloaded at %s", time.strftime("%Y-%m-%d %H:%M:%S"))
    return CONFIG


def has_config_changed() -> bool:
    """
    Check if config file has been modified since last load.

    Returns:
        True if config file has changed
    """
    if _config_file_path is None or not os.path.exists(_config_file_path):
        return False

    try:
        current_mtime = os.path.getmtime(_config_file_path)
    except OSError:
        return False
    return current_mtime > _config_last_modified


def section(name: str) -> Dict[str, Any]:
    """Top-level config section, falling back to the built-in default."""
    value = CONFIG.get(name)
    if isinstance(value, dict):
        return value
    return DEFAULT_CONFIG.get(name, {})
