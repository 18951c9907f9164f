"""Pytest configuration and shared fixtures."""

import pytest
from quest_rewards.models.content import ContentTables
from quest_rewards.models.enum import QuestCategory
from quest_rewards.models.request import EquipStateSnapshot, QuestContext
from quest_rewards.utils.content_loader import DEFAULT_CONTENT_PATH, load_content


@pytest.fixture(scope="session")
def content():
    """The shipped content tables."""
    return load_content(str(DEFAULT_CONTENT_PATH))


@pytest.fixture
def make_equip_state():
    """Build an equip-state snapshot from item names."""
    def _make(equipped=(), passive=(), familiars=()):
        return EquipStateSnapshot(
            equipped_items=list(equipped),
            passive_item_slots=list(passive),
            passive_familiar_slots=list(familiars),
        )
    return _make


@pytest.fixture
def custom_content():
    """Small content tables for pipeline arithmetic."""
    return ContentTables.model_validate({
        "items": {
            "Ink Well": {"type": "Non-Wearable", "reward_modifier": {"ink_drops": 20}},
            "Triple Lens": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 3, "multiplier_currency": "inkDrops"},
            },
            "Doubler": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 2, "multiplier_currency": "inkDrops"},
            },
            "Second Doubler": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 2, "multiplier_currency": "inkDrops"},
            },
            "Half Again": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 1.5, "multiplier_currency": "inkDrops"},
            },
            "Half Again Too": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 1.5, "multiplier_currency": "inkDrops"},
            },
            "Scholar's Ring": {
                "type": "Wearable",
                "reward_modifier": {"multiplier": 2, "multiplier_currency": "xp"},
            },
            "Mixed Charm": {
                "type": "Wearable",
                "reward_modifier": {"xp": 5, "ink_drops": 5, "paper_scraps": 1},
            },
        },
        "temporary_buffs": {
            "Inspired": {"reward_modifier": {"ink_drops": 4}},
        },
    })


@pytest.fixture
def dungeon_room_quest():
    """A dungeon room completion without an encounter."""
    return QuestContext(category=QuestCategory.DUNGEON_CRAWL, prompt="", room_number="1")


@pytest.fixture
def befriend_encounter_quest():
    """A befriended Monster encounter in room 1."""
    return QuestContext(
        category=QuestCategory.DUNGEON_CRAWL,
        is_encounter=True,
        is_befriend=True,
        room_number="1",
        encounter_name="Will-o-wisps",
    )
