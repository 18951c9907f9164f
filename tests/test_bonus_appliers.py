"""Tests for background and wizard school bonuses."""

from quest_rewards.models.enum import Currency, QuestCategory, ReceiptEntryType
from quest_rewards.models.request import QuestContext
from quest_rewards.models.reward import Reward
from quest_rewards.services.base_resolver import resolve_base
from quest_rewards.services.bonus_appliers import apply_background_bonus, apply_school_bonus


def test_biblioslinker_on_dungeon_crawl(content, dungeon_room_quest):
    """Test that Biblioslinker adds Paper Scraps to a dungeon room reward."""
    base = resolve_base(QuestCategory.DUNGEON_CRAWL, "", {"room_number": "1"}, content=content)

    result = apply_background_bonus(base, dungeon_room_quest, "biblioslinker")
    rows = result.get_receipt().modifiers

    assert base.paper_scraps == 5
    assert result.paper_scraps == 8
    assert result.modified_by == ["Biblioslinker"]
    assert len(rows) == 1
    assert rows[0].type == ReceiptEntryType.BACKGROUND
    assert rows[0].value == 3
    assert rows[0].currency == Currency.PAPER_SCRAPS


def test_biblioslinker_accepts_raw_quest_fields():
    """Test that a quest given as a plain mapping is accepted."""
    result = apply_background_bonus(Reward(), {"type": "♠ Dungeon Crawl", "prompt": ""}, "biblioslinker")

    assert result.paper_scraps == 3


def test_biblioslinker_outside_dungeon_is_noop():
    """Test that Biblioslinker does nothing for other quest types."""
    reward = Reward(ink_drops=10)
    quest = QuestContext(category=QuestCategory.ORGANIZE_THE_STACKS)

    assert apply_background_bonus(reward, quest, "biblioslinker") is reward


def test_other_background_is_noop(dungeon_room_quest):
    """Test that other backgrounds leave the reward untouched."""
    reward = Reward(paper_scraps=5)

    assert apply_background_bonus(reward, dungeon_room_quest, "archivist") is reward
    assert apply_background_bonus(reward, dungeon_room_quest, "") is reward
    assert apply_background_bonus(reward, dungeon_room_quest, None) is reward


def test_background_bonus_does_not_mutate_input(dungeon_room_quest):
    """Test that the input reward is left untouched."""
    reward = Reward(paper_scraps=5)

    apply_background_bonus(reward, dungeon_room_quest, "biblioslinker")

    assert reward.paper_scraps == 5
    assert reward.modified_by == []
    assert reward.steps == []


def test_enchantment_on_befriended_encounter(befriend_encounter_quest):
    """Test that Enchantment multiplies XP by 1.5 for a befriended encounter."""
    reward = Reward(xp=30)

    result = apply_school_bonus(reward, befriend_encounter_quest, "Enchantment")
    row = result.get_receipt().modifiers[0]

    assert result.xp == 45
    assert row.type == ReceiptEntryType.SCHOOL
    assert row.source == "School of Enchantment"
    assert row.value == 15
    assert row.currency == Currency.XP
    assert result.modified_by == ["School of Enchantment"]


def test_enchantment_is_case_insensitive(befriend_encounter_quest):
    """Test that the school name is matched case-insensitively."""
    assert apply_school_bonus(Reward(xp=30), befriend_encounter_quest, "enchantment").xp == 45


def test_enchantment_floors_result(befriend_encounter_quest):
    """Test that the boosted XP is rounded down."""
    result = apply_school_bonus(Reward(xp=5), befriend_encounter_quest, "Enchantment")

    assert result.xp == 7
    assert result.get_receipt().modifiers[0].value == 2


def test_enchantment_requires_befriend(befriend_encounter_quest):
    """Test that a defeated encounter gets no Enchantment bonus."""
    reward = Reward(xp=30)
    quest = befriend_encounter_quest.model_copy(update={"is_befriend": False})

    assert apply_school_bonus(reward, quest, "Enchantment") is reward


def test_enchantment_requires_encounter(dungeon_room_quest):
    """Test that a plain room completion gets no Enchantment bonus."""
    reward = Reward(xp=30)
    quest = dungeon_room_quest.model_copy(update={"is_befriend": True})

    assert apply_school_bonus(reward, quest, "Enchantment") is reward


def test_enchantment_requires_xp(befriend_encounter_quest):
    """Test that a reward with no XP is left untouched."""
    reward = Reward(ink_drops=10)

    assert apply_school_bonus(reward, befriend_encounter_quest, "Enchantment") is reward


def test_other_school_is_noop(befriend_encounter_quest):
    """Test that other schools leave the reward untouched."""
    reward = Reward(xp=30)

    assert apply_school_bonus(reward, befriend_encounter_quest, "Divination") is reward
    assert apply_school_bonus(reward, befriend_encounter_quest, None) is reward


def test_enchantment_when_befriend_flag_missing():
    """Test that an encounter record without an isBefriend flag counts as befriended."""
    record = {
        "type": "♠ Dungeon Crawl",
        "isEncounter": True,
        "roomNumber": "1",
        "encounterName": "Will-o-wisps",
    }

    result = apply_school_bonus(Reward(xp=30), record, "Enchantment")

    assert QuestContext.model_validate(record).is_befriend is True
    assert result.xp == 45
    assert result.modified_by == ["School of Enchantment"]
