"""
Background and school bonuses.

These depend on the quest itself (category, encounter outcome), not just a
modifier name, so they run as separate passes after apply_modifiers.
Both return the input Reward itself when nothing applies.
"""

import math
from typing import Any, Mapping, Optional, Union
from quest_rewards.models.enum import Currency, QuestCategory, ReceiptEntryType, StepStage
from quest_rewards.models.request import QuestContext
from quest_rewards.models.reward import AppliedStep, Reward
from quest_rewards.utils.config_loader import section

BIBLIOSLINKER = "biblioslinker"
ENCHANTMENT = "enchantment"


def _as_context(quest: Union[QuestContext, Mapping[str, Any]]) -> QuestContext:
    if isinstance(quest, QuestContext):
        return quest
    return QuestContext.model_validate(quest)


def apply_background_bonus(reward: Reward, quest: Union[QuestContext, Mapping[str, Any]], background: Optional[str]) -> Reward:
    """Biblioslinker: flat Paper Scraps on Dungeon Crawl quests."""
    if background != BIBLIOSLINKER:
        return reward
    if _as_context(quest).category != QuestCategory.DUNGEON_CRAWL:
        return reward

    bonus_cfg = section("backgrounds").get(BIBLIOSLINKER, {})
    bonus = int(bonus_cfg.get("paper_scraps", 3))
    label = bonus_cfg.get("label", "Biblioslinker")

    modified = reward.clone()
    modified.apply_step(AppliedStep(
        stage=StepStage.BACKGROUND,
        entry_type=ReceiptEntryType.BACKGROUND,
        source=label,
        currency=Currency.PAPER_SCRAPS,
        delta=bonus,
        description=f"{bonus:+d} Paper Scraps for Dungeon Crawls",
    ))
    modified.modified_by.append(label)
    return modified


def apply_school_bonus(reward: Reward, quest: Union[QuestContext, Mapping[str, Any]], school: Optional[str]) -> Reward:
    """Enchantment: befriending a dungeon encounter earns 1.5x XP, floored."""
    if not school or school.lower() != ENCHANTMENT:
        return reward
    quest = _as_context(quest)
    if quest.category != QuestCategory.DUNGEON_CRAWL or not quest.is_encounter or not quest.is_befriend:
        return reward
    if not reward.xp:
        return reward

    school_cfg = section("schools").get(ENCHANTMENT, {})
    factor = float(school_cfg.get("befriend_xp_multiplier", 1.5))
    label = school_cfg.get("label", "School of Enchantment")

    boosted = math.floor(reward.xp * factor)
    modified = reward.clone()
    modified.apply_step(AppliedStep(
        stage=StepStage.SCHOOL,
        entry_type=ReceiptEntryType.SCHOOL,
        source=label,
        currency=Currency.XP,
        delta=boosted - reward.xp,
        description=f"x{factor:g} XP for befriending",
    ))
    modified.modified_by.append(label)
    return modified
