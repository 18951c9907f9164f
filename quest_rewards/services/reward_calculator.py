import logging
from typing import Iterable, Optional
from quest_rewards.models.content import ContentTables
from quest_rewards.models.enum import Currency, QuestCategory
from quest_rewards.models.modifier import Modifier
from quest_rewards.models.request import QuestContext
from quest_rewards.models.reward import Receipt, Reward
from quest_rewards.services.base_resolver import resolve_base
from quest_rewards.services.bonus_appliers import apply_background_bonus, apply_school_bonus
from quest_rewards.services.equip_state import EquipStateView
from quest_rewards.services.modifier_pipeline import apply_modifiers
from quest_rewards.utils.config_loader import section
from quest_rewards.utils.content_loader import get_content

logger = logging.getLogger(__name__)


def _normalize(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def _genre_blueprint_reward(prompt: str, content: ContentTables, default: int) -> int:
    # Exact match on the "Genre: ..." prefix first, so "Fiction" can't
    # claim a "Speculative Fiction" prompt
    prompt_genre = _normalize(prompt.split(":")[0])
    for genre_quest in content.genre_quests.values():
        if prompt_genre and _normalize(genre_quest.genre) == prompt_genre:
            return genre_quest.blueprint_reward or default

    best_len, best_reward = 0, 0
    prompt_norm = _normalize(prompt)
    for genre_quest in content.genre_quests.values():
        genre_norm = _normalize(genre_quest.genre)
        if genre_norm and genre_norm in prompt_norm and len(genre_norm) > best_len:
            best_len, best_reward = len(genre_norm), genre_quest.blueprint_reward or default
    return best_reward or default


def calculate_blueprint_reward(quest: QuestContext, content: Optional[ContentTables] = None) -> int:
    """Blueprints a completed quest awards; Dungeon Crawls and Side Quests award none."""
    blueprint_cfg = section("blueprints")
    if quest.category == QuestCategory.ORGANIZE_THE_STACKS:
        if content is None:
            content = get_content()
        return _genre_blueprint_reward(quest.prompt or "", content, int(blueprint_cfg.get("default_genre_reward", 3)))
    if quest.category == QuestCategory.EXTRA_CREDIT:
        return int(blueprint_cfg.get("extra_credit_reward", 10))
    return 0


def calculate_final_rewards(
    quest: QuestContext,
    background: Optional[str] = None,
    wizard_school: Optional[str] = None,
    equip_state: Optional[EquipStateView] = None,
    content: Optional[ContentTables] = None,
) -> Reward:
    """
    Run the full reward calculation for a quest.

    Order is fixed: base, blueprints, modifiers, background, school.

    Args:
        quest: Quest record fields
        background: Keeper background key, e.g. "biblioslinker"
        wizard_school: Wizard school name, e.g. "Enchantment"
        equip_state: Live view of equipped / passive-slot items
        content: Content tables, defaults to the shared tables

    Returns:
        Final Reward with its full receipt history
    """
    if content is None:
        content = get_content()

    reward = resolve_base(
        quest.category,
        quest.prompt,
        {
            "is_encounter": quest.is_encounter,
            "room_number": quest.room_number,
            "encounter_name": quest.encounter_name,
            "is_befriend": quest.is_befriend,
        },
        content=content,
    )

    blueprints = calculate_blueprint_reward(quest, content)
    if blueprints > 0:
        reward = reward.with_base_amount(Currency.BLUEPRINTS, blueprints)

    if quest.buffs:
        modifiers = [Modifier.parse(label) for label in quest.buffs]
        reward = apply_modifiers(reward, modifiers, equip_state=equip_state, content=content)

    if background:
        reward = apply_background_bonus(reward, quest, background)

    if wizard_school:
        reward = apply_school_bonus(reward, quest, wizard_school)

    logger.debug("Calculated reward for %s: %s", quest.category, reward.to_json())
    return reward


def calculate_quest_receipt(
    quest: QuestContext,
    background: Optional[str] = None,
    wizard_school: Optional[str] = None,
    equip_state: Optional[EquipStateView] = None,
) -> Optional[Receipt]:
    """Receipt preview for an active quest, or None if it can't be calculated."""
    try:
        return calculate_final_rewards(quest, background, wizard_school, equip_state).get_receipt()
    except (ValueError, KeyError, FileNotFoundError) as e:
        logger.warning("Failed to calculate receipt preview: %s", e)
        return None


def format_modifiers_for_display(labels: Optional[Iterable[str]]) -> str:
    names = [Modifier.parse(label).name for label in (labels or [])]
    if not names:
        return "-"
    return ", ".join(names)
