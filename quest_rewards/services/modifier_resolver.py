import logging
from typing import Optional
from quest_rewards.models.content import ContentTables
from quest_rewards.models.enum import ModifierKind
from quest_rewards.models.modifier import Modifier, ModifierEffect
from quest_rewards.services.equip_state import EquipStateView, uses_passive_effect
from quest_rewards.utils.config_loader import section
from quest_rewards.utils.content_loader import get_content

logger = logging.getLogger(__name__)


def _background_effect(name: str) -> Optional[ModifierEffect]:
    bonus_cfg = section("backgrounds").get("modifier_bonus", {})
    if name in bonus_cfg.get("names", []):
        # Every listed background shares the same flat bump
        return ModifierEffect(ink_drops=int(bonus_cfg.get("ink_drops", 10)))
    return None


def _item_effect(
    name: str, content: ContentTables, equip_state: Optional[EquipStateView]
) -> Optional[ModifierEffect]:
    item = content.items.get(name)
    if item is None:
        # Buffs granted by rewards are often logged with the item prefix
        buff = content.temporary_buffs.get(name)
        return buff.reward_modifier if buff else None
    if uses_passive_effect(name, equip_state):
        return item.passive_reward_modifier
    return item.reward_modifier


def resolve_modifier(
    modifier: Modifier,
    equip_state: Optional[EquipStateView] = None,
    content: Optional[ContentTables] = None,
) -> Optional[ModifierEffect]:
    """
    Look up the effect definition for a modifier.

    Args:
        modifier: Item, background or temporary buff to resolve
        equip_state: Live equip-state view; None means the state is unknown
            and item modifiers use their active table
        content: Content tables to search, defaults to the shared tables

    Returns:
        The effect, or None when the name is unknown (stale or removed content)
    """
    if content is None:
        content = get_content()

    if modifier.kind == ModifierKind.BACKGROUND:
        effect = _background_effect(modifier.name)
    elif modifier.kind == ModifierKind.ITEM:
        effect = _item_effect(modifier.name, content, equip_state)
    else:
        buff = content.temporary_buffs.get(modifier.name)
        effect = buff.reward_modifier if buff else None

    if effect is None:
        logger.debug("No reward effect for %s, skipping", modifier.label)
    return effect
