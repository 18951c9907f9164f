"""Applies item, buff and background modifiers to a base reward."""

import math
from typing import List, Optional, Sequence, Tuple, Union
from quest_rewards.models.content import ContentTables
from quest_rewards.models.enum import Currency, ModifierKind, ReceiptEntryType, StepStage
from quest_rewards.models.modifier import Modifier, ModifierEffect
from quest_rewards.models.reward import AppliedStep, Reward
from quest_rewards.services.equip_state import EquipStateView
from quest_rewards.services.modifier_resolver import resolve_modifier
from quest_rewards.utils.content_loader import get_content


def _format_factor(factor: float) -> str:
    return str(int(factor)) if float(factor).is_integer() else str(factor)


def coerce_modifier(value: Union[Modifier, str]) -> Modifier:
    if isinstance(value, Modifier):
        return value
    return Modifier.parse(value)


def apply_modifiers(
    base: Reward,
    modifiers: Sequence[Union[Modifier, str]],
    equip_state: Optional[EquipStateView] = None,
    content: Optional[ContentTables] = None,
) -> Reward:
    """
    Apply modifiers to a reward in two passes and return a new Reward.

    Pass 1 adds every additive delta in input order and queues multipliers.
    Pass 2 applies the queued multipliers in the same order, flooring after
    each one. The receipt row of a multiplier carries the actual change it
    produced, not the factor.

    Unknown modifiers are no-ops. `base` is never mutated.
    """
    result = base.clone()
    if not modifiers:
        return result
    if content is None:
        content = get_content()

    queued: List[Tuple[Modifier, ModifierEffect]] = []

    for modifier in (coerce_modifier(m) for m in modifiers):
        effect = resolve_modifier(modifier, equip_state, content)
        if effect is None or effect.is_empty:
            continue

        entry_type = (
            ReceiptEntryType.BACKGROUND
            if modifier.kind == ModifierKind.BACKGROUND
            else ReceiptEntryType.ITEM
        )
        for currency, delta in effect.additive_deltas().items():
            result.apply_step(AppliedStep(
                stage=StepStage.ADDITIVE,
                entry_type=entry_type,
                source=modifier.name,
                currency=currency,
                delta=delta,
                description=f"{delta:+d} {currency.display_name}",
            ))

        if effect.has_multiplier:
            queued.append((modifier, effect))

        result.modified_by.append(modifier.name)

    for modifier, effect in queued:
        currency: Currency = effect.multiplier_currency
        before = result.amount(currency)
        after = math.floor(before * effect.multiplier)
        result.apply_step(AppliedStep(
            stage=StepStage.MULTIPLICATIVE,
            entry_type=ReceiptEntryType.MULTIPLIER,
            source=modifier.name,
            currency=currency,
            delta=after - before,
            description=f"x{_format_factor(effect.multiplier)} {currency.display_name}",
        ))

    return result
