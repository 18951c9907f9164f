"""
End-of-month calculators.

Each one turns an aggregate count into a Reward that starts from zero.
Every amount it earns is an applied step, so the receipt reads
base + rows = final like any other reward.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from quest_rewards.models.content import ContentTables
from quest_rewards.models.enum import Currency, ReceiptEntryType, StepStage
from quest_rewards.models.request import AtmosphericBuffUsage
from quest_rewards.models.reward import AppliedStep, Reward
from quest_rewards.utils.config_loader import section
from quest_rewards.utils.content_loader import get_content

logger = logging.getLogger(__name__)

SCRIBE = "scribe"


def _clamp_count(count: Any) -> int:
    try:
        return max(0, int(count))
    except (TypeError, ValueError):
        return 0


def _breakdown(source: str, currency: Currency, value: int, description: str) -> AppliedStep:
    return AppliedStep(
        stage=StepStage.END_OF_MONTH,
        entry_type=ReceiptEntryType.END_OF_MONTH,
        source=source,
        currency=currency,
        delta=value,
        description=description,
    )


def compute_book_completion_reward(count: int) -> Reward:
    books = _clamp_count(count)
    per_book = int(section("end_of_month").get("book_completion_xp", 15))
    xp = books * per_book

    reward = Reward()
    if books:
        reward.apply_step(_breakdown(
            "End of Month - Book Completion",
            Currency.XP,
            xp,
            f"{books} books × {per_book} XP",
        ))
    return reward


def compute_journal_entry_reward(count: int, background: Optional[str] = None) -> Reward:
    entries = _clamp_count(count)
    journal_cfg = section("end_of_month").get("journal_entry", {})
    per_entry = int(journal_cfg.get("base_paper_scraps", 5))
    base_amount = entries * per_entry

    reward = Reward()
    if entries:
        reward.apply_step(_breakdown(
            "End of Month - Journal Entries",
            Currency.PAPER_SCRAPS,
            base_amount,
            f"{entries} journal entries × {per_entry} Paper Scraps",
        ))

    if background == SCRIBE and entries:
        per_entry_bonus = int(journal_cfg.get("scribe_bonus", 3))
        label = journal_cfg.get("scribe_label", "Scribe's Acolyte")
        reward.apply_step(AppliedStep(
            stage=StepStage.BACKGROUND,
            entry_type=ReceiptEntryType.BACKGROUND,
            source=label,
            currency=Currency.PAPER_SCRAPS,
            delta=entries * per_entry_bonus,
            description=f"{entries} journal entries × {per_entry_bonus:+d} Paper Scraps",
        ))
        reward.modified_by.append(label)
    return reward


def _usage(value: Union[AtmosphericBuffUsage, Mapping[str, Any]]) -> AtmosphericBuffUsage:
    if isinstance(value, AtmosphericBuffUsage):
        return value
    return AtmosphericBuffUsage.model_validate(value)


def compute_atmospheric_buff_reward(
    buff_usage: Mapping[str, Union[AtmosphericBuffUsage, Mapping[str, Any]]],
    associated_buffs: Iterable[str] = (),
) -> Reward:
    """
    Ink Drops for the month's atmospheric buffs.

    Each active buff earns its days used times the per-day value; buffs
    associated with the keeper's sanctum earn the sanctum rate instead.
    """
    atmospheric_cfg = section("atmospheric")
    base_value = int(atmospheric_cfg.get("base_value", 1))
    sanctum_value = int(atmospheric_cfg.get("sanctum_bonus", 2))
    associated = set(associated_buffs or ())

    reward = Reward()
    for name, raw in (buff_usage or {}).items():
        usage = _usage(raw)
        days = _clamp_count(usage.days_used)
        if not usage.is_active or days == 0:
            continue

        is_associated = name in associated
        per_day = sanctum_value if is_associated else base_value
        amount = days * per_day
        description = f"{days} days × {per_day} Ink Drops"
        if is_associated:
            description += " (Sanctum bonus)"

        reward.apply_step(_breakdown(name, Currency.INK_DROPS, amount, description))
        reward.modified_by.append(name)

    return reward


def compute_end_of_month_rewards(
    books_completed: int = 0,
    journal_entries: int = 0,
    background: Optional[str] = None,
    atmospheric_buffs: Optional[Mapping[str, Union[AtmosphericBuffUsage, Mapping[str, Any]]]] = None,
    sanctum: Optional[str] = None,
    content: Optional[ContentTables] = None,
) -> Dict[str, Reward]:
    """Run all three calculators for a month close-out, keyed by calculator."""
    if content is None:
        content = get_content()

    associated = []
    if sanctum:
        sanctum_def = content.sanctums.get(sanctum)
        if sanctum_def is None:
            logger.debug("Unknown sanctum %r, no associated buffs", sanctum)
        else:
            associated = sanctum_def.associated_buffs

    return {
        "atmospheric_buffs": compute_atmospheric_buff_reward(atmospheric_buffs or {}, associated),
        "book_completion": compute_book_completion_reward(books_completed),
        "journal_entries": compute_journal_entry_reward(journal_entries, background),
    }
