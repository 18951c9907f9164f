import re
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from quest_rewards.models.enum import Currency, ModifierKind, ADDITIVE_CURRENCIES

_LABEL_PREFIX = re.compile(r"^\[(Buff|Item|Background)\] ")

_PREFIX_KINDS = {
    "Item": ModifierKind.ITEM,
    "Background": ModifierKind.BACKGROUND,
    "Buff": ModifierKind.TEMPORARY_BUFF,
}

_KIND_PREFIXES = {
    ModifierKind.ITEM: "[Item] ",
    ModifierKind.BACKGROUND: "[Background] ",
    ModifierKind.TEMPORARY_BUFF: "",
}


class Modifier(BaseModel):
    """A named effect selected for a quest: an item, a background trait or a temporary buff."""

    model_config = ConfigDict(frozen=True)

    kind: ModifierKind
    name: str

    @classmethod
    def parse(cls, label: str) -> "Modifier":
        """Build a Modifier from a quest-log label such as ``[Item] Librarian's Compass``."""
        match = _LABEL_PREFIX.match(label)
        if not match:
            return cls(kind=ModifierKind.TEMPORARY_BUFF, name=label)
        return cls(kind=_PREFIX_KINDS[match.group(1)], name=label[match.end():])

    @classmethod
    def item(cls, name: str) -> "Modifier":
        return cls(kind=ModifierKind.ITEM, name=name)

    @classmethod
    def background(cls, name: str) -> "Modifier":
        return cls(kind=ModifierKind.BACKGROUND, name=name)

    @classmethod
    def buff(cls, name: str) -> "Modifier":
        return cls(kind=ModifierKind.TEMPORARY_BUFF, name=name)

    @property
    def label(self) -> str:
        return f"{_KIND_PREFIXES[self.kind]}{self.name}"


class ModifierEffect(BaseModel):
    """
    Effect definition of a modifier.

    At most one additive triple and at most one multiplicative factor,
    which targets a single currency.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    xp: int = 0
    ink_drops: int = Field(default=0, alias="inkDrops")
    paper_scraps: int = Field(default=0, alias="paperScraps")
    multiplier: Optional[float] = None
    multiplier_currency: Currency = Field(default=Currency.INK_DROPS, alias="multiplierCurrency")

    def additive_deltas(self) -> Dict[Currency, int]:
        """Nonzero additive deltas in currency order."""
        deltas = {}
        for currency in ADDITIVE_CURRENCIES:
            value = getattr(self, currency.attr)
            if value:
                deltas[currency] = value
        return deltas

    @property
    def has_multiplier(self) -> bool:
        return self.multiplier is not None and self.multiplier != 1

    @property
    def is_empty(self) -> bool:
        return not self.additive_deltas() and not self.has_multiplier
