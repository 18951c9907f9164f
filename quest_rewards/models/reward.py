"""Reward value object and its receipt projection."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from quest_rewards.models.enum import Currency, ReceiptEntryType, StepStage


class CurrencySnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    xp: int = 0
    ink_drops: int = Field(default=0, alias="inkDrops")
    paper_scraps: int = Field(default=0, alias="paperScraps")
    blueprints: int = 0

    def get(self, currency: Currency) -> int:
        return getattr(self, currency.attr)


class AppliedStep(BaseModel):
    """One recorded adjustment to a single currency."""

    model_config = ConfigDict(frozen=True)

    stage: StepStage
    entry_type: ReceiptEntryType
    source: str
    currency: Currency
    delta: int
    description: str = ""


class ReceiptModifier(BaseModel):
    source: str
    type: ReceiptEntryType
    value: int
    currency: Optional[Currency] = None
    description: str = ""


class Receipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base: CurrencySnapshot
    modifiers: List[ReceiptModifier] = Field(default_factory=list)
    final: CurrencySnapshot
    items: List[str] = Field(default_factory=list)
    modified_by: List[str] = Field(default_factory=list, alias="modifiedBy")


class Reward(BaseModel):
    """
    Currency and item payout for a quest, with its derivation history.

    Pipeline stages never mutate a Reward they were handed: they clone it
    and record every change as an AppliedStep on the clone, so earlier
    snapshots stay valid and get_receipt() is a plain read.
    """

    model_config = ConfigDict(populate_by_name=True)

    xp: int = 0
    ink_drops: int = Field(default=0, alias="inkDrops")
    paper_scraps: int = Field(default=0, alias="paperScraps")
    blueprints: int = 0
    items: List[str] = Field(default_factory=list)
    modified_by: List[str] = Field(default_factory=list, alias="modifiedBy")
    base: Optional[CurrencySnapshot] = None
    steps: List[AppliedStep] = Field(default_factory=list)

    @field_validator("items", "modified_by", mode="before")
    @classmethod
    def coerce_list(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return list(v)

    @model_validator(mode="after")
    def snapshot_base(self) -> "Reward":
        if self.base is None:
            self.base = self.snapshot()
        return self

    def amount(self, currency: Currency) -> int:
        return getattr(self, currency.attr)

    def snapshot(self) -> CurrencySnapshot:
        return CurrencySnapshot(
            xp=self.xp,
            ink_drops=self.ink_drops,
            paper_scraps=self.paper_scraps,
            blueprints=self.blueprints,
        )

    def clone(self) -> "Reward":
        return self.model_copy(deep=True)

    def apply_step(self, step: AppliedStep) -> None:
        """Add the step's delta to its currency and append it to the history."""
        setattr(self, step.currency.attr, self.amount(step.currency) + step.delta)
        self.steps.append(step)

    def with_base_amount(self, currency: Currency, value: int) -> "Reward":
        """
        Return a clone whose live and base amount of `currency` is `value`.

        Only meaningful before any modifier stage has run, since the base
        snapshot is rewritten.
        """
        cloned = self.clone()
        setattr(cloned, currency.attr, value)
        setattr(cloned.base, currency.attr, value)
        return cloned

    def to_json(self) -> Dict[str, Any]:
        return {
            "xp": self.xp,
            "inkDrops": self.ink_drops,
            "paperScraps": self.paper_scraps,
            "blueprints": self.blueprints,
            "items": list(self.items),
            "modifiedBy": list(self.modified_by),
        }

    def get_receipt(self) -> Receipt:
        return Receipt(
            base=self.base.model_copy(),
            modifiers=[
                ReceiptModifier(
                    source=step.source,
                    type=step.entry_type,
                    value=step.delta,
                    currency=step.currency,
                    description=step.description,
                )
                for step in self.steps
            ],
            final=self.snapshot(),
            items=list(self.items),
            modified_by=list(self.modified_by),
        )
