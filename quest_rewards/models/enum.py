from enum import Enum


class QuestCategory(str, Enum):
    DUNGEON_CRAWL = "♠ Dungeon Crawl"
    SIDE_QUEST = "♣ Side Quest"
    ORGANIZE_THE_STACKS = "♥ Organize the Stacks"
    EXTRA_CREDIT = "⭐ Extra Credit"


class Currency(str, Enum):
    XP = "xp"
    INK_DROPS = "inkDrops"
    PAPER_SCRAPS = "paperScraps"
    BLUEPRINTS = "blueprints"

    @property
    def attr(self) -> str:
        """Attribute name of this currency on a Reward."""
        return _CURRENCY_ATTRS[self]

    @property
    def display_name(self) -> str:
        return _CURRENCY_DISPLAY[self]


_CURRENCY_ATTRS = {
    Currency.XP: "xp",
    Currency.INK_DROPS: "ink_drops",
    Currency.PAPER_SCRAPS: "paper_scraps",
    Currency.BLUEPRINTS: "blueprints",
}

_CURRENCY_DISPLAY = {
    Currency.XP: "XP",
    Currency.INK_DROPS: "Ink Drops",
    Currency.PAPER_SCRAPS: "Paper Scraps",
    Currency.BLUEPRINTS: "Blueprints",
}

# Currencies a modifier may add to directly
ADDITIVE_CURRENCIES = (Currency.XP, Currency.INK_DROPS, Currency.PAPER_SCRAPS)


class ModifierKind(str, Enum):
    ITEM = "item"
    BACKGROUND = "background"
    TEMPORARY_BUFF = "temporary-buff"


class EncounterType(str, Enum):
    MONSTER = "Monster"
    FRIENDLY_CREATURE = "Friendly Creature"
    FAMILIAR = "Familiar"


class ReceiptEntryType(str, Enum):
    ITEM = "item"
    MULTIPLIER = "multiplier"
    BACKGROUND = "background"
    SCHOOL = "school"
    END_OF_MONTH = "end-of-month"


class StepStage(str, Enum):
    ADDITIVE = "additive"
    MULTIPLICATIVE = "multiplicative"
    BACKGROUND = "background"
    SCHOOL = "school"
    END_OF_MONTH = "end-of-month"
