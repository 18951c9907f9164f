from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from quest_rewards.models.enum import QuestCategory


class QuestContext(BaseModel):
    """The parts of a quest record the engine reads. Not validated beyond types."""

    model_config = ConfigDict(populate_by_name=True)

    category: Union[QuestCategory, str] = Field(..., alias="type", description="Quest type, e.g. '♠ Dungeon Crawl'")
    prompt: str = ""
    is_encounter: bool = Field(default=False, alias="isEncounter")
    is_befriend: bool = Field(default=True, alias="isBefriend", description="Encounter outcome; records without the flag count as befriended")
    room_number: Optional[str] = Field(default=None, alias="roomNumber")
    encounter_name: Optional[str] = Field(default=None, alias="encounterName")
    buffs: List[str] = Field(default_factory=list, description="Modifier labels applied to the quest")

    @field_validator("room_number", mode="before")
    @classmethod
    def stringify_room_number(cls, v):
        if v is None or v == "":
            return None
        return str(v)


class EquipStateSnapshot(BaseModel):
    """Point-in-time copy of which items are equipped or slotted passively."""

    model_config = ConfigDict(populate_by_name=True)

    equipped_items: List[str] = Field(default_factory=list, alias="equippedItems")
    passive_item_slots: List[str] = Field(default_factory=list, alias="passiveItemSlots")
    passive_familiar_slots: List[str] = Field(default_factory=list, alias="passiveFamiliarSlots")

    def is_equipped(self, name: str) -> bool:
        return name in self.equipped_items

    def is_passive(self, name: str) -> bool:
        return name in self.passive_item_slots or name in self.passive_familiar_slots


class AtmosphericBuffUsage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days_used: int = Field(default=0, alias="daysUsed")
    is_active: bool = Field(default=False, alias="isActive")


class RewardCalculationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quest: QuestContext
    background: str = ""
    wizard_school: str = Field(default="", alias="wizardSchool")
    equip_state: Optional[EquipStateSnapshot] = Field(default=None, alias="equipState")


class BaseRewardRequest(BaseModel):
    quest: QuestContext


class EndOfMonthRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    books_completed: int = Field(default=0, alias="booksCompleted")
    journal_entries: int = Field(default=0, alias="journalEntries")
    background: str = ""
    sanctum: str = ""
    atmospheric_buffs: Dict[str, AtmosphericBuffUsage] = Field(default_factory=dict, alias="atmosphericBuffs")
