"""Static game content the engine looks up by key."""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from quest_rewards.models.enum import EncounterType
from quest_rewards.models.modifier import ModifierEffect


class RewardTable(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    xp: int = 0
    ink_drops: int = Field(default=0, alias="inkDrops")
    paper_scraps: int = Field(default=0, alias="paperScraps")
    items: List[str] = Field(default_factory=list)


class ItemDefinition(BaseModel):
    type: str
    bonus: str = ""
    reward_modifier: ModifierEffect = Field(default_factory=ModifierEffect)
    passive_reward_modifier: Optional[ModifierEffect] = None


class BuffDefinition(BaseModel):
    description: str = ""
    duration: str = ""
    source: str = ""
    reward_modifier: ModifierEffect = Field(default_factory=ModifierEffect)


class EncounterDefinition(BaseModel):
    name: str
    type: EncounterType
    befriend: Optional[str] = None
    defeat: Optional[str] = None
    rewards: Optional[RewardTable] = None


class RoomDefinition(BaseModel):
    name: str
    challenge: str = ""
    room_rewards: Optional[RewardTable] = None
    encounters: List[EncounterDefinition] = Field(default_factory=list)

    def find_encounter(self, name: str) -> Optional[EncounterDefinition]:
        for encounter in self.encounters:
            if encounter.name == name:
                return encounter
        return None


class SideQuestDefinition(BaseModel):
    name: str
    prompt: str
    rewards: RewardTable = Field(default_factory=RewardTable)


class GenreQuestDefinition(BaseModel):
    genre: str
    blueprint_reward: Optional[int] = None


class CompletionRewardDefinition(BaseModel):
    """One row of the d20 dungeon completion table."""

    name: str
    reward: str = ""
    item: Optional[str] = None


class SanctumDefinition(BaseModel):
    associated_buffs: List[str] = Field(default_factory=list)


class ContentTables(BaseModel):
    items: Dict[str, ItemDefinition] = Field(default_factory=dict)
    temporary_buffs: Dict[str, BuffDefinition] = Field(default_factory=dict)
    dungeon_rooms: Dict[str, RoomDefinition] = Field(default_factory=dict)
    side_quests: Dict[str, SideQuestDefinition] = Field(default_factory=dict)
    genre_quests: Dict[str, GenreQuestDefinition] = Field(default_factory=dict)
    sanctums: Dict[str, SanctumDefinition] = Field(default_factory=dict)
    dungeon_completion_rewards: Dict[str, CompletionRewardDefinition] = Field(default_factory=dict)
