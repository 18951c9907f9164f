from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict
from quest_rewards.models.reward import Receipt


class RewardResponse(BaseModel):
    reward: Dict[str, Any]
    receipt: Receipt


class EndOfMonthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    atmospheric_buffs: RewardResponse = Field(alias="atmosphericBuffs")
    book_completion: RewardResponse = Field(alias="bookCompletion")
    journal_entries: RewardResponse = Field(alias="journalEntries")
    total: Dict[str, Any]
