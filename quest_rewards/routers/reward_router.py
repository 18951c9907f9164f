from fastapi import APIRouter, HTTPException, status
from quest_rewards.models.content import CompletionRewardDefinition
from quest_rewards.models.request import BaseRewardRequest, EndOfMonthRequest, RewardCalculationRequest
from quest_rewards.models.response import EndOfMonthResponse, RewardResponse
from quest_rewards.models.reward import Reward
from quest_rewards.services.base_resolver import completion_reward_for_roll, resolve_base, room_reward_for_claim
from quest_rewards.services.end_of_month import compute_end_of_month_rewards
from quest_rewards.services.reward_calculator import calculate_final_rewards

router = APIRouter(prefix="/reward")


def _to_response(reward: Reward) -> RewardResponse:
    return RewardResponse(reward=reward.to_json(), receipt=reward.get_receipt())


@router.post("/calculate", response_model=RewardResponse, status_code=status.HTTP_200_OK)
def calculate_reward(req: RewardCalculationRequest) -> RewardResponse:
    """
    Calculate the final reward and receipt for a quest.

    Args:
        req: Quest fields plus background, wizard school and equip state

    Returns:
        RewardResponse with the serialized reward and its receipt

    Raises:
        HTTPException: If the request or the loaded content is invalid
    """
    try:
        reward = calculate_final_rewards(
            req.quest,
            background=req.background,
            wizard_school=req.wizard_school,
            equip_state=req.equip_state,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_response(reward)


@router.post("/base", response_model=RewardResponse, status_code=status.HTTP_200_OK)
def base_reward(req: BaseRewardRequest) -> RewardResponse:
    """Base reward for a quest before any modifier, as shown on a freshly drawn card."""
    quest = req.quest
    try:
        reward = resolve_base(
            quest.category,
            quest.prompt,
            {
                "is_encounter": quest.is_encounter,
                "room_number": quest.room_number,
                "encounter_name": quest.encounter_name,
                "is_befriend": quest.is_befriend,
            },
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_response(reward)


@router.post("/end-of-month", response_model=EndOfMonthResponse, status_code=status.HTTP_200_OK)
def end_of_month(req: EndOfMonthRequest) -> EndOfMonthResponse:
    """Month close-out: atmospheric buffs, completed books and journal entries."""
    try:
        results = compute_end_of_month_rewards(
            books_completed=req.books_completed,
            journal_entries=req.journal_entries,
            background=req.background,
            atmospheric_buffs=req.atmospheric_buffs,
            sanctum=req.sanctum,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    total = {"xp": 0, "inkDrops": 0, "paperScraps": 0, "blueprints": 0}
    for reward in results.values():
        for key in total:
            total[key] += reward.to_json()[key]

    return EndOfMonthResponse(
        atmospheric_buffs=_to_response(results["atmospheric_buffs"]),
        book_completion=_to_response(results["book_completion"]),
        journal_entries=_to_response(results["journal_entries"]),
        total=total,
    )


@router.get("/dungeon/rooms/{room_number}/claim", response_model=RewardResponse)
def room_claim(room_number: str) -> RewardResponse:
    """Reward for claiming a completed dungeon room."""
    reward = room_reward_for_claim(room_number)
    if reward is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Room {room_number} has no claimable reward")
    return _to_response(reward)


@router.get("/dungeon/completion/{roll}", response_model=CompletionRewardDefinition)
def dungeon_completion(roll: int) -> CompletionRewardDefinition:
    """Dungeon completion reward for a d20 roll."""
    entry = completion_reward_for_roll(roll)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No completion reward for roll {roll}")
    return entry
