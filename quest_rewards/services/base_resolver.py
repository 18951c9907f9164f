import logging
import math
from typing import Any, Dict, Optional, Union
from quest_rewards.models.content import CompletionRewardDefinition, ContentTables, RewardTable
from quest_rewards.models.enum import EncounterType, QuestCategory
from quest_rewards.models.reward import Reward
from quest_rewards.utils.config_loader import section
from quest_rewards.utils.content_loader import get_content

logger = logging.getLogger(__name__)


def _reward_from_config(key: str) -> Reward:
    return Reward(**section("rewards").get(key, {}))


def _default_reward() -> Reward:
    """The 'something happened' token reward for anything unresolvable."""
    return _reward_from_config("default_fallback")


def _reward_from_table(table: RewardTable) -> Reward:
    return Reward(
        xp=table.xp,
        ink_drops=table.ink_drops,
        paper_scraps=table.paper_scraps,
        items=list(table.items),
    )


def _side_quest_reward(descriptor: str, content: ContentTables) -> Reward:
    for side_quest in content.side_quests.values():
        if side_quest.prompt in descriptor or side_quest.name in descriptor:
            return _reward_from_table(side_quest.rewards)
    logger.debug("No side quest matches %r, using fallback", descriptor)
    return _default_reward()


def _encounter_type_reward(encounter_type: EncounterType) -> Optional[Reward]:
    amounts = section("rewards").get("encounter", {}).get(encounter_type.value)
    if amounts is None:
        return None
    return Reward(**amounts)


def _dungeon_reward(
    content: ContentTables,
    room_number: Optional[str],
    is_encounter: bool,
    encounter_name: Optional[str],
    is_befriend: bool,
) -> Reward:
    if not room_number:
        return _default_reward()

    room = content.dungeon_rooms.get(str(room_number))
    if room is None:
        logger.debug("Unknown dungeon room %s, using fallback", room_number)
        return _default_reward()

    if is_encounter and encounter_name and room.encounters:
        encounter = room.find_encounter(encounter_name)
        if encounter is not None:
            if encounter.rewards is not None:
                reward = _reward_from_table(encounter.rewards)
            else:
                reward = _encounter_type_reward(encounter.type)
            if reward is not None:
                # A befriended familiar joins the keeper
                if (
                    is_befriend
                    and encounter.type == EncounterType.FAMILIAR
                    and encounter.name not in reward.items
                ):
                    reward.items.append(encounter.name)
                return reward
        logger.debug("Unknown encounter %r in room %s", encounter_name, room_number)

    if room.room_rewards is not None:
        return _reward_from_table(room.room_rewards)

    return _default_reward()


def resolve_base(
    category: Union[QuestCategory, str],
    descriptor: str = "",
    options: Optional[Dict[str, Any]] = None,
    content: Optional[ContentTables] = None,
) -> Reward:
    """
    Resolve the base reward for a completed activity.

    Args:
        category: Quest type
        descriptor: Quest prompt text; side quests are matched against it
        options: Situational flags - is_encounter, room_number,
            encounter_name, is_befriend
        content: Content tables to search, defaults to the shared tables

    Returns:
        A fresh Reward whose base snapshot equals its values
    """
    options = options or {}
    if content is None:
        content = get_content()

    if category == QuestCategory.EXTRA_CREDIT:
        return _reward_from_config("extra_credit")

    if category == QuestCategory.ORGANIZE_THE_STACKS:
        return _reward_from_config("organize_the_stacks")

    if category == QuestCategory.SIDE_QUEST:
        return _side_quest_reward(descriptor or "", content)

    if category == QuestCategory.DUNGEON_CRAWL:
        return _dungeon_reward(
            content,
            room_number=options.get("room_number"),
            is_encounter=bool(options.get("is_encounter", False)),
            encounter_name=options.get("encounter_name"),
            is_befriend=bool(options.get("is_befriend", True)),
        )

    return _default_reward()


def room_reward_for_claim(room_number: Union[str, int], content: Optional[ContentTables] = None) -> Optional[Reward]:
    """Reward paid when a completed room is claimed, or None if the room pays nothing."""
    if content is None:
        content = get_content()

    room = content.dungeon_rooms.get(str(room_number))
    if room is None or room.room_rewards is None:
        return None
    return _reward_from_table(room.room_rewards)


def completion_reward_for_roll(
    roll: Union[int, float], content: Optional[ContentTables] = None
) -> Optional[CompletionRewardDefinition]:
    """Dungeon completion table entry for a d20 roll, clamped to 1..20."""
    if content is None:
        content = get_content()

    key = str(min(20, max(1, math.floor(roll))))
    entry = content.dungeon_completion_rewards.get(key)
    if entry is None:
        logger.debug("No dungeon completion reward for roll %s", key)
    return entry
