"""Read-only view of the caller's equipment state."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class EquipStateView(Protocol):
    def is_equipped(self, name: str) -> bool:
        ...

    def is_passive(self, name: str) -> bool:
        ...


def uses_passive_effect(name: str, equip_state: Optional[EquipStateView]) -> bool:
    """
    True when the passive effect table applies to `name`.

    Equipped wins over passive; unknown state (None) selects the active table.
    The view is queried on every call, nothing is cached.
    """
    if equip_state is None:
        return False
    if equip_state.is_equipped(name):
        return False
    return equip_state.is_passive(name)
