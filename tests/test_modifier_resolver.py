"""Tests for modifier labels and effect lookup."""

from quest_rewards.models.enum import ModifierKind
from quest_rewards.models.modifier import Modifier
from quest_rewards.services.equip_state import EquipStateView
from quest_rewards.services.modifier_resolver import resolve_modifier


class MutableEquipState:
    """Equip state whose contents can change between lookups."""

    def __init__(self):
        self.equipped = set()
        self.passive = set()

    def is_equipped(self, name):
        return name in self.equipped

    def is_passive(self, name):
        return name in self.passive


def test_parse_item_label():
    """Test that an [Item] label parses to an item modifier."""
    modifier = Modifier.parse("[Item] Librarian's Compass")

    assert modifier.kind == ModifierKind.ITEM
    assert modifier.name == "Librarian's Compass"


def test_parse_background_label():
    """Test that a [Background] label parses to a background modifier."""
    modifier = Modifier.parse("[Background] Prophet Bonus")

    assert modifier.kind == ModifierKind.BACKGROUND
    assert modifier.name == "Prophet Bonus"


def test_parse_buff_and_bare_labels():
    """Test that [Buff] and unprefixed labels parse to temporary buffs."""
    assert Modifier.parse("[Buff] Long Read Focus") == Modifier.buff("Long Read Focus")
    assert Modifier.parse("Long Read Focus") == Modifier.buff("Long Read Focus")


def test_label_round_trips():
    """Test that a modifier's label parses back to the same modifier."""
    for modifier in (Modifier.item("Pocket Dragon"), Modifier.background("Archivist Bonus"), Modifier.buff("Inspired")):
        assert Modifier.parse(modifier.label) == modifier


def test_snapshot_satisfies_equip_state_view(make_equip_state):
    """Test that the request snapshot can be used as an equip-state view."""
    assert isinstance(make_equip_state(), EquipStateView)
    assert isinstance(MutableEquipState(), EquipStateView)


def test_background_modifier(content):
    """Test that a listed background resolves to the flat Ink Drops bonus."""
    effect = resolve_modifier(Modifier.background("Archivist Bonus"), content=content)

    assert effect.ink_drops == 10
    assert effect.multiplier is None


def test_unknown_background(content):
    """Test that an unlisted background has no effect."""
    assert resolve_modifier(Modifier.background("Tinker Bonus"), content=content) is None


def test_item_without_equip_state_uses_active(content):
    """Test that an unknown equip state selects the active effect."""
    effect = resolve_modifier(Modifier.item("Librarian's Compass"), content=content)

    assert effect.ink_drops == 20


def test_equipped_item_uses_active(content, make_equip_state):
    """Test that an equipped item uses its active effect."""
    state = make_equip_state(equipped=["Librarian's Compass"])

    effect = resolve_modifier(Modifier.item("Librarian's Compass"), state, content)

    assert effect.ink_drops == 20


def test_passive_item_uses_passive(content, make_equip_state):
    """Test that an item in a passive slot uses its passive effect."""
    state = make_equip_state(passive=["Librarian's Compass"])

    effect = resolve_modifier(Modifier.item("Librarian's Compass"), state, content)

    assert effect.ink_drops == 10


def test_passive_familiar_uses_passive(content, make_equip_state):
    """Test that a familiar in a passive familiar slot uses its passive effect."""
    state = make_equip_state(familiars=["Pocket Dragon"])

    effect = resolve_modifier(Modifier.item("Pocket Dragon"), state, content)

    assert effect.ink_drops == 10


def test_equipped_wins_over_passive(content, make_equip_state):
    """Test that an item both equipped and slotted passively uses its active effect."""
    state = make_equip_state(equipped=["Librarian's Compass"], passive=["Librarian's Compass"])

    effect = resolve_modifier(Modifier.item("Librarian's Compass"), state, content)

    assert effect.ink_drops == 20


def test_unslotted_item_uses_active(content, make_equip_state):
    """Test that an item neither equipped nor passive uses its active effect."""
    effect = resolve_modifier(Modifier.item("Librarian's Compass"), make_equip_state(), content)

    assert effect.ink_drops == 20


def test_passive_without_passive_table(content, make_equip_state):
    """Test that a passive item with no passive effect has no effect."""
    state = make_equip_state(familiars=["Garden Gnome"])

    assert resolve_modifier(Modifier.item("Garden Gnome"), state, content) is None


def test_equip_state_read_on_every_lookup(content):
    """Test that equip-state changes are picked up by the next lookup."""
    state = MutableEquipState()
    compass = Modifier.item("Librarian's Compass")

    state.passive.add("Librarian's Compass")
    assert resolve_modifier(compass, state, content).ink_drops == 10

    state.equipped.add("Librarian's Compass")
    assert resolve_modifier(compass, state, content).ink_drops == 20


def test_unknown_item(content):
    """Test that an item missing from the content tables has no effect."""
    assert resolve_modifier(Modifier.item("Removed Item"), content=content) is None


def test_temporary_buff(content):
    """Test that a temporary buff resolves from the buff table."""
    effect = resolve_modifier(Modifier.buff("Bloodline Affinity"), content=content)

    assert effect.ink_drops == 15


def test_item_name_as_buff_is_unknown(content):
    """Test that lookup is scoped to the modifier's kind."""
    assert resolve_modifier(Modifier.buff("Librarian's Compass"), content=content) is None


def test_item_label_falls_back_to_buff_table(content):
    """Test that an item-prefixed name missing from the item table resolves as a temporary buff."""
    effect = resolve_modifier(Modifier.item("Bloodline Affinity"), content=content)

    assert effect.ink_drops == 15
