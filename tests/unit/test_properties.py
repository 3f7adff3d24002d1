"""Property-based tests for the army and battle invariants."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from condottiere.domain import catalog
from condottiere.domain.army import Army
from condottiere.domain.enums import BattleResult, UnitType

unit_types = st.sampled_from(list(UnitType))
upgradable_types = st.sampled_from([UnitType.PIKEMAN, UnitType.ARCHER])


def _army(name: str, types: list[UnitType], gold: int | None = None) -> Army:
    return Army(name, "Custom", units=[catalog.create_unit(t) for t in types], gold=gold)


def _army_with_strengths(name: str, strengths: list[int]) -> Army:
    units = []
    for strength in strengths:
        unit = catalog.create_unit(UnitType.PIKEMAN)
        unit.set_strength(strength)
        units.append(unit)
    return Army(name, "Custom", units=units)


@given(
    types=st.lists(unit_types, min_size=1, max_size=6),
    gold=st.integers(min_value=0, max_value=250),
    actions=st.lists(
        st.tuples(st.sampled_from(["train", "transform"]), st.integers(0, 20)), max_size=25
    ),
)
def test_gold_never_goes_negative(types, gold, actions):
    army = _army("Treasury", types, gold=gold)

    for action, index in actions:
        roster = army.units
        unit = roster[index % len(roster)]
        gold_before = army.gold
        if action == "train":
            succeeded = army.train_unit(unit)
        else:
            succeeded = army.transform_unit(unit)
        assert army.gold >= 0
        if not succeeded:
            assert army.gold == gold_before
        assert len(army.units) == len(types)


@given(unit_type=upgradable_types, rounds=st.integers(min_value=0, max_value=30))
def test_transform_preserves_accumulated_training(unit_type, rounds):
    army = _army("Drillers", [unit_type], gold=10_000)
    unit = army.units[0]
    for _ in range(rounds):
        army.train_unit(unit)
    base = catalog.base_strength(unit_type)
    accumulated = unit.strength - base
    target, _ = catalog.upgrade_terms(unit_type)

    assert army.transform_unit(unit) is True

    (upgraded,) = army.units
    assert upgraded.type is target
    assert upgraded.strength == catalog.base_strength(target) + accumulated


@given(
    size=st.integers(min_value=0, max_value=8),
    count=st.integers(min_value=0, max_value=12),
)
def test_lose_units_never_errors(size, count):
    army = _army("Garrison", [UnitType.ARCHER] * size)

    lost = army.lose_units(count)

    assert len(lost) == min(size, count)
    assert len(army.units) == max(0, size - count)


@given(
    mine=st.lists(st.integers(min_value=0, max_value=60), max_size=8),
    theirs=st.lists(st.integers(min_value=0, max_value=60), max_size=8),
)
def test_battle_is_strength_monotonic(mine, theirs):
    attacker = _army_with_strengths("A", mine)
    defender = _army_with_strengths("B", theirs)
    strongest_mine = sorted(mine, reverse=True)
    strongest_theirs = sorted(theirs, reverse=True)

    result = attacker.attack(defender)

    if sum(mine) > sum(theirs):
        assert result is BattleResult.WIN
        assert attacker.gold == 1100
        assert sorted((u.strength for u in defender.units), reverse=True) == strongest_theirs[2:]
        assert len(attacker.units) == len(mine)
    elif sum(theirs) > sum(mine):
        assert result is BattleResult.LOSS
        assert defender.gold == 1100
        assert sorted((u.strength for u in attacker.units), reverse=True) == strongest_mine[2:]
        assert len(defender.units) == len(theirs)
    else:
        assert result is BattleResult.TIE
        assert attacker.gold == defender.gold == 1000
        assert sorted((u.strength for u in attacker.units), reverse=True) == strongest_mine[1:]
        assert sorted((u.strength for u in defender.units), reverse=True) == strongest_theirs[1:]


@given(
    mine=st.lists(st.integers(min_value=0, max_value=60), max_size=6),
    theirs=st.lists(st.integers(min_value=0, max_value=60), max_size=6),
)
def test_history_is_symmetric(mine, theirs):
    attacker = _army_with_strengths("A", mine)
    defender = _army_with_strengths("B", theirs)

    result = attacker.attack(defender)

    (mine_record,) = attacker.battle_history
    (their_record,) = defender.battle_history
    assert mine_record.result is result
    assert their_record.result is result.flipped()
    assert mine_record.self_strength == their_record.opponent_strength
    assert mine_record.opponent_strength == their_record.self_strength
    assert mine_record.units_lost == len(mine) - len(attacker.units)
    assert their_record.units_lost == len(theirs) - len(defender.units)
