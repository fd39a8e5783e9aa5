import math
import random

import pytest
from pydantic import ValidationError

from rand_select.config import SelectorConfig
from rand_select.selector import InvalidWeightError, WeightedSelector
from rand_select.types import Choice


def _ab() -> WeightedSelector[str]:
    return WeightedSelector().with_value(1.0, "A").with_value(1.5, "B")


def test_boundary_draws_follow_half_open_intervals():
    selector = _ab()

    assert selector.total_weight == 2.5
    assert selector.select(0.0) == "A"
    assert selector.select(0.999) == "A"
    assert selector.select(1.0) == "B"
    assert selector.select(2.499) == "B"
    assert selector.select(2.5) is None
    assert selector.select(3.0) is None


def test_negative_and_nan_draws_return_none():
    selector = _ab()

    assert selector.select(-0.001) is None
    assert selector.select(float("nan")) is None


def test_select_is_deterministic_for_same_draw():
    selector = _ab().with_none(2.0)

    for draw in (0.3, 1.7, 3.9):
        assert selector.select(draw) == selector.select(draw)


def test_empty_selector_returns_none():
    selector = WeightedSelector()

    assert selector.total_weight == 0.0
    assert len(selector) == 0
    assert selector.select(0.0) is None
    assert selector.select(0.5) is None
    assert selector.select_random() is None


def test_all_zero_weights_behave_like_empty():
    calls = []

    def random_fn():
        calls.append(1)
        return 0.5

    selector = WeightedSelector(random_fn=random_fn).with_value(0.0, "A").with_none(0.0)

    assert selector.select(0.0) is None
    assert selector.select_random() is None
    assert calls == []


def test_bounds_are_monotonic_and_additive():
    weights = [0.5, 0.0, 2.25, 1.0, 0.0, 3.125]
    selector = WeightedSelector.from_pairs((weight, index) for index, weight in enumerate(weights))

    bounds = [entry.upper_bound for entry in selector.entries]
    for previous, current, weight in zip(bounds, bounds[1:], weights[1:]):
        if weight == 0.0:
            assert current == previous
        else:
            assert current > previous
    assert selector.total_weight == pytest.approx(sum(weights))
    assert selector.total_weight == bounds[-1]


def test_zero_weight_entry_is_never_selected():
    selector = WeightedSelector().with_value(1.0, "A").with_value(0.0, "X").with_value(1.0, "B")

    draws = [i * 0.01 for i in range(200)]
    results = {selector.select(draw) for draw in draws}

    assert "X" not in results
    assert results == {"A", "B"}
    assert selector.select(1.0) == "B"


def test_leading_zero_weight_entry_is_skipped():
    selector = WeightedSelector().with_value(0.0, "X").with_value(1.0, "A")

    assert selector.select(0.0) == "A"


def test_none_class_share_is_roughly_three_quarters():
    selector = WeightedSelector().with_value(1.0, "A").with_none(3.0)
    rng = random.Random(1234)
    trials = 20000

    results = [selector.select_with_rng(rng) for _ in range(trials)]
    none_share = results.count(None) / trials

    assert selector.total_weight == 4.0
    assert abs(none_share - 0.75) < 0.02
    assert set(results) == {None, "A"}


def test_with_none_up_to_tops_up_and_ignores_lower_targets():
    selector = WeightedSelector().with_value(0.1, "A").with_value(0.2, "B").with_none_up_to(1.0)

    assert selector.total_weight == pytest.approx(1.0)
    entries = len(selector)

    selector.with_none_up_to(0.2)

    assert selector.total_weight == pytest.approx(1.0)
    assert len(selector) == entries
    assert all(entry.weight >= 0.0 for entry in selector.entries)
    assert selector.probability(None) == pytest.approx(0.7)


@pytest.mark.parametrize("target", [2.5, 1.0, 0.0, -1.0])
def test_with_none_up_to_at_or_below_total_is_a_no_op(target):
    selector = _ab().with_none_up_to(target)

    assert selector.total_weight == 2.5
    assert len(selector) == 2
    assert selector.select(2.0) == "B"


@pytest.mark.parametrize("target", [float("nan"), float("inf"), "1.0"])
def test_with_none_up_to_rejects_non_finite_targets(target):
    selector = _ab()

    with pytest.raises(InvalidWeightError):
        selector.with_none_up_to(target)

    assert selector.total_weight == 2.5


def test_probability_ignores_weight_absorbed_by_rounding():
    selector = WeightedSelector().with_value(1e10, "A").with_value(1e-20, "B")

    assert selector.entries[1].upper_bound == selector.entries[0].upper_bound
    assert selector.probability("B") == 0.0
    assert selector.probability("A") == 1.0
    assert selector.select(1e10 - 1.0) == "A"


@pytest.mark.parametrize("weight", [-1.0, float("nan"), float("inf"), "1.0", None, True])
def test_invalid_weight_is_rejected_without_mutation(weight):
    selector = _ab()

    with pytest.raises(InvalidWeightError):
        selector.append(weight, "C")

    assert len(selector) == 2
    assert selector.total_weight == 2.5


def test_invalid_weight_error_is_value_error():
    with pytest.raises(ValueError):
        WeightedSelector().with_none(-0.5)
    with pytest.raises(ValueError):
        WeightedSelector().with_none_up_to(math.inf)


def test_select_random_scales_unit_draw_by_total_weight():
    selector = WeightedSelector(random_fn=lambda: 0.5).with_value(1.0, "A").with_value(3.0, "B")

    assert selector.select_random() == "B"
    assert selector.select_random(lambda: 0.2) == "A"


def test_seeded_config_makes_selection_reproducible():
    pairs = [(1.0, "A"), (1.0, "B"), (1.0, "C")]
    first = WeightedSelector.from_pairs(pairs, config=SelectorConfig(seed=7))
    second = WeightedSelector.from_pairs(pairs, config=SelectorConfig(seed=7))

    assert [first.select_random() for _ in range(50)] == [second.select_random() for _ in range(50)]


def test_from_choices_validates_mappings():
    selector = WeightedSelector.from_choices(
        [
            {"weight": 2, "value": "gold"},
            Choice[str](weight=1.0, value="silver"),
            {"weight": 1.0},
        ]
    )

    assert selector.total_weight == 4.0
    assert selector.values() == ["gold", "silver"]
    assert selector.probability("gold") == pytest.approx(0.5)
    assert selector.select(3.5) is None

    with pytest.raises(ValidationError):
        WeightedSelector.from_choices([{"weight": -1.0, "value": "lead"}])


def test_copy_is_independent():
    original = _ab()
    clone = original.copy().with_none(2.5)

    assert original.total_weight == 2.5
    assert clone.total_weight == 5.0
    assert len(original) == 2
    assert clone.select(1.0) == "B"
    assert clone.select(4.0) is None


def test_iteration_and_repr():
    selector = _ab()

    assert [entry.value for entry in selector] == ["A", "B"]
    assert repr(selector) == "WeightedSelector(entries=2, total_weight=2.5)"
    assert WeightedSelector().probability("A") == 0.0
