# tests/test_costs.py
import math

import pytest

from dtoshield.core.costs import estimate_cost, get_pricing
from dtoshield.errors import UnknownModelError


def test_zero_chars_is_all_zero():
    est = estimate_cost(0, "gemini-2.5-flash")
    assert est.input_tokens == 0
    assert est.output_tokens == 0
    assert est.total_tokens == 0
    assert est.input_cost == 0
    assert est.output_cost == 0
    assert est.total_cost == 0


def test_four_thousand_chars():
    est = estimate_cost(4000, "gemini-2.5-flash")
    assert est.input_tokens == 1000
    assert est.output_tokens == 800
    assert est.total_tokens == 1800
    assert est.input_cost == pytest.approx(1000 / 1_000_000 * 0.3)
    assert est.output_cost == pytest.approx(800 / 1_000_000 * 2.5)
    assert est.total_cost == pytest.approx(est.input_cost + est.output_cost)


def test_ceiling_rounding():
    # 5 chars -> 2 tokens, 2 * 0.8 = 1.6 -> 2
    est = estimate_cost(5, "gemini-2.5-flash")
    assert est.input_tokens == 2
    assert est.output_tokens == 2

    est = estimate_cost(1, "gemini-2.5-flash")
    assert est.input_tokens == 1
    assert est.output_tokens == 1


@pytest.mark.parametrize("chars", [0, 1, 3, 4, 7, 39, 4000, 123457, 10**9 + 3])
def test_output_tokens_is_ceiling_of_eighty_percent(chars):
    est = estimate_cost(chars, "gemini-2.5-pro")
    assert est.output_tokens == math.ceil(est.input_tokens * 4 / 5)


def test_monotonic_in_chars():
    previous = None
    for chars in range(0, 200):
        est = estimate_cost(chars, "gemini-2.5-pro")
        if previous is not None:
            assert est.total_tokens >= previous.total_tokens
            assert est.total_cost >= previous.total_cost
        previous = est


def test_costs_scale_with_price_table():
    table = {"tiny": {"input_per_million": 1.0, "output_per_million": 10.0}}
    est = estimate_cost(4_000_000, "tiny", pricing=table)
    assert est.input_tokens == 1_000_000
    assert est.input_cost == pytest.approx(1.0)
    assert est.output_cost == pytest.approx(8.0)
    assert est.total_cost == pytest.approx(9.0)


def test_custom_chars_per_token():
    est = estimate_cost(100, "gemini-2.5-flash", chars_per_token=3)
    assert est.input_tokens == 34


def test_unknown_model():
    with pytest.raises(UnknownModelError):
        estimate_cost(10, "gpt-nope")
    with pytest.raises(ValueError):
        get_pricing("gpt-nope")


def test_negative_chars_rejected():
    with pytest.raises(ValueError):
        estimate_cost(-1, "gemini-2.5-flash")
