"""
报价方案生成测试
"""
import pytest

from talentbridge.services.pricing import (
    build_quote_options,
    option_id,
    parse_lower_bound,
    DEFAULT_COST_ESTIMATE,
    EXECUTIVE_COST_ESTIMATE,
)


def item_total(option) -> int:
    return sum(item.amount for item in option.items)


@pytest.mark.parametrize("estimate, expected", [
    ("€10,000 - €12,000", 10000),
    ("€10.000 - €12.000", 10000),
    ("20000-25000 EUR", 20000),
    ("€9,500.00 - €11,000.00", 9500),
    ("€10.000,50 - €12.000,00", 10000),
    ("€10k - €12k", 10000),
    ("€1.5K - €2K", 1500),
    ("1,23,456", None),
    ("on request", None),
    ("", None),
    (None, None),
])
def test_parse_lower_bound(estimate, expected):
    assert parse_lower_bound(estimate) == expected


def test_default_options():
    """缺省区间生成两档方案，明细之和等于下限"""
    essential, executive = build_quote_options("quote-1")

    assert essential.name == "Essential Package"
    assert essential.cost_estimate == DEFAULT_COST_ESTIMATE
    assert [i.amount for i in essential.items] == [8000, 2000]
    assert item_total(essential) == 10000

    assert executive.name == "Executive Package"
    assert executive.cost_estimate == EXECUTIVE_COST_ESTIMATE
    assert item_total(executive) == parse_lower_bound(EXECUTIVE_COST_ESTIMATE)

    assert not essential.selected and not executive.selected


def test_custom_estimate_drives_essential_tier():
    essential, executive = build_quote_options("quote-1", "€20,000 - €24,000")

    assert essential.cost_estimate == "€20,000 - €24,000"
    assert [i.amount for i in essential.items] == [16000, 4000]
    assert executive.cost_estimate == EXECUTIVE_COST_ESTIMATE


def test_unparseable_estimate_falls_back_to_default_amounts():
    essential, _ = build_quote_options("quote-1", "on request")
    assert essential.cost_estimate == "on request"
    assert item_total(essential) == 10000


def test_option_ids_are_stable_and_distinct():
    """相同报价ID重复生成得到相同方案ID"""
    first = build_quote_options("quote-1")
    again = build_quote_options("quote-1")
    other = build_quote_options("quote-2")

    assert [o.id for o in first] == [o.id for o in again]
    assert first[0].id != first[1].id
    assert first[0].id != other[0].id
    assert first[0].id == option_id("quote-1", "essential")


@pytest.mark.parametrize("estimate, lower, amounts", [
    ("€9,500.00 - €11,000.00", 9500, [7600, 1900]),
    ("€10k - €12k", 10000, [8000, 2000]),
    ("€1.5k - €2k", 1500, [1200, 300]),
])
def test_decimal_and_k_estimates_sum_to_lower_bound(estimate, lower, amounts):
    """带小数或 k 后缀的区间，明细之和仍等于下限"""
    essential, _ = build_quote_options("quote-1", estimate)

    assert essential.cost_estimate == estimate
    assert [i.amount for i in essential.items] == amounts
    assert item_total(essential) == lower
