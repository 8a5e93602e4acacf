"""
报价方案生成模块

build_quote_options() 是纯函数: 相同的 (quote_id, cost_estimate) 总是得到相同的两档方案，
每档方案的费用明细之和等于其费用区间的下限
"""
import re
import uuid
from decimal import Decimal
from typing import List, Optional

from talentbridge.models.quote import QuoteItem, QuoteOption


DEFAULT_COST_ESTIMATE = "€10,000 - €12,000"
EXECUTIVE_COST_ESTIMATE = "€15,000 - €18,000"

# 基础方案中安置费所占比例（百分比），其余为管理费
PLACEMENT_SHARE_PERCENT = 80

# 金额: 数字与千分位分隔符，可带 k 后缀
_AMOUNT_PATTERN = re.compile(r"(\d(?:[\d.,]*\d)?)\s*([kK])?")
# 末尾一到两位的小数部分，如 ".00"、",50"
_DECIMAL_TAIL = re.compile(r"^(.*\d)[.,](\d{1,2})$")
_GROUPED_DIGITS = re.compile(r"^\d{1,3}(?:[.,]\d{3})*$|^\d+$")


def parse_lower_bound(cost_estimate: Optional[str]) -> Optional[int]:
    """
    解析费用区间下限

    "€10,000 - €12,000" -> 10000
    "€9,500.00 - €11,000.00" -> 9500（小数部分舍去）
    "€10k - €12k" -> 10000，"1.5k" -> 1500

    "," 与 "." 都可作千分位分隔符，分组不是三位一组时视为无法解析，返回 None
    """
    if not cost_estimate:
        return None
    match = _AMOUNT_PATTERN.search(cost_estimate)
    if not match:
        return None

    whole, fraction = match.group(1), "0"
    tail = _DECIMAL_TAIL.match(whole)
    if tail:
        whole, fraction = tail.groups()
    if not _GROUPED_DIGITS.match(whole):
        return None

    amount = Decimal(f"{whole.replace(',', '').replace('.', '')}.{fraction}")
    if match.group(2):
        amount *= 1000
    return int(amount)


def option_id(quote_id: str, tier: str) -> str:
    """方案ID: 由报价ID与档位派生，重复生成结果一致"""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"quote:{quote_id}:{tier}"))


def _essential_items(cost_estimate: str) -> List[QuoteItem]:
    lower = parse_lower_bound(cost_estimate)
    if lower is None:
        lower = parse_lower_bound(DEFAULT_COST_ESTIMATE)
    placement = lower * PLACEMENT_SHARE_PERCENT // 100
    return [
        QuoteItem(label="Placement Fee", amount=placement, description="Recruitment & Vetting"),
        QuoteItem(label="Admin Fee", amount=lower - placement, description="Processing & Compliance"),
    ]


def _executive_items() -> List[QuoteItem]:
    return [
        QuoteItem(label="Placement Fee", amount=10000, description="Premium Sourcing"),
        QuoteItem(label="Relocation Support", amount=3000, description="Logistics & Housing"),
        QuoteItem(label="Integration Package", amount=2000, description="Cultural Training"),
    ]


def build_quote_options(quote_id: str, cost_estimate: Optional[str] = None) -> List[QuoteOption]:
    """
    生成两档报价方案

    Args:
        quote_id: 报价请求ID，用于派生方案ID
        cost_estimate: 运营给出的基础方案费用区间，缺省为 €10,000 - €12,000

    Returns:
        [Essential Package, Executive Package]
    """
    essential_estimate = cost_estimate or DEFAULT_COST_ESTIMATE
    return [
        QuoteOption(
            id=option_id(quote_id, "essential"),
            name="Essential Package",
            cost_estimate=essential_estimate,
            perks=["Standard Placement", "Basic Support"],
            items=_essential_items(essential_estimate),
        ),
        QuoteOption(
            id=option_id(quote_id, "executive"),
            name="Executive Package",
            cost_estimate=EXECUTIVE_COST_ESTIMATE,
            perks=["Priority Support", "Relocation Assistance", "Onboarding Package"],
            items=_executive_items(),
        ),
    ]
