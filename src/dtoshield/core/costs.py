# src/dtoshield/core/costs.py
from typing import Dict, Mapping, Optional

from dtoshield.config import (
    CHARS_PER_TOKEN,
    MODEL_PRICING,
    OUTPUT_RATIO_DENOMINATOR,
    OUTPUT_RATIO_NUMERATOR,
)
from dtoshield.errors import UnknownModelError
from dtoshield.models import CostEstimate, ModelPricing


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def get_pricing(model: str, pricing: Optional[Mapping[str, Dict[str, float]]] = None) -> ModelPricing:
    table = MODEL_PRICING if pricing is None else pricing
    if model not in table:
        raise UnknownModelError(model, table.keys())
    return ModelPricing(**table[model])


def estimate_cost(
    total_chars: int,
    model: str,
    pricing: Optional[Mapping[str, Dict[str, float]]] = None,
    chars_per_token: int = CHARS_PER_TOKEN,
) -> CostEstimate:
    """
    Estimates token usage and price for sending total_chars characters.

    Token counts are rounded up; output is assumed to be 80% of the input.
    """
    if total_chars < 0:
        raise ValueError("total_chars must be non-negative")

    model_pricing = get_pricing(model, pricing)

    input_tokens = _ceil_div(total_chars, chars_per_token)
    output_tokens = _ceil_div(input_tokens * OUTPUT_RATIO_NUMERATOR, OUTPUT_RATIO_DENOMINATOR)

    input_cost = input_tokens / 1_000_000 * model_pricing.input_per_million
    output_cost = output_tokens / 1_000_000 * model_pricing.output_per_million

    return CostEstimate(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
        input_cost=input_cost,
        output_cost=output_cost,
        total_cost=input_cost + output_cost,
    )
