"""
Deal metrics derived from purchase price and equity raise.

Rent is estimated at 0.8% of the purchase price per month and operating
expenses at 30% of rent.
"""

import math
import random
from typing import Optional

from app.schemas.pitch import PitchFormData, DealMetrics

MONTHLY_RENT_RATIO = 0.008
EXPENSE_RATIO = 0.3
BASE_RISK = 4
PRICE_RISK_THRESHOLD = 500_000
HIGH_VOLATILITY_THRESHOLD = 750_000
MEDIUM_VOLATILITY_THRESHOLD = 400_000
NOT_AVAILABLE = "N/A"


def estimated_monthly_rent(purchase_price: float) -> int:
    return math.floor(purchase_price * MONTHLY_RENT_RATIO)


def market_volatility(purchase_price: float) -> str:
    if purchase_price > HIGH_VOLATILITY_THRESHOLD:
        return "High"
    if purchase_price > MEDIUM_VOLATILITY_THRESHOLD:
        return "Medium"
    return "Low"


def calculate_deal_metrics(form: PitchFormData, seed: Optional[int] = None) -> DealMetrics:
    """
    Compute headline deal metrics for a form.

    The location risk component is drawn from a RNG seeded by the form, so
    the score is stable for a given deal.
    """
    price = form.purchase_price
    raise_amount = form.total_raise
    monthly_rent = estimated_monthly_rent(price)
    annual_rent = monthly_rent * 12

    cap_rate = f"{annual_rent / price * 100:.2f}%" if price > 0 else NOT_AVAILABLE
    cash_on_cash = f"{annual_rent / raise_amount * 100:.1f}%" if raise_amount > 0 else NOT_AVAILABLE

    rng = random.Random(f"{form.seed() if seed is None else seed}:risk")
    price_risk = 1 if price > PRICE_RISK_THRESHOLD else 0
    location_risk = 1 if rng.random() > 0.7 else 0
    risk_score = min(10, BASE_RISK + price_risk + location_risk)

    net_monthly = monthly_rent - monthly_rent * EXPENSE_RATIO
    if net_monthly > 0:
        break_even = f"{math.ceil(raise_amount / net_monthly)} months"
    else:
        break_even = NOT_AVAILABLE

    return DealMetrics(
        cap_rate=cap_rate,
        cash_on_cash_return=cash_on_cash,
        risk_score=risk_score,
        market_volatility=market_volatility(price),
        break_even_analysis=break_even,
    )
