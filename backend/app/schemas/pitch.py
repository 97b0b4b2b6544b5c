import hashlib

from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List


KNOWN_TONES = ("Professional", "Persuasive", "Data-Driven")


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PitchFormData(CamelModel):
    """Investment form submitted by the user"""
    project_name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    investment_type: str = Field(..., min_length=1, max_length=100)
    purchase_price: float = Field(..., ge=0)
    total_raise: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("totalRaise", "equityRaise", "total_raise"),
        serialization_alias="totalRaise",
    )
    target_irr: str = Field("", max_length=50)
    hold_period: str = Field("", max_length=50)
    description: str = Field("", max_length=5000)
    sponsor_bio: str = Field("", max_length=5000)
    tone: str = "Professional"

    @field_validator("tone", mode="before")
    @classmethod
    def default_tone(cls, v):
        return v or "Professional"

    @property
    def location(self) -> str:
        """Last comma-separated part of the address, e.g. the city or state"""
        return self.address.split(",")[-1].strip()

    def seed(self) -> int:
        """Stable integer derived from the fields that identify a deal"""
        key = "|".join([
            self.project_name.strip().lower(),
            self.address.strip().lower(),
            self.investment_type.strip().lower(),
            f"{self.purchase_price:.2f}",
            f"{self.total_raise:.2f}",
        ])
        return int.from_bytes(hashlib.sha256(key.encode("utf-8")).digest()[:8], "big")


class ComparableProperty(CamelModel):
    address: str
    price: str
    distance: str
    note: str


class MarketTrend(CamelModel):
    year: str
    median_price: float
    rent_growth: float
    cap_rate: float


class MarketTrends(CamelModel):
    price_trends: List[MarketTrend]
    summary: str


class DealMetrics(CamelModel):
    cap_rate: str
    cash_on_cash_return: str
    risk_score: int = Field(..., ge=1, le=10)
    market_volatility: str
    break_even_analysis: str


class GeneratedContent(CamelModel):
    """Marketing copy for a pitch deck"""
    executive_summary: str
    investment_thesis: str
    risk_factors: List[str]
    location_overview: str
    location_snapshot: str
    sponsor_bio: str
    comparable_properties: List[ComparableProperty]
    market_trends: MarketTrends
    deal_metrics: Optional[DealMetrics] = None
    content_source: Optional[str] = None  # "ai" or "fallback"
