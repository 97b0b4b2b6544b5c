"""
Deterministic Fallback Content Generator

Produces complete pitch deck copy from templates when the AI service is not
configured or fails. Figures that look "random" (demographics, comparable
sales, market trends) come from a random.Random seeded with a hash of the
form, so the same form always yields the same deck.

Usage:
    generator = FallbackContentGenerator(form)
    content = generator.generate()
"""

import math
import random
from datetime import date
from typing import Dict, List, Optional

from app.schemas.pitch import (
    PitchFormData,
    GeneratedContent,
    ComparableProperty,
    MarketTrend,
    MarketTrends,
)
from app.services.deal_metrics import calculate_deal_metrics
from app.utils.formatters import format_currency, location_from_address, excerpt


DEVELOPMENT = "development"
FLIP = "flip"
RENTAL = "rental"
GENERAL = "general"

STRATEGY_KEYWORDS = [
    (DEVELOPMENT, ("development", "build")),
    (FLIP, ("flip", "renovate")),
    (RENTAL, ("rental", "buy and hold")),
]


def classify_strategy(investment_type: str) -> str:
    """Map a free-text investment type onto one of the template strategies"""
    lowered = investment_type.lower()
    for strategy, keywords in STRATEGY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return strategy
    return GENERAL


STRATEGY_TEMPLATES: Dict[str, Dict[str, str]] = {
    DEVELOPMENT: {
        "strategy": "ground-up development",
        "value": "capitalize on strong demand and limited supply",
        "execution": "leverage proven development expertise and strategic partnerships",
    },
    FLIP: {
        "strategy": "value-add renovation",
        "value": "transform an underperforming asset",
        "execution": "implement targeted improvements to maximize market appeal",
    },
    RENTAL: {
        "strategy": "income-generating acquisition",
        "value": "secure stable cash flow in a high-demand market",
        "execution": "optimize operations and enhance tenant satisfaction",
    },
    GENERAL: {
        "strategy": "strategic real estate investment",
        "value": "capitalize on favorable market conditions",
        "execution": "leverage market expertise and operational excellence",
    },
}

SUMMARY_TONES: Dict[str, Dict[str, str]] = {
    "Professional": {
        "opening": "**{name}** represents a compelling **{strategy}** opportunity positioned to",
        "emphasis": "strategic advantages",
        "conclusion": "disciplined execution",
    },
    "Persuasive": {
        "opening": "**{name}** presents an *exceptional* **{strategy}** opportunity designed to",
        "emphasis": "competitive advantages",
        "conclusion": "*proven execution capabilities*",
    },
    "Data-Driven": {
        "opening": "**{name}** offers a *quantifiably attractive* **{strategy}** opportunity structured to",
        "emphasis": "measurable market advantages",
        "conclusion": "*data-driven execution approach*",
    },
}

SNAPSHOT_TONES: Dict[str, Dict[str, str]] = {
    "Professional": {
        "intro": "demonstrates **solid fundamentals** with *consistent performance metrics*",
        "emphasis": "reliable indicators",
    },
    "Persuasive": {
        "intro": "showcases **exceptional growth potential** with *compelling demographic advantages*",
        "emphasis": "outstanding opportunities",
    },
    "Data-Driven": {
        "intro": "exhibits **quantifiable growth metrics** and *measurable market advantages*",
        "emphasis": "data-supported trends",
    },
}

THESIS_TEMPLATES: Dict[str, str] = {
    DEVELOPMENT: """This **ground-up development** opportunity capitalizes on *undersupplied market conditions* in {location}, where demand significantly outpaces new construction. The strategic approach focuses on:

- **Timing advantage:** Entering during favorable construction costs and pre-leasing market conditions
- **Location premium:** Prime positioning in a *high-growth demographic corridor* with limited development sites
- **Design optimization:** Modern amenities and layouts aligned with current tenant preferences
- **Exit flexibility:** Multiple disposition strategies including hold for income or sale upon stabilization

The development strategy leverages *current market inefficiencies* while positioning for **long-term value appreciation** through quality construction and strategic location selection.""",
    FLIP: """This **value-add opportunity** targets an *underperforming asset* in a strong {location} submarket, where strategic improvements can unlock significant value appreciation. Our renovation strategy emphasizes:

- **Market repositioning:** Transforming the property to compete in a higher rent tier through targeted improvements
- **Cost-effective upgrades:** Focus on high-impact, moderate-cost improvements that maximize ROI
- **Rapid execution:** Streamlined renovation timeline to minimize carrying costs and accelerate returns
- **Market timing:** Capitalizing on *strong buyer demand* and limited inventory in the target price range

This approach leverages **proven renovation expertise** and *market knowledge* to create value through strategic property transformation and repositioning.""",
    RENTAL: """This **income-generating acquisition** targets a *cash-flowing asset* in {location}'s resilient rental market, where strong demographics support consistent tenant demand. The investment strategy focuses on:

- **Stable cash flow:** Immediate income generation with potential for organic rent growth
- **Market fundamentals:** Strong employment base and *population growth* supporting rental demand
- **Operational optimization:** Enhancing property management and tenant retention to maximize NOI
- **Appreciation potential:** Benefiting from **long-term market appreciation** while generating current income

This conservative approach provides *downside protection* through immediate cash flow while capturing **market appreciation** over the hold period.""",
    GENERAL: """This **strategic real estate investment** capitalizes on strong market fundamentals in *{location}*, including:

- **Population growth** and job creation driving sustained demand
- **Limited new supply** creating favorable market conditions
- **Strategic location** with excellent access to employment centers and amenities
- **Transportation infrastructure** enhancing long-term value and accessibility

Our *value-creation strategy* enhances the asset's competitive position while generating **stable returns** through targeted improvements and operational optimization.""",
}

RISK_FACTORS: Dict[str, List[str]] = {
    DEVELOPMENT: [
        "Development timeline delays due to permitting, weather, or contractor issues",
        "Construction cost overruns from material price volatility or scope changes",
        "Pre-leasing challenges in changing market conditions",
        "Interest rate increases during construction period affecting project feasibility",
        "Environmental or soil condition discoveries requiring additional remediation",
    ],
    FLIP: [
        "Renovation cost overruns from hidden structural or systems issues",
        "Extended marketing periods in softening sales market conditions",
        "Permitting delays for renovation work impacting timeline and carrying costs",
        "Market preference shifts affecting design choices and target buyer appeal",
        "Competition from new construction or other renovated properties",
    ],
    RENTAL: [
        "Tenant turnover and vacancy periods affecting cash flow stability",
        "Property maintenance and capital expenditure requirements exceeding projections",
        "Rent control or tenant protection legislation limiting rent growth",
        "Property management challenges affecting operations and tenant retention",
        "Market saturation from new rental supply impacting occupancy and rents",
    ],
    GENERAL: [
        "Interest rate fluctuations affecting financing costs and property valuations",
        "Local {location} market economic downturn impacting demand and rental rates",
        "Construction cost inflation and labor shortage delays",
        "Regulatory changes in zoning, rent control, or tax policies",
        "Increased competition from new developments or alternative investments",
    ],
}

LOCATION_OVERVIEW_TEMPLATE = """**{location}** serves as a **strategic gateway** within the broader metropolitan region, benefiting from *exceptional connectivity* and infrastructure advantages that drive sustained real estate demand.

**Infrastructure & Accessibility:**
- **Transportation networks:** Major highway access, public transit connectivity, and proximity to airports
- **Utility infrastructure:** Robust power grid, high-speed internet, and municipal services
- **Development pipeline:** Planned infrastructure improvements and municipal investment initiatives
- **Regional positioning:** Central location within key employment and commercial corridors

**Economic Foundation:**
- **Diverse employment base** across technology, healthcare, finance, and manufacturing sectors
- **Educational institutions** providing workforce development and housing demand stability
- **Commercial development** including retail, office, and mixed-use projects driving population growth

The area's *strategic location* and **continuous infrastructure investment** create a foundation for sustained real estate appreciation and rental demand growth."""

SPONSOR_QUALIFICATIONS = """**Key Qualifications:**
- **Proven track record** in real estate investment and development
- **Extensive market knowledge** and operational expertise
- **Strong relationships** with local contractors, brokers, and financial institutions
- **Hands-on approach** to asset management and value creation

The sponsor team's *comprehensive experience* and **strategic partnerships** position them to execute the business plan successfully and deliver **strong returns** to investors."""

COMPARABLE_STREETS = [
    ("Oak Street", 0.9, 0.2, 0.2, 0.8, "Similar square footage and amenities"),
    ("Pine Avenue", 0.85, 0.3, 0.3, 1.2, "Comparable age and condition"),
    ("Maple Drive", 0.95, 0.15, 0.1, 0.6, "Similar lot size and finishes"),
]


class FallbackContentGenerator:
    """Template-driven pitch deck copy for a single form"""

    def __init__(self, form: PitchFormData, as_of: Optional[date] = None):
        self.form = form
        self.as_of = as_of or date.today()
        self.seed = form.seed()
        self.strategy = classify_strategy(form.investment_type)
        self.tone = form.tone if form.tone in SUMMARY_TONES else "Professional"

    def _rng(self, section: str) -> random.Random:
        """Independent deterministic stream per section"""
        return random.Random(f"{self.seed}:{section}")

    def executive_summary(self) -> str:
        form = self.form
        location = location_from_address(form.address, "the target market")
        strategy = STRATEGY_TEMPLATES[self.strategy]
        style = SUMMARY_TONES[self.tone]

        opening = style["opening"].format(name=form.project_name, strategy=strategy["strategy"])
        description = f"*{excerpt(form.description.strip())}*" if form.description.strip() else ""

        return f"""{opening} {strategy["value"]} in the growing *{location}* market. {description}

**Value Creation Strategy:**
- **Market positioning:** Prime location with strong demographic trends and economic growth
- **Execution approach:** {strategy["execution"]} to maximize returns
- **Risk mitigation:** {style["emphasis"]} including market knowledge and operational expertise

This investment combines *favorable market fundamentals* with **proven investment strategies** to deliver attractive risk-adjusted returns through {style["conclusion"]} and comprehensive market analysis."""

    def investment_thesis(self) -> str:
        location = location_from_address(self.form.address, "the target market")
        return THESIS_TEMPLATES[self.strategy].format(location=location)

    def risk_factors(self) -> List[str]:
        location = location_from_address(self.form.address, "the market")
        return [risk.format(location=location) for risk in RISK_FACTORS[self.strategy]]

    def location_overview(self) -> str:
        location = location_from_address(self.form.address, "the target location")
        return LOCATION_OVERVIEW_TEMPLATE.format(location=location)

    def location_snapshot(self) -> str:
        location = location_from_address(self.form.address, "the target location")
        style = SNAPSHOT_TONES[self.tone]
        rng = self._rng("snapshot")

        population_growth = 1.5 + rng.random() * 3.5
        median_income = int(55000 + rng.random() * 45000)
        unemployment_rate = 2.5 + rng.random() * 3
        housing_appreciation = 4 + rng.random() * 8

        return f"""**{location}** {style["intro"]} that position it favorably for real estate investment.

**Key Demographics & Market Metrics:**
- **Population growth:** {population_growth:.1f}% annually, outpacing regional averages
- **Median household income:** {format_currency(median_income)}, supporting strong purchasing power
- **Unemployment rate:** {unemployment_rate:.1f}%, indicating economic stability
- **Housing appreciation:** {housing_appreciation:.1f}% over the past year, demonstrating market strength

**Investment-Relevant Trends:**
- **Millennial influx** driving rental demand and homebuying activity
- **Remote work adoption** increasing housing demand in suburban markets
- **Commercial expansion** with new businesses and job creation initiatives

These {style["emphasis"]} support **sustained rental demand** and *long-term property value appreciation*, making the market attractive for real estate investment strategies."""

    def sponsor_bio(self) -> str:
        bio = self.form.sponsor_bio.strip()
        if not bio:
            return SPONSOR_QUALIFICATIONS
        return f"{bio}\n\n{SPONSOR_QUALIFICATIONS}"

    def comparable_properties(self) -> List[ComparableProperty]:
        rng = self._rng("comparables")
        comps = []
        for street, price_floor, price_span, dist_floor, dist_span, note in COMPARABLE_STREETS:
            number = rng.randint(100, 1098)
            price = self.form.purchase_price * (price_floor + rng.random() * price_span)
            distance = dist_floor + rng.random() * dist_span
            comps.append(ComparableProperty(
                address=f"{number} {street}",
                price=format_currency(price),
                distance=f"{distance:.1f} miles",
                note=note,
            ))
        return comps

    def market_trends(self) -> MarketTrends:
        rng = self._rng("trends")
        base_median = math.floor(self.form.purchase_price * 0.75)
        first_year = self.as_of.year - 4

        price_trends = []
        for i in range(5):
            growth = 1 + (0.03 + rng.random() * 0.08)  # 3-11% annual growth
            price_trends.append(MarketTrend(
                year=str(first_year + i),
                median_price=math.floor(base_median * growth ** i),
                rent_growth=math.floor((2 + rng.random() * 6) * 10) / 10,
                cap_rate=math.floor((4 + rng.random() * 3) * 10) / 10,
            ))

        first_price = price_trends[0].median_price
        appreciation = (price_trends[-1].median_price / first_price - 1) * 100 if first_price else 0.0
        average_rent_growth = sum(t.rent_growth for t in price_trends) / len(price_trends)

        return MarketTrends(
            price_trends=price_trends,
            summary=(
                f"Market analysis shows consistent appreciation with median home prices increasing "
                f"{appreciation:.1f}% over the past 5 years. Rental growth has averaged "
                f"{average_rent_growth:.1f}% annually, indicating strong rental demand."
            ),
        )

    def generate(self) -> GeneratedContent:
        """Build every section of the deck"""
        return GeneratedContent(
            executive_summary=self.executive_summary(),
            investment_thesis=self.investment_thesis(),
            risk_factors=self.risk_factors(),
            location_overview=self.location_overview(),
            location_snapshot=self.location_snapshot(),
            sponsor_bio=self.sponsor_bio(),
            comparable_properties=self.comparable_properties(),
            market_trends=self.market_trends(),
            deal_metrics=calculate_deal_metrics(self.form, seed=self.seed),
            content_source="fallback",
        )
