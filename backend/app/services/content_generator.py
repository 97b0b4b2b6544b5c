"""
Content Generator

Turns an investment form into pitch deck copy. Claude writes the narrative
sections when an API key is configured; every section the model omits or
returns malformed is filled from the deterministic fallback, and any AI
failure degrades to the full fallback deck.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import AIServiceError
from app.core.logging_config import logger
from app.schemas.pitch import PitchFormData, GeneratedContent, ComparableProperty
from app.services.fallback_content import FallbackContentGenerator
from app.utils.claude_client import ClaudeClient, get_claude_client
from app.utils.formatters import format_currency, location_from_address
from app.utils.response_parser import JSONResponseParser


SYSTEM_PROMPT = (
    "You are a professional real estate investment analyst. Provide detailed, accurate, "
    "and compelling investment analysis content. Always return valid JSON without "
    "markdown formatting or code blocks."
)

# AI response key -> GeneratedContent field
TEXT_FIELDS = {
    "executiveSummary": "executive_summary",
    "investmentThesis": "investment_thesis",
    "locationOverview": "location_overview",
    "locationSnapshot": "location_snapshot",
    "enhancedSponsorBio": "sponsor_bio",
}

PROMPT_TEMPLATE = """Generate content for an investment pitch deck with the following details:

Project: {project_name}
Address: {address}
Investment Type: {investment_type}
Purchase Price: {purchase_price}
Equity Raise: {total_raise}
Target IRR: {target_irr}
Hold Period: {hold_period}
Description: {description}
Sponsor Bio: {sponsor_bio}
Content Tone: {tone}

The content is displayed inside sections that already carry titles (Executive Summary, Investment Thesis, Deal Metrics, Location Overview, Location Snapshot, Sponsor Information). Do NOT include section headers in any field. Use markdown (**bold**, *emphasis*, bullet points) inside the text fields.

Return a JSON object with these fields:

1. executiveSummary: 3-4 sentences in a {tone_lower} tone on the value proposition and strategy. Do not repeat purchase price, equity raise or IRR.
2. investmentThesis: 3-4 paragraphs on why this opportunity stands out, its competitive advantages and the value creation plan.
3. locationOverview: 3-4 paragraphs on the infrastructure, regional positioning and economic base of {location}.
4. locationSnapshot: a {tone_lower} analysis of demographic and market metrics with specific figures for investors.
5. enhancedSponsorBio: the sponsor bio above rewritten to be more compelling while keeping its facts.
6. riskFactors: array of 5 plain-text risk factors specific to this investment type and location.
7. comparableProperties: array of 3 objects with address, price, distance and note, priced around {purchase_price}.

Return raw JSON only. Do not wrap the response in code blocks."""


class ContentGenerator:
    """Generate pitch deck copy with Claude, falling back to templates"""

    def __init__(self, client: Optional[ClaudeClient] = None, as_of: Optional[date] = None):
        self._client = client
        self.as_of = as_of

    @property
    def client(self) -> ClaudeClient:
        if self._client is None:
            self._client = get_claude_client()
        return self._client

    def build_prompt(self, form: PitchFormData) -> str:
        return PROMPT_TEMPLATE.format(
            project_name=form.project_name,
            address=form.address,
            investment_type=form.investment_type,
            purchase_price=format_currency(form.purchase_price),
            total_raise=format_currency(form.total_raise),
            target_irr=form.target_irr or "Not specified",
            hold_period=form.hold_period or "Not specified",
            description=form.description or "Not provided",
            sponsor_bio=form.sponsor_bio or "Not provided",
            tone=form.tone,
            tone_lower=form.tone.lower(),
            location=location_from_address(form.address, "the target market"),
        )

    async def generate(self, form: PitchFormData) -> GeneratedContent:
        fallback = FallbackContentGenerator(form, as_of=self.as_of).generate()

        if not settings.ai_enabled:
            logger.info(
                f"Using fallback content for '{form.project_name}' (AI not configured)",
                extra={"event_type": "content_fallback", "reason": "ai_disabled"}
            )
            return fallback

        try:
            response = await self.client.generate(
                prompt=self.build_prompt(form),
                system_prompt=SYSTEM_PROMPT,
            )
            ai_content = JSONResponseParser.parse_object(response["content"])
        except AIServiceError as e:
            logger.warning(
                f"AI generation failed, using fallback content: {e.message}",
                extra={"event_type": "content_fallback", "reason": e.code}
            )
            return fallback

        return self.merge(ai_content, fallback)

    def merge(self, ai_content: Dict[str, Any], fallback: GeneratedContent) -> GeneratedContent:
        """
        Combine an AI response with fallback content field by field.

        Market trends and deal metrics always come from the fallback since
        they are computed, not written.
        """
        merged = fallback.model_copy(deep=True)
        replaced: List[str] = []

        for key, field in TEXT_FIELDS.items():
            value = ai_content.get(key)
            if isinstance(value, str) and value.strip():
                setattr(merged, field, value.strip())
                replaced.append(key)

        risks = ai_content.get("riskFactors")
        if isinstance(risks, list):
            risks = [r.strip() for r in risks if isinstance(r, str) and r.strip()]
            if risks:
                merged.risk_factors = risks
                replaced.append("riskFactors")

        comps = self._parse_comparables(ai_content.get("comparableProperties"))
        if comps:
            merged.comparable_properties = comps
            replaced.append("comparableProperties")

        merged.content_source = "ai"
        logger.info(
            f"Merged AI content ({len(replaced)} fields from AI)",
            extra={"event_type": "content_merged", "ai_fields": replaced}
        )
        return merged

    @staticmethod
    def _parse_comparables(value: Any) -> List[ComparableProperty]:
        if not isinstance(value, list):
            return []

        comps = []
        for item in value:
            if not isinstance(item, dict):
                return []
            item = dict(item)
            if isinstance(item.get("price"), (int, float)):
                item["price"] = format_currency(item["price"])
            if isinstance(item.get("distance"), (int, float)):
                item["distance"] = f"{item['distance']} miles"
            try:
                comps.append(ComparableProperty.model_validate(item))
            except PydanticValidationError:
                return []
        return comps
