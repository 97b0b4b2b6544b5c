"""
Content generation endpoints

POST /generate turns an investment form into pitch deck copy. The AI service
is optional: without it, or when it fails, the deterministic fallback deck is
returned, so this endpoint only errors on invalid input.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.core.logging_config import logger
from app.core.rate_limiter import ai_operation_rate_limit
from app.core.security import require_session
from app.schemas.pitch import PitchFormData, GeneratedContent
from app.services.content_generator import ContentGenerator


router = APIRouter(tags=["Generation"])


def get_content_generator() -> ContentGenerator:
    return ContentGenerator()


@router.post("/generate", response_model=GeneratedContent, response_model_exclude_none=True)
@ai_operation_rate_limit()
async def generate_content(
    request: Request,
    form: PitchFormData,
    session: Dict[str, Any] = Depends(require_session),
    generator: ContentGenerator = Depends(get_content_generator),
):
    """Generate pitch deck copy for an investment (rate limited: 10/min)"""
    logger.info(
        f"Generating content for '{form.project_name}' ({form.investment_type}, tone={form.tone})",
        extra={"event_type": "generate_request", "investment_type": form.investment_type}
    )
    content = await generator.generate(form)
    logger.info(
        f"Generated content for '{form.project_name}' from {content.content_source}",
        extra={"event_type": "generate_complete", "content_source": content.content_source}
    )
    return content


@router.get("/test")
async def test_authenticated(session: Dict[str, Any] = Depends(require_session)):
    """Check that a bearer token is accepted"""
    return {
        "message": "API is working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
