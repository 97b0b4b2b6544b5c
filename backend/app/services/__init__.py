from app.services.deal_metrics import calculate_deal_metrics
from app.services.fallback_content import FallbackContentGenerator, classify_strategy
from app.services.content_generator import ContentGenerator
from app.services.pitch_deck_service import PitchDeckService

__all__ = [
    # Content
    "ContentGenerator",
    "FallbackContentGenerator",
    "calculate_deal_metrics",
    "classify_strategy",
    # Persistence
    "PitchDeckService",
]
