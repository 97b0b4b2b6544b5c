# Pydantic schemas
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.pitch import (
    CamelModel,
    PitchFormData,
    ComparableProperty,
    MarketTrend,
    MarketTrends,
    DealMetrics,
    GeneratedContent,
)
from app.schemas.pitch_deck import (
    SavePitchDeckOptions,
    SavePitchDeckRequest,
    SavePitchDeckResponse,
    PitchDeckMetadata,
    PitchDeckOut,
    GetPitchDeckResponse,
    IncrementViewResponse,
    DeletePitchDeckResponse,
    PitchDeckAnalytics,
)
