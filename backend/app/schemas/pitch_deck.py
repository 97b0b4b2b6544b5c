from pydantic import Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime

from app.schemas.pitch import CamelModel, PitchFormData, GeneratedContent


class SavePitchDeckOptions(CamelModel):
    expires_in: Optional[int] = Field(None, description="Days until expiration; 0 or unset means the default")
    password: Optional[str] = Field(None, max_length=128)
    is_public: bool = True

    @field_validator("password")
    @classmethod
    def blank_password_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class SavePitchDeckRequest(CamelModel):
    form_data: PitchFormData
    generated_content: GeneratedContent
    options: Optional[SavePitchDeckOptions] = None


class SavePitchDeckResponse(CamelModel):
    share_id: str
    share_url: str
    expires_at: Optional[datetime] = None


class PitchDeckMetadata(CamelModel):
    view_count: int = 0
    last_viewed: Optional[datetime] = None


class PitchDeckOut(CamelModel):
    """Stored pitch deck as returned to viewers (never includes the password hash)"""
    id: Optional[str] = Field(None, alias="_id")
    share_id: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_public: bool
    form_data: Dict[str, Any]
    generated_content: Dict[str, Any]
    metadata: PitchDeckMetadata


class GetPitchDeckResponse(CamelModel):
    pitch_deck: PitchDeckOut
    is_password_protected: bool


class IncrementViewResponse(CamelModel):
    view_count: int


class DeletePitchDeckResponse(CamelModel):
    success: bool


class PitchDeckAnalytics(CamelModel):
    share_id: str
    view_count: int
    last_viewed: Optional[datetime] = None
    created_at: datetime
