"""
Pitch deck endpoints

Saving and deleting require a session token; viewing, view counting and
analytics are public so share links work for anyone who has them.
"""

import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from slowapi.util import get_remote_address

from app.core.database import get_pitch_deck_collection
from app.core.exceptions import InvalidShareIdError
from app.core.logging_config import logger, set_share_id
from app.core.security import require_session
from app.schemas.pitch_deck import (
    SavePitchDeckRequest,
    SavePitchDeckResponse,
    GetPitchDeckResponse,
    IncrementViewResponse,
    DeletePitchDeckResponse,
    PitchDeckAnalytics,
)
from app.services.pitch_deck_service import PitchDeckService


router = APIRouter(prefix="/pitch-decks", tags=["Pitch Decks"])

SHARE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{6}$")


async def get_pitch_deck_service(collection=Depends(get_pitch_deck_collection)) -> PitchDeckService:
    return PitchDeckService(collection)


def valid_share_id(share_id: str) -> str:
    """Path dependency rejecting malformed share IDs with a 400"""
    if not SHARE_ID_PATTERN.match(share_id):
        raise InvalidShareIdError(share_id)
    set_share_id(share_id)
    return share_id


@router.post("", response_model=SavePitchDeckResponse, status_code=status.HTTP_201_CREATED)
async def save_pitch_deck(
    request: Request,
    payload: SavePitchDeckRequest,
    session: Dict[str, Any] = Depends(require_session),
    service: PitchDeckService = Depends(get_pitch_deck_service),
):
    """Save a pitch deck and return its share link"""
    client_ip = get_remote_address(request)

    result = await service.save(payload, client_ip=client_ip,
                                user_agent=request.headers.get("User-Agent"))
    logger.info(f"Saved pitch deck {result.share_id} for '{payload.form_data.project_name}'")
    return result


@router.get("/{share_id}", response_model=GetPitchDeckResponse)
async def get_pitch_deck(
    share_id: str = Depends(valid_share_id),
    password: Optional[str] = Query(None, max_length=128),
    service: PitchDeckService = Depends(get_pitch_deck_service),
):
    """Fetch a shared deck; protected decks need ?password="""
    return await service.get(share_id, password)


@router.patch("/{share_id}/view", response_model=IncrementViewResponse)
async def increment_view(
    share_id: str = Depends(valid_share_id),
    service: PitchDeckService = Depends(get_pitch_deck_service),
):
    return await service.increment_view(share_id)


@router.delete("/{share_id}", response_model=DeletePitchDeckResponse)
async def delete_pitch_deck(
    share_id: str = Depends(valid_share_id),
    session: Dict[str, Any] = Depends(require_session),
    service: PitchDeckService = Depends(get_pitch_deck_service),
):
    """Unpublish a deck (soft delete)"""
    return await service.delete(share_id)


@router.get("/{share_id}/analytics", response_model=PitchDeckAnalytics)
async def get_analytics(
    share_id: str = Depends(valid_share_id),
    service: PitchDeckService = Depends(get_pitch_deck_service),
):
    return await service.analytics(share_id)
