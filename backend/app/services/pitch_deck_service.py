"""
Pitch Deck Service - persistence of shareable pitch decks

Decks live in a single document collection keyed by a short random share ID.
Reads only ever see decks that are public and not yet expired; the TTL index
on expiresAt removes expired documents in the background.
"""

import secrets
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.config import settings
from app.core.exceptions import (
    PitchDeckNotFoundError,
    InvalidDeckPasswordError,
    ShareIdExhaustedError,
)
from app.core.logging_config import logger, set_share_id
from app.core.security import get_password_hash, verify_password
from app.schemas.pitch_deck import (
    SavePitchDeckRequest,
    SavePitchDeckOptions,
    SavePitchDeckResponse,
    PitchDeckOut,
    GetPitchDeckResponse,
    IncrementViewResponse,
    DeletePitchDeckResponse,
    PitchDeckAnalytics,
)

SHARE_ID_ALPHABET = string.ascii_letters + string.digits


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PitchDeckService:
    """CRUD operations for pitch decks over an async (motor) collection"""

    def __init__(self, collection, clock: Callable[[], datetime] = utcnow):
        self.collection = collection
        self.clock = clock

    def _visible(self, share_id: str) -> Dict[str, Any]:
        """Filter matching a deck that viewers are allowed to see"""
        return {
            "shareId": share_id,
            "isPublic": True,
            "expiresAt": {"$gt": self.clock()},
        }

    def _log(self, operation: str, started: float, affected: int = 0, **kwargs) -> None:
        logger.log_db_operation(
            operation,
            settings.PITCH_DECK_COLLECTION,
            (time.perf_counter() - started) * 1000,
            documents_affected=affected,
            **kwargs,
        )

    @staticmethod
    def new_share_id(length: Optional[int] = None) -> str:
        length = length or settings.SHARE_ID_LENGTH
        return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))

    async def generate_share_id(self) -> str:
        """Random share ID not yet present in the collection"""
        for _ in range(settings.SHARE_ID_MAX_ATTEMPTS):
            share_id = self.new_share_id()
            existing = await self.collection.find_one({"shareId": share_id}, {"_id": 1})
            if existing is None:
                return share_id
            logger.debug(f"Share ID collision on {share_id}, retrying")
        raise ShareIdExhaustedError(settings.SHARE_ID_MAX_ATTEMPTS)

    def expiration_for(self, options: SavePitchDeckOptions, now: datetime) -> datetime:
        days = options.expires_in or settings.DEFAULT_EXPIRATION_DAYS
        days = max(1, min(days, settings.MAX_EXPIRATION_DAYS))
        return now + timedelta(days=days)

    async def save(
        self,
        request: SavePitchDeckRequest,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> SavePitchDeckResponse:
        """Persist a deck and return its share link"""
        options = request.options or SavePitchDeckOptions()
        now = self.clock()
        expires_at = self.expiration_for(options, now)
        hashed_password = get_password_hash(options.password) if options.password else None

        started = time.perf_counter()
        for attempt in range(settings.SHARE_ID_MAX_ATTEMPTS):
            share_id = await self.generate_share_id()
            document = {
                "shareId": share_id,
                "createdAt": now,
                "expiresAt": expires_at,
                "isPublic": options.is_public,
                "formData": request.form_data.model_dump(by_alias=True),
                "generatedContent": request.generated_content.model_dump(by_alias=True),
                "metadata": {
                    "viewCount": 0,
                    "lastViewed": None,
                    "creatorIp": client_ip,
                    "userAgent": user_agent,
                },
            }
            if hashed_password:
                document["password"] = hashed_password

            try:
                await self.collection.insert_one(document)
            except DuplicateKeyError:
                # Another writer took the ID between the check and the insert
                logger.warning(f"Duplicate shareId {share_id} on insert (attempt {attempt + 1})")
                continue

            set_share_id(share_id)
            self._log("insert", started, affected=1, share_id=share_id,
                      password_protected=bool(hashed_password))
            return SavePitchDeckResponse(
                share_id=share_id,
                share_url=f"{settings.CLIENT_URL.rstrip('/')}/share/{share_id}",
                expires_at=expires_at,
            )

        raise ShareIdExhaustedError(settings.SHARE_ID_MAX_ATTEMPTS)

    async def get(self, share_id: str, password: Optional[str] = None) -> GetPitchDeckResponse:
        """
        Fetch a public, unexpired deck.

        A protected deck requested without a password yields a preview with
        only the project name, so the client can render a password gate.
        """
        started = time.perf_counter()
        document = await self.collection.find_one(self._visible(share_id))
        self._log("find_one", started, affected=1 if document else 0, share_id=share_id)
        if document is None:
            raise PitchDeckNotFoundError(share_id)

        hashed_password = document.pop("password", None)
        document["_id"] = str(document["_id"]) if document.get("_id") is not None else None

        if hashed_password:
            if not password:
                return GetPitchDeckResponse(
                    pitch_deck=self._preview(document),
                    is_password_protected=True,
                )
            if not verify_password(password, hashed_password):
                logger.log_auth_event("deck_password", success=False, reason="invalid_password",
                                      share_id=share_id)
                raise InvalidDeckPasswordError(share_id)

        return GetPitchDeckResponse(
            pitch_deck=PitchDeckOut.model_validate(document),
            is_password_protected=bool(hashed_password),
        )

    @staticmethod
    def _preview(document: Dict[str, Any]) -> PitchDeckOut:
        metadata = document.get("metadata") or {}
        return PitchDeckOut(
            id=document.get("_id"),
            share_id=document["shareId"],
            created_at=document["createdAt"],
            expires_at=document.get("expiresAt"),
            is_public=document["isPublic"],
            form_data={"projectName": (document.get("formData") or {}).get("projectName", "")},
            generated_content={},
            metadata={"viewCount": metadata.get("viewCount", 0)},
        )

    async def increment_view(self, share_id: str) -> IncrementViewResponse:
        started = time.perf_counter()
        document = await self.collection.find_one_and_update(
            self._visible(share_id),
            {
                "$inc": {"metadata.viewCount": 1},
                "$set": {"metadata.lastViewed": self.clock()},
            },
            projection={"metadata.viewCount": 1},
            return_document=ReturnDocument.AFTER,
        )
        self._log("find_one_and_update", started, affected=1 if document else 0, share_id=share_id)
        if document is None:
            raise PitchDeckNotFoundError(share_id)
        return IncrementViewResponse(view_count=document["metadata"]["viewCount"])

    async def delete(self, share_id: str) -> DeletePitchDeckResponse:
        """Soft delete: the deck stops being public and expires normally"""
        started = time.perf_counter()
        result = await self.collection.update_one(
            self._visible(share_id),
            {"$set": {"isPublic": False}},
        )
        self._log("update_one", started, affected=result.modified_count, share_id=share_id)
        if result.modified_count == 0:
            raise PitchDeckNotFoundError(share_id, message="Pitch deck not found")
        logger.info(f"Pitch deck {share_id} unpublished")
        return DeletePitchDeckResponse(success=True)

    async def analytics(self, share_id: str) -> PitchDeckAnalytics:
        """View statistics; available for protected decks since no content is returned"""
        document = await self.collection.find_one(
            self._visible(share_id),
            {"shareId": 1, "createdAt": 1, "metadata.viewCount": 1, "metadata.lastViewed": 1},
        )
        if document is None:
            raise PitchDeckNotFoundError(share_id)
        metadata = document.get("metadata") or {}
        return PitchDeckAnalytics(
            share_id=document["shareId"],
            view_count=metadata.get("viewCount", 0),
            last_viewed=metadata.get("lastViewed"),
            created_at=document["createdAt"],
        )

    async def cleanup_expired(self) -> int:
        """Delete decks past their expiration; returns the number removed"""
        started = time.perf_counter()
        result = await self.collection.delete_many({"expiresAt": {"$lt": self.clock()}})
        self._log("delete_many", started, affected=result.deleted_count)
        if result.deleted_count:
            logger.info(f"Removed {result.deleted_count} expired pitch decks")
        return result.deleted_count
