"""
Custom Exceptions for PitchSite
===============================

Services raise these instead of generic Exception so the API layer can map
them to HTTP responses.

Usage:
    from app.core.exceptions import PitchDeckNotFoundError

    if not deck:
        raise PitchDeckNotFoundError(share_id)
"""

from typing import Optional, Any, Dict


class PitchSiteError(Exception):
    """Base exception for all PitchSite errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication Errors
# ============================================

class InvalidTokenError(PitchSiteError):
    """Bearer token is invalid or expired"""

    status_code = 403

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(PitchSiteError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidShareIdError(ValidationError):
    """Share ID does not match the expected format"""

    def __init__(self, share_id: str):
        super().__init__("Invalid shareId format", field="shareId")
        self.code = "INVALID_SHARE_ID"
        self.details["share_id"] = share_id[:32]


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(PitchSiteError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, message: str, resource_type: str, resource_id: str):
        super().__init__(
            message,
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class PitchDeckNotFoundError(ResourceNotFoundError):
    """Pitch deck missing, expired, or no longer public"""

    def __init__(self, share_id: str, message: str = "Pitch deck not found or not publicly accessible"):
        super().__init__(message, "PitchDeck", share_id)


class InvalidDeckPasswordError(PitchSiteError):
    """Password supplied for a protected pitch deck is wrong"""

    status_code = 401

    def __init__(self, share_id: str):
        super().__init__("Invalid password", code="INVALID_DECK_PASSWORD",
                         details={"share_id": share_id})


# ============================================
# AI/Claude Errors
# ============================================

class AIServiceError(PitchSiteError):
    """AI service (Claude) error"""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="AI_SERVICE_ERROR")


class AIResponseParseError(AIServiceError):
    """Failed to parse AI response"""

    def __init__(self, message: str = "Failed to parse AI response"):
        super().__init__(message)
        self.code = "AI_PARSE_ERROR"


# ============================================
# Storage Errors
# ============================================

class StorageError(PitchSiteError):
    """Document store operation failed"""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class ShareIdExhaustedError(StorageError):
    """Could not find a free share ID"""

    def __init__(self, attempts: int):
        super().__init__(f"Could not allocate a unique shareId after {attempts} attempts")
        self.code = "SHARE_ID_EXHAUSTED"
        self.details["attempts"] = attempts


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: PitchSiteError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
