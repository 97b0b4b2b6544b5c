from fastapi import APIRouter, HTTPException, status, Request

from app.core.config import settings
from app.core.security import check_app_password, create_access_token
from app.core.logging_config import logger
from app.core.rate_limiter import auth_rate_limit
from app.schemas.auth import LoginRequest, LoginResponse


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@auth_rate_limit()
async def login(request: Request, credentials: LoginRequest):
    """Exchange the shared application password for a bearer token (rate limited: 5/min)"""
    client_ip = request.client.host if request.client else "unknown"

    if not credentials.password:
        logger.log_auth_event("login", success=False, reason="Password missing", client_ip=client_ip)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password required"
        )

    if not check_app_password(credentials.password):
        logger.log_auth_event("login", success=False, reason="Invalid password", client_ip=client_ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )

    token = create_access_token()
    logger.log_auth_event("login", success=True, client_ip=client_ip)

    return LoginResponse(
        token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )
