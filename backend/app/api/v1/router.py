from fastapi import APIRouter
from app.api.v1.endpoints import auth, generate, pitch_decks, health

api_router = APIRouter()

# Deep health check (use /health/ready for load balancers)
api_router.include_router(health.router)

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(generate.router)
api_router.include_router(pitch_decks.router)
