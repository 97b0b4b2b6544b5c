# API endpoints
from . import auth, generate, pitch_decks, health

__all__ = ["auth", "generate", "pitch_decks", "health"]
