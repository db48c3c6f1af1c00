from .app import create_app
from .registry import GameRegistry, GameSession

__all__ = ["create_app", "GameRegistry", "GameSession"]
