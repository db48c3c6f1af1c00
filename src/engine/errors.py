"""Errors raised by the game engine for rejected mutations."""

from __future__ import annotations

from .models import Stage


class GameError(ValueError):
    """Base class for recoverable engine errors."""


class InvalidStageError(GameError):
    """A setup-only mutation was attempted outside the setup stage."""

    def __init__(self, operation: str, stage: Stage):
        self.operation = operation
        self.stage = stage
        super().__init__(f"Cannot {operation} in stage {stage.value}")


class NotFoundError(GameError):
    """A delete referenced a word or player that is not in the game."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind.capitalize()} '{key}' not found")
