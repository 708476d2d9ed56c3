"""Typed errors for the engine layer.

Each error carries a stable ``code`` so callers can branch on the kind of
failure without matching message text.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine failures."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class EngineNotRunningError(EngineError):
    """An operation needed an active session but the engine is stopped."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation} - no active session", "ENGINE_NOT_RUNNING")
        self.operation = operation


class ModelNotFoundError(EngineError):
    """The provider/model pair is missing from the model registry."""

    def __init__(self, provider: str, model_id: str) -> None:
        super().__init__(f"Model not found: {provider}/{model_id}", "MODEL_NOT_FOUND")
        self.provider = provider
        self.model_id = model_id


class EngineAssetNotFoundError(EngineError):
    """A required static asset was not found at any searched path."""

    def __init__(self, asset: str) -> None:
        super().__init__(f"{asset} not found", "ASSET_NOT_FOUND")
        self.asset = asset
