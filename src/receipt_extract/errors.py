from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when the engine is handed something that is not a text buffer."""


class OCRError(RuntimeError):
    """Raised by the OCR collaborator when an image cannot be recognized."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
