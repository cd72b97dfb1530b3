"""Casos de uso de desempeño."""

from .add_review import AddReviewInput, AddReviewUseCase

__all__ = ["AddReviewInput", "AddReviewUseCase"]
