"""Errors raised by the nutrition engine."""


class FoodSnapError(Exception):
    """Base class for engine errors."""


class ValidationError(FoodSnapError):
    """Raised when a quantity or nutrient value is outside its valid range."""


class MissingDataError(FoodSnapError):
    """Raised when a food record carries no nutrient profile at all."""
