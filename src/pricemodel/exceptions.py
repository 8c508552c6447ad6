"""
Custom Exceptions for the Price Paid Valuation Model

Provides a hierarchy of exceptions for standardized error handling across all modules.

Exception Hierarchy:
    PriceModelError (base)
    ├── ConfigurationError
    ├── DataSourceError
    │   └── ParsingError
    ├── ModelError
    │   ├── ModelNotFoundError
    │   ├── PredictionError
    │   ├── TrainingError
    │   │   └── SingularMatrixError
    │   └── InsufficientDataError
    └── ValidationError
"""


class PriceModelError(Exception):
    """Base exception for all price model errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(PriceModelError):
    """Raised when a source is missing or malformed beyond recovery."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)


# Data Source Errors
class DataSourceError(PriceModelError):
    """Base exception for source file errors."""

    pass


class ParsingError(DataSourceError):
    """Raised when a source file cannot be parsed."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message)


# ML Model Errors
class ModelError(PriceModelError):
    """Base exception for model-related errors."""

    pass


class ModelNotFoundError(ModelError):
    """Raised when the trained model file is not found."""

    def __init__(self, model_path: str = None):
        self.model_path = model_path
        message = f"Model not found at: {model_path}" if model_path else "Model not found"
        super().__init__(message)


class PredictionError(ModelError):
    """Raised when a prediction fails."""

    def __init__(self, message: str, input_data: dict = None):
        self.input_data = input_data
        super().__init__(message)


class TrainingError(ModelError):
    """Raised when model training fails."""

    pass


class SingularMatrixError(TrainingError):
    """Raised when the normal equations cannot be solved."""

    def __init__(self, message: str, column: int = None, pivot: float = None):
        self.column = column
        self.pivot = pivot
        super().__init__(message)


class InsufficientDataError(ModelError):
    """Raised when there's not enough data for training or prediction."""

    def __init__(self, message: str, required: int = None, available: int = None):
        self.required = required
        self.available = available
        super().__init__(message)


# Validation Errors
class ValidationError(PriceModelError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
