"""
Custom exception hierarchy for cachematrix.

Provides specific exception types for the failures a cached matrix can hit:
bad input, a matrix the inverter cannot invert, and bad solver configuration.
"""


class CacheMatrixError(Exception):
    """Base exception for all cachematrix errors."""

    def __init__(self, message: str, context: dict = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidInputError(CacheMatrixError):
    """Exception raised when a value is not a matrix-shaped structure."""

    def __init__(self, message: str, shape: tuple = None, context: dict = None):
        """
        Initialize invalid input error.

        Args:
            message: Error message
            shape: Optional shape of the rejected value
            context: Optional context dictionary
        """
        if shape is not None:
            context = dict(context or {})
            context['shape'] = shape
        super().__init__(message, context)
        self.shape = shape


class NotInvertibleError(CacheMatrixError):
    """Exception raised when the inverter cannot produce an inverse."""

    def __init__(self, message: str, shape: tuple = None, tolerance: float = None, context: dict = None):
        """
        Initialize not-invertible error.

        Args:
            message: Error message
            shape: Optional shape of the matrix
            tolerance: Optional tolerance the inversion was attempted with
            context: Optional context dictionary
        """
        if shape is not None or tolerance is not None:
            context = dict(context or {})
            if shape is not None:
                context['shape'] = shape
            if tolerance is not None:
                context['tolerance'] = tolerance
        super().__init__(message, context)
        self.shape = shape
        self.tolerance = tolerance


class ConfigError(CacheMatrixError):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_path: str = None, field: str = None, context: dict = None):
        """
        Initialize config error.

        Args:
            message: Error message
            config_path: Optional path to config file
            field: Optional field name that caused the error
            context: Optional context dictionary
        """
        if config_path or field:
            context = dict(context or {})
            if config_path:
                context['config_path'] = config_path
            if field:
                context['field'] = field
        super().__init__(message, context)
        self.config_path = config_path
        self.field = field
