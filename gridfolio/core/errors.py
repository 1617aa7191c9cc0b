"""Custom exceptions used across Gridfolio."""


class GridfolioError(Exception):
    """Base error for the application."""


class ConfigError(GridfolioError):
    """Configuration related error."""


class DocumentError(GridfolioError):
    """Raised when the card document cannot be loaded or saved."""


class ArrangeError(GridfolioError):
    """Raised when the arrangement engine receives input it cannot handle."""


class ShapeError(ArrangeError):
    """Raised for shape codes that are not ``<height>x<width>``."""


class CardValidationError(GridfolioError):
    """Raised when card content does not satisfy its schema."""

    def __init__(self, message: str, *, card_type: str | None = None) -> None:
        super().__init__(message)
        self.card_type = card_type
