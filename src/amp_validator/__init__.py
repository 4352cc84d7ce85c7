"""AMP HTML validation with categorized, grouped reports."""

from .validator import AmpValidator

__version__ = "0.1.0"

__all__ = ["AmpValidator", "__version__"]
