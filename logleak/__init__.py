"""logleak: find sensitive data written to Java log statements."""

from .masking import mask_and_serialize

__version__ = "0.1.0"

__all__ = ["mask_and_serialize", "__version__"]
