"""External service configurations."""

from .cloudinary import CloudinaryConfig

__all__ = ['CloudinaryConfig']
