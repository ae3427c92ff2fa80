"""Configuration package initialization."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from .uploads import ImageUploadConfig

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'ImageUploadConfig']
