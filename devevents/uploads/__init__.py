"""Image upload package initialization."""

from .image_host import CloudinaryUploader, ImageFile, ImageUploader

__all__ = ['CloudinaryUploader', 'ImageFile', 'ImageUploader']
