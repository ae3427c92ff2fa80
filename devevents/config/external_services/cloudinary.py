"""Cloudinary service configuration."""

import os
from dataclasses import dataclass

@dataclass
class CloudinaryConfig:
    """Cloudinary configuration settings."""

    folder: str = ""
    timeout: float = 30.0

    # Authentication
    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""

    def __post_init__(self):
        """Load missing settings from the environment."""
        if not self.cloud_name:
            self.cloud_name = os.environ.get('CLOUDINARY_CLOUD_NAME', '')
        if not self.api_key:
            self.api_key = os.environ.get('CLOUDINARY_API_KEY', '')
        if not self.api_secret:
            self.api_secret = os.environ.get('CLOUDINARY_API_SECRET', '')
        if not self.folder:
            self.folder = os.environ.get('CLOUDINARY_FOLDER', 'Dev Event')

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.cloud_name:
            raise ValueError("CLOUDINARY_CLOUD_NAME environment variable is required")
        if not self.api_key:
            raise ValueError("CLOUDINARY_API_KEY environment variable is required")
        if not self.api_secret:
            raise ValueError("CLOUDINARY_API_SECRET environment variable is required")
        return True
