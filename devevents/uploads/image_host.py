"""Image uploads to the external asset host."""

from dataclasses import dataclass
import io
import logging
from typing import Optional, Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from ..config.external_services import CloudinaryConfig
from ..errors import UploadError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ImageFile:
    """An image received with an event submission."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

class ImageUploader(Protocol):
    """Anything that can store an image and return its public URL."""

    def upload(self, image: ImageFile) -> str:
        ...

class CloudinaryUploader:
    """Uploads images to Cloudinary through the Cloudinary SDK.

    Credentials are passed with every call instead of through the SDK's
    global ``cloudinary.config()``, so several uploaders can coexist.
    """

    def __init__(self, config: Optional[CloudinaryConfig] = None):
        self.config = config or CloudinaryConfig()

    def upload(self, image: ImageFile) -> str:
        """
        Upload an image and return its secure URL.

        Args:
            image: The image to upload

        Returns:
            str: The https URL Cloudinary serves the image from

        Raises:
            UploadError: If Cloudinary is not configured, unreachable, or
                returns an unexpected response
        """
        try:
            self.config.validate()
        except ValueError as e:
            logger.error(f"Cloudinary is not configured: {e}")
            raise UploadError() from e

        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(image.content),
                filename=image.filename,
                folder=self.config.folder,
                resource_type='image',
                cloud_name=self.config.cloud_name,
                api_key=self.config.api_key,
                api_secret=self.config.api_secret,
                timeout=self.config.timeout,
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload of {image.filename} failed: {e}")
            raise UploadError() from e

        secure_url = result.get('secure_url') if isinstance(result, dict) else None
        if not secure_url:
            logger.error(f"Invalid upload result from Cloudinary: {result}")
            raise UploadError()

        logger.info(f"Uploaded {image.filename} to {secure_url}")
        return secure_url
