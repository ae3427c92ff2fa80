"""Image upload limits."""

import os
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024

@dataclass
class ImageUploadConfig:
    """Constraints applied to event images before they are uploaded."""

    allowed_content_types: Tuple[str, ...] = field(
        default=('image/jpeg', 'image/png', 'image/webp', 'image/gif')
    )
    max_size_bytes: int = 0

    def __post_init__(self):
        """Load the size ceiling from the environment if not provided."""
        if not self.max_size_bytes:
            self.max_size_bytes = int(
                os.environ.get('MAX_IMAGE_SIZE_BYTES', DEFAULT_MAX_IMAGE_SIZE_BYTES)
            )

    @property
    def max_size_label(self) -> str:
        """Human readable size ceiling, e.g. '5MB'."""
        size = self.max_size_bytes
        if size >= 1024 * 1024 and size % (1024 * 1024) == 0:
            return f"{size // (1024 * 1024)}MB"
        if size >= 1024 and size % 1024 == 0:
            return f"{size // 1024}KB"
        return f"{size} bytes"
