"""Shared test data and doubles."""

from typing import Any, Dict, List, Optional

from devevents.uploads import ImageFile

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64

class RecordingUploader:
    """Image uploader that remembers what it was given instead of calling out."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.uploads: List[ImageFile] = []

    def upload(self, image: ImageFile) -> str:
        self.uploads.append(image)
        if self.error is not None:
            raise self.error
        return f"https://res.cloudinary.com/demo/image/upload/{image.filename}"

def event_form(**overrides: Any) -> Dict[str, Any]:
    """A complete, valid event submission. Overrides set to None drop the field."""
    form = {
        'title': 'React Conf 2025',
        'description': 'The React conference.',
        'overview': 'Deep dives into React Server Components.',
        'venue': 'Moscone West',
        'location': 'San Francisco, CA',
        'date': '2025-04-10',
        'time': '08:30',
        'mode': 'hybrid',
        'audience': 'Frontend engineers',
        'organizer': 'React Core Team',
        'agenda': '["Keynote", "Breakouts"]',
        'tags': '["react", "frontend"]',
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}

def png_image(filename: str = 'banner.png', size: Optional[int] = None) -> ImageFile:
    content = PNG_BYTES if size is None else b'\x00' * size
    return ImageFile(filename=filename, content_type='image/png', content=content)
