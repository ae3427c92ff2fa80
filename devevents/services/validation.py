"""Validation and normalization of incoming event submissions.

Submissions are checked in one pass: every text field, the schedule, the
agenda and tag lists and the attached image. All violations are collected
and raised together as a single ``ValidationError``.
"""

from typing import Annotated, Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from ..config.uploads import ImageUploadConfig
from ..errors import InvalidSlugError, ValidationError
from ..models import EVENT_MODES, SHORT_TEXT_MAX_LENGTH, TAG_MAX_LENGTH
from ..uploads import ImageFile
from ..utils.normalization import (
    SLUG_MAX_LENGTH,
    SLUG_PATTERN,
    decode_string_list,
    normalize_date,
    normalize_time,
    slugify,
    unique_in_order,
)

MODE_MESSAGE = 'Mode must be online, offline, or hybrid'

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ShortText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
]

class EventSubmission(BaseModel):
    """A validated, normalized event submission (everything but the image)."""

    model_config = ConfigDict(extra='ignore')

    title: ShortText
    description: RequiredText
    overview: RequiredText
    venue: ShortText
    location: ShortText
    date: RequiredText
    time: RequiredText
    mode: str
    audience: RequiredText
    organizer: RequiredText
    agenda: Union[str, List[str]]
    tags: Union[str, List[str]]

    @field_validator('title')
    @classmethod
    def title_has_slug(cls, value: str) -> str:
        if not slugify(value):
            raise PydanticCustomError(
                'empty_slug', 'Title must contain at least one letter or number'
            )
        if len(slugify(value)) > SLUG_MAX_LENGTH:
            raise PydanticCustomError(
                'slug_too_long', 'Title is too long to build a slug from'
            )
        return value

    @field_validator('mode', mode='before')
    @classmethod
    def strip_mode(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator('mode')
    @classmethod
    def known_mode(cls, value: str) -> str:
        if value not in EVENT_MODES:
            raise PydanticCustomError('invalid_mode', MODE_MESSAGE)
        return value

    @field_validator('date')
    @classmethod
    def canonical_date(cls, value: str) -> str:
        try:
            return normalize_date(value)
        except ValueError as e:
            raise PydanticCustomError('invalid_date', str(e)) from None

    @field_validator('time')
    @classmethod
    def canonical_time(cls, value: str) -> str:
        try:
            return normalize_time(value)
        except ValueError as e:
            raise PydanticCustomError('invalid_time', str(e)) from None

    @field_validator('agenda', 'tags')
    @classmethod
    def non_empty_list(cls, value: Union[str, List[str]], info) -> List[str]:
        items = decode_string_list(value)
        if info.field_name == 'tags':
            items = unique_in_order(items)
            if any(len(item) > TAG_MAX_LENGTH for item in items):
                raise PydanticCustomError(
                    'tag_too_long',
                    'Tags must be at most {max_length} characters each',
                    {'max_length': TAG_MAX_LENGTH},
                )
        if not items:
            raise PydanticCustomError(
                'empty_list',
                '{label} must contain at least one item',
                {'label': info.field_name.capitalize()},
            )
        return items

    @property
    def slug(self) -> str:
        return slugify(self.title)

    def to_record(self) -> Dict[str, Any]:
        """Field values for a new Event row (image excluded)."""
        return {**self.model_dump(), 'slug': self.slug}

def _format_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors into one ``{field, message}`` entry per field."""
    errors = []
    seen = set()
    for error in exc.errors():
        field = str(error['loc'][0]) if error['loc'] else 'payload'
        if field in seen:
            continue
        seen.add(field)

        if error['type'] in ('missing', 'string_too_short'):
            message = f"{field.capitalize()} is required"
        elif field == 'mode':
            message = MODE_MESSAGE
        elif error['type'] == 'string_too_long':
            message = f"{field.capitalize()} must be at most {error['ctx']['max_length']} characters"
        elif error['type'] in ('string_type', 'list_type'):
            message = f"{field.capitalize()} must be text"
        else:
            message = error['msg']
        errors.append({'field': field, 'message': message})
    return errors

def validate_image(
    image: Optional[ImageFile],
    config: ImageUploadConfig
) -> List[Dict[str, str]]:
    """Return the violations of an attached image (empty if acceptable)."""
    if image is None or not image.content:
        return [{'field': 'image', 'message': 'Image file is required'}]

    errors = []
    if image.content_type not in config.allowed_content_types:
        errors.append({
            'field': 'image',
            'message': 'Invalid file type. Only images are allowed'
        })
    if image.size > config.max_size_bytes:
        errors.append({
            'field': 'image',
            'message': f'File size exceeds {config.max_size_label} limit'
        })
    return errors

def validate_event_submission(
    payload: Mapping[str, Any],
    image: Optional[ImageFile],
    config: Optional[ImageUploadConfig] = None
) -> EventSubmission:
    """
    Validate and normalize an event submission.

    Args:
        payload: Raw form fields; agenda and tags may be lists or strings
        image: The attached image, if any
        config: Image constraints (defaults to the environment's)

    Returns:
        EventSubmission: The normalized submission

    Raises:
        ValidationError: Listing every field and image violation
    """
    config = config or ImageUploadConfig()
    errors: List[Dict[str, str]] = []
    submission = None

    try:
        submission = EventSubmission.model_validate(dict(payload))
    except PydanticValidationError as e:
        errors.extend(_format_errors(e))

    errors.extend(validate_image(image, config))

    if errors:
        raise ValidationError(errors)
    return submission

def validate_slug(slug: Optional[str]) -> str:
    """
    Check and normalize a slug received from a client.

    Returns:
        str: The trimmed, lower-cased slug

    Raises:
        InvalidSlugError: If the slug is missing, longer than 100 characters,
            or not lowercase words joined by single hyphens
    """
    if not isinstance(slug, str) or not slug.strip() or len(slug) > SLUG_MAX_LENGTH:
        raise InvalidSlugError(
            'Invalid or missing slug parameter. Slug must be 1-100 characters.'
        )

    sanitized = slug.strip().lower()
    if not SLUG_PATTERN.match(sanitized):
        raise InvalidSlugError(
            "Invalid slug format. Use lowercase letters, numbers, and hyphens "
            "(e.g., 'react-conf-2024')."
        )
    return sanitized
