#!/usr/bin/env python3

"""
Seed the database with a fixed set of sample events.

Events whose title already exists are skipped. When Cloudinary credentials
are configured, each event's local image (relative to --images-dir) is
uploaded and the hosted URL is stored; otherwise the local path is kept.

Usage:
    python scripts/seed_events.py
    python scripts/seed_events.py --images-dir public
"""

import argparse
import logging
import mimetypes
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from devevents.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401
from devevents.config.external_services import CloudinaryConfig
from devevents.db import Database, DatabaseError
from devevents.errors import UploadError
from devevents.models import Event
from devevents.services.validation import EventSubmission
from devevents.uploads import CloudinaryUploader, ImageFile

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SEED_EVENTS = [
    {
        'title': 'React Conf 2025',
        'description': "The React team's conference on the future of React and its ecosystem.",
        'overview': 'Deep dives into React Server Components, performance, and modern tooling.',
        'image': '/images/event1.png',
        'venue': 'Moscone West',
        'location': 'San Francisco, CA',
        'date': '2025-04-10',
        'time': '08:30',
        'mode': 'hybrid',
        'audience': 'Frontend engineers, library authors, tech leads',
        'organizer': 'React Core Team',
        'agenda': ['Keynote', 'Breakouts', 'Networking', 'Workshops'],
        'tags': ['react', 'frontend', 'javascript', 'rsc'],
    },
    {
        'title': 'Frontend Masters Summit',
        'description': 'A curated summit for frontend engineers covering performance, DX, and accessibility.',
        'overview': 'Talks on Web Performance, React Server Components, and design systems.',
        'image': '/images/event2.png',
        'venue': 'Austin Convention Center',
        'location': 'Austin, TX',
        'date': '2025-05-12',
        'time': '09:00',
        'mode': 'offline',
        'audience': 'Frontend engineers and tech leads',
        'organizer': 'Frontend Masters',
        'agenda': ['Opening', 'RSC deep dive', 'A11y lab', 'Panel'],
        'tags': ['react', 'frontend', 'javascript'],
    },
    {
        'title': 'JS Nation Live',
        'description': 'The global JavaScript conference streaming worldwide.',
        'overview': 'Latest trends in JS runtimes, frameworks, and tooling.',
        'image': '/images/event3.png',
        'venue': 'Online Platform',
        'location': 'Remote',
        'date': '2025-06-20',
        'time': '10:00',
        'mode': 'online',
        'audience': 'JavaScript developers',
        'organizer': 'GitNation',
        'agenda': ['Welcome', 'Keynote', 'Lightning talks', 'Networking rooms'],
        'tags': ['javascript', 'frontend', 'web'],
    },
    {
        'title': 'Cloud Native Meetup',
        'description': 'Meetup for Kubernetes, containers, and cloud-native tooling.',
        'overview': 'Sessions on K8s operators, observability, and platform engineering.',
        'image': '/images/event5.png',
        'venue': 'Community Hub',
        'location': 'Portland, OR',
        'date': '2025-03-28',
        'time': '18:30',
        'mode': 'offline',
        'audience': 'Platform engineers and SREs',
        'organizer': 'CNCF Portland',
        'agenda': ['Introductions', 'Operator patterns', 'Panel', 'Social'],
        'tags': ['kubernetes', 'cloud', 'devops'],
    },
]

def resolve_image(image_path: str, images_dir: Path, uploader) -> str:
    """Upload the local image if possible, otherwise keep its path."""
    if uploader is None:
        return image_path

    local_path = images_dir / image_path.lstrip('/')
    if not local_path.exists():
        logger.warning(f"Image {local_path} not found, keeping {image_path}")
        return image_path

    content_type = mimetypes.guess_type(local_path.name)[0] or 'application/octet-stream'
    image = ImageFile(
        filename=local_path.name,
        content_type=content_type,
        content=local_path.read_bytes()
    )
    try:
        return uploader.upload(image)
    except UploadError:
        logger.warning(f"Upload of {local_path} failed, keeping {image_path}")
        return image_path

def seed_events(db: Database, images_dir: Path, uploader=None) -> int:
    """
    Insert the sample events that are not stored yet.

    Returns:
        int: Number of events created
    """
    created = 0
    for seed in SEED_EVENTS:
        with db.session() as session:
            if session.query(Event.id).filter(Event.title == seed['title']).first():
                logger.info(f"Skipped existing: {seed['title']}")
                continue

        submission = EventSubmission.model_validate(seed)
        image_url = resolve_image(seed['image'], images_dir, uploader)

        with db.session() as session:
            session.add(Event(image=image_url, **submission.to_record()))
        created += 1
        logger.info(f"Created: {seed['title']}")

    return created

def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the database with sample events")
    parser.add_argument(
        '--images-dir',
        type=Path,
        default=Path.cwd() / 'public',
        help="Directory the seed image paths are relative to (default: ./public)"
    )
    args = parser.parse_args()

    cloudinary_config = CloudinaryConfig()
    uploader = CloudinaryUploader(cloudinary_config) if cloudinary_config.is_configured else None
    if uploader is None:
        logger.info("Cloudinary not configured, storing local image paths")

    db = Database()
    try:
        created = seed_events(db, args.images_dir, uploader)
    except DatabaseError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        db.dispose()

    logger.info(f"Seeding complete. Created {created} events.")
    return 0

if __name__ == "__main__":
    sys.exit(main())
