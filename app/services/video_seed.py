from __future__ import annotations

import logging

from ..core.database import Database
from ..models.video import Video

logger = logging.getLogger(__name__)

SAMPLE_VIDEOS = (
    {
        "title": "Sample Video 1",
        "description": "This is a sample video for testing",
        "s3_key": "sample-video-1.mp4",
    },
    {
        "title": "Sample Video 2",
        "description": "Another sample video",
        "s3_key": "sample-video-2.mp4",
    },
)


def seed_sample_videos(database: Database) -> int:
    inserted = 0
    with database.session() as db:
        existing = {
            key
            for (key,) in db.query(Video.s3_key).filter(Video.s3_key.in_([row["s3_key"] for row in SAMPLE_VIDEOS]))
        }
        for payload in SAMPLE_VIDEOS:
            if payload["s3_key"] in existing:
                continue
            db.add(Video(**payload))
            inserted += 1
        db.commit()
    logger.info("Seeded %d sample videos", inserted)
    return inserted
