import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.video import Video
from ..schemas.video import VideoCreate

logger = logging.getLogger(__name__)


class VideoKeyConflict(Exception):
    def __init__(self, s3_key: str):
        super().__init__(f"A video with s3_key {s3_key!r} already exists")
        self.s3_key = s3_key


def list_videos(db: Session) -> list[Video]:
    return db.query(Video).order_by(Video.created_at.desc(), Video.id.desc()).all()


def get_video_by_key(db: Session, key: str) -> Video | None:
    return db.query(Video).filter(Video.s3_key == key).one_or_none()


def register_video(db: Session, payload: VideoCreate) -> Video:
    video = Video(**payload.model_dump())
    db.add(video)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected duplicate s3_key %s", payload.s3_key)
        raise VideoKeyConflict(payload.s3_key) from exc
    db.refresh(video)
    return video
