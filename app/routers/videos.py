import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..schemas.video import VideoCreate, VideoDurationRead, VideoRead
from ..services import video_store
from ..services.upload_urls import public_object_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["videos"])


@router.get("/videos", response_model=list[VideoRead])
def list_videos(db: Session = Depends(get_db)):
    return video_store.list_videos(db)


@router.get("/videos/{key:path}", response_model=VideoRead)
def get_video(key: str, db: Session = Depends(get_db)):
    logger.info("Looking for video with key %s", key)
    video = video_store.get_video_by_key(db, key)
    if video is None:
        logger.info("Video not found: %s", key)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found")
    return video


@router.post("/videos", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
def register_video(payload: VideoCreate, db: Session = Depends(get_db)):
    try:
        return video_store.register_video(db, payload)
    except video_store.VideoKeyConflict:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A video with this s3_key already exists")


@router.get("/video-duration/{key:path}", response_model=VideoDurationRead)
def get_video_duration(key: str, request: Request):
    # Duration is read by the player from the object's metadata.
    return {"duration": None, "video_url": public_object_url(request.app.state.settings, key)}
