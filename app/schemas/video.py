from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VideoBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    s3_key: str = Field(min_length=1, max_length=255)
    thumbnail_s3_key: str | None = Field(default=None, max_length=255)


class VideoCreate(VideoBase):
    pass


class VideoRead(VideoBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UploadUrlRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(serialization_alias="uploadUrl")
    key: str
    content_type: str = Field(serialization_alias="contentType")


class VideoDurationRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    duration: float | None = None
    video_url: str = Field(serialization_alias="videoUrl")
