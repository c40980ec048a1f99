from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func

from ..core.database import Base


class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    s3_key = Column(String(255), unique=True, nullable=False)
    thumbnail_s3_key = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_videos_created_at", created_at.desc()),
        Index("idx_videos_s3_key", s3_key),
    )
