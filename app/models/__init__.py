from .video import Video

__all__ = ["Video"]
