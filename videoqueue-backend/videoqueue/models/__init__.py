from videoqueue.models.video import Video

__all__ = ["Video"]
