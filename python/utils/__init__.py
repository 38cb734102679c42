# Utils package
from .video import VideoEmbed, resolve_video_embed

__all__ = ['VideoEmbed', 'resolve_video_embed']
