"""
Video URL utilities for exercise demonstrations.
"""

import re
from typing import NamedTuple, Optional

YOUTUBE_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")
VIMEO_PATTERN = re.compile(r"vimeo\.com/(\d+)")
HTML5_PATTERN = re.compile(r"\.(mp4|webm|ogg)$", re.IGNORECASE)


class VideoEmbed(NamedTuple):
    embed_url: str
    provider: str  # youtube | vimeo | html5 | custom


def resolve_video_embed(url: Optional[str]) -> Optional[VideoEmbed]:
    """
    Turn a video page URL into an embeddable one.

    Returns:
        VideoEmbed, or None when there is no URL
    """
    if not url:
        return None

    match = YOUTUBE_PATTERN.search(url)
    if match:
        return VideoEmbed(f"https://www.youtube.com/embed/{match.group(1)}?modestbranding=1", "youtube")

    match = VIMEO_PATTERN.search(url)
    if match:
        return VideoEmbed(f"https://player.vimeo.com/video/{match.group(1)}", "vimeo")

    if HTML5_PATTERN.search(url):
        return VideoEmbed(url, "html5")

    # Assume the URL is already embeddable
    return VideoEmbed(url, "custom")
