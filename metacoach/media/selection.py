"""
Selection helpers for deciding which media posts to download.
"""

from datetime import datetime
from typing import Dict, Optional, Union

from metacoach.analysis_pipeline.core.models import MediaRecord, MediaType

# Rough average sizes; the Graph API does not report file sizes
ESTIMATED_SIZE_KB = {
    MediaType.VIDEO: 15000,
    MediaType.IMAGE: 500,
    MediaType.CAROUSEL_ALBUM: 2000,
}


def parse_timestamp(value: str) -> datetime:
    """Parse Graph API timestamps such as '2024-05-01T18:22:10+0000'."""
    try:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))


def is_media_downloadable(media: MediaRecord) -> bool:
    """Copyrighted or flagged media come back without a media_url."""
    return bool(media.media_url)


def get_media_download_url(media: MediaRecord) -> Optional[str]:
    return media.media_url or None


def get_thumbnail_url(media: MediaRecord) -> Optional[str]:
    """Poster image for videos, otherwise the media itself."""
    if media.media_type == MediaType.VIDEO and media.thumbnail_url:
        return media.thumbnail_url
    return media.media_url or None


def estimate_media_size(media: MediaRecord) -> Dict[str, Union[bool, int]]:
    return {"estimated": True, "size_kb": ESTIMATED_SIZE_KB[media.media_type]}


def should_download_media(
    media: MediaRecord,
    only_videos: bool = False,
    only_images: bool = False,
    min_timestamp: Optional[datetime] = None,
    max_timestamp: Optional[datetime] = None,
) -> bool:
    """
    Check whether a post passes the download filters.

    Args:
        media: Post to check
        only_videos: Keep VIDEO posts only
        only_images: Keep IMAGE posts only
        min_timestamp: Drop posts published before this (timezone-aware)
        max_timestamp: Drop posts published after this (timezone-aware)
    """
    if not is_media_downloadable(media):
        return False

    if only_videos and media.media_type != MediaType.VIDEO:
        return False
    if only_images and media.media_type != MediaType.IMAGE:
        return False

    if media.timestamp:
        published = parse_timestamp(media.timestamp)
        if min_timestamp and published < min_timestamp:
            return False
        if max_timestamp and published > max_timestamp:
            return False

    return True
