from .downloader import DownloadResult, MediaDownloader
from .selection import (
    estimate_media_size,
    get_media_download_url,
    get_thumbnail_url,
    is_media_downloadable,
    should_download_media,
)

__all__ = [
    "DownloadResult",
    "MediaDownloader",
    "estimate_media_size",
    "get_media_download_url",
    "get_thumbnail_url",
    "is_media_downloadable",
    "should_download_media",
]
