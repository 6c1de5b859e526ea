from datetime import datetime, timezone

from metacoach.analysis_pipeline.core.models import MediaRecord, MediaType
from metacoach.media import (
    estimate_media_size,
    get_media_download_url,
    get_thumbnail_url,
    is_media_downloadable,
    should_download_media,
)
from metacoach.media.selection import parse_timestamp


def record(**fields):
    base = {"id": "1", "media_type": MediaType.VIDEO, "media_url": "https://cdn.example.com/v.mp4"}
    base.update(fields)
    return MediaRecord(**base)


def test_parse_graph_api_timestamp():
    assert parse_timestamp("2024-05-01T18:22:10+0000") == datetime(2024, 5, 1, 18, 22, 10, tzinfo=timezone.utc)
    assert parse_timestamp("2024-05-01T18:22:10Z") == datetime(2024, 5, 1, 18, 22, 10, tzinfo=timezone.utc)


def test_copyrighted_media_is_not_downloadable():
    media = record(media_url=None)
    assert not is_media_downloadable(media)
    assert get_media_download_url(media) is None
    assert not should_download_media(media)


def test_thumbnail_url_prefers_video_poster():
    assert get_thumbnail_url(record(thumbnail_url="https://cdn.example.com/t.jpg")) == "https://cdn.example.com/t.jpg"
    assert get_thumbnail_url(record(media_type=MediaType.IMAGE, thumbnail_url="ignored")) == "https://cdn.example.com/v.mp4"


def test_estimated_sizes():
    assert estimate_media_size(record()) == {"estimated": True, "size_kb": 15000}
    assert estimate_media_size(record(media_type=MediaType.IMAGE))["size_kb"] == 500
    assert estimate_media_size(record(media_type=MediaType.CAROUSEL_ALBUM))["size_kb"] == 2000


def test_type_filters():
    image = record(media_type=MediaType.IMAGE)
    assert should_download_media(record(), only_videos=True)
    assert not should_download_media(image, only_videos=True)
    assert should_download_media(image, only_images=True)
    assert not should_download_media(record(), only_images=True)


def test_date_range_filter():
    media = record(timestamp="2024-05-01T18:22:10+0000")
    may = datetime(2024, 5, 1, tzinfo=timezone.utc)
    june = datetime(2024, 6, 1, tzinfo=timezone.utc)

    assert should_download_media(media, min_timestamp=may, max_timestamp=june)
    assert not should_download_media(media, min_timestamp=june)
    assert not should_download_media(media, max_timestamp=may)
