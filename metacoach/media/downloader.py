import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import aiohttp
from loguru import logger

from metacoach.analysis_pipeline.core.models import MediaRecord
from metacoach.exceptions import MediaDownloadError
from metacoach.media.selection import get_media_download_url, is_media_downloadable


@dataclass
class DownloadResult:
    """Outcome of downloading one post. Exactly one of data/error is set."""
    media: MediaRecord
    data: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


class MediaDownloader:
    """
    Downloads post media into memory.

    Attributes:
        timeout_seconds (float): Total timeout per request; large videos need a generous value.
        concurrency (int): Default number of simultaneous downloads in a batch.
    """

    def __init__(self, timeout_seconds: float = 60, concurrency: int = 3):
        self.timeout_seconds = timeout_seconds
        self.concurrency = concurrency

    async def download_media(self, media_url: str) -> bytes:
        """
        Download a URL fully into memory.

        Raises:
            MediaDownloadError: On HTTP errors, timeouts or connection failures
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(media_url) as response:
                    response.raise_for_status()
                    return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error downloading media: {e}")
            raise MediaDownloadError(
                f"Failed to download media: {e}",
                error_code="DOWNLOAD_FAILED",
                details={"url": media_url, "original_exception": type(e).__name__},
            ) from e

    async def download_media_with_metadata(self, media: MediaRecord) -> Tuple[bytes, MediaRecord]:
        url = get_media_download_url(media)
        if not url:
            raise MediaDownloadError(
                "No media URL available (may be copyrighted content)",
                error_code="NOT_DOWNLOADABLE",
                details={"media_id": media.id},
            )
        data = await self.download_media(url)
        return data, media

    async def _download_one(self, media: MediaRecord) -> DownloadResult:
        if not is_media_downloadable(media):
            return DownloadResult(media=media, error="Media not downloadable (copyrighted or no URL)")
        try:
            data, _ = await self.download_media_with_metadata(media)
        except MediaDownloadError as e:
            return DownloadResult(media=media, error=str(e))
        return DownloadResult(media=media, data=data)

    async def download_media_batch(
        self, media_items: Sequence[MediaRecord], concurrency: Optional[int] = None
    ) -> List[DownloadResult]:
        """
        Download posts in chunks of `concurrency`, one result per input in input order.

        A failed item is reported in its result and never aborts the batch.
        """
        concurrency = concurrency or self.concurrency
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        results: List[DownloadResult] = []
        for start in range(0, len(media_items), concurrency):
            batch = media_items[start:start + concurrency]
            outcomes = await asyncio.gather(
                *(self._download_one(media) for media in batch), return_exceptions=True
            )
            for media, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error(f"Unexpected error downloading {media.id}: {outcome}")
                    outcome = DownloadResult(media=media, error=str(outcome) or "Unknown error")
                results.append(outcome)

        succeeded = sum(1 for r in results if r.ok)
        logger.info(f"Downloaded {succeeded}/{len(results)} media items")
        return results
