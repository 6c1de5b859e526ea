from functools import lru_cache

from fastapi import HTTPException, UploadFile
from loguru import logger

from metacoach.analysis_pipeline import AnalysisOrchestrator, AnalysisResult, MediaRecord
from metacoach.config.settings import MetaCoachConfig
from metacoach.exceptions import (
    ConfigurationException,
    ExternalToolMissing,
    FrameExtractionError,
    MediaDownloadError,
    MetaCoachException,
    ProviderException,
    ScoringError,
    TranscriptionError,
)
from metacoach.media import MediaDownloader
from app.utilities import ExecutionTimer

# Upstream dependency failures: the request was fine, something it relies on was not
FAILED_DEPENDENCY = (ExternalToolMissing, TranscriptionError, ScoringError, ProviderException, MediaDownloadError)


@lru_cache
def get_config() -> MetaCoachConfig:
    return MetaCoachConfig()


@lru_cache
def get_orchestrator() -> AnalysisOrchestrator:
    logger.info("Creating analysis orchestrator")
    return AnalysisOrchestrator.from_config(get_config())


def get_downloader() -> MediaDownloader:
    download = get_config().download
    return MediaDownloader(timeout_seconds=download.timeout_seconds, concurrency=download.concurrency)


def to_http_exception(e: Exception) -> HTTPException:
    """Map a pipeline failure onto an HTTP status."""
    if isinstance(e, FAILED_DEPENDENCY):
        return HTTPException(424, {"error_code": e.error_code, "message": str(e)})
    if isinstance(e, FrameExtractionError):
        return HTTPException(422, {"error_code": e.error_code, "message": str(e)})
    if isinstance(e, ValueError):
        return HTTPException(400, str(e))
    if isinstance(e, ConfigurationException):
        return HTTPException(500, "Service is not configured")
    return HTTPException(500, "Analysis failed")


async def run_analysis(orchestrator: AnalysisOrchestrator, media_bytes: bytes, media: MediaRecord) -> AnalysisResult:
    with ExecutionTimer() as timer:
        try:
            result = await orchestrator(media_bytes, media)
        except (MetaCoachException, ValueError) as e:
            logger.error(f"Analysis of {media.id} failed: {e}")
            raise to_http_exception(e) from e
    logger.info(f"Analysis of {media.id} served in {timer.elapsed_ms}ms")
    return result


async def analyze_upload(file: UploadFile, media: MediaRecord, orchestrator: AnalysisOrchestrator) -> AnalysisResult:
    media_bytes = await file.read()
    if not media_bytes:
        raise HTTPException(400, "Uploaded file is empty")
    logger.info(f"Received {file.filename} ({len(media_bytes)} bytes) for {media.media_type.value} {media.id}")
    return await run_analysis(orchestrator, media_bytes, media)


async def analyze_remote(
    media: MediaRecord, orchestrator: AnalysisOrchestrator, downloader: MediaDownloader
) -> AnalysisResult:
    try:
        media_bytes, media = await downloader.download_media_with_metadata(media)
    except MediaDownloadError as e:
        logger.error(f"Download of {media.id} failed: {e}")
        raise to_http_exception(e) from e
    return await run_analysis(orchestrator, media_bytes, media)
