from fastapi import APIRouter, Depends, File, UploadFile

from metacoach.analysis_pipeline import AnalysisOrchestrator, AnalysisResult
from metacoach.media import MediaDownloader
from app.schemas.analysis import AnalyzeUploadRequest, AnalyzeUrlRequest
from app.services.analysis_services import analyze_remote, analyze_upload, get_downloader, get_orchestrator

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    summary="Analyze an uploaded post",
    description="Upload the media file of a post. VIDEO gets transcript, hook and content scores; "
    "IMAGE gets thumbnail and content scores; CAROUSEL_ALBUM gets a thumbnail score for the lead image.",
)
async def analyze(
    file: UploadFile = File(...),
    data: AnalyzeUploadRequest = Depends(),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    return await analyze_upload(file, data.to_media_record(), orchestrator)


@router.post(
    "/analyze-url",
    response_model=AnalysisResult,
    summary="Download a post's media and analyze it",
)
async def analyze_url(
    media: AnalyzeUrlRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    downloader: MediaDownloader = Depends(get_downloader),
):
    return await analyze_remote(media, orchestrator, downloader)
