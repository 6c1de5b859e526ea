import base64
from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(value) -> int:
    """Coerce a model-reported score to an int in [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, int(value)))


Score = Annotated[int, BeforeValidator(clamp_score)]


class MediaType(str, Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    CAROUSEL_ALBUM = "CAROUSEL_ALBUM"


class MediaRecord(BaseModel):
    """A media post as returned by the Graph API. Never mutated by the pipeline."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Platform media identifier")
    media_type: MediaType = Field(..., description="IMAGE, VIDEO or CAROUSEL_ALBUM")
    caption: Optional[str] = Field(None, description="Post caption, if any")
    timestamp: Optional[str] = Field(None, description="ISO-8601 publish time as reported by the platform")
    media_url: Optional[str] = Field(None, description="Download URL; absent for copyrighted or flagged media")
    thumbnail_url: Optional[str] = Field(None, description="Poster image URL for videos")
    permalink: Optional[str] = None


class Frame(BaseModel):
    """One decoded still image and its position in the extracted sequence."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    data: bytes
    timestamp: Optional[float] = Field(None, description="Approximate position in the video, in seconds")

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")


class VideoMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: float = 0.0
    width: int = 0
    height: int = 0
    fps: float = 30.0
    codec: str = "unknown"


class Transcript(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    language: str
    duration_ms: int = Field(..., ge=0, description="Wall-clock time spent transcribing")


class HookAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: Score
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    key_frames: List[str] = Field(default_factory=list, description="Base64 JPEG frames sent to the model")


class ThumbnailAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: Score
    clarity: Score
    composition: Score
    attention: Score
    recommendations: List[str] = Field(default_factory=list)


class ContentQuality(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: Score
    visual_appeal: Score
    engagement: Score
    relevance: Score
    suggestions: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Aggregated output of one analysis call. Ownership passes to the caller."""
    model_config = ConfigDict(frozen=True)

    media_id: str
    media_type: MediaType
    timestamp: str
    transcript: Optional[Transcript] = None
    hook_analysis: Optional[HookAnalysis] = None
    thumbnail_analysis: Optional[ThumbnailAnalysis] = None
    content_quality: Optional[ContentQuality] = None
    stage_errors: Dict[str, str] = Field(
        default_factory=dict,
        description="Stage name to error message for stages that failed without aborting the analysis"
    )
    analyzed_at: datetime
    processing_time_ms: int = Field(..., ge=0)
