from typing import Optional

from pydantic import BaseModel, Field

from metacoach.analysis_pipeline import MediaRecord, MediaType


class AnalyzeUploadRequest(BaseModel):
    """Form fields sent alongside an uploaded media file."""
    media_id: str = Field(..., min_length=1, examples=["17890001"])
    media_type: MediaType = Field(..., examples=["VIDEO"])
    caption: Optional[str] = Field(None, examples=["Unboxing the new camera"])
    timestamp: Optional[str] = Field(None, examples=["2024-05-01T18:22:10+0000"])

    def to_media_record(self) -> MediaRecord:
        return MediaRecord(
            id=self.media_id,
            media_type=self.media_type,
            caption=self.caption,
            timestamp=self.timestamp,
        )


class AnalyzeUrlRequest(MediaRecord):
    """A post as returned by the Graph API; its media_url is downloaded and analysed."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "17890001",
                    "media_type": "VIDEO",
                    "caption": "Unboxing the new camera",
                    "timestamp": "2024-05-01T18:22:10+0000",
                    "media_url": "https://scontent.cdninstagram.com/v/example.mp4",
                }
            ]
        }
    }
