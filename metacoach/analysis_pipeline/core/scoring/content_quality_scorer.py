from typing import List, Sequence

from loguru import logger

from metacoach.analysis_pipeline.core.models import ContentQuality, Frame
from metacoach.analysis_pipeline.core.scoring.base_scorer import BaseScorer, ScoringContext
from metacoach.analysis_pipeline.core.scoring.parsing import (
    ScoreFieldSpec,
    extract_list_items,
    parse_score_fields,
    rounded_mean,
)
from metacoach.analysis_pipeline.core.scoring.prompts import (
    IMAGE_CONTENT_SYSTEM_PROMPT,
    VIDEO_CONTENT_SYSTEM_PROMPT,
    image_content_user_prompt,
    video_content_user_prompt,
)

TRANSCRIPT_EXCERPT_CHARS = 500

CONTENT_FIELDS = (
    ScoreFieldSpec("visual_appeal", r"visual\s+appeal"),
    ScoreFieldSpec("engagement", r"engagement"),
    ScoreFieldSpec("relevance", r"relevance"),
    ScoreFieldSpec("overall", r"overall(?:\s+score)?", default=None),
)


def sample_frames(frames: Sequence[Frame]) -> List[Frame]:
    """First, middle and last frame. Short sequences repeat frames."""
    return [frames[0], frames[len(frames) // 2], frames[-1]]


class ContentQualityScorer(BaseScorer):
    """Rates overall production quality, engagement and relevance of a post."""

    name = "content_quality"
    log_tag = "Content Analysis"

    async def score(self, frames: Sequence[Frame], context: ScoringContext) -> ContentQuality:
        """
        Score a video (context carries a transcript) or a single image.

        Video requests carry three sampled frames at low detail plus the
        caption and a transcript excerpt; image requests carry the one image
        at high detail plus the caption.
        """
        self._require_frames(frames)

        if context.is_video:
            logger.info(f"[{self.log_tag}] Analyzing overall video quality...")
            excerpt = context.transcript[:TRANSCRIPT_EXCERPT_CHARS]
            reply = await self._complete(
                VIDEO_CONTENT_SYSTEM_PROMPT,
                video_content_user_prompt(context.caption, excerpt, len(frames)),
                sample_frames(frames),
                detail="low",
            )
        else:
            logger.info(f"[{self.log_tag}] Analyzing image content...")
            reply = await self._complete(
                IMAGE_CONTENT_SYSTEM_PROMPT,
                image_content_user_prompt(context.caption),
                frames[:1],
                detail="high",
            )

        fields = parse_score_fields(reply, CONTENT_FIELDS)
        sub_scores = [fields["visual_appeal"], fields["engagement"], fields["relevance"]]
        overall = fields["overall"]
        if overall is None:
            overall = rounded_mean(sub_scores)

        result = ContentQuality(
            overall_score=overall,
            visual_appeal=fields["visual_appeal"],
            engagement=fields["engagement"],
            relevance=fields["relevance"],
            suggestions=extract_list_items(reply, "suggestion"),
        )
        logger.info(f"[{self.log_tag}] Overall score: {result.overall_score}/100")
        return result
