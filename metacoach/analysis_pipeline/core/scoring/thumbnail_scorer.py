from typing import Sequence

from loguru import logger

from metacoach.analysis_pipeline.core.models import Frame, ThumbnailAnalysis
from metacoach.analysis_pipeline.core.scoring.base_scorer import BaseScorer, ScoringContext
from metacoach.analysis_pipeline.core.scoring.parsing import (
    ScoreFieldSpec,
    extract_list_items,
    parse_score_fields,
    rounded_mean,
)
from metacoach.analysis_pipeline.core.scoring.prompts import THUMBNAIL_SYSTEM_PROMPT, thumbnail_user_prompt

THUMBNAIL_FIELDS = (
    ScoreFieldSpec("clarity", r"clarity"),
    ScoreFieldSpec("composition", r"composition"),
    ScoreFieldSpec("attention", r"attention"),
    # "Overall score: N", "Overall: N" or a bare "Score: N" line, never "Clarity score: N"
    ScoreFieldSpec("overall", r"(?:^[ \t]*(?:overall\s+)?score|\boverall(?:\s+score)?)", default=None),
)


class ThumbnailScorer(BaseScorer):
    """Rates a single image as it would appear in a feed."""

    name = "thumbnail"
    log_tag = "Thumbnail Analysis"

    def __init__(self, provider, max_tokens: int = 800):
        super().__init__(provider, max_tokens=max_tokens)

    async def score(self, frames: Sequence[Frame], context: ScoringContext) -> ThumbnailAnalysis:
        """Score the first supplied frame; the rest are ignored."""
        self._require_frames(frames)
        logger.info(f"[{self.log_tag}] Analyzing image quality...")

        reply = await self._complete(
            THUMBNAIL_SYSTEM_PROMPT, thumbnail_user_prompt(context.caption), frames[:1], detail="high"
        )

        fields = parse_score_fields(reply, THUMBNAIL_FIELDS)
        sub_scores = [fields["clarity"], fields["composition"], fields["attention"]]
        overall = fields["overall"]
        if overall is None:
            overall = rounded_mean(sub_scores)

        result = ThumbnailAnalysis(
            score=overall,
            clarity=fields["clarity"],
            composition=fields["composition"],
            attention=fields["attention"],
            recommendations=extract_list_items(reply, "recommendation"),
        )
        logger.info(f"[{self.log_tag}] Score: {result.score}/100")
        return result
