from typing import Sequence

from loguru import logger

from metacoach.analysis_pipeline.core.models import Frame, HookAnalysis
from metacoach.analysis_pipeline.core.scoring.base_scorer import BaseScorer, ScoringContext
from metacoach.analysis_pipeline.core.scoring.parsing import ScoreFieldSpec, extract_list_items, parse_score_fields
from metacoach.analysis_pipeline.core.scoring.prompts import HOOK_SYSTEM_PROMPT, hook_user_prompt

HOOK_CANDIDATE_FRAMES = 5
HOOK_FRAMES_SENT = 3
TRANSCRIPT_EXCERPT_CHARS = 200

HOOK_FIELDS = (ScoreFieldSpec("score", r"score"),)


class HookScorer(BaseScorer):
    """Rates the opening seconds of a video for attention-grabbing quality."""

    name = "hook"
    log_tag = "Hook Analysis"

    async def score(self, frames: Sequence[Frame], context: ScoringContext) -> HookAnalysis:
        self._require_frames(frames)
        hook_frames = list(frames[:HOOK_CANDIDATE_FRAMES])
        sent = hook_frames[:HOOK_FRAMES_SENT]
        logger.info(f"[{self.log_tag}] Analyzing {len(hook_frames)} frames...")

        excerpt = (context.transcript or "")[:TRANSCRIPT_EXCERPT_CHARS]
        reply = await self._complete(HOOK_SYSTEM_PROMPT, hook_user_prompt(excerpt), sent, detail="high")

        fields = parse_score_fields(reply, HOOK_FIELDS)
        result = HookAnalysis(
            score=fields["score"],
            strengths=extract_list_items(reply, "strength"),
            weaknesses=extract_list_items(reply, "weakness"),
            recommendations=extract_list_items(reply, "recommendation"),
            key_frames=self._to_base64(hook_frames),
        )
        logger.info(f"[{self.log_tag}] Score: {result.score}/100")
        return result
