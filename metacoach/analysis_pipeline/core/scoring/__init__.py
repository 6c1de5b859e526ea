from .base_scorer import BaseScorer, ScoringContext
from .content_quality_scorer import ContentQualityScorer
from .hook_scorer import HookScorer
from .parsing import ScoreFieldSpec, extract_list_items, parse_score_fields
from .thumbnail_scorer import ThumbnailScorer

__all__ = [
    "BaseScorer",
    "ScoringContext",
    "HookScorer",
    "ThumbnailScorer",
    "ContentQualityScorer",
    "ScoreFieldSpec",
    "parse_score_fields",
    "extract_list_items",
]
