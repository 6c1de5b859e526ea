import pytest

from metacoach.analysis_pipeline.core.models import ContentQuality, HookAnalysis
from metacoach.analysis_pipeline.core.scoring.parsing import (
    DEFAULT_SCORE,
    ScoreFieldSpec,
    extract_list_items,
    parse_score_fields,
    rounded_mean,
)

FIELDS = (
    ScoreFieldSpec("visual_appeal", r"visual\s+appeal"),
    ScoreFieldSpec("engagement", r"engagement"),
    ScoreFieldSpec("overall", r"overall(?:\s+score)?", default=None),
)


def test_labels_are_case_insensitive_and_first_match_wins():
    text = "VISUAL APPEAL: 85\nengagement 70\nEngagement: 10"
    assert parse_score_fields(text, FIELDS) == {"visual_appeal": 85, "engagement": 70, "overall": None}


def test_missing_labels_fall_back_to_default():
    values = parse_score_fields("The post looks great, nothing to add.", FIELDS)
    assert values["visual_appeal"] == DEFAULT_SCORE
    assert values["engagement"] == DEFAULT_SCORE
    assert values["overall"] is None


def test_empty_reply_does_not_raise():
    assert parse_score_fields("", FIELDS)["engagement"] == 50


@pytest.mark.parametrize(
    "values, expected",
    [
        ([85, 70, 90], 82),
        ([80, 70, 90], 80),
        ([50, 51], 51),
        ([0, 1], 1),
        ([], DEFAULT_SCORE),
    ],
)
def test_rounded_mean_rounds_half_up(values, expected):
    assert rounded_mean(values) == expected


def test_bulleted_items_are_preferred_and_capped():
    text = "\n".join(
        ["Our suggestion overall is to post more."]
        + [f"{i}. Suggestion number {i}" for i in range(1, 8)]
    )
    items = extract_list_items(text, "suggestion")
    assert items == [f"Suggestion number {i}" for i in range(1, 6)]


def test_dash_and_star_bullets():
    text = "- Weakness: late text\n* weakness in pacing\n• Another weakness"
    assert extract_list_items(text, "weakness") == ["Weakness: late text", "weakness in pacing", "Another weakness"]


def test_fallback_strips_list_markers():
    text = "Strengths\n  3) strength: good light\nnothing else"
    assert extract_list_items(text, "strength") == ["Strengths", "strength: good light"]


def test_no_keyword_yields_empty_list():
    assert extract_list_items("Score: 40", "recommendation") == []
    assert extract_list_items("", "recommendation") == []


def test_scores_are_clamped_into_range():
    hook = HookAnalysis(score=140)
    quality = ContentQuality(overall_score=-5, visual_appeal=101, engagement=50, relevance=100)
    assert hook.score == 100
    assert quality.overall_score == 0
    assert quality.visual_appeal == 100
