import pytest
from pydantic import ValidationError

from metacoach.config.settings import FrameExtractionConfig, MetaCoachConfig, OpenAIConfig


def test_defaults(monkeypatch):
    monkeypatch.delenv("OPENAI_VISION_MODEL", raising=False)
    config = OpenAIConfig()
    assert config.vision_model == "gpt-4o"
    assert config.transcription_model == "whisper-1"
    assert config.max_retries == 0

    frames = FrameExtractionConfig()
    assert frames.default_frame_count == 10
    assert frames.fallback_duration_seconds == 30.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_VISION_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("FRAMES_DEFAULT_QUALITY", "5")
    monkeypatch.setenv("VISION_PROVIDER", "openai")

    config = MetaCoachConfig()
    assert config.openai.vision_model == "gpt-4o-mini"
    assert config.frames.default_quality == 5
    assert config.openai is config.openai


def test_quality_is_validated():
    with pytest.raises(ValidationError):
        FrameExtractionConfig(default_quality=40)
