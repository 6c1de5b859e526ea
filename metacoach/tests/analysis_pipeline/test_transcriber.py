import pytest

from metacoach.analysis_pipeline.core.transcription import Transcriber
from metacoach.exceptions import TranscriptionError
from metacoach.tests.stubs import StubTranscriptionProvider


async def test_transcribe_returns_text_language_and_timing():
    provider = StubTranscriptionProvider(text="Welcome back to the channel")
    transcript = await Transcriber(provider, language="en").transcribe(b"video-bytes")

    assert transcript.text == "Welcome back to the channel"
    assert transcript.language == "en"
    assert transcript.duration_ms >= 0
    assert provider.calls == [
        {"size": 11, "filename": "video.mp4", "language": "en", "response_format": "verbose_json"}
    ]


async def test_silent_video_yields_empty_text():
    transcript = await Transcriber(StubTranscriptionProvider(text="")).transcribe(b"silence")
    assert transcript.text == ""


async def test_provider_failure_becomes_transcription_error():
    with pytest.raises(TranscriptionError) as exc_info:
        await Transcriber(StubTranscriptionProvider(fail=True)).transcribe(b"video")
    assert str(exc_info.value).startswith("Failed to generate transcript")
    assert exc_info.value.error_code == "TRANSCRIPTION_FAILED"
