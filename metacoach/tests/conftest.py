import pytest

from metacoach.tests.stubs import DEFAULT_REPLIES, StubDecoder, StubTranscriptionProvider, StubVisionProvider


@pytest.fixture
def stub_decoder():
    return StubDecoder()


@pytest.fixture
def vision_provider():
    return StubVisionProvider(DEFAULT_REPLIES)


@pytest.fixture
def transcription_provider():
    return StubTranscriptionProvider()
