import pytest

from metacoach.utils.cost import estimate_cost


def test_gpt4o_pricing():
    assert estimate_cost("gpt-4o", 2000, 500) == pytest.approx(0.005 + 0.005)


def test_whisper_has_no_output_cost():
    assert estimate_cost("whisper-1", 3000, 1000) == pytest.approx(0.018)


def test_unknown_model_is_free():
    assert estimate_cost("my-local-model", 10_000, 10_000) == 0.0
