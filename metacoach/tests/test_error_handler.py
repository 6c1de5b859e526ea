import pytest

from metacoach.exceptions import FrameExtractionError, ProviderException
from metacoach.utils.error_handler import convert_exceptions, log_exceptions


@convert_exceptions({OSError: FrameExtractionError})
async def write_fails():
    raise OSError("disk full")


@convert_exceptions({OSError: FrameExtractionError})
def already_domain_error():
    raise ProviderException("upstream", error_code="PROVIDER_ERROR")


@convert_exceptions({OSError: FrameExtractionError})
def unrelated():
    raise KeyError("missing")


@log_exceptions(include_traceback=False)
async def logged():
    raise ValueError("bad input")


async def test_mapped_exception_is_converted():
    with pytest.raises(FrameExtractionError) as exc_info:
        await write_fails()
    assert exc_info.value.details == {"original_exception": "OSError"}
    assert isinstance(exc_info.value.__cause__, OSError)


def test_domain_exceptions_pass_through():
    with pytest.raises(ProviderException):
        already_domain_error()


def test_unmapped_exceptions_pass_through():
    with pytest.raises(KeyError):
        unrelated()


async def test_log_exceptions_reraises():
    with pytest.raises(ValueError):
        await logged()
