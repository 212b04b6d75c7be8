import pytest
import requests
from unittest.mock import MagicMock, patch
from senders.errors import ZeptoHttpError
from utils.redaction import redact_headers
from utils.retry import RetryManager

@pytest.mark.parametrize("error,expected", [
    (requests.exceptions.ReadTimeout("read timed out"), True),
    (requests.exceptions.ConnectionError("reset"), True),
    (ZeptoHttpError(429, "slow down"), True),
    (ZeptoHttpError(502, ""), True),
    (ZeptoHttpError(400, "bad request"), False),
    (requests.exceptions.InvalidURL("nope"), False),
    (ValueError("boom"), False),
])
def test_is_transient_error(error, expected):
    assert RetryManager.is_transient_error(error) is expected

@patch("utils.retry.time.sleep")
def test_retries_are_sequential_with_fixed_delay(mock_sleep):
    func = MagicMock(side_effect=[ZeptoHttpError(500), ZeptoHttpError(503), "ok"])
    func.__name__ = "post"

    wrapped = RetryManager.with_retry(max_attempts=3, delay_seconds=0.5)(func)

    assert wrapped() == "ok"
    assert func.call_count == 3
    assert [c.args for c in mock_sleep.call_args_list] == [(0.5,), (0.5,)]

def test_redact_headers_hides_credentials():
    headers = {"Authorization": "Zoho-enczapikey abc", "Accept": "application/json"}
    assert redact_headers(headers) == {"Authorization": "Zoho-enczapikey ***", "Accept": "application/json"}
    assert redact_headers({"api_key": "abc"}) == {"api_key": "***"}
