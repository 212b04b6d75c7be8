import json
import pytest
from unittest.mock import MagicMock
from email_factory import EmailFactory
from mapper.payload_mapper import PayloadMapper
from models.dispatch import DispatchResult
from senders.errors import ZeptoApiError, ZeptoConfigurationError
from senders.mock_senders import MockSender
from senders.zeptomail_sender import ZeptoMailSender
from settings import ZeptoMailSettings

HEADERS = {
    "Authorization": "Zoho-enczapikey test-key",
    "Accept": "application/json",
    "Content-Type": "application/json",
}

@pytest.fixture
def zepto_client():
    client = MagicMock()
    client.send.return_value = DispatchResult(
        path="/v1.1/email", response={"message": "OK", "request_id": "req-9"}, request_headers=HEADERS
    )
    return client

def test_send_posts_mapped_payload(settings, basic_message, zepto_client):
    sender = ZeptoMailSender(settings, client=zepto_client)
    expected = PayloadMapper(settings).map(basic_message)

    result = sender.send(basic_message)

    assert result.request_id == "req-9"
    zepto_client.send.assert_called_once()
    path, payload = zepto_client.send.call_args[0]
    assert path == "/v1.1/email"
    assert payload == expected.payload

def test_send_records_response_on_message_without_credentials(settings, basic_message, zepto_client):
    sender = ZeptoMailSender(settings, client=zepto_client)

    sender.send(basic_message)

    assert json.loads(basic_message.get_header("X-Zepto-Response")) == {"message": "OK", "request_id": "req-9"}
    recorded = json.loads(basic_message.get_header("X-Zepto-Request-Headers"))
    assert recorded["Authorization"] == "Zoho-enczapikey ***"
    assert recorded["Accept"] == "application/json"

def test_resend_does_not_forward_reporting_headers(settings, basic_message, zepto_client):
    sender = ZeptoMailSender(settings, client=zepto_client)
    sender.send(basic_message)
    sender.send(basic_message)

    payload = zepto_client.send.call_args[0][1]
    assert "mime_headers" not in payload

def test_failures_propagate_and_nothing_is_recorded(settings, basic_message, zepto_client):
    zepto_client.send.side_effect = ZeptoApiError({"error": {"message": "bad sender"}})
    sender = ZeptoMailSender(settings, client=zepto_client)

    with pytest.raises(ZeptoApiError):
        sender.send(basic_message)
    assert not basic_message.has_header("X-Zepto-Response")

def test_sender_requires_api_key():
    with pytest.raises(ZeptoConfigurationError):
        ZeptoMailSender(ZeptoMailSettings(api_key=""))

def test_mock_sender_records_requests(basic_message):
    sender = MockSender()
    result = sender.send(basic_message)
    assert result.path == "/v1.1/email"
    assert result.request_id.startswith("mock-")
    assert sender.sent[0].payload["subject"] == "Hi"

def test_factory_builds_senders(monkeypatch):
    monkeypatch.delenv("ZEPTOMAIL_MAIL_KEY", raising=False)
    assert isinstance(EmailFactory.get_sender("MOCK"), MockSender)
    assert isinstance(EmailFactory.get_sender("zeptomail", {"api_key": "k"}), ZeptoMailSender)

    with pytest.raises(ZeptoConfigurationError):
        EmailFactory.get_sender("zeptomail", {})
    with pytest.raises(ValueError, match="Unsupported provider"):
        EmailFactory.get_sender("smtp", {"api_key": "k"})
