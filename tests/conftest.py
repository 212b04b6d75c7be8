import pytest
from fastapi.testclient import TestClient
from app import app, get_sender
from models.address import Address
from models.message import EmailMessage
from senders.mock_senders import MockSender
from settings import ZeptoMailSettings

@pytest.fixture
def settings():
    return ZeptoMailSettings(api_key="test-key", retries=2, retry_sleep_ms=200)

@pytest.fixture
def basic_message():
    return EmailMessage(
        sender=Address(address="a@x.com"),
        to=[Address(address="b@x.com")],
        subject="Hi",
        html_body="<p>hi</p>",
    )

@pytest.fixture
def mock_sender():
    return MockSender()

@pytest.fixture
def client(mock_sender):
    app.dependency_overrides[get_sender] = lambda: mock_sender
    yield TestClient(app)
    app.dependency_overrides.clear()
