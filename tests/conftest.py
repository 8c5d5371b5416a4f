import pytest

from ingest_core.webhook_auth import WebhookAuthConfig, WebhookGate

SECRET = "s3cret-key-0123456789abcdef01234567"
NOW = 1_735_689_600
PAYLOAD = b'{"a":1}'


@pytest.fixture
def config():
    return WebhookAuthConfig(secret=SECRET, environment="production")


@pytest.fixture
def gate(config):
    return WebhookGate(config, clock=lambda: NOW)


@pytest.fixture
def dev_gate():
    return WebhookGate(WebhookAuthConfig(secret=None, environment="development"), clock=lambda: NOW)


@pytest.fixture
def prod_gate_without_secret():
    return WebhookGate(WebhookAuthConfig(secret=None, environment="production"), clock=lambda: NOW)
