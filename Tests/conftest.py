import boto3
import pytest
from moto import mock_aws
from DB.DB import create_items_table

@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-southeast-2")

# A fresh mocked items table per test, dropped with the mock when the test ends
@pytest.fixture
def item_table(mock_env):
    with mock_aws():
        yield create_items_table(boto3.resource('dynamodb', region_name='ap-southeast-2'))
