import json
from pathlib import Path

import pytest
import respx
from httpx import Response
from planka_mcp.core.client import PlankaClient
from planka_mcp.core.config import PlankaConfig

BASE_URL = "https://planka.example.com"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def config():
    return PlankaConfig(
        base_url=BASE_URL, username="agent@example.com", password="s3cret"
    )


@pytest.fixture
def client(config):
    return PlankaClient(config)


@pytest.fixture
def load_fixture():
    def _load(name: str):
        return json.loads((FIXTURES_DIR / name).read_text())

    return _load


@pytest.fixture
def mock_login():
    """Register the token endpoint on the active respx router."""

    def _mock(*tokens: str):
        tokens = tokens or ("token-1",)
        return respx.post(f"{BASE_URL}/api/access-tokens").mock(
            side_effect=[Response(200, json={"item": t}) for t in tokens]
        )

    return _mock
