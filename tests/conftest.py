import pytest

from seedclaw.config import Settings


@pytest.fixture
def settings():
    return Settings(api_key="k", gateway_url="http://gateway.test:18789")


@pytest.fixture
def image_body():
    return {
        "model": "doubao-seedream-4-5-251128",
        "created": 1757321139,
        "data": [{"url": "https://cdn.test/out.png", "size": "1024x1024"}],
    }
