"""
CineAI test fixtures
"""

import json
from io import BytesIO

import httpx
import pytest
from PIL import Image

from cineai.video import VideoSettings

IMAGE_URL = "https://images.test/scene.png"


STORY = (
    "Драматическая короткометражка о человеке, который решает проблему "
    "с друзьями через умную месть. Главный герой Ваня устраивает публичное "
    "разоблачение в ресторане. Ночью Ваня едет домой на машине и вспоминает всё."
)


@pytest.fixture
def story() -> str:
    return STORY


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (40, 30), "white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def small_video() -> VideoSettings:
    return VideoSettings(width=32, height=18, fps=2, scene_duration=1)


@pytest.fixture
def film_transport(png_bytes):
    """Unsplash answers with one image URL, image host serves a PNG."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == "api.unsplash.com":
            body = {"results": [{"urls": {"regular": IMAGE_URL}}]}
            return httpx.Response(200, content=json.dumps(body))
        return httpx.Response(200, content=png_bytes, headers={"Content-Type": "image/png"})

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport
