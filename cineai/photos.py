import logging
from typing import List, Optional

import httpx

from cineai.config import settings
from cineai.logic import DEFAULT_EMOTION, Character, Scene

logger = logging.getLogger(__name__)

MAX_PHOTOS = 5
PER_PAGE = 3

LOCATION_QUERIES = {
    "ресторан": "restaurant interior cinematic",
    "улица": "city street night cinematic",
    "дом": "home interior modern",
    "офис": "office interior professional",
    "машина": "car interior driving",
}


def build_queries(scene: Scene, character: Optional[Character]) -> List[str]:
    queries = [LOCATION_QUERIES.get(scene.location, scene.location)]

    if character:
        parts = ["man" if character.gender == "male" else "woman"]
        if scene.emotion != DEFAULT_EMOTION:
            parts.append(scene.emotion)
        parts.append("cinematic portrait")
        queries.append(" ".join(parts))

    return queries


class PhotoSearch:
    """Поиск стоковых фото для сцены через Unsplash."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_key: Optional[str] = None,
        api_url: Optional[str] = None,
        fallback_url: Optional[str] = None,
    ) -> None:
        self.client = client
        self.access_key = access_key if access_key is not None else settings.unsplash_access_key
        self.api_url = api_url or settings.unsplash_api_url
        self.fallback_url = fallback_url or settings.fallback_photo_url

    async def _search(self, query: str) -> List[str]:
        response = await self.client.get(
            self.api_url,
            params={"query": query, "per_page": PER_PAGE, "orientation": "landscape"},
            headers={"Authorization": f"Client-ID {self.access_key}"},
        )
        response.raise_for_status()
        data = response.json()

        urls = []
        for item in data.get("results") or []:
            url = (item.get("urls") or {}).get("regular")
            if url:
                urls.append(url)
        return urls

    async def search_photos(self, scene: Scene, character: Optional[Character]) -> List[str]:
        if not self.access_key:
            logger.warning("UNSPLASH_ACCESS_KEY не задан, сцена %d получит запасное фото", scene.id)
            return [self.fallback_url]

        photos: List[str] = []

        for query in build_queries(scene, character):
            try:
                photos.extend(await self._search(query))
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("Ошибка поиска фото по запросу %r: %s", query, exc)
                photos.append(self.fallback_url)

        return photos[:MAX_PHOTOS]
