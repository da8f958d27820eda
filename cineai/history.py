import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

PLACEHOLDER_THUMBNAIL = "https://images.unsplash.com/photo-1485846234645-a62644f84728?w=400"
TITLE_LENGTH = 50
SLIDE_INTERVAL_MS = 3000


@dataclass
class Generation:
    id: str
    title: str
    status: str  # processing | completed | failed
    progress: float
    thumbnail: str
    video_url: Optional[str] = None
    photos: Optional[List[str]] = None
    genre: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)


def demo_generations() -> List[Generation]:
    return [
        Generation(
            id="1",
            title="Драматическая сцена в ресторане",
            status="completed",
            progress=100,
            thumbnail="https://images.unsplash.com/photo-1478720568477-152d9b164e26?w=400",
            video_url="https://images.unsplash.com/photo-1478720568477-152d9b164e26?w=1200",
            photos=[
                "https://images.unsplash.com/photo-1478720568477-152d9b164e26?w=1200",
                "https://images.unsplash.com/photo-1514933651103-005eec06c04b?w=1200",
                "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=1200",
            ],
            genre="драма",
            created_at=datetime(2024, 11, 13),
        ),
        Generation(
            id="2",
            title="Романтическая прогулка по городу",
            status="processing",
            progress=67,
            thumbnail="https://images.unsplash.com/photo-1514565131-fce0801e5785?w=400",
            created_at=datetime(2024, 11, 14),
        ),
    ]


class History:
    """История генераций в памяти процесса, новые сверху."""

    def __init__(self, items: Optional[List[Generation]] = None) -> None:
        self._items: List[Generation] = demo_generations() if items is None else list(items)

    def list(self) -> List[Generation]:
        return list(self._items)

    def get(self, generation_id: str) -> Optional[Generation]:
        for item in self._items:
            if item.id == generation_id:
                return item
        return None

    def _require(self, generation_id: str) -> Generation:
        item = self.get(generation_id)
        if item is None:
            raise KeyError(generation_id)
        return item

    def start(self, description: str) -> Generation:
        generation_id = str(time.time_ns() // 1_000_000)
        while self.get(generation_id) is not None:
            generation_id = str(int(generation_id) + 1)

        item = Generation(
            id=generation_id,
            title=description[:TITLE_LENGTH] + "...",
            status="processing",
            progress=0,
            thumbnail=PLACEHOLDER_THUMBNAIL,
        )
        self._items.insert(0, item)
        return item

    def set_progress(self, generation_id: str, progress: float) -> Generation:
        item = self._require(generation_id)
        item.progress = min(progress, 100)
        return item

    def complete(
        self, generation_id: str, video_url: str, photos: List[str], genre: Optional[str] = None,
    ) -> Generation:
        item = self._require(generation_id)
        item.status = "completed"
        item.progress = 100
        item.thumbnail = photos[0] if photos else video_url
        item.video_url = video_url
        item.photos = list(photos)
        item.genre = genre
        return item

    def fail(self, generation_id: str) -> Generation:
        item = self._require(generation_id)
        item.status = "failed"
        item.progress = 0
        return item


# ============================================================
#  ПРОСМОТР
# ============================================================

def next_photo_index(current: int, photos: Optional[List[str]]) -> int:
    max_index = (len(photos) if photos else 1) - 1
    return 0 if current >= max_index else current + 1


def photo_scale(index: int) -> float:
    return 1 + (index % 2) * 0.1


def slideshow(item: Generation) -> Dict:
    """Кадры просмотра: фото, масштаб и индекс следующего кадра."""
    photos = item.photos or [item.video_url or item.thumbnail]
    return {
        "interval_ms": SLIDE_INTERVAL_MS,
        "frames": [
            {"src": src, "scale": photo_scale(i), "next": next_photo_index(i, photos)}
            for i, src in enumerate(photos)
        ],
    }


MONTHS = [
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
]


def format_created(value: datetime) -> str:
    return f"{value.day} {MONTHS[value.month - 1]} {value.year} г."


def as_dict(item: Generation) -> Dict:
    return {
        "id": item.id,
        "title": item.title,
        "status": item.status,
        "progress": item.progress,
        "thumbnail": item.thumbnail,
        "video_url": item.video_url,
        "photos": item.photos,
        "genre": item.genre,
        "slideshow": slideshow(item),
        "created_at": item.created_at.isoformat(),
        "created_label": format_created(item.created_at),
    }
