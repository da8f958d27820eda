import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()

FALLBACK_PHOTO = "https://images.unsplash.com/photo-1485846234645-a62644f84728?w=1200"


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Settings:
    """Настройки из переменных окружения (.env подхватывается автоматически)."""

    unsplash_access_key: Optional[str]
    unsplash_api_url: str
    fallback_photo_url: str
    http_timeout: float
    voiceover_enabled: bool
    voice_dir: Path
    video_width: int
    video_height: int
    video_fps: int
    scene_duration: int
    cors_origins: List[str]

    def __init__(self) -> None:
        self.unsplash_access_key = os.getenv("UNSPLASH_ACCESS_KEY")
        self.unsplash_api_url = os.getenv("UNSPLASH_API_URL", "https://api.unsplash.com/search/photos")
        self.fallback_photo_url = os.getenv("FALLBACK_PHOTO_URL", FALLBACK_PHOTO)
        self.http_timeout = float(os.getenv("HTTP_TIMEOUT", "30"))
        self.voiceover_enabled = _flag("VOICEOVER_ENABLED", "true")
        self.voice_dir = Path(os.getenv("VOICE_DIR", "voiceovers"))
        self.video_width = int(os.getenv("VIDEO_WIDTH", "1920"))
        self.video_height = int(os.getenv("VIDEO_HEIGHT", "1080"))
        self.video_fps = int(os.getenv("VIDEO_FPS", "30"))
        self.scene_duration = int(os.getenv("SCENE_DURATION", "5"))
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]


settings = Settings()
