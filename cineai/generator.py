import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx

from cineai import voice
from cineai.config import settings
from cineai.logic import StoryAnalysis, parse_description
from cineai.photos import PhotoSearch
from cineai.video import VideoSettings, create_video_from_photos

logger = logging.getLogger(__name__)

VOICED_SCENES = 3

ProgressCallback = Callable[[float], None]


@dataclass
class FilmResult:
    video_url: str
    analysis: StoryAnalysis
    photos: List[str] = field(default_factory=list)
    video: Dict[str, int] = field(default_factory=dict)
    voiceovers: List[Path] = field(default_factory=list)


class VideoGenerator:
    def __init__(
        self,
        client: httpx.AsyncClient,
        photo_search: Optional[PhotoSearch] = None,
        video_settings: Optional[VideoSettings] = None,
        voiceover_enabled: Optional[bool] = None,
        voice_dir: Optional[Path] = None,
    ) -> None:
        self.client = client
        self.photo_search = photo_search or PhotoSearch(client)
        self.video_settings = video_settings or VideoSettings.from_settings()
        self.voiceover_enabled = settings.voiceover_enabled if voiceover_enabled is None else voiceover_enabled
        self.voice_dir = voice_dir or settings.voice_dir

    async def generate_film(self, description: str, on_progress: ProgressCallback) -> FilmResult:
        on_progress(10)
        analysis = parse_description(description)

        on_progress(20)
        fallback = self.photo_search.fallback_url
        all_photos: List[str] = []
        total = len(analysis.scenes)

        for i, scene in enumerate(analysis.scenes):
            character = analysis.find_character(scene)
            photos = await self.photo_search.search_photos(scene, character)
            all_photos.append(photos[0] if photos else fallback)
            on_progress(20 + (i + 1) / total * 40)

        on_progress(70)
        voiceovers: List[Path] = []
        if self.voiceover_enabled:
            for scene in analysis.scenes[:VOICED_SCENES]:
                character = analysis.find_character(scene)
                if scene.dialogue and character:
                    path = await voice.generate_voiceover(scene.dialogue, character.gender, self.voice_dir)
                    voiceovers.append(path)

        on_progress(85)
        video = await create_video_from_photos(
            self.client, all_photos, analysis.scenes, analysis.characters, self.video_settings,
        )

        on_progress(100)
        logger.info("Фильм %r готов: %d сцен, %d кадров", analysis.title, total, video["frames"])

        return FilmResult(
            video_url=all_photos[0] if all_photos else fallback,
            analysis=analysis,
            photos=all_photos,
            video=video,
            voiceovers=voiceovers,
        )
