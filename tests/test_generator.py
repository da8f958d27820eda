import asyncio
from pathlib import Path

import httpx

from cineai import voice
from cineai.generator import VideoGenerator
from cineai.photos import PhotoSearch

IMAGE_URL = "https://images.test/scene.png"
FALLBACK = "https://images.test/fallback.jpg"


def make_generator(client, small_video, tmp_path, voiceover_enabled=False):
    return VideoGenerator(
        client,
        photo_search=PhotoSearch(client, access_key="key", fallback_url=FALLBACK),
        video_settings=small_video,
        voiceover_enabled=voiceover_enabled,
        voice_dir=tmp_path,
    )


class TestGenerateFilm:
    def test_progress_and_result(self, story, film_transport, small_video, tmp_path):
        progress = []

        async def run():
            async with httpx.AsyncClient(transport=film_transport) as client:
                generator = make_generator(client, small_video, tmp_path)
                return await generator.generate_film(story, progress.append)

        result = asyncio.run(run())

        assert progress[:2] == [10, 20]
        assert progress[2:5] == [20 + 1 / 3 * 40, 20 + 2 / 3 * 40, 60]
        assert progress[-3:] == [70, 85, 100]
        assert result.video_url == IMAGE_URL
        assert result.photos == [IMAGE_URL] * 3
        assert result.video == {"frames": 6, "width": 32, "height": 18}
        assert result.analysis.genre == "драма"
        assert result.voiceovers == []

    def test_no_scenes_uses_fallback(self, film_transport, small_video, tmp_path):
        progress = []

        async def run():
            async with httpx.AsyncClient(transport=film_transport) as client:
                generator = make_generator(client, small_video, tmp_path)
                return await generator.generate_film("Коротко.", progress.append)

        result = asyncio.run(run())

        assert result.video_url == FALLBACK
        assert result.photos == []
        assert result.video["frames"] == 0
        assert progress == [10, 20, 70, 85, 100]

    def test_voiceover_for_dialogue(self, film_transport, small_video, tmp_path, monkeypatch):
        calls = []

        async def fake_voiceover(text, gender, output_dir):
            calls.append((text, gender, output_dir))
            return Path(output_dir) / "voice.mp3"

        monkeypatch.setattr(voice, "generate_voiceover", fake_voiceover)
        description = "Катя говорит: «Я всё знаю». Ваня молчит и смотрит в окно."

        async def run():
            async with httpx.AsyncClient(transport=film_transport) as client:
                generator = make_generator(client, small_video, tmp_path, voiceover_enabled=True)
                return await generator.generate_film(description, lambda value: None)

        result = asyncio.run(run())

        assert calls == [("Я всё знаю", "female", tmp_path)]
        assert result.voiceovers == [tmp_path / "voice.mp3"]

    def test_voiceover_disabled(self, film_transport, small_video, tmp_path, monkeypatch):
        async def fail_voiceover(text, gender, output_dir):
            raise AssertionError("voiceover must not run")

        monkeypatch.setattr(voice, "generate_voiceover", fail_voiceover)
        description = "Катя говорит: «Я всё знаю». Ваня молчит и смотрит в окно."

        async def run():
            async with httpx.AsyncClient(transport=film_transport) as client:
                generator = make_generator(client, small_video, tmp_path)
                return await generator.generate_film(description, lambda value: None)

        assert asyncio.run(run()).voiceovers == []
