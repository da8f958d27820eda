import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Iterator, List, Optional, Union

import httpx
from PIL import Image, ImageDraw, ImageFont

from cineai.config import settings
from cineai.logic import Character, Scene

logger = logging.getLogger(__name__)

ZOOM = 0.1
BAND_HEIGHT = 150
BAND_COLOR = (0, 0, 0, 128)
CAPTION_COLOR = "#d4af37"
CAPTION_LENGTH = 80
CAPTION_SIZE = 36
CAPTION_BASELINE = 60


@dataclass
class VideoSettings:
    width: int = 1920
    height: int = 1080
    fps: int = 30
    scene_duration: int = 5

    @classmethod
    def from_settings(cls) -> "VideoSettings":
        return cls(
            width=settings.video_width,
            height=settings.video_height,
            fps=settings.video_fps,
            scene_duration=settings.scene_duration,
        )

    @property
    def frames_per_scene(self) -> int:
        return self.fps * self.scene_duration


def caption_font(size: int = CAPTION_SIZE) -> Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]:
    try:
        return ImageFont.truetype("Montserrat-Bold.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


async def load_image(client: httpx.AsyncClient, url: str) -> Image.Image:
    response = await client.get(url)
    response.raise_for_status()
    image = Image.open(BytesIO(response.content))
    return image.convert("RGB")


def render_frames(image: Image.Image, caption: str, video: VideoSettings) -> Iterator[Image.Image]:
    """Кадры сцены: медленный наезд на фото и подпись на тёмной плашке."""
    width, height = video.width, video.height
    base = image.resize((width, height), Image.Resampling.BILINEAR)
    font = caption_font()
    text = caption[:CAPTION_LENGTH]
    total = video.frames_per_scene

    for frame in range(total):
        progress = frame / total
        scale = 1 + progress * ZOOM

        crop_w = width / scale
        crop_h = height / scale
        left = (width - crop_w) / 2
        top = (height - crop_h) / 2
        box = (round(left), round(top), round(left + crop_w), round(top + crop_h))
        canvas = base.crop(box).resize((width, height), Image.Resampling.BILINEAR)

        draw = ImageDraw.Draw(canvas, "RGBA")
        draw.rectangle((0, height - BAND_HEIGHT, width, height), fill=BAND_COLOR)

        text_width = draw.textlength(text, font=font)
        _, text_top, _, text_bottom = draw.textbbox((0, 0), text, font=font)
        draw.text(
            ((width - text_width) / 2, height - CAPTION_BASELINE - (text_bottom - text_top)),
            text,
            fill=CAPTION_COLOR,
            font=font,
        )

        yield canvas


def count_rendered(image: Image.Image, caption: str, video: VideoSettings) -> int:
    # Кадры рисуются и сразу отбрасываются
    return sum(1 for _ in render_frames(image, caption, video))


async def create_video_from_photos(
    client: httpx.AsyncClient,
    photos: List[str],
    scenes: List[Scene],
    characters: List[Character],
    video: Optional[VideoSettings] = None,
) -> Dict[str, int]:
    video = video or VideoSettings.from_settings()
    frames = 0

    for scene, photo_url in zip(scenes, photos):
        image = await load_image(client, photo_url)
        frames += await asyncio.to_thread(count_rendered, image, scene.action, video)
        logger.debug("Сцена %d отрисована, всего кадров: %d", scene.id, frames)

    logger.info("Черновик видео: %d кадров %dx%d", frames, video.width, video.height)
    return {"frames": frames, "width": video.width, "height": video.height}
