import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional

import edge_tts

logger = logging.getLogger(__name__)

RATE = "-10%"
PITCH = {"female": "+20Hz", "male": "-20Hz"}


def pick_voice(voices: List[Dict[str, str]], gender: str) -> Optional[str]:
    russian = [v for v in voices if v.get("Locale", "").lower().startswith("ru")]
    wanted = "Female" if gender == "female" else "Male"

    for voice in russian:
        if voice.get("Gender") == wanted:
            return voice["ShortName"]
    if russian:
        return russian[0]["ShortName"]
    if voices:
        return voices[0]["ShortName"]
    return None


async def generate_voiceover(text: str, gender: str, output_dir: Path) -> Path:
    voices = await edge_tts.list_voices()
    voice = pick_voice(voices, gender)
    if voice is None:
        raise RuntimeError("Нет доступных голосов для озвучки")

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"voiceover_{uuid.uuid4().hex}.mp3"

    communicate = edge_tts.Communicate(
        text,
        voice=voice,
        rate=RATE,
        pitch=PITCH.get(gender, "+0Hz"),
    )
    await communicate.save(str(output_path))

    logger.info("Озвучка (%s, %s) сохранена: %s", voice, gender, output_path)
    return output_path
