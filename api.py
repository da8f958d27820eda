import logging
from dataclasses import asdict
from pathlib import Path

import httpx
from fastapi import BackgroundTasks, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel

from cineai.config import settings
from cineai.documents import UnsupportedFileError, extract_text_from_file
from cineai.generator import VideoGenerator
from cineai.history import History, as_dict
from cineai.logic import parse_description

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "cineai" / "static"
PREVIEW_PHOTOS = 5

app = FastAPI(title="CineAI")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

history = History()


class TextRequest(BaseModel):
    text: str = ""


class GenerateRequest(BaseModel):
    description: str = ""


def build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True)


# ============================================================
# 📌 ГЕНЕРАЦИЯ
# ============================================================

async def run_generation(generation_id: str, description: str) -> None:
    def on_progress(value: float) -> None:
        history.set_progress(generation_id, value)

    try:
        async with build_client() as client:
            result = await VideoGenerator(client).generate_film(description, on_progress)
    except Exception:
        logger.exception("Не удалось создать фильм %s", generation_id)
        history.fail(generation_id)
        return

    history.complete(
        generation_id, result.video_url, result.photos[:PREVIEW_PHOTOS], genre=result.analysis.genre,
    )
    logger.info(
        "Создан фильм \"%s\" (%s)", result.analysis.title, result.analysis.genre,
    )


# ============================================================
# 📌 API
# ============================================================

@app.get("/")
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.post("/parse_text")
async def parse_text(data: TextRequest):
    return asdict(parse_description(data.text))


@app.post("/parse_file")
async def parse_file(file: UploadFile = File(...)):
    content = await file.read()

    try:
        text = extract_text_from_file(file.filename, content)
    except UnsupportedFileError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return {"text": text, "analysis": asdict(parse_description(text))}


@app.post("/generate", status_code=202)
async def generate(data: GenerateRequest, background_tasks: BackgroundTasks):
    if not data.description.strip():
        raise HTTPException(status_code=400, detail="Пожалуйста, опишите ваш фильм")

    item = history.start(data.description)
    background_tasks.add_task(run_generation, item.id, data.description)
    return as_dict(item)


@app.get("/history")
async def list_history():
    return [as_dict(item) for item in history.list()]


@app.get("/history/{generation_id}")
async def get_history(generation_id: str):
    item = history.get(generation_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Генерация не найдена")
    return as_dict(item)


@app.post("/upload_video")
async def upload_video(file: UploadFile = File(...)):
    logger.info("Получено видео %s", file.filename)
    return {
        "filename": file.filename,
        "status": "accepted",
        "message": "Обработка запущена",
    }


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print(">>> http://127.0.0.1:8000")
    uvicorn.run(app, host="127.0.0.1", port=8000)
