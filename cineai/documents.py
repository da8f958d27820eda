import re
from io import BytesIO

import pdfplumber
from docx import Document
from striprtf.striprtf import rtf_to_text

from cineai.splitter import normalize

SUPPORTED_EXTENSIONS = {"txt", "docx", "pdf", "rtf"}


class UnsupportedFileError(ValueError):
    pass


# ============================================================
# 📌 DOCX: все run'ы абзаца склеиваются в одну строку
# ============================================================

def _paragraph_text(paragraph) -> str:
    full = "".join(run.text for run in paragraph.runs)
    return full.replace("\u00A0", " ").strip()


def extract_docx_text(content: bytes) -> str:
    doc = Document(BytesIO(content))

    lines = []

    for p in doc.paragraphs:
        full = _paragraph_text(p)
        if full:
            lines.append(full)

    # Таблицы Word
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for p in cell.paragraphs:
                    full = _paragraph_text(p)
                    if full:
                        lines.append(full)

    return normalize("\n".join(lines))


# ============================================================
# 📌 PDF
# ============================================================

def extract_pdf_text(content: bytes) -> str:
    parts = []

    with pdfplumber.open(BytesIO(content)) as pdf:
        for page in pdf.pages:
            tx = page.extract_text()
            if not tx:
                continue

            # перенос слова по слогам
            tx = tx.replace("-\n", "")
            parts.append(tx.replace("\n", " "))

    result = " ".join(parts).replace("\u00A0", " ")
    return " ".join(result.split())


# ============================================================
# 📌 TXT / RTF
# ============================================================

def decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("cp1251", errors="ignore")


def extract_rtf_text(content: bytes) -> str:
    return normalize(rtf_to_text(decode_text(content)))


# ============================================================
# 📌 Общий экстрактор
# ============================================================

def file_extension(filename: str) -> str:
    match = re.search(r"\.([A-Za-z0-9]+)$", filename or "")
    return match.group(1).lower() if match else ""


def extract_text_from_file(filename: str, content: bytes) -> str:
    ext = file_extension(filename)

    if ext == "txt":
        return normalize(decode_text(content))

    if ext == "docx":
        return extract_docx_text(content)

    if ext == "pdf":
        return extract_pdf_text(content)

    if ext == "rtf":
        return extract_rtf_text(content)

    raise UnsupportedFileError(f"Неподдерживаемый формат файла: {filename}")
