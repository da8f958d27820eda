import re
from typing import List

TOKEN_RE = re.compile(r"[А-Яа-яЁёA-Za-z\-]+")

# Предложение заканчивается любой серией . ! ?
SENTENCE_END_RE = re.compile(r"[.!?]+")

# Слишком короткие обрывки ("Ночь.", "Да!") сценой не считаются
MIN_SENTENCE_LENGTH = 10


def normalize(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = text.replace("\r", "\n")
    text = text.replace("\u2028", "\n")
    text = text.replace("\u00A0", " ")
    text = re.sub(r"\n{2,}", "\n", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    return text.strip()


def tokenize(text: str) -> List[str]:
    return TOKEN_RE.findall(text)


def split_sentences(text: str) -> List[str]:
    sentences = []

    for chunk in SENTENCE_END_RE.split(text):
        chunk = chunk.strip()
        if len(chunk) > MIN_SENTENCE_LENGTH:
            sentences.append(chunk)

    return sentences
