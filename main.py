import logging
import sys

from cineai.documents import extract_text_from_file
from cineai.logic import parse_description


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "data/example.txt"
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with open(path, "rb") as f:
        text = extract_text_from_file(path, f.read())

    analysis = parse_description(text)

    print("=" * 60)
    print(f"{analysis.title}")
    print(f"Жанр: {analysis.genre} | Настроение: {analysis.mood}")
    characters = [f"{c.name} ({c.gender})" for c in analysis.characters]
    print(f"Персонажи: {', '.join(characters) if characters else '-'}")

    for scene in analysis.scenes:
        print("=" * 60)
        print(f"СЦЕНА {scene.id}")
        print("-" * 60)
        print(f"Локация: {scene.location}")
        print(f"Время суток: {scene.time}")
        print(f"Персонажи: {', '.join(scene.characters)}")
        print(f"Эмоция: {scene.emotion}")
        if scene.dialogue:
            print(f"Реплика: {scene.dialogue}")
        print(f"Действие: {scene.action}")
        print("\n")


if __name__ == "__main__":
    main()
