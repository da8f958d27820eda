import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from pymorphy3 import MorphAnalyzer

from cineai.splitter import split_sentences, tokenize

logger = logging.getLogger(__name__)

# ============================================================
#  ИНИЦИАЛИЗАЦИЯ
# ============================================================

morph = MorphAnalyzer()

MAX_SCENES = 10
TITLE_LENGTH = 50

DEFAULT_GENRE = "драма"
DEFAULT_MOOD = "нейтральный"
DEFAULT_EMOTION = "нейтральная"
UNKNOWN_LOCATION = "неизвестная локация"
DEFAULT_HERO = "герой"


# ============================================================
#  МОДЕЛИ
# ============================================================

@dataclass
class Character:
    name: str
    gender: str  # "male" | "female"
    age: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Scene:
    id: int
    location: str
    characters: List[str]
    action: str
    emotion: str
    time: str  # "day" | "night" | "evening"
    dialogue: Optional[str] = None


@dataclass
class StoryAnalysis:
    title: str
    genre: str
    characters: List[Character] = field(default_factory=list)
    scenes: List[Scene] = field(default_factory=list)
    mood: str = DEFAULT_MOOD

    def find_character(self, scene: Scene) -> Optional[Character]:
        """Первый известный персонаж, присутствующий в сцене."""
        for character in self.characters:
            if character.name in scene.characters:
                return character
        return None


# ============================================================
#  СЛОВАРИ
# ============================================================

STOP_WORDS = {
    "и", "в", "во", "не", "что", "он", "она", "оно", "они", "а", "но", "же",
    "из", "у", "к", "по", "на", "за", "от", "до", "под", "над", "при", "для",
    "без", "или", "ли", "то", "это", "эта", "этот", "эти", "этом", "этих",
    "там", "тут", "здесь", "когда", "мы", "вы", "ты", "я", "его", "её", "ее",
    "их", "нам", "вам", "наш", "ваш", "который", "какая", "какое", "какие",
    "ну", "да", "нет", "ни", "тоже", "ещё", "еще", "бы", "уж", "сам", "сама",
    "каждый", "кто-то", "что-то", "где-то", "кто", "никто", "все", "всё"
}

CHARACTER_PATTERNS = [
    re.compile(r"(?:главный герой|героиня|персонаж)\s+([а-яё]+)", re.IGNORECASE),
    re.compile(r"([А-ЯЁ][а-яё]+)\s+(?:решает|устраивает|идет|говорит)"),
]

FEMALE_ENDINGS = {"а", "я", "ь"}
MALE_NAMES = {"ваня", "иван", "петр", "алекс", "дима", "саша"}
FEMALE_NAMES = {"мария", "анна", "елена", "ольга", "катя", "саша"}

GENRE_KEYWORDS: Dict[str, List[str]] = {
    "драма": ["драма", "эмоции", "чувства", "слезы", "переживания"],
    "комедия": ["смешно", "юмор", "шутка", "веселье", "смех"],
    "триллер": ["напряжение", "опасность", "страх", "угроза"],
    "романтика": ["любовь", "романтик", "чувства", "отношения"],
    "экшн": ["драка", "погоня", "бой", "действие", "стрельба"],
    "детектив": ["расследование", "тайна", "секрет", "разгадка"],
}

MOOD_KEYWORDS: Dict[str, List[str]] = {
    "темный": ["месть", "предательство", "обман", "злость", "ненависть"],
    "светлый": ["счастье", "радость", "добро", "любовь", "дружба"],
    "тревожный": ["страх", "опасность", "напряжение", "беспокойство"],
    "меланхоличный": ["грусть", "тоска", "одиночество", "воспоминания"],
}

LOCATION_KEYWORDS: Dict[str, List[str]] = {
    "ресторан": ["ресторан", "кафе", "столик", "официант"],
    "улица": ["улица", "прогулка", "город", "парк"],
    "дом": ["дом", "квартира", "комната", "кухня"],
    "офис": ["офис", "работа", "кабинет", "стол"],
    "машина": ["машина", "автомобиль", "едет", "дорога"],
}

EMOTION_KEYWORDS: Dict[str, List[str]] = {
    "радость": ["радость", "счастье", "улыбка", "смех"],
    "гнев": ["злость", "ярость", "месть", "разозлился"],
    "грусть": ["грусть", "слезы", "печаль", "тоска"],
    "страх": ["страх", "испуг", "ужас", "боится"],
    "удивление": ["удивление", "шок", "неожиданно", "потрясен"],
}

NIGHT_MARKERS = ("ночь", "вечер")

# «...», "..." или “...”
DIALOGUE_RE = re.compile(r"[«\"“]([^«»\"“”]+)[»\"”]")


# ============================================================
#  ВСПОМОГАТЕЛЬНОЕ
# ============================================================

def first_match(text: str, table: Dict[str, List[str]], default: str) -> str:
    lower = text.lower()
    for label, keywords in table.items():
        if any(keyword in lower for keyword in keywords):
            return label
    return default


def lemma(word: str) -> str:
    return morph.parse(word)[0].normal_form


def sentence_lemmas(sentence: str) -> Set[str]:
    return {lemma(t) for t in tokenize(sentence)}


def name_gender(name: str) -> Optional[str]:
    """Род по словарю имён pymorphy3, если слово распознано как имя."""
    for parsed in morph.parse(name):
        if "Name" not in parsed.tag:
            continue
        if parsed.tag.gender == "femn":
            return "female"
        if parsed.tag.gender == "masc":
            return "male"
    return None


# ============================================================
#  ПЕРСОНАЖИ
# ============================================================

def detect_gender(name: str, context: str = "") -> str:
    lower_name = name.lower()

    if lower_name in FEMALE_NAMES:
        return "female"
    if lower_name in MALE_NAMES:
        return "male"

    gender = name_gender(name)
    if gender:
        return gender

    if lower_name and lower_name[-1] in FEMALE_ENDINGS:
        return "female"

    return "male"


def extract_characters(description: str) -> List[Character]:
    characters: List[Character] = []
    seen = set()

    for pattern in CHARACTER_PATTERNS:
        for match in pattern.finditer(description):
            name = match.group(1)
            if not name or name in seen:
                continue
            if name.lower() in STOP_WORDS:
                continue

            seen.add(name)
            characters.append(Character(name=name, gender=detect_gender(name, description)))

    return characters


# ============================================================
#  ЖАНР / НАСТРОЕНИЕ / ЭМОЦИЯ
# ============================================================

def detect_genre(text: str) -> str:
    lower = text.lower()
    max_score = 0
    detected = DEFAULT_GENRE

    for genre, keywords in GENRE_KEYWORDS.items():
        score = sum(1 for keyword in keywords if keyword in lower)
        if score > max_score:
            max_score = score
            detected = genre

    return detected


def detect_mood(text: str) -> str:
    return first_match(text, MOOD_KEYWORDS, DEFAULT_MOOD)


def detect_scene_emotion(text: str) -> str:
    return first_match(text, EMOTION_KEYWORDS, DEFAULT_EMOTION)


def detect_location(text: str) -> str:
    return first_match(text, LOCATION_KEYWORDS, UNKNOWN_LOCATION)


def detect_time(text: str) -> str:
    lower = text.lower()
    if any(marker in lower for marker in NIGHT_MARKERS):
        return "night"
    return "day"


def extract_dialogue(text: str) -> Optional[str]:
    match = DIALOGUE_RE.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


# ============================================================
#  СЦЕНЫ
# ============================================================

def present_characters(sentence: str, characters: List[Character]) -> List[str]:
    lower = sentence.lower()
    lemmas = None
    result = []

    for character in characters:
        if character.name.lower() in lower:
            result.append(character.name)
            continue

        # Косвенные падежи: "Ваню", "с Марией"
        if lemmas is None:
            lemmas = sentence_lemmas(sentence)
        if lemma(character.name) in lemmas:
            result.append(character.name)

    return result


def extract_scenes(description: str, characters: List[Character]) -> List[Scene]:
    scenes = []
    default_cast = [characters[0].name if characters else DEFAULT_HERO]

    for index, sentence in enumerate(split_sentences(description)):
        if index >= MAX_SCENES:
            break

        cast = present_characters(sentence, characters)

        scenes.append(Scene(
            id=index + 1,
            location=detect_location(sentence),
            characters=cast or list(default_cast),
            action=sentence,
            emotion=detect_scene_emotion(sentence),
            time=detect_time(sentence),
            dialogue=extract_dialogue(sentence),
        ))

    return scenes


# ============================================================
#  ГЛАВНАЯ ФУНКЦИЯ АНАЛИЗА
# ============================================================

def parse_description(description: str) -> StoryAnalysis:
    characters = extract_characters(description)
    scenes = extract_scenes(description, characters)

    analysis = StoryAnalysis(
        title=description[:TITLE_LENGTH],
        genre=detect_genre(description),
        characters=characters,
        scenes=scenes,
        mood=detect_mood(description),
    )

    logger.info(
        "Разбор описания: %d персонажей, %d сцен, жанр %s, настроение %s",
        len(characters), len(scenes), analysis.genre, analysis.mood,
    )
    return analysis
