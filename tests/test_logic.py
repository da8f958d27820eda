from dataclasses import asdict

from cineai.logic import (
    Character,
    detect_gender,
    detect_genre,
    detect_mood,
    detect_scene_emotion,
    extract_characters,
    extract_scenes,
    parse_description,
)


class TestDetectGender:
    def test_name_lists(self):
        assert detect_gender("Ваня") == "male"
        assert detect_gender("Иван") == "male"
        assert detect_gender("Ольга") == "female"
        assert detect_gender("Мария") == "female"

    def test_female_list_checked_first(self):
        assert detect_gender("Саша") == "female"

    def test_dictionary_name(self):
        assert detect_gender("Наталья") == "female"
        assert detect_gender("Олег") == "male"

    def test_endings(self):
        assert detect_gender("Звезда") == "female"
        assert detect_gender("Гром") == "male"


class TestDetectGenre:
    def test_default(self):
        assert detect_genre("просто текст без подсказок") == "драма"

    def test_highest_score(self):
        text = "Детектив ведет расследование и ищет разгадка, но вокруг юмор"
        assert detect_genre(text) == "детектив"

    def test_tie_keeps_earlier(self):
        assert detect_genre("смешно, но страх") == "комедия"

    def test_case_insensitive(self):
        assert detect_genre("ПОГОНЯ и Драка") == "экшн"


class TestDetectMood:
    def test_first_matching(self):
        assert detect_mood("месть и дружба") == "темный"
        assert detect_mood("счастье") == "светлый"

    def test_default(self):
        assert detect_mood("обычный день") == "нейтральный"


class TestSceneEmotion:
    def test_keywords(self):
        assert detect_scene_emotion("Он боится темноты") == "страх"
        assert detect_scene_emotion("Шок от новости") == "удивление"

    def test_default(self):
        assert detect_scene_emotion("Он идет") == "нейтральная"


class TestCharacters:
    def test_patterns(self, story):
        characters = extract_characters(story)
        assert characters == [Character(name="Ваня", gender="male")]

    def test_second_pattern_needs_capital(self):
        characters = extract_characters("Катя говорит правду. потом петр решает уйти.")
        assert [c.name for c in characters] == ["Катя"]
        assert characters[0].gender == "female"

    def test_heroine_pattern_case_insensitive(self):
        characters = extract_characters("ГЕРОИНЯ Анна живет одна")
        assert [c.name for c in characters] == ["Анна"]

    def test_pronouns_skipped(self):
        assert extract_characters("Он решает уйти из дома навсегда.") == []


class TestScenes:
    def test_story(self, story):
        analysis = parse_description(story)
        scenes = analysis.scenes

        assert len(scenes) == 3
        assert [s.id for s in scenes] == [1, 2, 3]
        assert scenes[0].location == "неизвестная локация"
        assert scenes[0].emotion == "гнев"
        assert scenes[0].characters == ["Ваня"]
        assert scenes[1].location == "ресторан"
        assert scenes[1].time == "day"
        assert scenes[2].location == "дом"
        assert scenes[2].time == "night"
        assert scenes[2].action == "Ночью Ваня едет домой на машине и вспоминает всё"

    def test_evening_is_night(self):
        scenes = extract_scenes("Вечером они сидят в кафе.", [])
        assert scenes[0].time == "night"
        assert scenes[0].location == "ресторан"

    def test_default_hero(self):
        scenes = extract_scenes("Кто-то гуляет по парку.", [])
        assert scenes[0].characters == ["герой"]
        assert scenes[0].location == "улица"

    def test_inflected_name(self):
        text = "Главный герой Ваня устраивает ужин. Катя говорит тост. Все долго ждут Катю в ресторане."
        analysis = parse_description(text)
        assert [c.name for c in analysis.characters] == ["Ваня", "Катя"]
        assert analysis.scenes[2].characters == ["Катя"]

    def test_dialogue(self):
        scenes = extract_scenes("Катя говорит: «Я всё знаю». Ваня молчит и смотрит.", [])
        assert scenes[0].dialogue == "Я всё знаю"
        assert scenes[1].dialogue is None

    def test_at_most_ten(self):
        text = " ".join(f"Сцена номер {i} в парке." for i in range(15))
        scenes = extract_scenes(text, [])
        assert len(scenes) == 10
        assert scenes[-1].id == 10


class TestParseDescription:
    def test_summary(self, story):
        analysis = parse_description(story)
        assert analysis.title == story[:50]
        assert analysis.genre == "драма"
        assert analysis.mood == "темный"

    def test_serializable(self, story):
        data = asdict(parse_description(story))
        assert data["characters"][0] == {
            "name": "Ваня", "gender": "male", "age": None, "description": None,
        }
        assert data["scenes"][1]["location"] == "ресторан"

    def test_find_character(self, story):
        analysis = parse_description(story)
        assert analysis.find_character(analysis.scenes[1]).name == "Ваня"

    def test_empty(self):
        analysis = parse_description("")
        assert analysis.scenes == []
        assert analysis.characters == []
        assert analysis.genre == "драма"
