import math

from schoolmeal.services.importers import (
    food_docs,
    parse_school_lines,
    schools_from_meals,
    to_food_doc,
    to_meal_doc,
)
from schoolmeal.services.utils import clean_dish_names, format_date, to_text


def test_format_date():
    assert format_date("20251113") == "2025-11-13"
    assert format_date(20251113) == "2025-11-13"
    assert format_date("2025-11-13") == "2025-11-13"
    assert format_date("") is None
    assert format_date(None) is None


def test_meal_doc_mapping():
    doc = to_meal_doc({"school_code": 7010057, "meal_code": 2, "meal_date": "20251113", "meal_count": "120.00"})
    assert doc.school_code == "7010057"
    assert doc.meal_code == "2"
    assert doc.meal_count == 120.0
    assert doc.updated_date is None
    assert to_meal_doc({"school_code": "1", "meal_count": ""}).meal_count is None


def test_schools_from_meals_first_wins():
    rows = [
        {"school_code": "1", "school_name": "가"},
        {"school_code": "1", "school_name": "나"},
        {"school_code": "2", "school_name": "다"},
    ]
    assert [(s.school_code, s.school_name) for s in schools_from_meals(rows)] == [("1", "가"), ("2", "다")]


def test_school_lines_last_wins():
    raw = "B10|서울|1|가\nB10|서울|1|나\n짧은|줄\n"
    schools = parse_school_lines(raw)
    assert len(schools) == 1
    assert schools[0].school_name == "나"


def test_food_aliases():
    doc = to_food_doc({"음식명": "김밥", "칼로리": 320.0, "비타민B1": 0.15, "제공량": "1줄", "비타민A": math.nan})
    assert doc.food_name == "김밥"
    assert doc.calories == "320"
    assert doc.thiamine == "0.15"
    assert doc.serving_size == "1줄"
    assert doc.vitamin_a == ""


def test_food_docs_drop_nameless():
    assert [d.food_name for d in food_docs([{"식품명": "밥"}, {"식품명": math.nan}, {}])] == ["밥"]


def test_to_text():
    assert to_text(None) == ""
    assert to_text(math.nan) == ""
    assert to_text(12.0) == "12"
    assert to_text(" a ") == "a"


def test_clean_dish_names():
    text = "[수능감독] 흰쌀밥\n곰탕&소면 (5.6.13.16)\n봄동겉절이 (5.6.13)\n컵과일(수능) (12)\n\n"
    assert clean_dish_names(text) == ["[수능감독] 흰쌀밥", "곰탕&소면", "봄동겉절이", "컵과일(수능)"]
    assert clean_dish_names("중식<br/>흰쌀밥(5)") == ["중식", "흰쌀밥"]
