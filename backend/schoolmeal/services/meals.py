# schoolmeal/services/meals.py
# 급식 조회 → 끼니 선별(석식 제외) → 영양 분석 리포트
# 분석 흐름: 프로필 권장량 1회 계산 → 끼니별 영양정보 파싱 → 이름별 합산

from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from schoolmeal.db.indexes import FOODS, MEALS
from schoolmeal.models.nutrients import RecommendedNutrients, UserProfile
from schoolmeal.services.nutrition.aggregate import AggregatedReport, aggregate
from schoolmeal.services.nutrition.calculator import compute_recommended_intake
from schoolmeal.services.nutrition.parser import BR_MARK, parse_nutrition_line
from schoolmeal.services.utils import clean_dish_names

log = logging.getLogger(__name__)

BREAKFAST = "조식"
LUNCH = "중식"
DINNER = "석식"

FOOD_SEARCH_LIMIT = 20


async def find_meals(db, school_code: str, meal_date: str) -> List[Dict[str, Any]]:
    cur = db[MEALS].find({"school_code": school_code, "meal_date": meal_date}).sort("meal_code", 1)
    return [doc async for doc in cur]


async def search_foods(db, food_name: str, limit: int = FOOD_SEARCH_LIMIT) -> List[Dict[str, Any]]:
    """식품명 부분일치 검색 (대소문자 무시)"""
    q = {"food_name": {"$regex": re.escape(food_name.strip()), "$options": "i"}}
    cur = db[FOODS].find(q).limit(limit)
    out: List[Dict[str, Any]] = []
    async for doc in cur:
        doc["id"] = str(doc.pop("_id", ""))
        out.append(doc)
    return out


def breakfast_flags(records: Sequence[Mapping[str, Any]]) -> Tuple[bool, bool]:
    """(조식 있음, 조식 추가 필요) — 중식만 있고 조식이 없을 때만 추가 유도"""
    names = {r.get("meal_name") for r in records}
    has_breakfast = BREAKFAST in names
    return has_breakfast, (LUNCH in names and not has_breakfast)


def select_meals(records: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    return [r for r in records if r.get("meal_name") != DINNER]


def to_meal_view(record: Mapping[str, Any]) -> Dict[str, Any]:
    meal_name = record.get("meal_name") or ""
    dish_text = record.get("dish_names") or ""
    return {
        "meal_name": meal_name,
        "dish_name": f"{meal_name}{BR_MARK}{dish_text}",
        "dishes": clean_dish_names(dish_text),
        "calories": record.get("calorie_info") or "",
        "nutrition": record.get("nutrition_info") or "",
    }


def analyze_meals(
    profile: UserProfile,
    records: Sequence[Mapping[str, Any]],
) -> Tuple[RecommendedNutrients, AggregatedReport]:
    recommended = compute_recommended_intake(profile)
    log.debug("recommended nutrients: %s", recommended)

    entries = []
    for r in select_meals(records):
        text = r.get("nutrition_info")
        if text:
            entries.extend(parse_nutrition_line(text, recommended))
    return recommended, aggregate(entries)
