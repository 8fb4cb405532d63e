# schoolmeal/services/nutrition/breakfast.py
# 조식 미제공 학교: 사용자가 고른 음식(식품 DB 항목)을 합산해 가짜 조식 급식 텍스트를 만든다
# 만들어진 nutrition 텍스트는 급식 영양정보와 같은 문법 → parser로 그대로 파싱 가능

from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from schoolmeal.models.nutrients import NutrientEntry, UserProfile
from schoolmeal.services.nutrition.aggregate import AggregatedReport, merge_into
from schoolmeal.services.nutrition.calculator import compute_recommended_intake
from schoolmeal.services.nutrition.parser import BR_MARK, parse_nutrition_line, parse_number

BREAKFAST_LABEL = "조식"

# (식품 DB 필드, 라벨, 단위, 소수점 자리)
BREAKFAST_FIELDS: Tuple[Tuple[str, str, str, int], ...] = (
    ("carbohydrate", "탄수화물", "g", 1),
    ("protein", "단백질", "g", 1),
    ("fat", "지방", "g", 1),
    ("vitamin_a", "비타민A", "R.E", 1),
    ("thiamine", "티아민", "mg", 2),
    ("riboflavin", "리보플라빈", "mg", 2),
    ("vitamin_c", "비타민C", "mg", 1),
    ("calcium", "칼슘", "mg", 1),
    ("iron", "철분", "mg", 1),
)


class MealText(BaseModel):
    dish_name: str
    calories: str
    nutrition: str


def _field(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def _total(items: Sequence[Any], key: str) -> float:
    # 숫자로 못 읽는 값은 0 취급
    return sum(parse_number(str(_field(it, key) or "")) or 0.0 for it in items)


def format_fixed(value: float, digits: int) -> str:
    # float의 실제 이진 값 기준 반올림, 정확히 절반이면 올림
    q = Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return f"{q:f}"


def build_breakfast_meal(food_items: Iterable[Any]) -> MealText:
    items = list(food_items)
    dishes = ", ".join(str(_field(it, "food_name") or "") for it in items)

    parts: List[str] = []
    for key, label, unit, digits in BREAKFAST_FIELDS:
        total = _total(items, key)
        if total > 0:
            parts.append(f"{label}({unit}) : {format_fixed(total, digits)}")

    return MealText(
        dish_name=f"{BREAKFAST_LABEL}{BR_MARK}{dishes}",
        calories=f"{format_fixed(_total(items, 'calories'), 1)} Kcal",
        nutrition=BR_MARK.join(parts),
    )


def add_breakfast(
    profile: UserProfile,
    report: Optional[Mapping[str, NutrientEntry]],
    food_items: Iterable[Any],
) -> Tuple[MealText, AggregatedReport]:
    """조식 텍스트 생성 → 파싱 → 기존 리포트에 병합 (기존 권장량은 유지)"""
    meal = build_breakfast_meal(food_items)
    recommended = compute_recommended_intake(profile)
    entries = parse_nutrition_line(meal.nutrition, recommended)
    return meal, merge_into(report, entries)
