# schoolmeal/services/nutrition/analysis.py
# 섭취량/권장량 비율로 상태 판정 + 부족 영양소별 추천 음식

from __future__ import annotations
from typing import Dict, Iterable, List

from schoolmeal.models.nutrients import NutrientEntry

OVER = "초과"
MET = "충족"
FAIR = "양호"
LOW = "부족"

# 부족 시 보여줄 음식 (고정 목록)
FOOD_SUGGESTIONS: List[Dict[str, object]] = [
    {"nutrient": "단백질", "foods": ["닭가슴살", "두부", "계란", "연어", "그릭요거트"], "icon": "Beef"},
    {"nutrient": "비타민", "foods": ["당근", "시금치", "브로콜리", "파프리카", "토마토"], "icon": "Apple"},
    {"nutrient": "칼슘", "foods": ["우유", "치즈", "요거트", "뼈째먹는 생선", "아몬드"], "icon": "Milk"},
]


def percentage(current: float, recommended: float) -> float:
    if recommended <= 0:
        return 0.0
    return current * 100 / recommended


def classify(current: float, recommended: float) -> str:
    pct = percentage(current, recommended)
    if pct > 100:
        return OVER
    if pct >= 90:
        return MET
    if pct >= 70:
        return FAIR
    return LOW


def describe(entry: NutrientEntry) -> Dict[str, object]:
    d = entry.model_dump()
    d["percentage"] = round(percentage(entry.current, entry.recommended), 1)
    d["status"] = classify(entry.current, entry.recommended)
    return d


def suggest_foods(entries: Iterable[NutrientEntry]) -> List[Dict[str, object]]:
    # "비타민"은 비타민A/비타민C 등 접두어로 매칭
    low = [e.name for e in entries if classify(e.current, e.recommended) == LOW]
    return [
        s for s in FOOD_SUGGESTIONS
        if any(name.startswith(str(s["nutrient"])) for name in low)
    ]
