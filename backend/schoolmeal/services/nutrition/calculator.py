# schoolmeal/services/nutrition/calculator.py
# 사용자 프로필(나이/성별/키/몸무게) → 1일 권장 영양소 섭취량
# - 에너지/탄수화물/지방은 총에너지소비량(TEE) 기반, 단백질은 체중 기반
# - 비타민/무기질은 연령 구간 표 조회 (상한 포함: ≤8, ≤11, ≤14, 그 외)
# - 입력 범위 검증 없음. 범위 밖 나이는 마지막 구간으로 떨어진다

from __future__ import annotations
import math
from typing import Dict, Tuple

from schoolmeal.models.nutrients import Gender, RecommendedNutrients, UserProfile

# 연령 구간 표: ((상한 나이, 값), ...) + 마지막 구간(else) 값
BracketTable = Tuple[Tuple[Tuple[int, float], ...], float]

THIAMINE: Dict[str, BracketTable] = {
    "male":   (((8, 0.7), (11, 0.9), (14, 1.1)), 1.3),
    "female": (((8, 0.7), (11, 0.9), (14, 1.1)), 1.1),
}

RIBOFLAVIN: Dict[str, BracketTable] = {
    "male":   (((8, 0.9), (11, 1.1), (14, 1.5)), 1.7),
    "female": (((8, 0.8), (11, 1.0), (14, 1.2)), 1.2),
}

VITAMIN_C: BracketTable = (((8, 50), (11, 70), (14, 90)), 100)

CALCIUM: BracketTable = (((8, 700), (11, 800), (14, 1000)), 900)

# 철분은 남성만 구간이 하나 적다 (12세 이상 14)
IRON: Dict[str, BracketTable] = {
    "male":   (((8, 9), (11, 11)), 14),
    "female": (((8, 9), (11, 10), (14, 16)), 14),
}

VITAMIN_A = {"male": 1400, "female": 1200}  # R.E, 연령 무관


def round_half_away(x: float) -> int:
    """.5는 0에서 먼 쪽으로 반올림 (양수에서는 JS Math.round와 동일)"""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _lookup(table: BracketTable, age: int) -> float:
    brackets, rest = table
    for upper, value in brackets:
        if age <= upper:
            return value
    return rest


def thiamine(age: int, gender: Gender) -> float:
    return _lookup(THIAMINE[gender], age)


def riboflavin(age: int, gender: Gender) -> float:
    return _lookup(RIBOFLAVIN[gender], age)


def vitamin_c(age: int) -> float:
    return _lookup(VITAMIN_C, age)


def calcium(age: int) -> float:
    return _lookup(CALCIUM, age)


def iron(age: int, gender: Gender) -> float:
    return _lookup(IRON[gender], age)


def total_energy_expenditure(profile: UserProfile) -> float:
    """8~19세 TEE (kcal)"""
    age, weight = profile.age, profile.weight
    height_m = profile.height / 100
    if profile.gender == "male":
        return 88.5 - 61.9 + age + 1.13 * (26.7 * weight + 903 * height_m) + 25
    return 135.3 - 30.8 * age + 1.13 * (10.0 * weight + 934 * height_m) + 25


def compute_recommended_intake(profile: UserProfile) -> RecommendedNutrients:
    tee = total_energy_expenditure(profile)
    age, gender = profile.age, profile.gender

    return RecommendedNutrients(
        energy=round_half_away(tee),
        carbohydrate=round_half_away(tee / 4),
        protein=round_half_away(profile.weight * 0.9),
        fat=round_half_away(tee * 0.225 / 9),   # 지방 에너지 비율 15~30% 중간값
        vitamin_a=VITAMIN_A[gender],
        thiamine=thiamine(age, gender),
        riboflavin=riboflavin(age, gender),
        vitamin_c=vitamin_c(age),
        calcium=calcium(age),
        iron=iron(age, gender),
    )
