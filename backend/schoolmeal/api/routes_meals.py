# schoolmeal/api/routes_meals.py
# 급식 조회 + 영양 분석 / 조식 추가 후 재분석
# 서버는 상태를 들고 있지 않는다: 조식 추가 시 클라이언트가 기존 분석 결과(nutrients)를 다시 보낸다

from __future__ import annotations
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from schoolmeal.core.deps import get_meal_db
from schoolmeal.db.models.schemas import (
    BreakfastIn,
    BreakfastOut,
    MealAnalyzeIn,
    MealAnalyzeOut,
    MealView,
    NutrientOut,
)
from schoolmeal.services.meals import (
    analyze_meals,
    breakfast_flags,
    find_meals,
    select_meals,
    to_meal_view,
)
from schoolmeal.services.nutrition.aggregate import AggregatedReport, report_from_list
from schoolmeal.services.nutrition.analysis import describe, suggest_foods
from schoolmeal.services.nutrition.breakfast import add_breakfast

log = logging.getLogger(__name__)

router = APIRouter(prefix="/meals", tags=["meals"])

def _nutrients_out(report: AggregatedReport) -> List[NutrientOut]:
    return [NutrientOut(**describe(e)) for e in report.values()]

@router.post("/analyze", response_model=MealAnalyzeOut)
async def meals_analyze(payload: MealAnalyzeIn, db=Depends(get_meal_db)):
    """학교코드+날짜 급식 조회 → 프로필 권장량 대비 영양 분석"""
    try:
        records = await find_meals(db, payload.school_code, payload.date)
    except PyMongoError as e:
        raise HTTPException(status_code=503, detail=f"DB 조회 오류: {str(e)}")

    if not records:
        raise HTTPException(status_code=404, detail="해당 날짜의 급식 정보를 찾을 수 없습니다.")

    has_breakfast, needs_breakfast = breakfast_flags(records)
    recommended, report = analyze_meals(payload.to_profile(), records)
    meals = [MealView(**to_meal_view(r)) for r in select_meals(records)]
    log.info("meals analyzed: school=%s date=%s meals=%d nutrients=%d",
             payload.school_code, payload.date, len(meals), len(report))

    return MealAnalyzeOut(
        meals=meals,
        nutrients=_nutrients_out(report),
        recommended=recommended.by_label(),
        has_breakfast=has_breakfast,
        needs_breakfast=needs_breakfast,
        suggestions=suggest_foods(report.values()),
    )

@router.post("/breakfast", response_model=BreakfastOut)
async def meals_add_breakfast(payload: BreakfastIn):
    """선택한 음식으로 조식을 만들어 기존 분석 결과에 합산"""
    if not payload.food_items:
        raise HTTPException(status_code=400, detail="최소 1개의 음식을 선택해주세요")

    prior = report_from_list(payload.nutrients)
    meal, report = add_breakfast(payload.profile.to_profile(), prior, payload.food_items)
    log.info("breakfast added: items=%d nutrients=%d", len(payload.food_items), len(report))

    view = MealView(
        meal_name="조식",
        dish_name=meal.dish_name,
        dishes=[f.food_name for f in payload.food_items],
        calories=meal.calories,
        nutrition=meal.nutrition,
    )
    return BreakfastOut(
        meal=view,
        nutrients=_nutrients_out(report),
        suggestions=suggest_foods(report.values()),
    )
