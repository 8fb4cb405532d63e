# schoolmeal/api/routes_foods.py
# 식품 DB 검색 — 조식 추가 화면에서 사용

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from schoolmeal.core.deps import get_meal_db
from schoolmeal.db.models.schemas import FoodSearchIn
from schoolmeal.services.meals import search_foods

log = logging.getLogger(__name__)

router = APIRouter(prefix="/foods", tags=["foods"])

@router.post("/search")
async def foods_search(payload: FoodSearchIn, db=Depends(get_meal_db)):
    name = (payload.food_name or "").strip()
    # 2글자 미만은 검색하지 않는다
    if len(name) < 2:
        return {"foods": []}

    try:
        foods = await search_foods(db, name)
    except PyMongoError as e:
        log.exception("food search failed")
        raise HTTPException(status_code=503, detail=f"DB 조회 오류: {str(e)}")

    log.info("foods found: %d (q=%s)", len(foods), name)
    return {"foods": foods}
