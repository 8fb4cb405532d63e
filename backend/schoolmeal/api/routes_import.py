# schoolmeal/api/routes_import.py
# 관리용 일괄 임포트 API
# - POST /import/meals   : 급식 레코드 배열 (학교 upsert + 급식 insert)
# - POST /import/schools : "교육청코드|교육청명|학교코드|학교명" 텍스트
# - POST /import/foods   : 식품 영양성분 엑셀(xlsx) 업로드

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pymongo.errors import PyMongoError

from schoolmeal.core.deps import get_meal_db
from schoolmeal.db.models.schemas import MealImportIn, SchoolImportIn
from schoolmeal.services.importers import (
    food_docs,
    import_foods,
    import_meals,
    parse_school_lines,
    read_food_rows,
    upsert_schools,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB

@router.post("/meals")
async def import_meal_data(payload: MealImportIn, db=Depends(get_meal_db)):
    if payload.meal_data is None:
        raise HTTPException(status_code=400, detail="Invalid meal data format")

    log.info("Importing %d meal records", len(payload.meal_data))
    try:
        res = await import_meals(db, payload.meal_data)
    except PyMongoError as e:
        log.exception("meal import failed")
        raise HTTPException(status_code=500, detail=f"DB 저장 오류: {str(e)}")
    return {"success": True, **res}

@router.post("/schools")
async def import_school_list(payload: SchoolImportIn, db=Depends(get_meal_db)):
    schools = parse_school_lines(payload.raw_data)
    log.info("Parsed %d unique schools", len(schools))
    try:
        n = await upsert_schools(db, schools)
    except PyMongoError as e:
        log.exception("school import failed")
        raise HTTPException(status_code=500, detail=f"DB 저장 오류: {str(e)}")
    return {"success": True, "schoolsImported": n}

@router.post("/foods")
async def import_food_file(file: UploadFile = File(...), db=Depends(get_meal_db)):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="비어있는 파일은 업로드할 수 없습니다")
    if len(data) > MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="파일 크기는 20MB 이하여야 합니다")

    try:
        rows = read_food_rows(data)
    except Exception as e:
        log.warning("food sheet read failed: %s", e)
        raise HTTPException(status_code=400, detail="엑셀 파일을 읽을 수 없습니다")

    docs = food_docs(rows)
    log.info("Processing %d food items...", len(docs))
    return await import_foods(db, docs)
