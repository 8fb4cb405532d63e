# schoolmeal/services/importers.py
# 엑셀/텍스트에서 뽑은 행 → 학교/급식/식품 문서 매핑 + Mongo 업서트
# - 급식: 학교는 school_code로 중복 제거 후 upsert, 급식은 insert
# - 학교 목록: "교육청코드|교육청명|학교코드|학교명" 한 줄씩
# - 식품: 첫 시트, 컬럼 별칭 매핑, 100건씩 배치 upsert (배치 실패는 건너뛰고 계속)

from __future__ import annotations
import io
import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import pandas as pd
from pymongo import UpdateOne
from pymongo.errors import PyMongoError

from schoolmeal.db.indexes import FOODS, MEALS, SCHOOLS
from schoolmeal.db.models.meal import FoodItemDoc, MealDoc, SchoolDoc
from schoolmeal.services.utils import format_date, to_float_or_none, to_text

log = logging.getLogger(__name__)

FOOD_BATCH_SIZE = 100

# FoodItemDoc 필드 → 엑셀 컬럼 후보 (앞쪽 우선)
FOOD_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "food_name": ("식품명", "음식명"),
    "food_code": ("식품코드",),
    "calories": ("에너지(kcal)", "칼로리"),
    "carbohydrate": ("탄수화물(g)",),
    "protein": ("단백질(g)",),
    "fat": ("지방(g)",),
    "vitamin_a": ("비타민A(μg RAE)", "비타민A"),
    "thiamine": ("티아민(mg)", "비타민B1"),
    "riboflavin": ("리보플라빈(mg)", "비타민B2"),
    "vitamin_c": ("비타민C(mg)", "비타민C"),
    "calcium": ("칼슘(mg)",),
    "iron": ("철(mg)",),
    "serving_size": ("1회제공량", "제공량"),
}


# ------------------------------
# 급식 레코드
# ------------------------------

def to_meal_doc(row: Mapping[str, Any]) -> MealDoc:
    return MealDoc(
        school_code=to_text(row.get("school_code")),
        meal_code=to_text(row.get("meal_code")),
        meal_name=to_text(row.get("meal_name")),
        meal_date=format_date(row.get("meal_date")),
        meal_count=to_float_or_none(row.get("meal_count")),
        dish_names=to_text(row.get("dish_names")),
        origin_info=to_text(row.get("origin_info")),
        calorie_info=to_text(row.get("calorie_info")),
        nutrition_info=to_text(row.get("nutrition_info")),
        updated_date=format_date(row.get("updated_date")),
    )


def schools_from_meals(rows: Iterable[Mapping[str, Any]]) -> List[SchoolDoc]:
    # 같은 학교코드는 처음 나온 행 기준
    seen: Dict[str, SchoolDoc] = {}
    for row in rows:
        code = to_text(row.get("school_code"))
        if code and code not in seen:
            seen[code] = SchoolDoc(
                office_code=to_text(row.get("office_code")),
                office_name=to_text(row.get("office_name")),
                school_code=code,
                school_name=to_text(row.get("school_name")),
            )
    return list(seen.values())


def parse_school_lines(raw: str) -> List[SchoolDoc]:
    # 같은 학교코드가 다시 나오면 뒤쪽으로 덮어쓴다
    schools: Dict[str, SchoolDoc] = {}
    for line in (raw or "").splitlines():
        parts = [p.strip() for p in line.split("|")]
        if len(parts) < 4:
            continue
        office_code, office_name, school_code, school_name = parts[:4]
        if not school_code:
            continue
        schools[school_code] = SchoolDoc(
            office_code=office_code,
            office_name=office_name,
            school_code=school_code,
            school_name=school_name,
        )
    return list(schools.values())


async def upsert_schools(db, schools: Sequence[SchoolDoc]) -> int:
    if not schools:
        return 0
    ops = [
        UpdateOne({"school_code": s.school_code}, {"$set": s.model_dump()}, upsert=True)
        for s in schools
    ]
    await db[SCHOOLS].bulk_write(ops, ordered=False)
    log.info("schools upserted: %d", len(ops))
    return len(ops)


async def import_meals(db, rows: Sequence[Mapping[str, Any]]) -> Dict[str, int]:
    schools = schools_from_meals(rows)
    n_schools = await upsert_schools(db, schools)

    meals = [to_meal_doc(r).model_dump() for r in rows]
    if meals:
        await db[MEALS].insert_many(meals)
    log.info("meal records inserted: %d", len(meals))
    return {"schoolsImported": n_schools, "mealsImported": len(meals)}


# ------------------------------
# 식품 엑셀
# ------------------------------

def _pick(row: Mapping[str, Any], columns: Tuple[str, ...]) -> str:
    for col in columns:
        v = to_text(row.get(col))
        if v:
            return v
    return ""


def to_food_doc(row: Mapping[str, Any]) -> FoodItemDoc:
    return FoodItemDoc(**{field: _pick(row, cols) for field, cols in FOOD_COLUMNS.items()})


def read_food_rows(source: Union[bytes, str]) -> List[Dict[str, Any]]:
    """xlsx 첫 시트 → 행 dict 리스트"""
    buf = io.BytesIO(source) if isinstance(source, bytes) else source
    df = pd.read_excel(buf, sheet_name=0)
    return df.to_dict(orient="records")


def food_docs(rows: Iterable[Mapping[str, Any]]) -> List[FoodItemDoc]:
    docs = [to_food_doc(r) for r in rows]
    return [d for d in docs if d.food_name]


def _food_key(doc: FoodItemDoc) -> Dict[str, str]:
    # 코드 없는 항목은 이름 기준
    if doc.food_code:
        return {"food_code": doc.food_code}
    return {"food_name": doc.food_name, "food_code": ""}


async def import_foods(db, docs: Sequence[FoodItemDoc], batch_size: int = FOOD_BATCH_SIZE) -> Dict[str, Any]:
    success = 0
    errors = 0
    for i in range(0, len(docs), batch_size):
        batch = docs[i : i + batch_size]
        ops = [UpdateOne(_food_key(d), {"$set": d.model_dump()}, upsert=True) for d in batch]
        try:
            await db[FOODS].bulk_write(ops, ordered=False)
            log.info("food batch %d inserted (%d)", i // batch_size + 1, len(batch))
            success += len(batch)
        except PyMongoError as e:
            log.error("food batch %d failed: %s", i // batch_size + 1, e)
            errors += len(batch)
    return {"success": True, "total": len(docs), "successCount": success, "errorCount": errors}
