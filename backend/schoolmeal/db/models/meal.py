# schoolmeal/db/models/meal.py
# 학교/급식/식품 저장 문서 — 원본 테이블 필드명 그대로
from typing import Optional

from pydantic import BaseModel


class SchoolDoc(BaseModel):
    office_code: str = ""
    office_name: str = ""
    school_code: str
    school_name: str = ""


class MealDoc(BaseModel):
    school_code: str
    meal_code: str = ""
    meal_name: str = ""          # 조식 / 중식 / 석식
    meal_date: Optional[str] = None   # YYYY-MM-DD
    meal_count: Optional[float] = None
    dish_names: str = ""
    origin_info: str = ""
    calorie_info: str = ""       # "1217.3 Kcal"
    nutrition_info: str = ""     # "탄수화물(g) : 181.3\n단백질(g) : 49.1..."
    updated_date: Optional[str] = None


class FoodItemDoc(BaseModel):
    # 숫자도 엑셀 원문 그대로 문자열 저장
    food_name: str
    food_code: str = ""
    calories: str = ""
    carbohydrate: str = ""
    protein: str = ""
    fat: str = ""
    vitamin_a: str = ""
    thiamine: str = ""
    riboflavin: str = ""
    vitamin_c: str = ""
    calcium: str = ""
    iron: str = ""
    serving_size: str = ""
