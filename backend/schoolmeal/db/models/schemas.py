# schoolmeal/db/models/schemas.py
# API 입출력 Pydantic 모델
# 프론트는 camelCase로 보내므로 alias 허용 (populate_by_name)
from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from schoolmeal.models.nutrients import NutrientEntry, UserProfile


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# # 학교 검색
class SchoolSearchIn(_CamelModel):
    school_name: str = Field(default="", alias="schoolName")

class SchoolOut(_CamelModel):
    school_name: str = Field(alias="schoolName")
    school_code: str = Field(alias="schoolCode")
    office_code: str = Field(alias="officeCode")
    address: Optional[str] = None
    school_type: Optional[str] = Field(default=None, alias="schoolType")


# # 식품 검색 (조식 추가용)
class FoodSearchIn(_CamelModel):
    food_name: str = Field(default="", alias="foodName")

class FoodItemOut(BaseModel):
    id: str = ""
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


# # 급식 조회 + 분석
class ProfileIn(_CamelModel):
    # 호출측 검증 (계산기 자체는 검증 안 함)
    age: int = Field(..., ge=8, le=19)
    height: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)
    gender: Literal["male", "female"]

    def to_profile(self) -> UserProfile:
        return UserProfile(age=self.age, height=self.height, weight=self.weight, gender=self.gender)

class MealAnalyzeIn(ProfileIn):
    school_code: str = Field(..., alias="schoolCode", min_length=1)
    date: str = Field(..., description="YYYY-MM-DD")

class MealView(_CamelModel):
    meal_name: str = Field(alias="mealName")
    dish_name: str = Field(alias="dishName")     # "중식<br/>흰쌀밥 (5)<br/>..."
    dishes: List[str] = Field(default_factory=list)
    calories: str = ""
    nutrition: str = ""

class NutrientOut(NutrientEntry):
    percentage: float
    status: str

class MealAnalyzeOut(_CamelModel):
    meals: List[MealView]
    nutrients: List[NutrientOut]
    recommended: Dict[str, float]
    has_breakfast: bool = Field(alias="hasBreakfast")
    needs_breakfast: bool = Field(alias="needsBreakfast")
    suggestions: List[Dict[str, Any]] = Field(default_factory=list)


# # 조식 추가
class BreakfastIn(_CamelModel):
    profile: ProfileIn
    nutrients: List[NutrientEntry] = Field(default_factory=list)
    food_items: List[FoodItemOut] = Field(default_factory=list, alias="foodItems")

class BreakfastOut(_CamelModel):
    meal: MealView
    nutrients: List[NutrientOut]
    suggestions: List[Dict[str, Any]] = Field(default_factory=list)


# # 임포트
class MealImportIn(_CamelModel):
    meal_data: Optional[List[Dict[str, Any]]] = Field(default=None, alias="mealData")

class SchoolImportIn(_CamelModel):
    raw_data: str = Field(default="", alias="rawData")
