# schoolmeal/models/nutrients.py
# 영양소 계산/집계 코어 모델
# UserProfile: 권장량 계산 입력 (검증 없음, 계산기는 어떤 숫자도 받는다)
# RecommendedNutrients: 10개 영양소 권장량, 한글 라벨(alias)로도 접근
# NutrientEntry: 급식 텍스트에서 파싱한 영양소 한 줄 + 권장량

from __future__ import annotations
from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["male", "female"]


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    height: float   # cm
    weight: float   # kg
    gender: Gender


class RecommendedNutrients(BaseModel):
    # 필드명은 영문, alias는 급식 영양정보 텍스트에 찍히는 한글 라벨
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    energy: int = Field(alias="에너지")             # kcal
    carbohydrate: int = Field(alias="탄수화물")     # g
    protein: int = Field(alias="단백질")            # g
    fat: int = Field(alias="지방")                  # g
    vitamin_a: float = Field(alias="비타민A")       # R.E
    thiamine: float = Field(alias="티아민")         # mg
    riboflavin: float = Field(alias="리보플라빈")   # mg
    vitamin_c: float = Field(alias="비타민C")       # mg
    calcium: float = Field(alias="칼슘")            # mg
    iron: float = Field(alias="철분")               # mg

    def by_label(self) -> Dict[str, float]:
        """한글 라벨 → 권장량 (파서 조회용)"""
        return self.model_dump(by_alias=True)


class NutrientEntry(BaseModel):
    name: str
    current: float
    recommended: float
    unit: str
