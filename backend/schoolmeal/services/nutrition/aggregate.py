# schoolmeal/services/nutrition/aggregate.py
# 여러 끼니의 NutrientEntry를 영양소 이름별로 합산
# - 처음 등장한 항목이 recommended/unit을 정한다 (이후 중복은 current만 누적)
# - merge_into: 기존 리포트에 새 묶음(조식 등)을 이어 붙임. 입력은 변경하지 않음

from __future__ import annotations
from typing import Dict, Iterable, Mapping, Optional

from schoolmeal.models.nutrients import NutrientEntry

AggregatedReport = Dict[str, NutrientEntry]


def merge_into(report: Optional[Mapping[str, NutrientEntry]], entries: Iterable[NutrientEntry]) -> AggregatedReport:
    out: AggregatedReport = {
        name: e.model_copy() for name, e in (report or {}).items()
    }
    for e in entries:
        acc = out.get(e.name)
        if acc is None:
            acc = NutrientEntry(name=e.name, current=0.0, recommended=e.recommended, unit=e.unit)
            out[e.name] = acc
        acc.current += e.current
    return out


def aggregate(entries: Iterable[NutrientEntry]) -> AggregatedReport:
    return merge_into(None, entries)


def report_from_list(items: Iterable[NutrientEntry]) -> AggregatedReport:
    """렌더링용 리스트 → 리포트 (클라이언트가 돌려준 기존 결과 복원)"""
    out: AggregatedReport = {}
    for e in items:
        if e.name in out:
            out[e.name].current += e.current
        else:
            out[e.name] = e.model_copy()
    return out
