# schoolmeal/services/nutrition/parser.py
# 급식 영양정보 텍스트 → NutrientEntry 리스트
# 텍스트 예: "탄수화물(g) : 181.3<br/>단백질(g) : 49.1<br/>..."
# - 구분자는 개정마다 달랐다: 줄바꿈 / <br/> / | → 기본값은 셋 다 허용
# - 문법(이름(단위) : 값)에 안 맞는 조각은 조용히 버린다 (예외 없음)

from __future__ import annotations
import re
from typing import Iterator, List, Mapping, NamedTuple, Optional, Pattern, Union

from schoolmeal.models.nutrients import NutrientEntry, RecommendedNutrients

BR_MARK = "<br/>"

DEFAULT_SEPARATOR = re.compile(r"<br\s*/?>|\r?\n|\|", re.I)

CLAUSE_RE = re.compile(r"^(.+?)\((.+?)\)\s*:\s*(.+)$")

# 값 앞부분의 숫자만 사용 ("1,217.3 Kcal" → 1217.3)
NUMBER_RE = re.compile(r"[-+]?(?:\d[\d,]*\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# 매칭 안 된 영양소 권장량 = 섭취량 * 1.5 (임시 추정치, 근거 있는 값 아님)
FALLBACK_RATIO = 1.5

Separator = Union[str, Pattern[str]]


class NutrientClause(NamedTuple):
    name: str
    unit: str
    value: float


class ClauseResult(NamedTuple):
    raw: str
    clause: Optional[NutrientClause]   # None이면 버린 조각

    @property
    def matched(self) -> bool:
        return self.clause is not None


def parse_number(text: str) -> Optional[float]:
    """문자열 앞쪽 숫자 파싱. 숫자가 없으면 None"""
    m = NUMBER_RE.match((text or "").strip())
    if not m:
        return None
    try:
        return float(m.group(0).replace(",", ""))
    except ValueError:
        return None


def split_clauses(text: str, separator: Separator = DEFAULT_SEPARATOR) -> List[str]:
    if isinstance(separator, str):
        parts = (text or "").split(separator)
    else:
        parts = separator.split(text or "")
    return [p.strip() for p in parts if p and p.strip()]


def parse_clause(raw: str) -> Optional[NutrientClause]:
    m = CLAUSE_RE.match(raw.strip())
    if not m:
        return None
    name, unit, value = m.groups()
    num = parse_number(value)
    if num is None:
        return None
    return NutrientClause(name=name, unit=unit, value=num)


def scan_clauses(text: str, separator: Separator = DEFAULT_SEPARATOR) -> Iterator[ClauseResult]:
    for raw in split_clauses(text, separator):
        yield ClauseResult(raw=raw, clause=parse_clause(raw))


def parse_nutrition_line(
    text: str,
    recommended: Union[RecommendedNutrients, Mapping[str, float]],
    separator: Separator = DEFAULT_SEPARATOR,
) -> List[NutrientEntry]:
    table = recommended.by_label() if isinstance(recommended, RecommendedNutrients) else dict(recommended)

    out: List[NutrientEntry] = []
    for res in scan_clauses(text, separator):
        if not res.matched:
            continue
        c = res.clause
        rec = table[c.name] if c.name in table else c.value * FALLBACK_RATIO
        out.append(NutrientEntry(name=c.name, current=c.value, recommended=rec, unit=c.unit))
    return out
