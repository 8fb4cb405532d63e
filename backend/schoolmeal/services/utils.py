# schoolmeal/services/utils.py
# 급식 표시/임포트용 문자열 유틸
# - 메뉴명에서 알레르기 번호 "(5.6.13)" 제거
# - 엑셀/나이스 날짜 "20251113" → "2025-11-13"

from __future__ import annotations
import re
from typing import Any, List, Optional

from schoolmeal.services.nutrition.parser import DEFAULT_SEPARATOR, Separator, parse_number, split_clauses

# 알레르기 유발 식품 번호: (1.6) / (12) / (5.6.13.16)
_ALLERGY_RE = re.compile(r"\s*\(\d+(?:\.\d+)*\.?\)")


def clean_dish_names(text: str, separator: Separator = DEFAULT_SEPARATOR) -> List[str]:
    out: List[str] = []
    for part in split_clauses(text, separator):
        s = _ALLERGY_RE.sub("", part).strip()
        if s:
            out.append(s)
    return out


def format_date(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    if len(s) == 8 and s.isdigit():
        return f"{s[:4]}-{s[4:6]}-{s[6:]}"
    return s


def to_float_or_none(value: Any) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    return parse_number(str(value))


def to_text(value: Any) -> str:
    """엑셀 셀 → 문자열 (빈칸/NaN은 "")"""
    if value is None:
        return ""
    if isinstance(value, float) and value != value:   # NaN
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
