# schoolmeal/services/neis.py
# 나이스 교육정보 개방 포털 — 학교기본정보(schoolInfo) 조회
# 의존: httpx
# 응답 구조: {"schoolInfo": [{"head": [...]}, {"row": [...]}]}, 결과 없으면 {"RESULT": {...}}

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from schoolmeal.core.config import settings

log = logging.getLogger(__name__)


class NeisNotReady(Exception):
    # API 키 미설정
    pass


class NeisError(Exception):
    # 나이스 호출/응답 파싱 실패
    pass


def _rows(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    info = data.get("schoolInfo")
    if not isinstance(info, list) or len(info) < 2:
        return []
    if not isinstance(info[1], dict):
        return []
    rows = info[1].get("row")
    return rows if isinstance(rows, list) else []


def to_school(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "schoolName": row.get("SCHUL_NM") or "",
        "schoolCode": row.get("SD_SCHUL_CODE") or "",
        "officeCode": row.get("ATPT_OFCDC_SC_CODE") or "",
        "address": row.get("ORG_RDNMA"),
        "schoolType": row.get("SCHUL_KND_SC_NM"),
    }


async def search_schools(
    school_name: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """학교명으로 학교 목록 조회 (최대 100건)"""
    api_key = settings.NEIS_API_KEY
    if not api_key:
        raise NeisNotReady("NEIS_API_KEY not set")

    params = {
        "KEY": api_key,
        "Type": "json",
        "pIndex": "1",
        "pSize": "100",
        "SCHUL_NM": school_name,
    }
    url = f"{settings.NEIS_BASE_URL.rstrip('/')}/schoolInfo"
    log.info("NEIS schoolInfo search: %s", school_name)

    own = client is None
    cli = client or httpx.AsyncClient(timeout=settings.NEIS_TIMEOUT)
    try:
        r = await cli.get(url, params=params)
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        log.error("NEIS 호출 실패: %s", e)
        raise NeisError(str(e)) from e
    finally:
        if own:
            await cli.aclose()

    schools = [to_school(row) for row in _rows(data if isinstance(data, dict) else {})]
    log.debug("NEIS schools found: %d", len(schools))
    return schools
