# schoolmeal/api/routes_schools.py
# 학교 검색 — 나이스 학교기본정보 프록시

from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException

from schoolmeal.db.models.schemas import SchoolSearchIn
from schoolmeal.services.neis import NeisError, NeisNotReady, search_schools

log = logging.getLogger(__name__)

router = APIRouter(prefix="/schools", tags=["schools"])

@router.post("/search")
async def schools_search(payload: SchoolSearchIn):
    """학교명(2글자 이상)으로 학교 목록 조회"""
    name = (payload.school_name or "").strip()
    if len(name) < 2:
        raise HTTPException(status_code=400, detail="학교명을 2글자 이상 입력해주세요")

    try:
        schools = await search_schools(name)
    except NeisNotReady as e:
        log.warning("NeisNotReady: %s", e)
        raise HTTPException(status_code=503, detail="학교 검색 기능이 설정되지 않았습니다")
    except NeisError:
        log.exception("NEIS search failed")
        raise HTTPException(status_code=502, detail="학교 검색 중 오류가 발생했습니다")

    return {"schools": schools}
