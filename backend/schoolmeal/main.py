# schoolmeal/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations

import logging
from asyncio import sleep
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schoolmeal.core.config import settings
from schoolmeal.api.routes_schools import router as schools_router   # 학교 검색(나이스)
from schoolmeal.api.routes_meals import router as meals_router       # 급식 조회/영양 분석/조식 추가
from schoolmeal.api.routes_foods import router as foods_router       # 식품 DB 검색
from schoolmeal.api.routes_import import router as import_router     # 관리용 임포트

# DB 초기화/인덱스
# init_db/close_db: 앱 시작/종료 시 커넥션 생성/정리
# get_db: 런타임에 DB 핸들 얻기
from schoolmeal.db.init import get_db, init_db, close_db
from schoolmeal.db.indexes import ensure_indexes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("schoolmeal")

app = FastAPI(title="School Meal Nutrition - API", version="0.1.0")

# CORS: 프론트 개발 서버 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 앱 시작/종료 이벤트 핸들러
@app.on_event("startup")
async def on_startup() -> None:
    # 1) DB 먼저 붙는다 (최대 20회, 1초 간격)
    db = None
    for i in range(20):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")
        return

    # 2) 인덱스 보장
    try:
        await ensure_indexes()
        log.info("[startup] indexes ensured")
    except Exception as e:
        log.error("[startup] ensure_indexes failed: %s", e)

@app.on_event("shutdown")
async def on_shutdown() -> None:
    # 몽고db 커넥션 정리
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

# 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
app.include_router(schools_router)
app.include_router(meals_router)
app.include_router(foods_router)
app.include_router(import_router)
