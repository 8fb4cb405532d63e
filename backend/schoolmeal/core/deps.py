# 공용 의존성 (DB 핸들)
from fastapi import HTTPException

from schoolmeal.db.init import get_db


def get_meal_db():
    # 미초기화 DB는 503으로 (라우터/테스트에서 dependency_overrides로 교체 가능)
    try:
        return get_db()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=f"DB 준비 안 됨: {e}")
