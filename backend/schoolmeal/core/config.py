# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGODB_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGODB_DB: str = "schoolmeal"

    # 나이스 교육정보 개방 포털
    NEIS_API_KEY: str | None = None
    NEIS_BASE_URL: str = "https://open.neis.go.kr/hub"
    NEIS_TIMEOUT: float = 10.0

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"


settings = Settings()
