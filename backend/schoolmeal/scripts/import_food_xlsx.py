# scripts/import_food_xlsx.py
# 식품 영양성분 엑셀을 API 없이 바로 Mongo에 적재
# 사용: python -m schoolmeal.scripts.import_food_xlsx 식품영양성분DB.xlsx [batch_size]
import asyncio
import os
import sys

from motor.motor_asyncio import AsyncIOMotorClient

from schoolmeal.core.config import settings
from schoolmeal.services.importers import FOOD_BATCH_SIZE, food_docs, import_foods, read_food_rows

# 환경변수 우선, 없으면 settings 기본값
MONGO = os.getenv("MONGODB_URI") or settings.MONGODB_URI
DBNAME = os.getenv("MONGODB_DB") or settings.MONGODB_DB


async def main(path: str, batch_size: int) -> None:
    cli = AsyncIOMotorClient(MONGO)
    db = cli[DBNAME]
    try:
        docs = food_docs(read_food_rows(path))
        print(f"[import] rows={len(docs)} batch={batch_size} db={DBNAME}")
        res = await import_foods(db, docs, batch_size=batch_size)
        print(f"[import] done. ok={res['successCount']} error={res['errorCount']}")
    finally:
        cli.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: import_food_xlsx.py <file.xlsx> [batch_size]")
        sys.exit(1)
    size = int(sys.argv[2]) if len(sys.argv) > 2 else FOOD_BATCH_SIZE
    asyncio.run(main(sys.argv[1], size))
