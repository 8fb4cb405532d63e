# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes()를 await로 호출한다.

from schoolmeal.db.init import get_db

SCHOOLS = "schools"
MEALS = "meal_info"
FOODS = "food_items"

async def ensure_indexes():
    db = get_db()

    # 학교: 행정표준코드 기준 upsert
    await db[SCHOOLS].create_index("school_code", unique=True)
    await db[SCHOOLS].create_index("school_name")

    # 급식: 학교+날짜 조회, 끼니코드 정렬
    await db[MEALS].create_index([("school_code", 1), ("meal_date", 1), ("meal_code", 1)])

    # 식품: 코드가 있을 때만 유니크, 이름 검색
    await db[FOODS].create_index(
        "food_code",
        unique=True,
        partialFilterExpression={"food_code": {"$type": "string", "$gt": ""}},
        name="food_code_1",
    )
    await db[FOODS].create_index("food_name")
