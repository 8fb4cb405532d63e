import io

import pandas as pd

from schoolmeal.services.importers import FOOD_BATCH_SIZE

LUNCH = {
    "school_code": "7010057", "meal_code": "2", "meal_name": "중식", "meal_date": "2025-11-13",
    "dish_names": "흰쌀밥\n곰탕&소면 (5.6.13.16)\n석박지 (9)",
    "calorie_info": "1217.3 Kcal",
    "nutrition_info": "탄수화물(g) : 181.3\n단백질(g) : 49.1\n칼슘(mg) : 222.5\n이상한텍스트",
}
DINNER = dict(LUNCH, meal_code="3", meal_name="석식", nutrition_info="단백질(g) : 100.0")
PROFILE = {"age": 15, "height": 170, "weight": 65, "gender": "male"}


def _seed_meals(db, *records):
    db["meal_info"].docs.extend(dict(r) for r in records)


def test_analyze_excludes_dinner_and_flags_breakfast(client, db):
    _seed_meals(db, DINNER, LUNCH)
    r = client.post("/meals/analyze", json={"schoolCode": "7010057", "date": "2025-11-13", **PROFILE})
    assert r.status_code == 200
    body = r.json()

    assert [m["mealName"] for m in body["meals"]] == ["중식"]
    assert body["meals"][0]["dishName"].startswith("중식<br/>")
    assert body["meals"][0]["dishes"] == ["흰쌀밥", "곰탕&소면", "석박지"]
    assert body["hasBreakfast"] is False
    assert body["needsBreakfast"] is True

    nutrients = {n["name"]: n for n in body["nutrients"]}
    assert set(nutrients) == {"탄수화물", "단백질", "칼슘"}
    assert nutrients["단백질"]["current"] == 49.1
    assert nutrients["단백질"]["recommended"] == 59
    assert nutrients["칼슘"]["status"] == "부족"
    assert body["recommended"]["에너지"] == 3762


def test_analyze_with_breakfast_record(client, db):
    breakfast = dict(LUNCH, meal_code="1", meal_name="조식", nutrition_info="단백질(g) : 10.0")
    _seed_meals(db, LUNCH, breakfast)
    body = client.post("/meals/analyze", json={"schoolCode": "7010057", "date": "2025-11-13", **PROFILE}).json()
    assert [m["mealName"] for m in body["meals"]] == ["조식", "중식"]
    assert body["hasBreakfast"] is True
    assert body["needsBreakfast"] is False
    protein = next(n for n in body["nutrients"] if n["name"] == "단백질")
    assert abs(protein["current"] - 59.1) < 1e-9


def test_analyze_not_found(client):
    r = client.post("/meals/analyze", json={"schoolCode": "0000", "date": "2025-01-01", **PROFILE})
    assert r.status_code == 404


def test_db_errors_become_service_errors(client, db):
    db["meal_info"].fail_find = True
    r = client.post("/meals/analyze", json={"schoolCode": "7010057", "date": "2025-11-13", **PROFILE})
    assert r.status_code == 503
    assert r.json()["detail"].startswith("DB 조회 오류")

    db["food_items"].fail_find = True
    assert client.post("/foods/search", json={"foodName": "우유"}).status_code == 503

    db["schools"].fail_bulk = True
    raw = "B10|서울특별시교육청|7010057|가락고등학교\n"
    assert client.post("/import/schools", json={"rawData": raw}).status_code == 500


def test_analyze_rejects_out_of_range_profile(client):
    r = client.post("/meals/analyze", json={"schoolCode": "1", "date": "2025-01-01", **dict(PROFILE, age=30)})
    assert r.status_code == 422


def test_breakfast_merge(client):
    payload = {
        "profile": PROFILE,
        "nutrients": [
            {"name": "단백질", "current": 49.1, "recommended": 59, "unit": "g", "status": "부족"},
        ],
        "foodItems": [
            {"id": "a", "food_name": "삶은 달걀", "calories": "77", "protein": "6.3", "iron": "0.9"},
            {"id": "b", "food_name": "우유", "calories": "130", "protein": "6.0", "calcium": "226"},
        ],
    }
    r = client.post("/meals/breakfast", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["meal"]["dishName"] == "조식<br/>삶은 달걀, 우유"
    assert body["meal"]["calories"] == "207.0 Kcal"
    assert body["meal"]["dishes"] == ["삶은 달걀", "우유"]

    nutrients = {n["name"]: n for n in body["nutrients"]}
    assert abs(nutrients["단백질"]["current"] - 61.4) < 1e-9
    assert nutrients["단백질"]["recommended"] == 59
    assert nutrients["단백질"]["status"] == "초과"
    assert nutrients["칼슘"]["recommended"] == 900
    assert nutrients["철분"]["recommended"] == 14


def test_breakfast_requires_items(client):
    r = client.post("/meals/breakfast", json={"profile": PROFILE, "nutrients": [], "foodItems": []})
    assert r.status_code == 400


def test_food_search(client, db):
    db["food_items"].docs.extend([
        {"_id": 1, "food_name": "우유", "food_code": "F1"},
        {"_id": 2, "food_name": "딸기우유", "food_code": "F2"},
        {"_id": 3, "food_name": "식빵", "food_code": "F3"},
    ])
    foods = client.post("/foods/search", json={"foodName": "우유"}).json()["foods"]
    assert sorted(f["food_name"] for f in foods) == ["딸기우유", "우유"]
    assert all("_id" not in f and f["id"] for f in foods)

    assert client.post("/foods/search", json={"foodName": "우"}).json() == {"foods": []}


def test_import_meals(client, db):
    rows = [
        {"office_code": "B10", "office_name": "서울특별시교육청", "school_code": "7010057",
         "school_name": "가락고등학교", "meal_code": "2", "meal_name": "중식", "meal_date": "20251113",
         "meal_count": "120.00", "dish_names": "흰쌀밥", "nutrition_info": "단백질(g) : 49.1",
         "updated_date": "20251120"},
        {"office_code": "B10", "office_name": "서울특별시교육청", "school_code": "7010057",
         "school_name": "가락고등학교", "meal_code": "1", "meal_name": "조식", "meal_date": "20251113"},
    ]
    r = client.post("/import/meals", json={"mealData": rows})
    assert r.json() == {"success": True, "schoolsImported": 1, "mealsImported": 2}

    meal = db["meal_info"].docs[0]
    assert meal["meal_date"] == "2025-11-13"
    assert meal["updated_date"] == "2025-11-20"
    assert meal["meal_count"] == 120.0
    assert db["schools"].docs[0]["school_name"] == "가락고등학교"

    assert client.post("/import/meals", json={}).status_code == 400


def test_import_schools(client, db):
    raw = "B10|서울특별시교육청|7010057|가락고등학교\n잘못된줄\nC10|부산광역시교육청|8010001|부산고등학교\n"
    r = client.post("/import/schools", json={"rawData": raw})
    assert r.json() == {"success": True, "schoolsImported": 2}
    assert {d["school_code"] for d in db["schools"].docs} == {"7010057", "8010001"}


def _xlsx(rows):
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, index=False)
    return buf.getvalue()


def test_import_foods_xlsx(client, db):
    data = _xlsx([
        {"식품코드": "D101", "식품명": "우유", "에너지(kcal)": 130, "단백질(g)": 6.0, "칼슘(mg)": 226},
        {"식품코드": "D102", "식품명": "", "에너지(kcal)": 10},
        {"식품코드": "D103", "식품명": "식빵", "에너지(kcal)": 265.5, "철(mg)": 1.1},
    ])
    files = {"file": ("foods.xlsx", data, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")}
    r = client.post("/import/foods", files=files)
    assert r.json() == {"success": True, "total": 2, "successCount": 2, "errorCount": 0}

    milk = next(d for d in db["food_items"].docs if d["food_code"] == "D101")
    assert milk["calories"] == "130"
    assert milk["protein"] == "6"
    assert milk["vitamin_a"] == ""


def test_import_foods_counts_failed_batches(client, db):
    db["food_items"].fail_bulk = True
    rows = [{"식품코드": f"X{i}", "식품명": f"음식{i}"} for i in range(FOOD_BATCH_SIZE + 5)]
    files = {"file": ("foods.xlsx", _xlsx(rows), "application/octet-stream")}
    body = client.post("/import/foods", files=files).json()
    assert body["total"] == FOOD_BATCH_SIZE + 5
    assert body["successCount"] == 0
    assert body["errorCount"] == FOOD_BATCH_SIZE + 5


def test_import_foods_rejects_empty_file(client):
    r = client.post("/import/foods", files={"file": ("empty.xlsx", b"", "application/octet-stream")})
    assert r.status_code == 400
