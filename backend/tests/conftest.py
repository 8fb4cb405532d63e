# 라우터 테스트용 메모리 DB (motor 컬렉션 흉내)
import re
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from schoolmeal.core.deps import get_meal_db
from schoolmeal.main import app


def _match(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.I if "i" in cond.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(cond["$regex"], value, flags):
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d.get(key) or "", reverse=direction < 0)
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    def __aiter__(self):
        self._it = iter(self._docs)
        return self

    async def __anext__(self):
        try:
            return next(self._it)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.fail_bulk = False
        self.fail_find = False
        self._seq = 0

    def find(self, query=None):
        if self.fail_find:
            from pymongo.errors import ServerSelectionTimeoutError
            raise ServerSelectionTimeoutError("no servers")
        return FakeCursor([dict(d) for d in self.docs if _match(d, query or {})])

    async def insert_many(self, docs):
        for d in docs:
            self._seq += 1
            self.docs.append({"_id": self._seq, **d})

    async def bulk_write(self, ops, ordered=True):
        from pymongo.errors import BulkWriteError
        if self.fail_bulk:
            raise BulkWriteError({"writeErrors": [], "nInserted": 0})
        for op in ops:
            # pymongo UpdateOne 내부 필드
            query, update = op._filter, op._doc
            hit = next((d for d in self.docs if _match(d, query)), None)
            if hit is None:
                self._seq += 1
                hit = {"_id": self._seq, **query}
                self.docs.append(hit)
            hit.update(update.get("$set", {}))


class FakeDB(dict):
    def __missing__(self, name):
        col = FakeCollection()
        self[name] = col
        return col


@pytest.fixture
def db():
    return FakeDB()


@pytest.fixture
def client(db):
    # with 없이 생성: startup(Mongo 연결) 훅은 돌지 않는다
    app.dependency_overrides[get_meal_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
