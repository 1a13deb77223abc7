"""
Pytest configuration and shared fixtures for orchestrate tests.

HTTP exchanges are stubbed with requests_mock. ``fake_api`` goes one step
further and serves a small in-memory document store so multi-request
behaviour (refs, conditional writes, paging) can be exercised end to end.
"""

import itertools
import json
from typing import Optional
from urllib.parse import parse_qsl, unquote, urlencode, urlsplit

import pytest
import requests_mock as rm
from pydantic import BaseModel

from orchestrate import Client


API_TOKEN = "test-token"
API_HOST = "api.test"
BASE_URL = f"https://{API_HOST}/v0/"


def query_pairs(request) -> list:
    """Query pairs of a recorded request, case and order preserved."""
    return parse_qsl(urlsplit(request.url).query, keep_blank_values=True)


# =============================================================================
# Sample Models
# =============================================================================

class User(BaseModel):
    name: str
    email: str


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Client pointed at the stub host."""
    return Client(token=API_TOKEN, host=API_HOST)


@pytest.fixture
def chad():
    return User(name="chad", email="c@x.com")


# =============================================================================
# In-memory API
# =============================================================================

class FakeOrchestrate:
    """
    Just enough of the key/value and search API to run scenarios against.

    Documents keep every version; a plain delete tombstones the key while
    leaving old refs readable, ``purge=true`` forgets the key entirely.
    """

    def __init__(self):
        self.docs: dict = {}
        self._keys = itertools.count(1)
        self._refs = itertools.count(1)

    # -- helpers -------------------------------------------------------------

    def _versions(self, collection: str, key: str) -> Optional[dict]:
        return self.docs.get(collection, {}).get(key)

    def _current(self, collection: str, key: str):
        doc = self._versions(collection, key)
        if doc is None or doc["deleted"]:
            return None
        return doc["history"][-1]

    def _write(self, collection: str, key: str, value, context) -> None:
        ref = f"r{next(self._refs):04d}"
        doc = self.docs.setdefault(collection, {}).setdefault(key, {"history": [], "deleted": False})
        doc["history"].append((ref, value))
        doc["deleted"] = False
        context.status_code = 201
        context.headers["Location"] = f"/v0/{collection}/{key}/refs/{ref}"

    @staticmethod
    def _error(context, status: int, message: str, code: str) -> str:
        context.status_code = status
        context.headers["Content-Type"] = "application/json"
        return json.dumps({"message": message, "code": code})

    def _live_items(self, collection: str) -> list:
        items = []
        for key in sorted(self.docs.get(collection, {})):
            current = self._current(collection, key)
            if current is not None:
                items.append((key, current[0], current[1]))
        return items

    # -- dispatch ------------------------------------------------------------

    def handle(self, request, context) -> str:
        parts = urlsplit(request.url)
        segments = [unquote(s) for s in parts.path.split("/") if s][1:]
        query = dict(parse_qsl(parts.query, keep_blank_values=True))
        method = request.method

        if len(segments) == 1:
            collection = segments[0]
            if method == "POST":
                self._write(collection, f"k{next(self._keys):04d}", request.json(), context)
                return ""
            if method == "GET" and "query" in query:
                return self._search(collection, query, context)
            if method == "GET":
                return self._list(collection, query, context)

        if len(segments) == 2:
            collection, key = segments
            if method == "GET":
                current = self._current(collection, key)
                if current is None:
                    return self._error(context, 404, f"{key} not found", "items_not_found")
                context.status_code = 200
                context.headers["Content-Location"] = f"/v0/{collection}/{key}/refs/{current[0]}"
                return json.dumps(current[1])
            if method == "PUT":
                return self._put(collection, key, request, context)
            if method == "DELETE":
                doc = self._versions(collection, key)
                if query.get("purge") == "true":
                    self.docs.get(collection, {}).pop(key, None)
                elif doc is not None:
                    doc["deleted"] = True
                context.status_code = 204
                return ""

        if len(segments) == 4 and segments[2] == "refs" and method == "GET":
            collection, key, _, ref = segments
            doc = self._versions(collection, key) or {"history": []}
            for version_ref, value in doc["history"]:
                if version_ref == ref:
                    context.status_code = 200
                    context.headers["Content-Location"] = f"/v0/{collection}/{key}/refs/{ref}"
                    return json.dumps(value)
            return self._error(context, 404, f"{key}/{ref} not found", "items_not_found")

        return self._error(context, 400, "unsupported", "api_bad_request")

    def _put(self, collection: str, key: str, request, context) -> str:
        current = self._current(collection, key)
        if_match = request.headers.get("If-Match")
        if if_match is not None:
            if current is None or current[0] != if_match.strip('"'):
                return self._error(context, 412, "ref does not match", "item_version_mismatch")
        if request.headers.get("If-None-Match") == "*" and current is not None:
            return self._error(context, 409, "item already present", "item_already_present")
        self._write(collection, key, request.json(), context)
        return ""

    def _list(self, collection: str, query: dict, context) -> str:
        limit = int(query.get("limit", 10))
        items = self._live_items(collection)
        if "afterKey" in query:
            items = [i for i in items if i[0] > query["afterKey"]]
        if "startKey" in query:
            items = [i for i in items if i[0] >= query["startKey"]]
        page = items[:limit]
        body = {
            "count": len(page),
            "results": [
                {"path": {"collection": collection, "key": k, "ref": r}, "value": v}
                for k, r, v in page
            ],
        }
        if len(items) > limit:
            body["next"] = f"/v0/{collection}?" + urlencode({"limit": limit, "afterKey": page[-1][0]})
        context.status_code = 200
        return json.dumps(body)

    def _search(self, collection: str, query: dict, context) -> str:
        limit = int(query.get("limit", 10))
        offset = int(query.get("offset", 0))
        items = self._live_items(collection)
        expression = query["query"]
        if expression != "*":
            field, _, wanted = expression.partition(":")
            items = [i for i in items if str(i[2].get(field)) == wanted]
        page = items[offset:offset + limit]
        body = {
            "count": len(page),
            "totalCount": len(items),
            "results": [
                {"path": {"collection": collection, "key": k, "ref": r}, "value": v, "score": 1.0}
                for k, r, v in page
            ],
        }
        if offset + limit < len(items):
            body["next"] = f"/v0/{collection}?" + urlencode(
                {"query": expression, "limit": limit, "offset": offset + limit}
            )
        if offset > 0:
            body["prev"] = f"/v0/{collection}?" + urlencode(
                {"query": expression, "limit": limit, "offset": max(offset - limit, 0)}
            )
        context.status_code = 200
        return json.dumps(body)


@pytest.fixture
def fake_api():
    """Serve FakeOrchestrate for every request to the stub host."""
    api = FakeOrchestrate()
    with rm.Mocker() as m:
        m.register_uri(rm.ANY, rm.ANY, text=api.handle)
        yield api
