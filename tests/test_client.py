"""
Tests for the Client: construction, ping and page following.
"""

import pytest
import requests

from orchestrate import Client, ClientConfig
from orchestrate.core.errors import DomainError, TransportError
from orchestrate.core.models import KVResults, SearchResults

from tests.conftest import API_HOST, API_TOKEN, BASE_URL, User, query_pairs


def kv_page(keys, next=None):
    body = {
        "count": len(keys),
        "results": [
            {"path": {"collection": "users", "key": k, "ref": f"r-{k}"}, "value": {"name": k, "email": f"{k}@x.com"}}
            for k in keys
        ],
    }
    if next is not None:
        body["next"] = next
    return body


class TestConstruction:
    """Tests for building a client."""

    def test_token_required(self):
        with pytest.raises(ValueError):
            Client(token="")

    def test_options_reach_config(self):
        client = Client(token=API_TOKEN, host=API_HOST, timeout=2.5, scheme="http")
        assert client.config.timeout == 2.5
        assert client.config.base_url == f"http://{API_HOST}/v0/"

    def test_from_config(self):
        config = ClientConfig(token=API_TOKEN, host=API_HOST)
        assert Client.from_config(config).config == config

    def test_builders_are_independent(self, client):
        assert client.get("users", "a") is not client.get("users", "a")

    def test_repr_hides_token(self, client):
        assert API_TOKEN not in repr(client)


class TestPing:
    """Tests for the reachability check."""

    def test_ping(self, client, requests_mock):
        requests_mock.head(BASE_URL, status_code=200)
        assert client.ping() is True
        assert requests_mock.last_request.method == "HEAD"

    def test_bad_key(self, client, requests_mock):
        requests_mock.head(BASE_URL, status_code=401)
        with pytest.raises(DomainError) as exc_info:
            client.ping()
        assert exc_info.value.status == 401

    def test_unreachable(self, client, requests_mock):
        requests_mock.head(BASE_URL, exc=requests.exceptions.ConnectionError)
        with pytest.raises(TransportError):
            client.ping()


class TestPaging:
    """Following next / prev links."""

    def test_next_page_replays_link(self, client, requests_mock):
        first = KVResults[User].model_validate(kv_page(["a"], next="/v0/users?limit=1&afterKey=a"))
        requests_mock.get(f"{BASE_URL}users", json=kv_page(["b"]))

        second = client.next_page(first, User)

        assert query_pairs(requests_mock.last_request) == [("limit", "1"), ("afterKey", "a")]
        assert isinstance(second, KVResults)
        assert isinstance(second.results[0].value, User)
        assert second.results[0].path.key == "b"
        assert not second.has_next()

    def test_next_page_on_last_page(self, client):
        last = KVResults[dict].model_validate(kv_page(["a"]))
        with pytest.raises(ValueError):
            client.next_page(last)

    def test_prev_page(self, client, requests_mock):
        page = SearchResults[dict].model_validate({
            "count": 0, "totalCount": 5, "results": [], "prev": "/v0/users?query=*&offset=0",
        })
        requests_mock.get(f"{BASE_URL}users", json={"count": 0, "totalCount": 5, "results": []})

        prev = client.prev_page(page)

        assert isinstance(prev, SearchResults)
        assert prev.total_count == 5
        assert query_pairs(requests_mock.last_request) == [("query", "*"), ("offset", "0")]

    def test_prev_page_missing(self, client):
        page = SearchResults[dict].model_validate({"count": 0, "totalCount": 0, "results": []})
        with pytest.raises(ValueError):
            client.prev_page(page)

    def test_iter_pages(self, client, requests_mock):
        requests_mock.get(
            f"{BASE_URL}users",
            [
                {"json": kv_page(["c", "d"], next="/v0/users?limit=2&afterKey=d")},
                {"json": kv_page(["e"])},
            ],
        )
        first = KVResults[User].model_validate(kv_page(["a", "b"], next="/v0/users?limit=2&afterKey=b"))

        keys = [r.path.key for page in client.iter_pages(first, User) for r in page.results]

        assert keys == ["a", "b", "c", "d", "e"]
        assert requests_mock.call_count == 2

    def test_iter_pages_stops_on_repeated_link(self, client, requests_mock):
        link = "/v0/users?limit=1&afterKey=a"
        requests_mock.get(f"{BASE_URL}users", json=kv_page(["b"], next=link))
        first = KVResults[dict].model_validate(kv_page(["a"], next=link))

        pages = list(client.iter_pages(first))

        assert len(pages) == 2
        assert requests_mock.call_count == 1
