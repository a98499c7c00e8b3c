# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import MagicMock
from urllib.parse import unquote

import pytest
import requests

from rubber_core.api import APIConfig, StockConnector, FormulaConnector
from rubber_core.services import ColorOrderStore, ColorService, FormulaService
from rubber_core.storage import LocalDatabase

BASE_URL = "https://rubber.test"


# =============================================================================
# FAKE REST SERVER
# =============================================================================

def make_response(
    status: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    raw: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network"""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if raw is not None:
        response._content = raw.encode("utf-8")
    elif body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    response.headers.update(headers or {})
    return response


class FakeRestServer:
    """
    In-memory stand-in for the stock/formulas API, used as the connectors'
    requests.Session. Resources are keyed by name, formulas carry an ETag.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.headers: Dict[str, str] = {}
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {"stock": {}, "formulas": {}}
        self.versions: Dict[str, int] = {}
        self.calls: List[Tuple[str, str, Any, Optional[Dict[str, str]]]] = []
        self._overrides: Dict[Tuple[str, str], requests.Response] = {}
        self._raise_next: Optional[Exception] = None

    # -- seeding / scripting ------------------------------------------------

    def seed_stock(self, *items: Dict[str, Any]) -> None:
        for item in items:
            self.collections["stock"][item["name"]] = dict(item)

    def seed_formula(self, name: str, ingredients: List[Dict[str, Any]]) -> None:
        self.collections["formulas"][name] = {"name": name, "ingredients": list(ingredients)}
        self.versions[name] = 1

    def respond_once(self, method: str, path: str, status: int, body: Any = None, raw: Optional[str] = None):
        self._overrides[(method, path)] = make_response(status, body, raw=raw)

    def raise_next(self, exc: Exception) -> None:
        self._raise_next = exc

    def count(self, method: str, path: Optional[str] = None) -> int:
        return sum(
            1 for m, p, _, _ in self.calls
            if m == method and (path is None or p == path)
        )

    def etag(self, name: str) -> str:
        return f'"v{self.versions.get(name, 1)}"'

    # -- requests.Session interface -----------------------------------------

    def request(self, method, url, json=None, headers=None, timeout=None, **kwargs):
        raw_path = url[len(self.base_url):]
        path = unquote(raw_path)
        self.calls.append((method, path, json, headers))

        if self._raise_next is not None:
            exc, self._raise_next = self._raise_next, None
            raise exc

        override = self._overrides.pop((method, path), None)
        if override is not None:
            return override

        parts = raw_path.strip("/").split("/", 1)
        collection = self.collections.get(parts[0])
        if collection is None:
            return make_response(404, {"message": "unknown collection"})

        if len(parts) == 1:
            return self._collection(parts[0], collection, method, json)
        return self._item(parts[0], collection, unquote(parts[1]), method, json, headers or {})

    def _collection(self, kind, collection, method, body):
        if method == "GET":
            return make_response(200, list(collection.values()))
        if method == "POST":
            if body["name"] in collection:
                return make_response(409, {"message": f"{body['name']} already exists"})
            collection[body["name"]] = dict(body)
            if kind == "formulas":
                self.versions[body["name"]] = 1
            return make_response(201, {"message": "created"})
        return make_response(405, {"message": "method not allowed"})

    def _item(self, kind, collection, key, method, body, headers):
        if key not in collection:
            return make_response(404, {"message": f"{key} not found"})

        if method == "GET":
            extra = {"ETag": self.etag(key)} if kind == "formulas" else None
            return make_response(200, collection[key], headers=extra)

        if method == "PUT":
            if kind == "formulas" and headers.get("If-Match") not in (None, self.etag(key)):
                return make_response(412, {"message": "precondition failed"})
            del collection[key]
            collection[body["name"]] = dict(body)
            if kind == "formulas":
                self.versions[body["name"]] = self.versions.pop(key, 1) + 1
            return make_response(200, {"message": "updated"})

        if method == "DELETE":
            del collection[key]
            self.versions.pop(key, None)
            return make_response(204)

        return make_response(405, {"message": "method not allowed"})


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def server():
    """Empty fake REST server"""
    return FakeRestServer()


@pytest.fixture
def stock_connector(server):
    return StockConnector(APIConfig(api_name="stock_test", base_url=BASE_URL), session=server)


@pytest.fixture
def formula_connector(server):
    return FormulaConnector(APIConfig(api_name="formulas_test", base_url=BASE_URL), session=server)


@pytest.fixture
def local_db(tmp_path):
    """Fresh SQLite settings store per test"""
    db = LocalDatabase(tmp_path / "state" / "rubber_stock.db")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def order_store(local_db):
    return ColorOrderStore(local_db)


@pytest.fixture
def color_service(stock_connector, order_store):
    return ColorService(stock_connector, order_store)


@pytest.fixture
def formula_service(formula_connector):
    return FormulaService(formula_connector)


@pytest.fixture
def mock_streamlit(monkeypatch):
    """Mock Streamlit module used by the config loader"""
    mock_st = MagicMock()
    mock_st.secrets = {}
    monkeypatch.setattr("rubber_core.config.settings.st", mock_st)
    return mock_st


@pytest.fixture
def negro_formula(server):
    """The 'Negro' formula as the app ships it"""
    server.seed_formula("Negro", [{"name": "Estabilizante [gr]", "quantity": 500}])
    return server
