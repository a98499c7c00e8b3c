# =============================================================================
# tests/unit/test_connectors.py
# Unit Tests for the stock and formula API connectors
# =============================================================================

import pytest
import requests

from rubber_core.errors import (
    HTTPStatusError,
    MalformedResponseError,
    ResourceNotFoundError,
    TransportError,
)
from rubber_core.models import Color, Formula, Ingredient

BASE_URL = "https://rubber.test"


class TestUrlConstruction:

    def test_collection_url(self, stock_connector, formula_connector):
        assert stock_connector.collection_url() == f"{BASE_URL}/stock"
        assert formula_connector.collection_url() == f"{BASE_URL}/formulas"

    @pytest.mark.parametrize("key,encoded", [
        ("Negro Pega", "Negro%20Pega"),
        ("Rojo/Azul", "Rojo%2FAzul"),
        ("Ñandú #1", "%C3%91and%C3%BA%20%231"),
    ])
    def test_item_url_is_percent_encoded(self, stock_connector, key, encoded):
        assert stock_connector.item_url(key) == f"{BASE_URL}/stock/{encoded}"


class TestStockConnector:

    def test_fetch_all_maps_items(self, server, stock_connector):
        server.seed_stock({"name": "Negro", "quantity": 15}, {"name": "Marino", "quantity": 10})

        assert stock_connector.fetch_all() == [
            Color("negro", "Negro", 15),
            Color("marino", "Marino", 10),
        ]

    def test_create_posts_wire_body(self, server, stock_connector):
        stock_connector.create(Color.from_name("Beige", 12))

        method, path, body, _ = server.calls[-1]
        assert (method, path, body) == ("POST", "/stock", {"name": "Beige", "quantity": 12})

    def test_replace_puts_to_name_url(self, server, stock_connector):
        server.seed_stock({"name": "Negro Pega", "quantity": 1})

        stock_connector.replace("Negro Pega", Color.from_name("Negro Pega", 4))

        assert server.count("PUT", "/stock/Negro Pega") == 1
        assert server.collections["stock"]["Negro Pega"]["quantity"] == 4

    def test_delete(self, server, stock_connector):
        server.seed_stock({"name": "Crudo", "quantity": 1})

        stock_connector.delete("Crudo")

        assert "Crudo" not in server.collections["stock"]

    def test_non_list_collection_is_malformed(self, server, stock_connector):
        server.respond_once("GET", "/stock", 200, {"items": []})

        with pytest.raises(MalformedResponseError):
            stock_connector.fetch_all()

    def test_invalid_json_is_malformed(self, server, stock_connector):
        server.respond_once("GET", "/stock", 200, raw="<html>oops</html>")

        with pytest.raises(MalformedResponseError):
            stock_connector.fetch_all()

    def test_server_error_carries_status_and_message(self, server, stock_connector):
        server.respond_once("GET", "/stock", 503, {"message": "waking up"})

        with pytest.raises(HTTPStatusError) as exc_info:
            stock_connector.fetch_all()

        assert exc_info.value.status_code == 503
        assert "waking up" in exc_info.value.message

    def test_transport_failure_is_wrapped(self, server, stock_connector):
        server.raise_next(requests.exceptions.ConnectionError("refused"))

        with pytest.raises(TransportError):
            stock_connector.fetch_all()

    def test_timeout_is_wrapped(self, server, stock_connector):
        server.raise_next(requests.exceptions.Timeout("slow"))

        with pytest.raises(TransportError):
            stock_connector.delete("Negro")

    def test_error_body_that_is_not_json(self, server, stock_connector):
        server.respond_once("DELETE", "/stock/Negro", 500, raw="Internal Server Error")

        with pytest.raises(HTTPStatusError) as exc_info:
            stock_connector.delete("Negro")

        assert "Internal Server Error" in exc_info.value.message


class TestFormulaConnector:

    def test_fetch_one_reads_etag(self, negro_formula, formula_connector):
        formula = formula_connector.fetch_one("Negro")

        assert formula.version == '"v1"'
        assert formula.ingredients == [Ingredient("Estabilizante", 500, "gr")]

    def test_fetch_one_missing_raises_not_found(self, formula_connector):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            formula_connector.fetch_one("Magenta")

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.status_code == 404

    def test_replace_sends_if_match(self, negro_formula, server, formula_connector):
        formula = formula_connector.fetch_one("Negro")

        formula_connector.replace("Negro", formula, if_match=formula.version)

        _, _, body, headers = server.calls[-1]
        assert headers == {"If-Match": '"v1"'}
        assert body == {"name": "Negro", "ingredients": [{"name": "Estabilizante [gr]", "quantity": 500}]}

    def test_replace_without_version_sends_no_header(self, negro_formula, server, formula_connector):
        formula_connector.replace("Negro", Formula.from_name("Negro"))

        assert server.calls[-1][3] is None
