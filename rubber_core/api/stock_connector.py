"""
Stock API Connector
CRUD for the /stock collection (rubber colors and their quantity)
"""
from typing import List

from rubber_core.errors import MalformedResponseError
from rubber_core.models import Color, color_from_wire, color_to_wire

from .base_connector import BaseAPIConnector


class StockConnector(BaseAPIConnector):
    """
    Connector for the stock collection.

    Expected API Response Format (GET /stock):
    [
        {"name": "Negro", "quantity": 15},
        {"name": "Negro Pega", "quantity": 20},
        ...
    ]

    Items are keyed by their raw name: PUT/DELETE /stock/{name}.
    """

    resource_path = "stock"

    def fetch_all(self) -> List[Color]:
        data, _ = self._make_request(self.collection_url())
        if not isinstance(data, list):
            raise MalformedResponseError("GET /stock did not return a list", payload=data)
        return [color_from_wire(item) for item in data]

    def fetch_one(self, name: str) -> Color:
        data, _ = self._make_request(self.item_url(name))
        return color_from_wire(data)

    def create(self, color: Color) -> None:
        self._make_request(self.collection_url(), "POST", data=color_to_wire(color), expect_json=False)

    def replace(self, name: str, color: Color) -> None:
        self._make_request(self.item_url(name), "PUT", data=color_to_wire(color), expect_json=False)

    def delete(self, name: str) -> None:
        self._make_request(self.item_url(name), "DELETE", expect_json=False)
