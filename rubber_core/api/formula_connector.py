"""
Formula API Connector
CRUD for the /formulas collection (mixing formulas per color)
"""
from typing import List, Optional

from rubber_core.errors import MalformedResponseError
from rubber_core.models import Formula, formula_from_wire, formula_to_wire

from .base_connector import BaseAPIConnector


class FormulaConnector(BaseAPIConnector):
    """
    Connector for the formulas collection.

    Expected API Response Format (GET /formulas):
    [
        {
            "name": "Negro",
            "ingredients": [
                {"name": "Estabilizante [gr]", "quantity": 500},
                {"name": "Espumante [gr]", "quantity": 650}
            ]
        },
        ...
    ]

    Formulas are keyed by display name: GET/PUT/DELETE /formulas/{name}.
    The API only offers whole-resource PUT, never PATCH.
    """

    resource_path = "formulas"

    def fetch_all(self) -> List[Formula]:
        data, _ = self._make_request(self.collection_url())
        if not isinstance(data, list):
            raise MalformedResponseError("GET /formulas did not return a list", payload=data)
        return [formula_from_wire(item) for item in data]

    def fetch_one(self, name: str) -> Formula:
        """GET one formula; the ETag header, when present, becomes Formula.version."""
        data, response = self._make_request(self.item_url(name))
        return formula_from_wire(data, version=response.headers.get("ETag"))

    def create(self, formula: Formula) -> None:
        self._make_request(self.collection_url(), "POST", data=formula_to_wire(formula), expect_json=False)

    def replace(self, name: str, formula: Formula, if_match: Optional[str] = None) -> None:
        headers = {"If-Match": if_match} if if_match else None
        self._make_request(
            self.item_url(name),
            "PUT",
            data=formula_to_wire(formula),
            headers=headers,
            expect_json=False,
        )

    def delete(self, name: str) -> None:
        self._make_request(self.item_url(name), "DELETE", expect_json=False)
