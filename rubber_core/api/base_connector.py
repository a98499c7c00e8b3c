"""
Base API Connector Class for the rubber REST API
Provides the HTTP/JSON plumbing shared by the stock and formula connectors
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote
from dataclasses import dataclass
import logging

import requests

from rubber_core.errors import (
    TransportError,
    HTTPStatusError,
    ResourceNotFoundError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)


@dataclass
class APIConfig:
    """Configuration for API connection"""
    api_name: str
    base_url: str
    api_key: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    timeout: float = 30


class BaseAPIConnector(ABC):
    """Abstract base class for the resource connectors"""

    # Collection path, e.g. "stock"
    resource_path: str = ""

    def __init__(self, config: APIConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        if config.headers:
            self.session.headers.update(config.headers)

        if config.api_key:
            self._set_auth_header()

    def _set_auth_header(self):
        """Set authentication header (bearer token by default)"""
        self.session.headers.update({"Authorization": f"Bearer {self.config.api_key}"})

    @abstractmethod
    def fetch_all(self):
        """GET the whole collection, mapped to local objects"""

    # =========================================================================
    # URL CONSTRUCTION
    # =========================================================================

    def collection_url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/{self.resource_path}"

    def item_url(self, key: str) -> str:
        """Key-based URL; the key segment is always percent-encoded."""
        return f"{self.collection_url()}/{quote(key, safe='')}"

    # =========================================================================
    # REQUEST / RESPONSE
    # =========================================================================

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        expect_json: bool = True,
    ) -> Tuple[Any, requests.Response]:
        """
        Make HTTP request and interpret the response.

        Args:
            url: Full request URL
            method: HTTP method (GET, POST, PUT, DELETE)
            data: JSON-serialisable request body
            headers: Extra per-request headers
            expect_json: Whether a 2xx body must parse as JSON

        Returns:
            Tuple of (parsed JSON body or None, response)

        Raises:
            TransportError: network failure or timeout
            ResourceNotFoundError: HTTP 404
            HTTPStatusError: any other non-2xx status
            MalformedResponseError: 2xx body that is not valid JSON
        """
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=data,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"API request failed for {self.config.api_name}: {e}",
                url=url,
                method=method,
            ) from e

        if not 200 <= response.status_code < 300:
            message = self._error_message(response)
            if response.status_code == 404:
                raise ResourceNotFoundError(message, url=url)
            raise HTTPStatusError(message, status_code=response.status_code, url=url)

        if not response.content or not response.content.strip():
            if expect_json:
                raise MalformedResponseError(f"Empty response body from {url}")
            return None, response

        try:
            return response.json(), response
        except ValueError as e:
            if not expect_json:
                return None, response
            raise MalformedResponseError(
                f"Response from {url} is not valid JSON: {e}",
                payload=response.text,
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Best-effort error message from an error response, for logging only"""
        fallback = f"HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            text = (response.text or "").strip()
            return f"{fallback}: {text[:200]}" if text else fallback

        if isinstance(body, dict):
            for key in ("message", "error", "detail"):
                if body.get(key):
                    return f"{fallback}: {body[key]}"
        return fallback
