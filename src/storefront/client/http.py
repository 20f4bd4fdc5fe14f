"""HTTP client for the storefront backend.

One method per backend operation. Every call either returns a parsed
schema or raises ``TransportError``; nothing is retried.
"""

from __future__ import annotations

from typing import Any

import requests
import structlog
from pydantic import ValidationError as SchemaError

from storefront.client.response import extract_error_detail
from storefront.client.schemas import (
    CatalogPage,
    LoginRequest,
    LoginResponse,
    OrderReceipt,
    OrderRecord,
    OrderStatus,
    OrderSubmission,
    Product,
    ProductDraft,
    StatusUpdateRequest,
)
from storefront.exceptions import TransportError, UnauthorizedError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class StorefrontClient:
    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # -------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        allow_not_found: bool = False,
        **kwargs: Any,
    ) -> requests.Response | None:
        url = f"{self.base_url}/api{path}"
        headers = kwargs.pop("headers", {})
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("backend_unreachable", method=method, path=path, error=str(exc))
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.debug("backend_response", method=method, path=path, status=response.status_code)

        if allow_not_found and response.status_code == 404:
            return None

        if response.status_code >= 400:
            detail = extract_error_detail(response)
            error_cls = UnauthorizedError if response.status_code in (401, 403) else TransportError
            logger.warning(
                "backend_error",
                method=method,
                path=path,
                status=response.status_code,
                detail=detail,
            )
            raise error_cls(
                f"{method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        return response

    @staticmethod
    def _parse(response: requests.Response, schema):
        try:
            return schema.model_validate(response.json())
        except (ValueError, SchemaError) as exc:
            raise TransportError(
                f"Unexpected response body: {exc}",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _parse_list(response: requests.Response, schema) -> list:
        try:
            body = response.json()
            if not isinstance(body, list):
                raise ValueError(f"expected a list, got {type(body).__name__}")
            return [schema.model_validate(item) for item in body]
        except (ValueError, SchemaError) as exc:
            raise TransportError(
                f"Unexpected response body: {exc}",
                status_code=response.status_code,
            ) from exc

    # -------------------------------------------------------------------
    # Shopper operations
    # -------------------------------------------------------------------
    def catalog(
        self,
        category: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> CatalogPage:
        """Fetch one page of products. Parameters left as ``None`` are not sent."""
        params = {
            key: value
            for key, value in (("category", category), ("sort", sort), ("page", page), ("limit", limit))
            if value is not None
        }
        response = self._request("GET", "/products", params=params)
        return self._parse(response, CatalogPage)

    def product(self, identifier: str) -> Product | None:
        response = self._request("GET", f"/products/{identifier}", allow_not_found=True)
        if response is None:
            return None
        return self._parse(response, Product)

    def submit_order(self, payload: OrderSubmission) -> OrderReceipt:
        response = self._request("POST", "/orders", json=payload.model_dump(mode="json"))
        return self._parse(response, OrderReceipt)

    def order(self, order_id: str) -> OrderRecord | None:
        response = self._request("GET", f"/orders/{order_id}", allow_not_found=True)
        if response is None:
            return None
        return self._parse(response, OrderRecord)

    # -------------------------------------------------------------------
    # Admin operations
    # -------------------------------------------------------------------
    def login(self, email: str, password: str) -> LoginResponse:
        body = LoginRequest(email=email, password=password)
        response = self._request("POST", "/admin/login", json=body.model_dump())
        return self._parse(response, LoginResponse)

    def admin_orders(self, token: str) -> list[OrderRecord]:
        response = self._request("GET", "/admin/orders", token=token)
        return self._parse_list(response, OrderRecord)

    def admin_create_product(self, token: str, draft: ProductDraft) -> dict:
        response = self._request(
            "POST",
            "/admin/products",
            token=token,
            json=draft.model_dump(mode="json", exclude_none=True),
        )
        try:
            return response.json()
        except ValueError:
            return {}

    def admin_update_order_status(self, token: str, order_id: str, status: OrderStatus | str) -> None:
        body = StatusUpdateRequest(status=status)
        self._request(
            "PATCH",
            f"/admin/orders/{order_id}/status",
            token=token,
            json=body.model_dump(mode="json"),
        )
