"""Composio REST adapter — implements the IntegrationService and ToolCatalogService ports."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from repo_star_advisor.domain.entities import (
    ConnectionRequest,
    IntegrationStatus,
    ToolCatalog,
)
from repo_star_advisor.domain.exceptions import (
    IntegrationLookupError,
    RepoStarAdvisorError,
    ToolCatalogError,
    ToolExecutionError,
)

logger = logging.getLogger(__name__)


class ComposioTool:
    """A single Composio action, executed on behalf of one entity."""

    def __init__(
        self,
        adapter: ComposioAdapter,
        name: str,
        description: str = "",
        entity_id: str = "default",
        app_name: str = "",
    ) -> None:
        self.name = name
        self.description = description
        self.app_name = app_name
        self._adapter = adapter
        self._entity_id = entity_id

    def __repr__(self) -> str:
        return f"ComposioTool({self.name!r})"

    async def invoke(self, tool_input: dict[str, Any]) -> str:
        """POST /api/v2/actions/{name}/execute → JSON text with ``data``."""
        resp = await self._adapter._request(
            "POST",
            f"/api/v2/actions/{self.name}/execute",
            json={
                "appName": self.app_name,
                "input": tool_input,
                "entityId": self._entity_id,
            },
            error_type=ToolExecutionError,
        )
        try:
            body = resp.json()
        except ValueError as exc:
            raise ToolExecutionError(f"{self.name} returned invalid JSON: {exc}") from exc
        if isinstance(body, dict) and body.get("successful") is False:
            raise ToolExecutionError(
                f"{self.name} failed: {body.get('error') or 'unknown error'}"
            )
        return resp.text


class ComposioAdapter:
    """Concrete integration and tool backend on the Composio REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://backend.composio.dev",
        entity_id: str = "default",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._entity_id = entity_id
        self._headers: dict[str, str] = {
            "x-api-key": api_key,
            "Accept": "application/json",
            "User-Agent": "repo-star-advisor/1.0",
        }
        self._integrations: dict[str, dict[str, Any]] = {}

    # ── IntegrationService ──────────────────────────────────────────────

    async def get_integration(self, integration_id: str) -> IntegrationStatus:
        """GET /api/v1/integrations/{id} + its active connected accounts."""
        resp = await self._request(
            "GET",
            f"/api/v1/integrations/{integration_id}",
            error_type=IntegrationLookupError,
        )
        data = resp.json()
        self._integrations[integration_id] = data
        self._integrations[data.get("id", integration_id)] = data

        accounts = await self._request(
            "GET",
            "/api/v1/connectedAccounts",
            params={"integrationId": integration_id, "showActiveOnly": "true"},
            error_type=IntegrationLookupError,
        )
        items = accounts.json().get("items", [])

        return IntegrationStatus(
            id=data.get("id", integration_id),
            name=data.get("name") or data.get("appName", ""),
            connections=tuple(items),
        )

    async def get_required_params(self, integration_id: str) -> list[dict[str, object]]:
        """``expectedInputFields`` of the integration body.

        Reuses the body fetched by :meth:`get_integration` when available.
        """
        data = self._integrations.get(integration_id)
        if data is None:
            resp = await self._request(
                "GET",
                f"/api/v1/integrations/{integration_id}",
                error_type=IntegrationLookupError,
            )
            data = self._integrations[integration_id] = resp.json()
        fields: list[dict[str, object]] = data.get("expectedInputFields", [])
        return fields

    async def initiate_connection(
        self, integration_id: str, entity_id: str
    ) -> ConnectionRequest:
        """POST /api/v1/connectedAccounts → redirect URL for the operator."""
        resp = await self._request(
            "POST",
            "/api/v1/connectedAccounts",
            json={"integrationId": integration_id, "userUuid": entity_id},
            error_type=IntegrationLookupError,
        )
        data = resp.json()
        return ConnectionRequest(
            redirect_url=data.get("redirectUrl"),
            status=data.get("connectionStatus"),
        )

    # ── ToolCatalogService ──────────────────────────────────────────────

    async def get_tools(self, apps: list[str]) -> ToolCatalog:
        """GET /api/v2/actions?apps=… → ordered catalog of tools."""
        resp = await self._request(
            "GET",
            "/api/v2/actions",
            params={"apps": ",".join(apps)},
            error_type=ToolCatalogError,
        )
        items = resp.json().get("items", [])
        return ToolCatalog(
            tools=tuple(
                ComposioTool(
                    self,
                    name=item["name"],
                    description=item.get("description", ""),
                    entity_id=self._entity_id,
                    app_name=item.get("appName") or ",".join(apps),
                )
                for item in items
                if item.get("name")
            )
        )

    # ── HTTP ────────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        error_type: type[RepoStarAdvisorError],
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Perform a Composio API request with error translation."""
        url = f"{self._base_url}{endpoint}"
        try:
            resp = await self._client.request(
                method, url, headers=self._headers, params=params, json=json
            )
        except httpx.HTTPError as exc:
            raise error_type(f"Network error calling {url}: {exc}") from exc

        if resp.is_success:
            return resp

        if resp.status_code in (401, 403):
            raise error_type(
                "Composio rejected the API key. "
                "Set a valid key in the COMPOSIO_API_KEY environment variable."
            )

        if resp.status_code == 404:
            raise error_type(f"Not found: {endpoint}")

        logger.debug("Composio error body for %s: %s", url, resp.text)
        raise error_type(f"Composio API returned HTTP {resp.status_code} for {url}")
