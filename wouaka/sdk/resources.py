"""API resource namespaces exposed on WouakaClient.

Each method maps to exactly one ``WouakaClient.request`` call and therefore
inherits its retry and error semantics.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wouaka.sdk.client import WouakaClient

JSON = dict[str, Any]


class _Resource:
    def __init__(self, client: "WouakaClient") -> None:
        self._client = client


class ScoresAPI(_Resource):
    """W-SCORE credit scoring."""

    async def calculate(self, data: Mapping[str, Any]) -> JSON:
        """Compute a credit score for a customer.

        Args:
            data: Score request (phone_number, full_name, country, consent, ...).

        Returns:
            Score response with score, grade, risk_category and factors.
        """
        return await self._client.request("POST", "/v1/scores", dict(data))

    async def get(self, score_id: str) -> JSON:
        """Fetch a previously computed score."""
        return await self._client.request("GET", f"/v1/scores/{score_id}")

    async def list(self, page: int | None = None, per_page: int | None = None) -> JSON:
        """List score history (paginated)."""
        return await self._client.request(
            "GET", "/v1/scores", params={"page": page, "per_page": per_page}
        )


class KycAPI(_Resource):
    """W-KYC identity verification."""

    async def verify(self, data: Mapping[str, Any]) -> JSON:
        """Run a KYC verification."""
        return await self._client.request("POST", "/v1/kyc/verify", dict(data))

    async def get(self, kyc_id: str) -> JSON:
        """Fetch a KYC verification by ID."""
        return await self._client.request("GET", f"/v1/kyc/{kyc_id}")

    async def list(
        self,
        page: int | None = None,
        per_page: int | None = None,
        status: str | None = None,
    ) -> JSON:
        """List KYC verifications, optionally filtered by status."""
        return await self._client.request(
            "GET",
            "/v1/kyc",
            params={"page": page, "per_page": per_page, "status": status},
        )


class IdentityAPI(_Resource):
    """Identity lookup."""

    async def lookup(self, data: Mapping[str, Any]) -> JSON:
        """Look up an identity by phone number, national ID or email."""
        return await self._client.request("POST", "/v1/identity/lookup", dict(data))

    async def get(self, identity_id: str) -> JSON:
        return await self._client.request("GET", f"/v1/identity/{identity_id}")


class PrecheckAPI(_Resource):
    """Fast eligibility precheck."""

    async def check(self, data: Mapping[str, Any]) -> JSON:
        """Run a precheck before a full scoring request."""
        return await self._client.request("POST", "/v1/precheck", dict(data))


class WebhooksAPI(_Resource):
    """Webhook endpoint management."""

    async def create(self, config: Mapping[str, Any]) -> JSON:
        return await self._client.request("POST", "/v1/webhooks", dict(config))

    async def list(self) -> list[JSON]:
        """List all webhooks (unwrapped from the ``webhooks`` field)."""
        response = await self._client.request("GET", "/v1/webhooks")
        return response.get("webhooks", [])

    async def get(self, webhook_id: str) -> JSON:
        return await self._client.request("GET", f"/v1/webhooks/{webhook_id}")

    async def update(self, webhook_id: str, config: Mapping[str, Any]) -> JSON:
        """Partially update a webhook."""
        return await self._client.request(
            "PATCH", f"/v1/webhooks/{webhook_id}", dict(config)
        )

    async def delete(self, webhook_id: str) -> None:
        await self._client.request("DELETE", f"/v1/webhooks/{webhook_id}")

    async def test(self, webhook_id: str) -> JSON:
        """Send a test delivery; returns ``{success, response_code?}``."""
        return await self._client.request("POST", f"/v1/webhooks/{webhook_id}/test")

    async def get_deliveries(
        self,
        webhook_id: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSON:
        """List delivery attempts for a webhook (paginated)."""
        return await self._client.request(
            "GET",
            f"/v1/webhooks/{webhook_id}/deliveries",
            params={"page": page, "per_page": per_page},
        )


class ApiKeysAPI(_Resource):
    """API key management."""

    async def list(self) -> list[JSON]:
        """List API keys (unwrapped from the ``keys`` field)."""
        response = await self._client.request("GET", "/v1/api-keys")
        return response.get("keys", [])

    async def create(
        self,
        name: str,
        permissions: Sequence[str] | None = None,
        expires_in_days: int | None = None,
    ) -> JSON:
        """Create an API key; the returned ``key`` is only shown once."""
        return await self._client.request(
            "POST",
            "/v1/api-keys",
            {
                "name": name,
                "permissions": list(permissions) if permissions is not None else None,
                "expires_in_days": expires_in_days,
            },
        )

    async def revoke(self, key_id: str) -> None:
        await self._client.request("DELETE", f"/v1/api-keys/{key_id}")

    async def rotate(self, key_id: str) -> JSON:
        return await self._client.request("POST", f"/v1/api-keys/{key_id}/rotate")


class UsageAPI(_Resource):
    """Usage statistics and plan quota."""

    async def get_stats(
        self, start_date: str | None = None, end_date: str | None = None
    ) -> JSON:
        """Usage statistics for a period (ISO 8601 dates)."""
        return await self._client.request(
            "GET",
            "/v1/usage",
            params={"start_date": start_date, "end_date": end_date},
        )

    async def get_quota(self) -> JSON:
        return await self._client.request("GET", "/v1/usage/quota")
