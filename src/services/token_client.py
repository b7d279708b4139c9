import httpx
import structlog
from typing import Any, List, Mapping, Optional

from src.config import settings
from src.models.token import TokenRecord
from src.services.registry_store import TokenStore
from src.utils.exceptions import StorageUnavailable, TokenRegistryErrorCodes, ValidationError

logger = structlog.get_logger()


class TokenApiClient(TokenStore):
    """Token registry accessed through the ``/api/tokens`` HTTP surface"""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT, connect=settings.HTTP_CONNECT_TIMEOUT),
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def list(self) -> List[TokenRecord]:
        try:
            response = self.client.get("/api/tokens")
        except httpx.RequestError as e:
            logger.error("Token list request failed", base_url=self.base_url, error=str(e))
            raise StorageUnavailable(f"Cannot reach {self.base_url}: {e}") from e

        if response.status_code != 200:
            raise StorageUnavailable(self._error_message(response, "Error reading tokens data"))

        try:
            return [TokenRecord.from_dict(item) for item in response.json()]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Failed to process token list response", error=str(e))
            raise StorageUnavailable(f"Malformed token list response: {e}") from e

    def create(self, fields: Mapping[str, Any]) -> TokenRecord:
        try:
            response = self.client.post("/api/tokens", json=dict(fields))
        except httpx.RequestError as e:
            logger.error("Token create request failed", base_url=self.base_url, error=str(e))
            raise StorageUnavailable(
                f"Cannot reach {self.base_url}: {e}", TokenRegistryErrorCodes.STORAGE_WRITE_FAILED
            ) from e

        if response.status_code == 400:
            body = self._json_or_empty(response)
            raise ValidationError(
                body.get("code", TokenRegistryErrorCodes.INVALID_PAYLOAD),
                body.get("error", "Invalid token data"),
                body.get("field"),
            )
        if response.status_code != 201:
            raise StorageUnavailable(
                self._error_message(response, "Error saving token data"),
                TokenRegistryErrorCodes.STORAGE_WRITE_FAILED,
            )

        try:
            return TokenRecord.from_dict(response.json())
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Failed to process token create response", error=str(e))
            raise StorageUnavailable(
                f"Malformed token create response: {e}", TokenRegistryErrorCodes.STORAGE_WRITE_FAILED
            ) from e

    @staticmethod
    def _json_or_empty(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _error_message(self, response: httpx.Response, default: str) -> str:
        return self._json_or_empty(response).get("error", f"{default} (HTTP {response.status_code})")
