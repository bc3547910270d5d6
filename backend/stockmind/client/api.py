"""HTTP client for the StockMind API."""
from typing import Any, Dict, Optional

import httpx

from stockmind.utils.logger import get_logger

logger = get_logger("client")


class ApiClientError(Exception):
    """Raised when the API answers with an error envelope or an HTTP error."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ApiClient:
    """
    Thin JSON client that unwraps the {success, data, error, message} envelope.

    Pass a preconfigured httpx.Client (e.g. with a MockTransport) to control
    the transport; otherwise one is created for base_url.
    """

    def __init__(self, base_url: str = "", client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Send a request and return the envelope's data.

        Raises:
            ApiClientError: On a non-2xx status or success=false
        """
        response = self._client.request(method, path, params=params, json=json)
        body = _json_or_none(response)

        if response.is_error or (isinstance(body, dict) and body.get("success") is False):
            message = _error_message(body) or response.reason_phrase
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiClientError(response.status_code, message)

        if isinstance(body, dict) and "success" in body:
            if "pagination" in body:
                return {"items": body.get("data", []), "pagination": body["pagination"]}
            return body.get("data")
        return body

    def get(self, path: str, **params: Any) -> Any:
        return self.request("GET", path, params=params or None)

    def post(self, path: str, json: Any = None, **params: Any) -> Any:
        return self.request("POST", path, params=params or None, json=json)

    def put(self, path: str, json: Any = None, **params: Any) -> Any:
        return self.request("PUT", path, params=params or None, json=json)

    def delete(self, path: str, **params: Any) -> Any:
        return self.request("DELETE", path, params=params or None)


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    return body.get("error") or body.get("message") or body.get("detail")
