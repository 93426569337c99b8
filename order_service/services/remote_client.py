# order_service/services/remote_client.py
import requests
from requests import RequestException
from pydantic import BaseModel, ValidationError

from order_service.domain.errors import (
    RemoteMalformed,
    RemoteNotFound,
    RemoteRejected,
    RemoteUnreachable,
)
from order_service.utils.logging import get_logger

logger = get_logger(__name__)


class RemoteClient:
    """
    Wspólna część klientów HTTP do user-service i product-service.

    Każde wywołanie to jedno zapytanie z timeoutem, bez retry i bez cache.
    Sesja requests jest wstrzykiwana (tworzy ją i zamyka main.py).
    """

    service_name = "remote-service"

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.info(f"{self.__class__.__name__} {method} {url}")

        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as e:
            raise RemoteUnreachable(self.service_name, f"{method} {url} failed: {e}") from e

        if resp.status_code == 404:
            raise RemoteNotFound(self.service_name, f"{url} not found")
        if resp.status_code >= 500:
            raise RemoteUnreachable(self.service_name, f"{method} {url} returned {resp.status_code}")
        if resp.status_code >= 400:
            raise RemoteRejected(self.service_name, f"{method} {url} rejected: {_error_text(resp)}")
        return resp

    def _call(self, method: str, path: str, **kwargs) -> dict:
        resp = self._send(method, path, **kwargs)
        url = f"{self.base_url}{path}"

        try:
            body = resp.json()
        except ValueError as e:
            raise RemoteMalformed(self.service_name, f"{url} returned non-JSON body") from e

        if not isinstance(body, dict) or not isinstance(body.get("data"), dict):
            raise RemoteMalformed(self.service_name, f"{url} returned no data object")
        return body["data"]

    def _parse(self, model: type[BaseModel], data: dict):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RemoteMalformed(self.service_name, f"unexpected payload: {e.error_count()} invalid fields") from e


def _error_text(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or str(resp.status_code)
    if isinstance(body, dict):
        for key in ("error", "detail"):
            if body.get(key):
                return str(body[key])
    return str(resp.status_code)
