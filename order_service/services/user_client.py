# order_service/services/user_client.py
from urllib.parse import quote

from order_service.domain.schemas import UserSnapshot
from order_service.services.remote_client import RemoteClient


class UserClient(RemoteClient):
    service_name = "user-service"

    def fetch_user(self, user_id: str) -> UserSnapshot:
        data = self._call("GET", f"/users/{quote(user_id, safe='')}")
        return self._parse(UserSnapshot, data)
