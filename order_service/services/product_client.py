# order_service/services/product_client.py
from urllib.parse import quote

from order_service.domain.schemas import ProductRecord
from order_service.services.remote_client import RemoteClient


class ProductClient(RemoteClient):
    service_name = "product-service"

    def fetch_product(self, product_id: str) -> ProductRecord:
        data = self._call("GET", f"/products/{quote(product_id, safe='')}")
        return self._parse(ProductRecord, data)

    def deduct_stock(self, product_id: str, quantity: int) -> None:
        # nie jest idempotentne - każde wywołanie zmniejsza stan
        # każda odpowiedź 2xx to sukces, treść nie jest potrzebna
        self._send(
            "PATCH",
            f"/products/{quote(product_id, safe='')}/stock",
            json={"quantity": quantity},
        )
