"""Tests for the user-service and product-service HTTP clients.

A stub session replaces requests.Session; no network access.
"""

from decimal import Decimal

import pytest
import requests

from order_service.domain.errors import (
    RemoteErrorKind,
    RemoteMalformed,
    RemoteNotFound,
    RemoteRejected,
    RemoteUnreachable,
)
from order_service.services.product_client import ProductClient
from order_service.services.user_client import UserClient
from tests.fakes import StubResponse, StubSession


def _user_client(response=None, error=None):
    session = StubSession(response, error)
    return UserClient("http://users:3001/", session, timeout=1.5), session


def _product_client(response=None, error=None):
    session = StubSession(response, error)
    return ProductClient("http://products:3003", session, timeout=1.5), session


class TestUserClient:

    def test_fetch_user(self):
        body = {"success": True, "data": {"_id": "u1", "name": "Alice", "email": "a@example.com", "age": 30}}
        client, session = _user_client(StubResponse(200, body))

        user = client.fetch_user("u1")

        assert user.id == "u1"
        assert user.name == "Alice"
        assert session.calls[0]["method"] == "GET"
        assert session.calls[0]["url"] == "http://users:3001/users/u1"
        assert session.calls[0]["timeout"] == 1.5

    def test_user_id_is_escaped(self):
        body = {"success": True, "data": {"id": "a/b", "name": "Slash"}}
        client, session = _user_client(StubResponse(200, body))
        client.fetch_user("a/b")
        assert session.calls[0]["url"] == "http://users:3001/users/a%2Fb"

    def test_not_found(self):
        client, _ = _user_client(StubResponse(404, {"success": False, "error": "User not found"}))
        with pytest.raises(RemoteNotFound) as exc_info:
            client.fetch_user("u404")
        assert exc_info.value.kind == RemoteErrorKind.NOT_FOUND

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("connection refused"),
            requests.Timeout("read timed out"),
        ],
    )
    def test_transport_errors_are_unreachable(self, error):
        client, _ = _user_client(error=error)
        with pytest.raises(RemoteUnreachable) as exc_info:
            client.fetch_user("u1")
        assert exc_info.value.__cause__ is error

    def test_server_error_is_unreachable(self):
        client, _ = _user_client(StubResponse(503, text="Service Unavailable"))
        with pytest.raises(RemoteUnreachable):
            client.fetch_user("u1")

    @pytest.mark.parametrize(
        "response",
        [
            StubResponse(200, None, text="<html>"),
            StubResponse(200, {"success": True}),
            StubResponse(200, ["u1"]),
            StubResponse(200, {"success": True, "data": {"id": "u1"}}),
        ],
    )
    def test_malformed_payloads(self, response):
        client, _ = _user_client(response)
        with pytest.raises(RemoteMalformed):
            client.fetch_user("u1")


class TestProductClient:

    def test_fetch_product(self):
        body = {"success": True, "data": {"_id": "p1", "name": "Keyboard", "price": 19.99, "stock": 4}}
        client, _ = _product_client(StubResponse(200, body))

        product = client.fetch_product("p1")

        assert product.price == Decimal("19.99")
        assert product.stock == 4
        assert product.snapshot().model_dump() == {"id": "p1", "name": "Keyboard", "price": Decimal("19.99")}

    def test_negative_stock_is_malformed(self):
        body = {"success": True, "data": {"id": "p1", "name": "Keyboard", "price": 1, "stock": -1}}
        client, _ = _product_client(StubResponse(200, body))
        with pytest.raises(RemoteMalformed):
            client.fetch_product("p1")

    def test_deduct_stock_sends_quantity(self):
        client, session = _product_client(StubResponse(200, {"success": True, "message": "Stock updated successfully"}))

        client.deduct_stock("p1", 3)

        call = session.calls[0]
        assert call["method"] == "PATCH"
        assert call["url"] == "http://products:3003/products/p1/stock"
        assert call["json"] == {"quantity": 3}

    def test_deduct_stock_ignores_body_on_success(self):
        client, _ = _product_client(StubResponse(204))
        client.deduct_stock("p1", 1)

    def test_deduct_stock_rejected(self):
        client, _ = _product_client(StubResponse(400, {"success": False, "error": "Insufficient stock"}))
        with pytest.raises(RemoteRejected, match="Insufficient stock"):
            client.deduct_stock("p1", 10)

    def test_deduct_stock_not_found(self):
        client, _ = _product_client(StubResponse(404, {"success": False, "error": "Product not found"}))
        with pytest.raises(RemoteNotFound):
            client.deduct_stock("p404", 1)
