"""Tests for the SQLAlchemy order repository against in-memory SQLite."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from order_service.data import models  # noqa: F401
from order_service.data.database import Base, build_engine, build_session_factory
from order_service.data.models.order import ORDER_STATUSES, OrderModel
from order_service.repos.order_repo import OrderRepo


@pytest.fixture
def db():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _order(user_id="u1", minutes_ago=0, **overrides):
    fields = dict(
        user_id=user_id,
        product_id="p1",
        quantity=2,
        total_price=Decimal("20.00"),
        user_details={"id": user_id, "name": "Alice", "email": None},
        product_details={"id": "p1", "name": "Keyboard", "price": "10"},
        created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    )
    fields.update(overrides)
    return OrderModel(**fields)


class TestInsert:

    def test_generates_id_and_defaults(self, db):
        repo = OrderRepo(db)
        order = repo.insert(_order())

        assert order.id
        assert order.status == "pending"
        assert repo.get(order.id).total_price == Decimal("20.00")

    def test_ids_are_unique(self, db):
        repo = OrderRepo(db)
        assert repo.insert(_order()).id != repo.insert(_order()).id

    def test_total_price_stored_exactly(self, db):
        repo = OrderRepo(db)
        order = repo.insert(_order(total_price=Decimal("0.125")))

        assert repo.get(order.id).total_price == Decimal("0.125")

    def test_get_missing(self, db):
        assert OrderRepo(db).get("missing") is None


class TestListing:

    def test_list_all_newest_first(self, db):
        repo = OrderRepo(db)
        old = repo.insert(_order(minutes_ago=10))
        new = repo.insert(_order(minutes_ago=1))
        middle = repo.insert(_order(user_id="u2", minutes_ago=5))

        assert [o.id for o in repo.list_all()] == [new.id, middle.id, old.id]

    def test_list_by_user(self, db):
        repo = OrderRepo(db)
        old = repo.insert(_order(minutes_ago=10))
        repo.insert(_order(user_id="u2"))
        new = repo.insert(_order(minutes_ago=1))

        assert [o.id for o in repo.list_by_user("u1")] == [new.id, old.id]
        assert repo.list_by_user("nobody") == []


class TestUpdateStatus:

    @pytest.mark.parametrize("start", ORDER_STATUSES)
    @pytest.mark.parametrize("target", ORDER_STATUSES)
    def test_any_status_to_any_status(self, db, start, target):
        repo = OrderRepo(db)
        order = repo.insert(_order(status=start))

        repo.update_status(order.id, target)

        assert repo.get(order.id).status == target

    def test_unknown_status_rejected(self, db):
        repo = OrderRepo(db)
        order = repo.insert(_order())
        with pytest.raises(ValueError, match="Invalid status"):
            repo.update_status(order.id, "lost")

    def test_missing_order(self, db):
        assert OrderRepo(db).update_status("missing", "shipped") is None


class TestDelete:

    def test_delete(self, db):
        repo = OrderRepo(db)
        order = repo.insert(_order())

        assert repo.delete(order.id) is True
        assert repo.get(order.id) is None

    def test_delete_missing(self, db):
        assert OrderRepo(db).delete("missing") is False
