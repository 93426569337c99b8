# order_service/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from order_service.data.models.order import OrderModel, ORDER_STATUSES


class OrderRepo:
    """
    Magazyn zamówień (SQLAlchemy).
    Błędy bazy są propagowane jako SQLAlchemyError, sesja jest wtedy wycofywana.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        return order

    def get(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_all(self) -> list[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_by_user(self, user_id: str) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def update_status(self, order_id: str, status: str) -> OrderModel | None:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

        order = self.get(order_id)
        if order:
            order.status = status
            self._commit()
            self.db.refresh(order)
        return order

    def delete(self, order_id: str) -> bool:
        order = self.get(order_id)
        if not order:
            return False
        self.db.delete(order)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
