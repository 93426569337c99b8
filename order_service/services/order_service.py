# order_service/services/order_service.py
from sqlalchemy.orm import Session

from order_service.data.models.order import OrderModel, ORDER_STATUSES
from order_service.domain.errors import InvalidInput, OrderNotFound
from order_service.repos.order_repo import OrderRepo
from order_service.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Zapytania i proste komendy na zamówieniach.
    Tworzenie zamówienia obsługuje OrderSaga.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def list_orders(self) -> list[OrderModel]:
        return self.repo.list_all()

    def list_user_orders(self, user_id: str) -> list[OrderModel]:
        return self.repo.list_by_user(user_id)

    def get_order(self, order_id: str) -> OrderModel:
        order = self.repo.get(order_id)
        if not order:
            raise OrderNotFound("Order not found")
        return order

    def update_status(self, order_id: str, status: str) -> OrderModel:
        """
        Use Case: zmiana statusu. Dowolne przejście między statusami jest dozwolone.
        """
        if status not in ORDER_STATUSES:
            raise InvalidInput(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

        order = self.repo.update_status(order_id, status)
        if not order:
            raise OrderNotFound("Order not found")

        logger.info(f"Order {order_id} status set to {status}")
        return order

    def delete_order(self, order_id: str) -> None:
        if not self.repo.delete(order_id):
            raise OrderNotFound("Order not found")
        logger.info(f"Order {order_id} deleted")
