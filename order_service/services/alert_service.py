# order_service/services/alert_service.py
from order_service.celery_worker import celery_app
from order_service.utils.logging import get_logger

logger = get_logger(__name__)


class AlertService:
    """
    Kanał alertów dla operatora.
    Zgłoszenia idą przez Celery, żeby nie blokować obsługi żądania.
    """

    def alert_orphaned_order(self, order_id: str, cause: Exception, delete_error: Exception) -> None:
        logger.critical(
            f"[ALERT] Order {order_id} is orphaned: stock update failed ({cause}) "
            f"and compensation delete failed ({delete_error})"
        )
        try:
            orphaned_order_alert_task.delay(order_id, str(cause), str(delete_error))
        except Exception as e:
            # broker niedostępny - alert został już zalogowany powyżej
            logger.error(f"Failed to enqueue orphaned order alert for {order_id}: {e}")


@celery_app.task(name="order_service.services.alert_service.orphaned_order_alert_task")
def orphaned_order_alert_task(order_id: str, cause: str, delete_error: str):
    """
    Celery task - zgłoszenie zamówienia bez pokrycia w stanie magazynowym.
    Operator musi ręcznie usunąć rekord albo skorygować stan produktu.
    """
    logger.critical(
        f"[OPERATOR] Orphaned order {order_id} requires manual cleanup "
        f"(stock error: {cause}; delete error: {delete_error})"
    )
    return {"order_id": order_id, "status": "reported"}
