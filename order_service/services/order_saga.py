# order_service/services/order_saga.py
"""
Saga tworzenia zamówienia.

Kroki (każdy błąd przerywa sagę, kolejne kroki nie są wykonywane):

    VALIDATING -> RESOLVING_USER -> RESOLVING_PRODUCT -> PERSISTING
        -> COMMITTING_STOCK -> DONE
                            -> COMPENSATING -> FAILED

Jedyna akcja kompensująca to usunięcie zapisanego zamówienia, gdy
product-service nie odjął stanu. Żaden krok nie jest ponawiany.
Nowy krok dodany po PERSISTING musi mieć własną kompensację.
"""
import uuid
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError

from order_service.data.models.order import OrderModel
from order_service.domain.errors import (
    CompensationFailure,
    DependencyFailure,
    InsufficientStock,
    InvalidInput,
    OrderError,
    PersistenceFailure,
    ProductNotFound,
    RemoteNotFound,
    RemoteServiceError,
    StockCommitFailure,
    UserNotFound,
)
from order_service.domain.schemas import ProductRecord, UserSnapshot
from order_service.services.alert_service import AlertService
from order_service.services.product_client import ProductClient
from order_service.services.user_client import UserClient
from order_service.utils.logging import get_logger

logger = get_logger(__name__)


class SagaState(str, Enum):
    VALIDATING = "validating"
    RESOLVING_USER = "resolving_user"
    RESOLVING_PRODUCT = "resolving_product"
    PERSISTING = "persisting"
    COMMITTING_STOCK = "committing_stock"
    COMPENSATING = "compensating"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS = {
    SagaState.VALIDATING: {SagaState.RESOLVING_USER, SagaState.FAILED},
    SagaState.RESOLVING_USER: {SagaState.RESOLVING_PRODUCT, SagaState.FAILED},
    SagaState.RESOLVING_PRODUCT: {SagaState.PERSISTING, SagaState.FAILED},
    SagaState.PERSISTING: {SagaState.COMMITTING_STOCK, SagaState.FAILED},
    SagaState.COMMITTING_STOCK: {SagaState.DONE, SagaState.COMPENSATING},
    SagaState.COMPENSATING: {SagaState.FAILED},
    SagaState.DONE: set(),
    SagaState.FAILED: set(),
}


class SagaExecution:
    """Stan jednej próby utworzenia zamówienia."""

    def __init__(self, user_id, product_id, quantity):
        self.saga_id = str(uuid.uuid4())
        self.user_id = user_id
        self.product_id = product_id
        self.quantity = quantity

        self.state = SagaState.VALIDATING
        self.history: list[SagaState] = [SagaState.VALIDATING]

        self.user: UserSnapshot | None = None
        self.product: ProductRecord | None = None
        self.order: OrderModel | None = None
        self.error: OrderError | None = None

    def transition(self, new_state: SagaState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Saga {self.saga_id}: illegal transition {self.state.value} -> {new_state.value}")
        logger.info(f"Saga {self.saga_id}: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def fail(self, error: OrderError) -> None:
        self.error = error
        self.transition(SagaState.FAILED)

    @property
    def inconsistent(self) -> bool:
        # zamówienie zostało w bazie mimo że stan produktu nie został odjęty
        return self.state == SagaState.FAILED and isinstance(self.error, CompensationFailure)


class OrderSaga:
    """
    Koordynator sagi tworzenia zamówienia.
    Zależności (repo, klienci, alerty) są wstrzykiwane przez router.
    """

    def __init__(
        self,
        order_repo,
        user_client: UserClient,
        product_client: ProductClient,
        alerts: AlertService | None = None,
    ):
        self.order_repo = order_repo
        self.user_client = user_client
        self.product_client = product_client
        self.alerts = alerts or AlertService()

    def create(self, user_id, product_id, quantity) -> OrderModel:
        saga = self.execute(user_id, product_id, quantity)
        if saga.error:
            raise saga.error
        return saga.order

    def execute(self, user_id, product_id, quantity) -> SagaExecution:
        saga = SagaExecution(user_id, product_id, quantity)
        logger.info(f"Saga {saga.saga_id} started: user={user_id} product={product_id} quantity={quantity}")

        steps = (
            self.validate,
            self.resolve_user,
            self.resolve_product,
            self.persist,
            self.commit_stock,
        )
        try:
            for step in steps:
                step(saga)
        except OrderError as e:
            logger.error(f"Saga {saga.saga_id} failed in {saga.state.value}: {type(e).__name__}: {e}")
            saga.fail(e)
            return saga

        saga.transition(SagaState.DONE)
        logger.info(f"Order {saga.order.id} created by saga {saga.saga_id}")
        return saga

    # =====================================================
    # STEPS
    # =====================================================
    def validate(self, saga: SagaExecution) -> None:
        if not saga.user_id or not saga.product_id or saga.quantity is None:
            raise InvalidInput("UserId, productId, and quantity are required")

        if not isinstance(saga.user_id, str) or not isinstance(saga.product_id, str):
            raise InvalidInput("UserId and productId must be strings")

        if isinstance(saga.quantity, bool) or not isinstance(saga.quantity, int):
            raise InvalidInput("Quantity must be an integer")

        if saga.quantity < 1:
            raise InvalidInput("Quantity must be at least 1")

    def resolve_user(self, saga: SagaExecution) -> None:
        saga.transition(SagaState.RESOLVING_USER)
        try:
            saga.user = self.user_client.fetch_user(saga.user_id)
        except RemoteNotFound as e:
            raise UserNotFound("User not found") from e
        except RemoteServiceError as e:
            raise DependencyFailure(f"Failed to validate user: {e}") from e

    def resolve_product(self, saga: SagaExecution) -> None:
        saga.transition(SagaState.RESOLVING_PRODUCT)
        try:
            product = self.product_client.fetch_product(saga.product_id)
        except RemoteNotFound as e:
            raise ProductNotFound("Product not found") from e
        except RemoteServiceError as e:
            raise DependencyFailure(f"Failed to validate product: {e}") from e

        # stan może się zmienić przed odjęciem, ostatecznie decyduje product-service
        if product.stock < saga.quantity:
            raise InsufficientStock(
                f"Insufficient stock: requested {saga.quantity}, available {product.stock}"
            )
        saga.product = product

    def persist(self, saga: SagaExecution) -> None:
        saga.transition(SagaState.PERSISTING)

        total_price = saga.product.price * saga.quantity

        order = OrderModel(
            user_id=saga.user_id,
            product_id=saga.product_id,
            quantity=saga.quantity,
            total_price=total_price,
            status="pending",
            user_details=saga.user.model_dump(mode="json"),
            product_details=saga.product.snapshot().model_dump(mode="json"),
        )
        try:
            saga.order = self.order_repo.insert(order)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to save order: {e}") from e

        logger.info(f"Order {saga.order.id} saved as pending, total {total_price}")

    def commit_stock(self, saga: SagaExecution) -> None:
        saga.transition(SagaState.COMMITTING_STOCK)
        try:
            self.product_client.deduct_stock(saga.product_id, saga.quantity)
        except RemoteServiceError as e:
            logger.error(f"Stock update for order {saga.order.id} failed: {e}")
            self.compensate(saga, e)

    # =====================================================
    # COMPENSATION
    # =====================================================
    def compensate(self, saga: SagaExecution, cause: Exception) -> None:
        """Usuwa zapisane zamówienie. Zawsze kończy się wyjątkiem."""
        saga.transition(SagaState.COMPENSATING)
        order_id = saga.order.id
        logger.info(f"Rolling back order {order_id}")

        try:
            self.order_repo.delete(order_id)
        except SQLAlchemyError as delete_error:
            self.alerts.alert_orphaned_order(order_id, cause, delete_error)
            raise CompensationFailure(order_id, cause, delete_error) from delete_error

        saga.order = None
        raise StockCommitFailure(f"Failed to update product stock: {cause}") from cause
