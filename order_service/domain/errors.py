# order_service/domain/errors.py
"""
Błędy domeny zamówień i błędy klientów zdalnych serwisów.

OrderError i jego podklasy niosą kod HTTP, który router zwraca klientowi.
RemoteServiceError opisuje wynik pojedynczego wywołania user-service
lub product-service.
"""
from enum import Enum


class RemoteErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"
    REJECTED = "rejected"


class RemoteServiceError(Exception):
    kind: RemoteErrorKind = RemoteErrorKind.UNREACHABLE

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class RemoteNotFound(RemoteServiceError):
    kind = RemoteErrorKind.NOT_FOUND


class RemoteUnreachable(RemoteServiceError):
    kind = RemoteErrorKind.UNREACHABLE


class RemoteMalformed(RemoteServiceError):
    kind = RemoteErrorKind.MALFORMED


class RemoteRejected(RemoteServiceError):
    kind = RemoteErrorKind.REJECTED


class OrderError(Exception):
    status_code = 500


class InvalidInput(OrderError):
    status_code = 400


class UserNotFound(OrderError):
    status_code = 400


class ProductNotFound(OrderError):
    status_code = 400


class InsufficientStock(OrderError):
    status_code = 400


class DependencyFailure(OrderError):
    pass


class PersistenceFailure(OrderError):
    pass


class StockCommitFailure(OrderError):
    """Odjęcie stanu nie powiodło się, zamówienie zostało usunięte (kompensacja)."""


class CompensationFailure(OrderError):
    """
    Odjęcie stanu nie powiodło się i usunięcie zamówienia też.
    Rekord zamówienia zostaje w bazie bez pokrycia w stanie magazynowym.
    """

    def __init__(self, order_id: str, cause: Exception, delete_error: Exception):
        super().__init__(
            f"Failed to update product stock ({cause}) and failed to remove "
            f"order {order_id} ({delete_error})"
        )
        self.order_id = order_id
        self.cause = cause
        self.delete_error = delete_error


class OrderNotFound(OrderError):
    status_code = 404
