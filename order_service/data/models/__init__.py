#import modeli żeby SQLAlchemy zarejestrował je w base metadata

from order_service.data.models.order import OrderModel, ORDER_STATUSES

__all__ = ["OrderModel", "ORDER_STATUSES"]
