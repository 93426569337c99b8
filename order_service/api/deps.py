# order_service/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from order_service.data.database import get_db
from order_service.repos.order_repo import OrderRepo
from order_service.services.alert_service import AlertService
from order_service.services.order_saga import OrderSaga
from order_service.services.order_service import OrderService
from order_service.services.product_client import ProductClient
from order_service.services.user_client import UserClient


def get_user_client(request: Request) -> UserClient:
    return request.app.state.user_client


def get_product_client(request: Request) -> ProductClient:
    return request.app.state.product_client


def get_alerts(request: Request) -> AlertService:
    return request.app.state.alerts


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_order_saga(
    db: Session = Depends(get_db),
    user_client: UserClient = Depends(get_user_client),
    product_client: ProductClient = Depends(get_product_client),
    alerts: AlertService = Depends(get_alerts),
) -> OrderSaga:
    return OrderSaga(
        order_repo=OrderRepo(db),
        user_client=user_client,
        product_client=product_client,
        alerts=alerts,
    )
