# order_service/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException

from order_service.api.deps import get_order_saga, get_order_service
from order_service.domain.errors import OrderError
from order_service.domain.schemas import (
    MessageEnvelope,
    OrderCreate,
    OrderEnvelope,
    OrderListEnvelope,
    OrderOut,
    StatusUpdate,
)
from order_service.services.order_saga import OrderSaga
from order_service.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def _list(orders) -> dict:
    return {
        "success": True,
        "count": len(orders),
        "data": [OrderOut.model_validate(o) for o in orders],
    }


@router.get("", response_model=OrderListEnvelope)
def list_orders(svc: OrderService = Depends(get_order_service)):
    return _list(svc.list_orders())


@router.get("/user/{user_id}", response_model=OrderListEnvelope)
def list_user_orders(user_id: str, svc: OrderService = Depends(get_order_service)):
    return _list(svc.list_user_orders(user_id))


@router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    try:
        order = svc.get_order(order_id)
    except OrderError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "data": OrderOut.model_validate(order)}


@router.post("", response_model=OrderEnvelope, status_code=201)
def create_order(payload: OrderCreate, saga: OrderSaga = Depends(get_order_saga)):
    """
    Tworzy zamówienie: walidacja użytkownika i produktu w zdalnych serwisach,
    zapis zamówienia i odjęcie stanu produktu (z kompensacją).
    """
    try:
        order = saga.create(payload.user_id, payload.product_id, payload.quantity)
    except OrderError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Order created successfully",
        "data": OrderOut.model_validate(order),
    }


@router.patch("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: str,
    payload: StatusUpdate,
    svc: OrderService = Depends(get_order_service),
):
    try:
        order = svc.update_status(order_id, payload.status)
    except OrderError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Order status updated successfully",
        "data": OrderOut.model_validate(order),
    }


@router.delete("/{order_id}", response_model=MessageEnvelope)
def delete_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    try:
        svc.delete_order(order_id)
    except OrderError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Order deleted successfully"}
