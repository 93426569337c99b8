# order_service/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter

from order_service.utils.settings import PRODUCT_SERVICE_URL, USER_SERVICE_URL

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {
        "status": "healthy",
        "service": "order-service",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "dependencies": {
            "userService": USER_SERVICE_URL,
            "productService": PRODUCT_SERVICE_URL,
        },
    }
