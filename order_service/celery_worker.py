# order_service/celery_worker.py
from celery import Celery

from order_service.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "orders",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski muszą być zaimportowane, żeby worker je zarejestrował
celery_app.conf.imports = (
    "order_service.services.alert_service",
)

celery_app.conf.timezone = "UTC"
