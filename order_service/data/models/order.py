import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, JSON

from order_service.data.database import Base

ORDER_STATUSES = ("pending", "confirmed", "shipped", "delivered", "cancelled")


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    product_id = Column(String, nullable=False)

    quantity = Column(Integer, nullable=False)
    # bez stałej skali: cena x ilość zapisana dokładnie, bez zaokrąglania
    total_price = Column(Numeric(asdecimal=True), nullable=False)
    status = Column(String(20), nullable=False, default="pending")

    # snapshoty z user-service / product-service w chwili zakupu
    user_details = Column(JSON, nullable=False, default=dict)
    product_details = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
