# order_service/domain/schemas.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel


class UserSnapshot(BaseModel):
    """Dane użytkownika zapisane w zamówieniu (snapshot z user-service)."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    email: str | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ProductSnapshot(BaseModel):
    """Dane produktu zapisane w zamówieniu (snapshot z product-service)."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    price: Decimal

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ProductRecord(ProductSnapshot):
    """Produkt tak jak zwraca go product-service (z aktualnym stanem)."""

    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(id=self.id, name=self.name, price=self.price)


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamówienia. Reguły biznesowe sprawdza saga."""

    user_id: str = ""
    product_id: str = ""
    # bool, float i string nie są zamieniane na int (InvalidInput)
    quantity: StrictInt | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusUpdate(BaseModel):
    status: str = ""


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: str
    user_id: str
    product_id: str
    quantity: int
    total_price: Decimal
    status: str
    user_details: UserSnapshot
    product_details: ProductSnapshot
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("total_price")
    @classmethod
    def _strip_trailing_zeros(cls, value: Decimal) -> Decimal:
        # sqlite oddaje Numeric ze skalą 10 (np. 0.1250000000)
        value = value.normalize()
        if value == value.to_integral_value():
            return value.quantize(Decimal(1))
        return value

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # sqlite nie przechowuje strefy czasowej, zapisujemy zawsze UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class OrderEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: OrderOut


class OrderListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: List[OrderOut]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
