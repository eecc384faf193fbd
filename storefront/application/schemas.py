from pydantic import BaseModel, Field, AliasChoices
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, Union


class Schema(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Orders

class OrderCreate(Schema):
    email: Optional[str] = None
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    quantity: int
    total_price: float
    buyer_name: Optional[str] = None
    phone: Optional[str] = None
    delivery_address: Optional[str] = None
    notes: Optional[str] = None


class StatusUpdate(Schema):
    status: str


class TrackingCreate(Schema):
    status: str
    location: Optional[str] = None
    note: Optional[str] = None
    date: Optional[str] = None


class TrackingEventRead(Schema):
    status: str
    location: Optional[str] = None
    note: Optional[str] = None
    date: Optional[str] = None
    timestamp: datetime


class OrderRead(Schema):
    id: int
    email: str
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    quantity: int
    total_price: float
    buyer_name: Optional[str] = None
    phone: Optional[str] = None
    delivery_address: Optional[str] = None
    notes: Optional[str] = None
    status: str
    payment_status: str
    transaction_id: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    tracking: list[TrackingEventRead] = []


class UpdateResult(Schema):
    acknowledged: bool = True
    matched_count: int
    modified_count: int


class DeleteResult(Schema):
    acknowledged: bool = True
    deleted_count: int


# Products

class ProductCreate(Schema):
    name: str
    price: float
    image: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    available_quantity: Optional[int] = None
    minimum_order: Optional[int] = None


class ProductUpdate(Schema):
    name: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    available_quantity: Optional[int] = None
    minimum_order: Optional[int] = None


class ProductRead(Schema):
    id: int
    name: str
    price: float
    image: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    available_quantity: Optional[int] = None
    minimum_order: Optional[int] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Users

class UserCreate(Schema):
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None


class UserRead(Schema):
    id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str
    created_at: datetime


class UserCreateResult(Schema):
    message: Optional[str] = None
    inserted_id: Optional[int] = None


class RoleRead(Schema):
    role: str


# Checkout and payments

class CheckoutOrder(Schema):
    # Storefront clients send the stored order back as-is, so "_id" is accepted too
    id: Optional[Union[int, str]] = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    email: Optional[str] = None
    product_name: Optional[str] = None
    total_price: float


class CheckoutRequest(Schema):
    order: CheckoutOrder


class CheckoutResponse(Schema):
    url: str


class PaymentConfirm(Schema):
    session_id: str
    order_id: Union[int, str]


class InsertResult(Schema):
    acknowledged: bool = True
    inserted_id: Optional[int] = None


class PaymentSuccess(Schema):
    message: Optional[str] = None
    payment_result: InsertResult
    update_result: Optional[UpdateResult] = None


class PaymentRead(Schema):
    id: int
    order_id: str
    email: Optional[str] = None
    transaction_id: str
    amount: float
    currency: Optional[str] = None
    date: datetime
    status: str
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    quantity: Optional[int] = None


# Admin

class AdminStats(Schema):
    total_users: int
    total_products: int
    total_orders: int
    total_payments: int
    total_order_value: float
    orders_by_status: dict[str, int]
