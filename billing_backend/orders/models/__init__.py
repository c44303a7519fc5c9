# orders/models/__init__.py

from orders.models.order import Order
from orders.models.order_detail import OrderDetail

__all__ = [
    "Order",
    "OrderDetail",
]
