from .order import AddressType, Order, OrderItem

__all__ = ["AddressType", "Order", "OrderItem"]
