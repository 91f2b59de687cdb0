"""Domain models."""

from .domain import Customer, DeliverySpeedConfig, Location, Product, Seller, Warehouse

__all__ = ["Location", "Seller", "Customer", "Warehouse", "Product", "DeliverySpeedConfig"]
