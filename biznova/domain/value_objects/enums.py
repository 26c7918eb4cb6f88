"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class EntityRole(str, Enum):
    RETAILER = "retailer"
    CUSTOMER = "customer"
