"""
Constants Package

Measurement units and validation limits shared across the application.
"""

from .units import VALID_MEASUREMENT_TYPES
from .validation import (
    VALID_ITEM_TYPES,
    DEFAULT_LABOR_COST,
    DEFAULT_PROFIT_MARGIN,
    MAX_LENGTHS,
    MONEY_PLACES,
    COST_PLACES,
    QUANTITY_PLACES,
    MAX_PROFIT_MARGIN,
)

__all__ = [
    'VALID_MEASUREMENT_TYPES',
    'VALID_ITEM_TYPES',
    'DEFAULT_LABOR_COST',
    'DEFAULT_PROFIT_MARGIN',
    'MAX_LENGTHS',
    'MONEY_PLACES',
    'COST_PLACES',
    'QUANTITY_PLACES',
    'MAX_PROFIT_MARGIN',
]
