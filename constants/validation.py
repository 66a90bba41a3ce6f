"""
Validation Constants

Contains whitelist values and limits for validating user input.
"""

from decimal import Decimal

# Valid values for order line item_type
VALID_ITEM_TYPES = {'ingredient', 'recipe'}

# Order pricing defaults
DEFAULT_LABOR_COST = Decimal('0')
DEFAULT_PROFIT_MARGIN = Decimal('0.4')

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'store': 100,
    'description': 2000,
    'recipe_name': 200,
    'instructions': 50000,
    'order_name': 200,
    'notes': 5000,
}

# Decimal places of the Numeric columns; values are rounded to these
# before they are used in totals, so stored totals add up from stored lines
MONEY_PLACES = 2       # entered prices and labor cost
COST_PLACES = 4        # line costs, unit prices, subtotals and totals
QUANTITY_PLACES = 4    # quantities and profit margin

# Numeric(5, 4) holds margins below 10 (1000%)
MAX_PROFIT_MARGIN = Decimal('10')
