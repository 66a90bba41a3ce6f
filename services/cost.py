"""
Cost Calculation Service

Pure functions for ingredient, recipe and order costing. No I/O and no
state, so they are safe to call from concurrent requests.

All arithmetic is done in Decimal. Rounding happens only at presentation
(round_money / cost_to_string), never on intermediate values.
"""

from decimal import InvalidOperation

from constants import DEFAULT_LABOR_COST, DEFAULT_PROFIT_MARGIN
from utils.money import to_decimal, round_money, cost_to_string
from .errors import InvalidInput


def _decimal(value, field):
    try:
        return to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInput(f'{field} must be a number, got {value!r}')


def per_unit_price(bulk_price, bulk_quantity):
    """
    Price of one unit of an ingredient.

    Args:
        bulk_price: What was paid for the package
        bulk_quantity: How much the package holds, in the ingredient's unit

    Returns:
        bulk_price / bulk_quantity as a Decimal

    Raises:
        InvalidInput: if bulk_quantity is not positive
    """
    price = _decimal(bulk_price, 'bulk_price')
    quantity = _decimal(bulk_quantity, 'bulk_quantity')
    if quantity <= 0:
        raise InvalidInput('bulk_quantity must be greater than zero')
    return price / quantity


def line_cost(unit_price, quantity_used):
    """
    Cost of using quantity_used of an ingredient in a recipe.

    No unit conversion happens here: quantity_used must already be in the
    ingredient's own unit. 200 g of an ingredient stored per kg will cost
    1000x too much.
    """
    return _decimal(unit_price, 'unit_price') * _decimal(quantity_used, 'quantity_used')


def recipe_total_cost(line_costs):
    """Sum of a recipe's line costs. A recipe needs at least one line."""
    line_costs = list(line_costs)
    if not line_costs:
        raise InvalidInput('recipe must have at least one ingredient')
    return sum((_decimal(c, 'line cost') for c in line_costs), to_decimal(0))


def _line_field(line, name):
    if isinstance(line, dict):
        return line.get(name)
    return getattr(line, name)


def order_subtotal(lines):
    """
    Sum of unit_price * quantity over all order lines.

    Lines may be mappings or objects exposing unit_price and quantity.
    An empty order has a subtotal of zero; refusing to submit an empty
    order is the caller's job.
    """
    subtotal = to_decimal(0)
    for line in lines:
        unit_price = _decimal(_line_field(line, 'unit_price'), 'unit_price')
        quantity = _decimal(_line_field(line, 'quantity'), 'quantity')
        subtotal += unit_price * quantity
    return subtotal


def order_grand_total(subtotal, labor_cost=None, profit_margin=None):
    """
    Quoted price for an order: subtotal + labor + subtotal * margin.

    Unset labor_cost means 0 and unset profit_margin means 0.4 (40%).
    """
    subtotal = _decimal(subtotal, 'subtotal')
    labor = DEFAULT_LABOR_COST if labor_cost is None else _decimal(labor_cost, 'labor_cost')
    margin = DEFAULT_PROFIT_MARGIN if profit_margin is None else _decimal(profit_margin, 'profit_margin')
    return subtotal + labor + subtotal * margin
