"""
Order Service

Orders are written the same way recipes are: one order row, then its
lines in input order, then the totals, all in one transaction. The
subtotal and quoted total are always recomputed here from the lines,
labor cost and profit margin; a total sent by the client is ignored.
"""

import logging

from sqlalchemy.orm import joinedload

from constants import (
    MAX_LENGTHS,
    VALID_ITEM_TYPES,
    DEFAULT_LABOR_COST,
    DEFAULT_PROFIT_MARGIN,
    MAX_PROFIT_MARGIN,
    MONEY_PLACES,
    COST_PLACES,
    QUANTITY_PLACES,
)
from models import Order, OrderLine
from utils.dates import utc_today, parse_iso_date
from utils.money import round_places
from utils.sanitizer import sanitize_instructions
from .cost import order_subtotal, order_grand_total
from .database import session_scope
from .errors import ValidationError, OrderNotFound
from .validation import (
    require_fields,
    require_list,
    clean_text,
    parse_decimal,
    parse_positive_int,
)

logger = logging.getLogger(__name__)


def validate_order_line(line, position):
    if not isinstance(line, dict):
        raise ValidationError(f'Item {position} must be an object')
    field = f'items[{position}]'
    item_type = str(line.get('item_type') or '').strip().lower()
    if item_type not in VALID_ITEM_TYPES:
        raise ValidationError(f"{field}.item_type must be 'ingredient' or 'recipe'")
    return {
        'item_type': item_type,
        'item_id': parse_positive_int(line.get('item_id'), f'{field}.item_id'),
        'quantity': parse_positive_int(line.get('quantity'), f'{field}.quantity'),
        'unit_price': parse_decimal(line.get('unit_price'), f'{field}.unit_price', min_val=0,
                                    places=COST_PLACES),
    }


def validate_order(data):
    """Return the cleaned order fields and lines, or raise ValidationError."""
    require_fields(data, ('order_name',))
    items = require_list(data.get('items'), 'items')

    order_date = data.get('order_date')
    if order_date:
        try:
            order_date = parse_iso_date(order_date)
        except ValueError:
            raise ValidationError('order_date must be YYYY-MM-DD')
    else:
        order_date = utc_today()

    labor_cost = DEFAULT_LABOR_COST
    if data.get('labor_cost') not in (None, ''):
        labor_cost = parse_decimal(data['labor_cost'], 'labor_cost', min_val=0, places=MONEY_PLACES)

    profit_margin = DEFAULT_PROFIT_MARGIN
    if data.get('profit_margin') not in (None, ''):
        profit_margin = parse_decimal(
            data['profit_margin'], 'profit_margin', min_val=0,
            places=QUANTITY_PLACES, below=MAX_PROFIT_MARGIN,
        )

    return {
        'order_name': clean_text(data.get('order_name'), 'order_name', MAX_LENGTHS['order_name']),
        'order_date': order_date,
        'notes': sanitize_instructions(data.get('notes'), max_length=MAX_LENGTHS['notes']),
        'labor_cost': labor_cost,
        'profit_margin': profit_margin,
        'items': [validate_order_line(line, i) for i, line in enumerate(items)],
    }


def create_order(data):
    """
    Validate and atomically create an order with its lines.

    Returns:
        The created order as a dict, including its lines

    Raises:
        ValidationError: invalid payload or no items; nothing written
        PersistenceError: a statement failed, e.g. an item_id that does
            not exist; nothing from this attempt is kept
    """
    values = validate_order(data)
    lines = values.pop('items')

    with session_scope('create order') as session:
        order = Order(subtotal=0, total_price=0, **values)
        session.add(order)
        session.flush()

        for line in lines:
            ref = 'ingredient_id' if line['item_type'] == 'ingredient' else 'recipe_id'
            session.add(OrderLine(
                order_id=order.id,
                item_type=line['item_type'],
                quantity=line['quantity'],
                unit_price=line['unit_price'],
                line_total=line['unit_price'] * line['quantity'],
                **{ref: line['item_id']}
            ))
            session.flush()

        # Rounded to the column scale here so the stored total is built from stored values
        order.subtotal = round_places(order_subtotal(lines), COST_PLACES)
        order.total_price = round_places(
            order_grand_total(order.subtotal, order.labor_cost, order.profit_margin), COST_PLACES
        )
        session.flush()

        result = order.to_dict(include_items=True)

    logger.info('Created order %s (%s) quoted at %s',
                result['id'], result['order_name'], result['total_price'])
    return result


def list_orders():
    """All orders, newest first."""
    with session_scope('list orders') as session:
        orders = session.query(Order).order_by(Order.order_date.desc(), Order.id.desc()).all()
        return [o.to_dict() for o in orders]


def get_order(order_id):
    with session_scope('load order') as session:
        order = session.query(Order).options(
            joinedload(Order.items)
        ).filter(Order.id == order_id).first()
        if order is None:
            raise OrderNotFound(order_id)
        return order.to_dict(include_items=True)
