"""
Ingredient Service

Create and list ingredients. Duplicate names are caught by a
case-insensitive lookup on the casefolded name_key before insert;
there is no lock or unique constraint behind it, so two concurrent
submissions of the same name can both get through.
"""

import logging

from constants import MAX_LENGTHS, MONEY_PLACES, QUANTITY_PLACES
from models import Ingredient
from utils.dates import utc_today
from .database import session_scope
from .errors import ConflictError
from .validation import (
    require_fields,
    clean_text,
    parse_decimal,
    parse_measurement_type,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'price', 'measurement_value', 'measurement_type')


def validate_ingredient(data):
    """
    Check an ingredient payload and return the cleaned column values.

    Raises:
        ValidationError: on a missing required field or a bad value
    """
    require_fields(data, REQUIRED_FIELDS)
    return {
        'name': clean_text(data.get('name'), 'name', MAX_LENGTHS['ingredient_name']),
        'price': parse_decimal(data.get('price'), 'price', min_val=0, allow_equal=False,
                               places=MONEY_PLACES),
        'measurement_value': parse_decimal(
            data.get('measurement_value'), 'measurement_value', min_val=0, allow_equal=False,
            places=QUANTITY_PLACES,
        ),
        'measurement_type': parse_measurement_type(data.get('measurement_type')),
        'store': clean_text(data.get('store'), 'store', MAX_LENGTHS['store'], required=False),
        'description': clean_text(
            data.get('description'), 'description', MAX_LENGTHS['description'], required=False
        ),
    }


def name_key(name):
    # SQL lower() folds ASCII only on SQLite, so the folded form is stored
    return name.casefold()


def find_by_name(session, name):
    """Case-insensitive name lookup, Unicode included."""
    return session.query(Ingredient).filter(
        Ingredient.name_key == name_key(name)
    ).first()


def create_ingredient(data):
    """
    Validate and insert one ingredient.

    Returns:
        The created ingredient as a dict

    Raises:
        ValidationError: invalid payload, nothing written
        ConflictError: an ingredient with the same name (any case) exists
        PersistenceError: the insert failed and was rolled back
    """
    values = validate_ingredient(data)

    with session_scope('create ingredient') as session:
        existing = find_by_name(session, values['name'])
        if existing:
            raise ConflictError(
                f"Ingredient \"{existing.name}\" already exists", existing.to_dict()
            )

        ingredient = Ingredient(date_added=utc_today(), name_key=name_key(values['name']), **values)
        session.add(ingredient)
        session.flush()
        result = ingredient.to_dict()

    logger.info('Created ingredient %s (%s)', result['id'], result['item_name'])
    return result


def list_ingredients():
    """All ingredients ordered by name."""
    with session_scope('list ingredients') as session:
        ingredients = session.query(Ingredient).order_by(Ingredient.name).all()
        return [ing.to_dict() for ing in ingredients]
