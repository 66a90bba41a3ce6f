"""
Recipe Service

Transactional recipe creation and recipe reads.

A recipe and all of its ingredient lines are written in one transaction:
the recipe row goes in with a zero total, each line is inserted in input
order, then the total is back-filled from the caller-supplied line costs.
Any failure rolls the whole attempt back.
"""

import logging

from sqlalchemy.orm import joinedload

from constants import MAX_LENGTHS, COST_PLACES, QUANTITY_PLACES
from models import Recipe, RecipeIngredient
from utils.dates import utc_today
from utils.money import round_places
from utils.sanitizer import sanitize_instructions
from .cost import recipe_total_cost
from .database import session_scope
from .errors import ValidationError, RecipeNotFound
from .validation import (
    require_fields,
    require_list,
    clean_text,
    parse_decimal,
    parse_positive_int,
    parse_measurement_type,
)

logger = logging.getLogger(__name__)


def validate_recipe_line(line, position):
    """
    Check one {inventory_id, quantity, measurement_type, price} line.

    price is the line's cost, already computed by the caller from the
    ingredient's per-unit price. It is rounded to the column scale and
    otherwise stored as given.
    """
    if not isinstance(line, dict):
        raise ValidationError(f'Ingredient {position} must be an object')
    field = f'ingredients[{position}]'
    return {
        'ingredient_id': parse_positive_int(line.get('inventory_id'), f'{field}.inventory_id'),
        'quantity': parse_decimal(line.get('quantity'), f'{field}.quantity', min_val=0, allow_equal=False,
                                  places=QUANTITY_PLACES),
        'measurement_type': parse_measurement_type(line.get('measurement_type'), f'{field}.measurement_type'),
        'price': parse_decimal(line.get('price'), f'{field}.price', min_val=0, places=COST_PLACES),
    }


def validate_recipe(data):
    """Return (name, instructions, lines) or raise ValidationError."""
    require_fields(data, ('recipe_name', 'instructions'))
    lines = require_list(data.get('ingredients'), 'ingredients')

    name = clean_text(data.get('recipe_name'), 'recipe_name', MAX_LENGTHS['recipe_name'])
    instructions = data.get('instructions')
    if not isinstance(instructions, str):
        raise ValidationError('instructions must be a string')
    instructions = sanitize_instructions(instructions, max_length=MAX_LENGTHS['instructions'])

    return name, instructions, [validate_recipe_line(line, i) for i, line in enumerate(lines)]


def create_recipe(name, instructions, lines):
    """
    Atomically create a recipe with its ingredient lines.

    Args:
        name: Recipe name (already validated)
        instructions: Recipe instructions (already validated)
        lines: List of dicts with ingredient_id, quantity, measurement_type, price

    Returns:
        The created recipe as a dict, including its lines

    Raises:
        ValidationError: empty name, instructions or lines; nothing written
        PersistenceError: a statement failed; nothing from this attempt is kept
    """
    if not (name and name.strip()) or not (instructions and instructions.strip()):
        raise ValidationError('recipe_name and instructions are required')
    if not lines:
        raise ValidationError('recipe must have at least one ingredient')

    # Stored lines keep COST_PLACES, so the total is summed from the same values
    lines = [dict(line, price=round_places(line['price'], COST_PLACES)) for line in lines]

    with session_scope('create recipe') as session:
        recipe = Recipe(
            recipe_name=name,
            instructions=instructions,
            date_created=utc_today(),
            total_cost=0,
        )
        session.add(recipe)
        session.flush()

        # One flush per line so a bad line fails at its own position
        for line in lines:
            session.add(RecipeIngredient(recipe_id=recipe.id, **line))
            session.flush()

        # Snapshot of the supplied costs, not re-derived from current prices
        recipe.total_cost = recipe_total_cost(line['price'] for line in lines)
        session.flush()

        result = recipe.to_dict(include_ingredients=True)

    logger.info('Created recipe %s (%s) with %d ingredients',
                result['id'], result['recipe_name'], len(lines))
    return result


def submit_recipe(data):
    """Validate a POST /recipes payload and create the recipe."""
    name, instructions, lines = validate_recipe(data)
    return create_recipe(name, instructions, lines)


def list_recipes():
    """All recipes ordered by name, without their lines."""
    with session_scope('list recipes') as session:
        recipes = session.query(Recipe).order_by(Recipe.recipe_name).all()
        return [r.to_dict() for r in recipes]


def get_recipe(recipe_id):
    """One recipe with its ingredient lines."""
    with session_scope('load recipe') as session:
        recipe = session.query(Recipe).options(
            joinedload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient)
        ).filter(Recipe.id == recipe_id).first()
        if recipe is None:
            raise RecipeNotFound(recipe_id)
        return recipe.to_dict(include_ingredients=True)
