"""
Services Package

Business logic modules for the kitchen costing application.
"""

from .errors import (
    ServiceError,
    ValidationError,
    InvalidInput,
    ConflictError,
    NotFoundError,
    RecipeNotFound,
    OrderNotFound,
    PersistenceError,
)

from .cost import (
    per_unit_price,
    line_cost,
    recipe_total_cost,
    order_subtotal,
    order_grand_total,
    round_money,
    cost_to_string,
)

from .database import session_scope

from .ingredients import (
    create_ingredient,
    list_ingredients,
)

from .recipes import (
    create_recipe,
    submit_recipe,
    list_recipes,
    get_recipe,
)

from .orders import (
    create_order,
    list_orders,
    get_order,
)

__all__ = [
    # Errors
    'ServiceError',
    'ValidationError',
    'InvalidInput',
    'ConflictError',
    'NotFoundError',
    'RecipeNotFound',
    'OrderNotFound',
    'PersistenceError',
    # Cost
    'per_unit_price',
    'line_cost',
    'recipe_total_cost',
    'order_subtotal',
    'order_grand_total',
    'round_money',
    'cost_to_string',
    # Database
    'session_scope',
    # Ingredients
    'create_ingredient',
    'list_ingredients',
    # Recipes
    'create_recipe',
    'submit_recipe',
    'list_recipes',
    'get_recipe',
    # Orders
    'create_order',
    'list_orders',
    'get_order',
]
