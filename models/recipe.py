"""
Recipe Models

Contains the Recipe and RecipeIngredient models for managing
recipes and their ingredient lines.
"""

from utils.money import cost_to_string, quantity_to_string
from .base import db


class Recipe(db.Model):
    """Recipe with instructions and a snapshot total cost of its lines."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_name = db.Column(db.String(200), nullable=False, index=True)
    instructions = db.Column(db.Text, nullable=False)
    date_created = db.Column(db.Date, nullable=False)
    # Frozen at creation time; later ingredient price changes do not touch it
    total_cost = db.Column(db.Numeric(12, 4), nullable=False, default=0)
    ingredients = db.relationship(
        'RecipeIngredient', backref='recipe', lazy=True,
        cascade='all, delete-orphan', order_by='RecipeIngredient.id'
    )

    def to_dict(self, include_ingredients=False):
        result = {
            'id': self.id,
            'recipe_name': self.recipe_name,
            'instructions': self.instructions,
            'date_created': self.date_created.isoformat() if self.date_created else None,
            'total_cost': cost_to_string(self.total_cost),
        }
        if include_ingredients:
            result['ingredients'] = [ri.to_dict() for ri in self.ingredients]
        return result


class RecipeIngredient(db.Model):
    """One ingredient's usage within a recipe, with its pre-computed cost."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id'), nullable=False, index=True)
    quantity = db.Column(db.Numeric(12, 4), nullable=False)
    measurement_type = db.Column(db.String(10), nullable=False)  # may differ from the ingredient's unit
    price = db.Column(db.Numeric(12, 4), nullable=False)
    ingredient = db.relationship('Ingredient')

    def to_dict(self):
        return {
            'id': self.id,
            'inventory_id': self.ingredient_id,
            'name': self.ingredient.name if self.ingredient else None,
            'quantity': quantity_to_string(self.quantity),
            'measurement_type': self.measurement_type,
            'price': cost_to_string(self.price),
        }
