"""
Order Models

Contains the Order and OrderLine models. An order line points at either
an ingredient or a recipe, tagged by item_type.
"""

from utils.money import cost_to_string, quantity_to_string
from .base import db


class Order(db.Model):
    """Quoted order: lines plus labor cost and profit margin."""
    __tablename__ = 'customer_order'

    id = db.Column(db.Integer, primary_key=True)
    order_name = db.Column(db.String(200), nullable=False)
    order_date = db.Column(db.Date, nullable=False, index=True)
    notes = db.Column(db.Text, default='')
    labor_cost = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    profit_margin = db.Column(db.Numeric(5, 4), nullable=False, default=0.4)
    # Derived from the lines and the two fields above; written together with them
    subtotal = db.Column(db.Numeric(12, 4), nullable=False, default=0)
    total_price = db.Column(db.Numeric(12, 4), nullable=False, default=0)
    items = db.relationship(
        'OrderLine', backref='order', lazy=True,
        cascade='all, delete-orphan', order_by='OrderLine.id'
    )

    def to_dict(self, include_items=False):
        result = {
            'id': self.id,
            'order_name': self.order_name,
            'order_date': self.order_date.isoformat() if self.order_date else None,
            'notes': self.notes,
            'labor_cost': cost_to_string(self.labor_cost),
            'profit_margin': quantity_to_string(self.profit_margin),
            'subtotal': cost_to_string(self.subtotal),
            'total_price': cost_to_string(self.total_price),
        }
        if include_items:
            result['items'] = [line.to_dict() for line in self.items]
        return result


class OrderLine(db.Model):
    """Requested quantity of an ingredient or recipe at a snapshot unit price."""
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('customer_order.id'), nullable=False, index=True)
    item_type = db.Column(db.String(20), nullable=False)  # 'ingredient' or 'recipe'
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id'), nullable=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id'), nullable=True)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(12, 4), nullable=False)
    line_total = db.Column(db.Numeric(12, 4), nullable=False)
    ingredient = db.relationship('Ingredient')
    recipe = db.relationship('Recipe')

    @property
    def item_id(self):
        return self.ingredient_id if self.item_type == 'ingredient' else self.recipe_id

    @property
    def item_name(self):
        if self.item_type == 'ingredient':
            return self.ingredient.name if self.ingredient else None
        return self.recipe.recipe_name if self.recipe else None

    def to_dict(self):
        return {
            'id': self.id,
            'item_id': self.item_id,
            'item_type': self.item_type,
            'name': self.item_name,
            'quantity': self.quantity,
            'unit_price': cost_to_string(self.unit_price),
            'line_total': cost_to_string(self.line_total),
        }
