"""
Ingredient Model

Contains the Ingredient model: a purchasable item with a bulk price
and the bulk quantity that price buys.
"""

from utils.money import cost_to_string, quantity_to_string, unit_price_to_string
from .base import db


class Ingredient(db.Model):
    """
    Purchasable ingredient.

    price buys measurement_value of measurement_type, so the per-unit
    price is price / measurement_value. Name uniqueness is checked
    case-insensitively on name_key before insert, not enforced by a
    constraint.
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    # name.casefold(), which can be longer than name
    name_key = db.Column(db.Text, nullable=False, index=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    store = db.Column(db.String(100), nullable=True)
    measurement_value = db.Column(db.Numeric(12, 4), nullable=False)
    measurement_type = db.Column(db.String(10), nullable=False)
    description = db.Column(db.Text, nullable=True)
    date_added = db.Column(db.Date, nullable=False)

    @property
    def unit_price(self):
        # Local import: services imports models
        from services.cost import per_unit_price
        return per_unit_price(self.price, self.measurement_value)

    def to_dict(self):
        return {
            'id': self.id,
            'item_name': self.name,
            'price': cost_to_string(self.price),
            'store': self.store,
            'measurement_value': quantity_to_string(self.measurement_value),
            'measurement_type': self.measurement_type,
            'description': self.description,
            'date_added': self.date_added.isoformat() if self.date_added else None,
            'unit_price': unit_price_to_string(self.unit_price),
        }
