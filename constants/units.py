"""
Unit Constants

Measurement unit codes accepted for ingredients and recipe lines.
"""

# Valid values for measurement_type fields (whitelist)
VALID_MEASUREMENT_TYPES = {
    'tsp',      # teaspoon
    'tbsp',     # tablespoon
    'cup',
    'floz',     # fluid ounce
    'oz',       # ounce
    'g',        # gram
    'kg',       # kilogram
    'ml',       # milliliter
    'l',        # liter
    'pint',
    'quart',
    'gallon',
    'unit',
    'lb',       # pound
}
