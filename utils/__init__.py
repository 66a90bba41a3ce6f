# Utility modules for the kitchen costing app
from .sanitizer import sanitize_text, sanitize_instructions
from .money import to_decimal, round_places, round_money, cost_to_string, unit_price_to_string, quantity_to_string
from .dates import utc_today, parse_iso_date
