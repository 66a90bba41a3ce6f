import atexit
import logging

from flask import Flask, Blueprint, request, jsonify
from sqlalchemy import text
from werkzeug.exceptions import HTTPException

from config import get_config
from models import db
from services import (
    ServiceError,
    ValidationError,
    ConflictError,
    create_ingredient,
    list_ingredients,
    submit_recipe,
    list_recipes,
    get_recipe,
    create_order,
    list_orders,
    get_order,
)

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)


def get_json_body():
    """Parsed JSON object from the request, or ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


# ============================================
# ROUTES - INGREDIENTS
# ============================================

@api.route('/ingredients', methods=['POST'])
def ingredient_add():
    ingredient = create_ingredient(get_json_body())
    return jsonify({
        'id': ingredient['id'],
        'item_name': ingredient['item_name'],
        'message': 'Ingredient added successfully!'
    }), 201


@api.route('/ingredients', methods=['GET'])
def ingredients_list():
    return jsonify(list_ingredients())


# ============================================
# ROUTES - RECIPES
# ============================================

@api.route('/recipes', methods=['POST'])
def recipe_add():
    recipe = submit_recipe(get_json_body())
    return jsonify({
        'id': recipe['id'],
        'recipe_name': recipe['recipe_name'],
        'total_cost': recipe['total_cost'],
        'message': 'Recipe added successfully!'
    }), 201


@api.route('/recipes', methods=['GET'])
def recipes_list():
    return jsonify(list_recipes())


@api.route('/recipes/<int:id>', methods=['GET'])
def recipe_view(id):
    return jsonify(get_recipe(id))


# ============================================
# ROUTES - ORDERS
# ============================================

@api.route('/orders', methods=['POST'])
def order_add():
    order = create_order(get_json_body())
    return jsonify({
        'id': order['id'],
        'order_name': order['order_name'],
        'subtotal': order['subtotal'],
        'total_price': order['total_price'],
        'message': 'Order added successfully!'
    }), 201


@api.route('/orders', methods=['GET'])
def orders_list():
    return jsonify(list_orders())


@api.route('/orders/<int:id>', methods=['GET'])
def order_view(id):
    return jsonify(get_order(id))


# ============================================
# ERROR HANDLERS
# ============================================

def register_error_handlers(app):

    @app.errorhandler(ConflictError)
    def handle_conflict(e):
        return jsonify({
            'error': str(e),
            'isDuplicate': True,
            'existingItem': e.existing
        }), 409

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        # 500s carry no internal detail; the cause was logged at rollback
        if e.status_code >= 500:
            return jsonify({'error': 'Internal Server Error'}), e.status_code
        return jsonify({'error': str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify({'error': 'Internal Server Error'}), 500


# ============================================
# APPLICATION FACTORY
# ============================================

def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger().setLevel(level)


def create_app(config_name=None, **overrides):
    """
    Build the Flask app and bind the database extension (and its
    connection pool) to it.

    Args:
        config_name: 'development', 'production' or 'testing'; defaults to FLASK_ENV
        overrides: Extra config values, applied last
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    configure_logging(app.config['LOG_LEVEL'])

    db.init_app(app)
    app.register_blueprint(api)
    register_error_handlers(app)
    return app


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    """Create missing tables and check that a pooled connection can be borrowed."""
    with app.app_context():
        db.create_all()
        try:
            with db.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
            logger.info('Database connection established successfully')
        except Exception:
            logger.exception('Failed to connect to database')
            raise


def dispose_db(app):
    """Close every pooled connection. Called once at shutdown."""
    with app.app_context():
        db.engine.dispose()
    logger.info('Database connection pool disposed')


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    atexit.register(dispose_db, app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
