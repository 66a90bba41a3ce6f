"""Tests for recipe creation and the transactional write path."""

from decimal import Decimal

import pytest

from models import db, Ingredient, Recipe, RecipeIngredient
from services import create_recipe, per_unit_price, line_cost
from services.errors import ValidationError, PersistenceError


def recipe_payload(*lines, name='Sugar Cookies', instructions='Mix and bake at 180C.'):
    return {
        'recipe_name': name,
        'instructions': instructions,
        'ingredients': list(lines),
    }


def sugar_line(sugar, grams=200):
    cost = line_cost(per_unit_price('3.49', 500), grams)
    return {
        'inventory_id': sugar['id'],
        'quantity': grams,
        'measurement_type': 'g',
        'price': str(cost),
    }


def test_end_to_end_single_ingredient(client, sugar, row_counts):
    response = client.post('/recipes', json=recipe_payload(sugar_line(sugar)))

    assert response.status_code == 201
    body = response.get_json()
    assert body['recipe_name'] == 'Sugar Cookies'
    assert body['message'] == 'Recipe added successfully!'

    counts = row_counts()
    assert counts['recipe'] == 1
    assert counts['recipe_ingredient'] == 1

    recipe = db.session.get(Recipe, body['id'])
    assert recipe.total_cost == Decimal('1.396')
    assert recipe.ingredients[0].price == Decimal('1.396')
    assert recipe.ingredients[0].ingredient_id == sugar['id']


def test_total_is_sum_of_supplied_line_costs(client, sugar, flour):
    lines = [
        sugar_line(sugar, 200),
        {'inventory_id': flour['id'], 'quantity': 250, 'measurement_type': 'g', 'price': 0.7475},
        # Usage unit differs from the stored unit; the supplied cost is trusted as-is
        {'inventory_id': flour['id'], 'quantity': 1, 'measurement_type': 'cup', 'price': '0.36'},
    ]

    response = client.post('/recipes', json=recipe_payload(*lines))

    assert response.status_code == 201
    recipe = db.session.get(Recipe, response.get_json()['id'])
    assert recipe.total_cost == Decimal('2.5035')
    assert [ri.measurement_type for ri in recipe.ingredients] == ['g', 'g', 'cup']


def test_get_recipe_with_lines(client, sugar):
    created = client.post('/recipes', json=recipe_payload(sugar_line(sugar))).get_json()

    response = client.get(f"/recipes/{created['id']}")

    assert response.status_code == 200
    body = response.get_json()
    assert body['total_cost'] == '1.40'
    assert body['ingredients'] == [{
        'id': body['ingredients'][0]['id'],
        'inventory_id': sugar['id'],
        'name': 'Sugar',
        'quantity': '200',
        'measurement_type': 'g',
        'price': '1.40',
    }]


def test_list_recipes(client, sugar):
    client.post('/recipes', json=recipe_payload(sugar_line(sugar), name='Shortbread'))
    client.post('/recipes', json=recipe_payload(sugar_line(sugar), name='Fudge'))

    response = client.get('/recipes')

    assert response.status_code == 200
    assert [r['recipe_name'] for r in response.get_json()] == ['Fudge', 'Shortbread']


def test_unknown_recipe_404(client):
    response = client.get('/recipes/999')
    assert response.status_code == 404
    assert 'error' in response.get_json()


def test_empty_ingredients_rejected(client, row_counts):
    response = client.post('/recipes', json=recipe_payload())

    assert response.status_code == 400
    assert row_counts()['recipe'] == 0


@pytest.mark.parametrize('payload', [
    {'instructions': 'x', 'ingredients': [{}]},
    {'recipe_name': 'Toast', 'ingredients': [{}]},
    {'recipe_name': 'Toast', 'instructions': 'x', 'ingredients': 'sugar'},
    {'recipe_name': 'Toast', 'instructions': 'x'},
    {'recipe_name': '', 'instructions': 'x', 'ingredients': [{}]},
])
def test_missing_fields_rejected(client, row_counts, payload):
    response = client.post('/recipes', json=payload)

    assert response.status_code == 400
    assert row_counts()['recipe'] == 0


@pytest.mark.parametrize('bad', [
    {'quantity': 0},
    {'quantity': 'lots'},
    {'measurement_type': 'handful'},
    {'price': -1},
    {'price': None},
    {'inventory_id': 'sugar'},
])
def test_bad_line_rejected_before_writing(client, sugar, row_counts, bad):
    line = sugar_line(sugar)
    line.update(bad)

    response = client.post('/recipes', json=recipe_payload(line))

    assert response.status_code == 400
    assert row_counts()['recipe'] == 0


def test_failed_line_rolls_back_everything(client, sugar, row_counts):
    lines = [
        sugar_line(sugar),
        sugar_line(sugar, 50),
        # No such ingredient: the foreign key fails on the third insert
        {'inventory_id': 9999, 'quantity': 1, 'measurement_type': 'g', 'price': 1},
    ]

    response = client.post('/recipes', json=recipe_payload(*lines))

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Internal Server Error'}
    counts = row_counts()
    assert counts['recipe'] == 0
    assert counts['recipe_ingredient'] == 0
    assert counts['ingredient'] == 1


def test_failure_while_totalling_rolls_back(app, sugar, row_counts, monkeypatch):
    def broken_total(costs):
        raise RuntimeError('boom')

    monkeypatch.setattr('services.recipes.recipe_total_cost', broken_total)

    lines = [{'ingredient_id': sugar['id'], 'quantity': Decimal('200'),
              'measurement_type': 'g', 'price': Decimal('1.396')}]
    with pytest.raises(PersistenceError) as excinfo:
        create_recipe('Fudge', 'Stir.', lines)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    # Session was closed, so no transaction is left open
    assert not db.session().in_transaction()
    counts = row_counts()
    assert counts['recipe'] == 0
    assert counts['recipe_ingredient'] == 0


def test_create_recipe_validates_without_touching_database(app, monkeypatch):
    def no_session(*args, **kwargs):
        raise AssertionError('database used during validation')

    monkeypatch.setattr('services.recipes.session_scope', no_session)

    with pytest.raises(ValidationError):
        create_recipe('', 'Stir.', [{'ingredient_id': 1}])
    with pytest.raises(ValidationError):
        create_recipe('Fudge', '', [{'ingredient_id': 1}])
    with pytest.raises(ValidationError):
        create_recipe('Fudge', 'Stir.', [])


def test_create_recipe_rejects_blank_text(app, monkeypatch):
    def no_session(*args, **kwargs):
        raise AssertionError('database used during validation')

    monkeypatch.setattr('services.recipes.session_scope', no_session)
    line = {'ingredient_id': 1, 'quantity': Decimal('1'), 'measurement_type': 'g', 'price': Decimal('1')}

    with pytest.raises(ValidationError):
        create_recipe('   ', 'Stir.', [line])
    with pytest.raises(ValidationError):
        create_recipe('Fudge', ' \n\t', [line])


def test_total_adds_up_from_stored_line_prices(client, flour):
    line = {'inventory_id': flour['id'], 'quantity': 333, 'measurement_type': 'g', 'price': '0.99567'}

    response = client.post('/recipes', json=recipe_payload(line, dict(line)))

    assert response.status_code == 201
    recipe = db.session.get(Recipe, response.get_json()['id'])
    assert [ri.price for ri in recipe.ingredients] == [Decimal('0.9957'), Decimal('0.9957')]
    assert recipe.total_cost == sum(ri.price for ri in recipe.ingredients)
    assert recipe.total_cost == Decimal('1.9914')


def test_create_recipe_rounds_line_prices_before_totalling(app, flour):
    lines = [{'ingredient_id': flour['id'], 'quantity': Decimal('1'),
              'measurement_type': 'g', 'price': Decimal('0.33335')}] * 3

    result = create_recipe('Crumb', 'Rub in.', lines)

    recipe = db.session.get(Recipe, result['id'])
    # 3 x 0.3334, not 1.00005 rounded
    assert recipe.total_cost == Decimal('1.0002')


def test_recipe_total_is_snapshot(client, sugar):
    created = client.post('/recipes', json=recipe_payload(sugar_line(sugar))).get_json()

    # Ingredients are never updated through the API; simulate a later price change
    ingredient = db.session.get(Ingredient, sugar['id'])
    ingredient.price = Decimal('10.00')
    db.session.commit()

    recipe = db.session.get(Recipe, created['id'])
    assert recipe.total_cost == Decimal('1.396')
    assert db.session.query(RecipeIngredient).one().price == Decimal('1.396')
