# tests/test_validator.py

import pytest

from targetplanner.calculator.validator import (InvalidInputError, parse_number, parse_plan,
                                                total_product_value, validate_inputs)
from targetplanner.models import ProductInput


def test_all_fields_filled_and_total_100_can_calculate(make_product):
    products = [make_product(id=1, product_value=40), make_product(id=2, product_value=60)]
    result = validate_inputs(500_000, products)

    assert result.is_product_value_valid
    assert result.has_all_required_fields
    assert result.can_calculate
    assert result.status == 'success'


@pytest.mark.parametrize('shares', [(50, 49), (60, 60), (100, 0.5), (99.9,), (0,)])
def test_total_other_than_100_never_calculates(make_product, shares):
    products = [make_product(id=i, product_value=share) for i, share in enumerate(shares)]
    result = validate_inputs(1_000, products)

    assert result.has_all_required_fields
    assert not result.can_calculate
    assert result.status == 'warning'


def test_total_of_99_9_is_rejected_with_message(make_product):
    result = validate_inputs(1_000, [make_product(product_value=99.9)])

    assert not result.can_calculate
    assert result.message == 'Total Product Value must add up to 100%. Current total: 99.9%'


def test_tolerance_accepts_rounding_noise(make_product):
    products = [make_product(id=i, product_value=v) for i, v in enumerate((33.3, 33.3, 33.4))]

    assert validate_inputs(1_000, products, tolerance=0.01).can_calculate
    assert not validate_inputs(1_000, [make_product(product_value=99.9)], tolerance=0.01).can_calculate


def test_zero_products_is_never_valid():
    result = validate_inputs(1_000, [])

    assert result.total_product_value == 0
    assert not result.is_product_value_valid
    assert not result.can_calculate
    assert result.status is None


def test_missing_revenue_goal_blocks_calculation(make_product):
    result = validate_inputs(None, [make_product()])

    assert result.is_product_value_valid
    assert not result.has_all_required_fields
    assert not result.can_calculate
    assert 'revenue_goal' in result.missing_fields


@pytest.mark.parametrize('field', ['product_value', 'sales_ratio', 'price', 'conversion_ratio'])
def test_any_unset_product_field_blocks_calculation(make_product, field):
    products = [make_product(id=1, product_value=50), make_product(id=2, name='Product B', product_value=50)]
    setattr(products[1], field, None)
    result = validate_inputs(1_000, products)

    assert not result.can_calculate
    assert result.missing_fields == [f'Product B.{field}']


def test_zero_counts_as_a_set_value(make_product):
    result = validate_inputs(0, [make_product(price=0, sales_ratio=0)])
    assert result.has_all_required_fields
    assert result.can_calculate


def test_unset_product_values_count_as_zero():
    products = [ProductInput(id=1, name='A', product_value=70), ProductInput(id=2, name='B')]
    result = validate_inputs(1_000, products)

    assert total_product_value(products) == 70
    assert result.status == 'warning'


def test_no_status_until_a_share_is_entered():
    result = validate_inputs(None, [ProductInput(id=1, name='A'), ProductInput(id=2, name='B')])
    assert result.status is None
    assert result.message is None


# --- parse_number ---

@pytest.mark.parametrize('raw, expected', [
    ('', None), ('   ', None), (None, None),
    ('40', 40.0), (' 12.5 ', 12.5), (0, 0.0), ('0', 0.0), (7.25, 7.25),
])
def test_parse_number_accepts(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize('raw', ['abc', '1,000', 'nan', 'inf', '-1', True])
def test_parse_number_rejects(raw):
    with pytest.raises(InvalidInputError):
        parse_number(raw, field='price')


def test_parse_number_enforces_maximum():
    with pytest.raises(InvalidInputError) as excinfo:
        parse_number('100.5', field='productValue', maximum=100)
    assert excinfo.value.field == 'productValue'
    assert parse_number('100', maximum=100) == 100


def test_parse_plan_builds_products():
    plan, errors = parse_plan({
        'revenueGoal': '1000000',
        'products': [{'name': 'Widget', 'productValue': 100, 'salesRatio': '35',
                      'price': 1000, 'conversionRatio': '10'}],
    })

    assert errors == []
    revenue_goal, products = plan
    assert revenue_goal == 1_000_000
    assert products[0].name == 'Widget'
    assert products[0].conversion_ratio == 10.0


def test_parse_plan_collects_every_error():
    plan, errors = parse_plan({
        'revenueGoal': '-5',
        'products': [{'productValue': 'lots', 'price': -1}],
    })

    assert plan is None
    assert len(errors) == 3
    assert errors[0].startswith('revenueGoal')


def test_parse_plan_rejects_non_object():
    plan, errors = parse_plan(['not', 'a', 'plan'])
    assert plan is None
    assert errors
