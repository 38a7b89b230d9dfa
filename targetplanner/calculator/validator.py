# ==============================================================================
# targetplanner/calculator/validator.py
# ------------------------------------------------------------------------------
# Parses raw input values and decides whether a plan may be calculated.
# ==============================================================================

import math
import logging
from targetplanner.models import ProductInput, ValidationResult
from .schema import PRODUCT_FIELDS, API_FIELD_NAMES, REVENUE_GOAL_BOUNDS, PRODUCT_VALUE_TOTAL


class InvalidInputError(ValueError):
    """Raised when a raw input value cannot be turned into a usable number."""

    def __init__(self, field, message):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def parse_number(raw, field='value', minimum=0, maximum=None):
    """
    Converts a raw input value into a float, or None when it is blank.

    Args:
        raw: The submitted value (str, int, float or None).
        field (str): Field name used in error messages.
        minimum (float): Inclusive lower bound, or None for no bound.
        maximum (float): Inclusive upper bound, or None for no bound.

    Returns:
        float | None: The parsed value; None is the "unset" sentinel.

    Raises:
        InvalidInputError: If the value is not a finite number within bounds.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidInputError(field, f"'{raw}' is not a number.")
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == '':
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidInputError(field, f"'{raw}' is not a number.")

    if not math.isfinite(value):
        raise InvalidInputError(field, f"'{raw}' is not a finite number.")
    if minimum is not None and value < minimum:
        raise InvalidInputError(field, f"must be at least {minimum}.")
    if maximum is not None and value > maximum:
        raise InvalidInputError(field, f"must be at most {maximum}.")
    return value


def parse_plan(payload):
    """
    Parses a JSON plan payload of the form
    {"revenueGoal": ..., "products": [{"name": ..., "productValue": ..., ...}]}.

    Returns:
        tuple: A tuple containing:
            - tuple: (revenue_goal, list of ProductInput) if parsing succeeded, else None.
            - list: Human-readable error messages.
    """
    errors = []
    if not isinstance(payload, dict):
        return None, ['Request body must be a JSON object.']

    revenue_goal = None
    try:
        revenue_goal = parse_number(payload.get('revenueGoal'), field='revenueGoal',
                                    minimum=REVENUE_GOAL_BOUNDS[0], maximum=REVENUE_GOAL_BOUNDS[1])
    except InvalidInputError as e:
        errors.append(str(e))

    raw_products = payload.get('products', [])
    if not isinstance(raw_products, list):
        errors.append("products: must be a list.")
        return None, errors

    products = []
    for index, raw_product in enumerate(raw_products):
        if not isinstance(raw_product, dict):
            errors.append(f"products[{index}]: must be an object.")
            continue
        product = ProductInput(
            id=raw_product.get('id', index + 1),
            name=str(raw_product.get('name') or f"Product {index + 1}"),
        )
        for api_name, attr in API_FIELD_NAMES.items():
            _, minimum, maximum = PRODUCT_FIELDS[attr]
            try:
                value = parse_number(raw_product.get(api_name), field=f"products[{index}].{api_name}",
                                     minimum=minimum, maximum=maximum)
            except InvalidInputError as e:
                errors.append(str(e))
                continue
            setattr(product, attr, value)
        products.append(product)

    if errors:
        return None, errors
    return (revenue_goal, products), []


def total_product_value(products):
    """Sums the product-value shares, counting unset values as 0."""
    total = 0
    for product in products:
        total += product.product_value or 0
    return total


def validate_inputs(revenue_goal, products, tolerance=0.0):
    """
    Decides whether the plan may be calculated.

    The product-value shares must add up to exactly 100 unless a tolerance
    is given, and every required field must be set. A value of 0 counts as
    set; only None is missing.

    Returns:
        ValidationResult: The gate decision plus an advisory status.
    """
    total = total_product_value(products)
    if tolerance:
        is_valid = abs(total - PRODUCT_VALUE_TOTAL) <= tolerance
    else:
        is_valid = total == PRODUCT_VALUE_TOTAL

    missing = []
    if revenue_goal is None:
        missing.append('revenue_goal')
    for product in products:
        for attr in PRODUCT_FIELDS:
            if getattr(product, attr) is None:
                missing.append(f"{product.name}.{attr}")

    any_share_entered = any(p.product_value is not None for p in products)
    status, message = None, None
    if any_share_entered and not is_valid:
        status = 'warning'
        message = f"Total Product Value must add up to 100%. Current total: {total:.1f}%"
    elif any_share_entered and is_valid:
        status = 'success'
        message = "Product Value percentages total 100% - Ready to calculate!"

    result = ValidationResult(
        total_product_value=total,
        is_product_value_valid=is_valid,
        has_all_required_fields=not missing,
        status=status,
        message=message,
        missing_fields=missing,
    )
    logging.debug(f"Validation: total={total}, valid_total={is_valid}, missing={len(missing)}, "
                  f"can_calculate={result.can_calculate}")
    return result
