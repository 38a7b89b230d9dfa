# ==============================================================================
# targetplanner/main/filters.py
# ------------------------------------------------------------------------------
# Display formatting for money and quantities, exposed as Jinja2 filters.
# Formatting happens at render/export time only; stored values stay raw.
# ==============================================================================

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from flask import current_app
from targetplanner.main import bp

DEFAULT_CURRENCY_SYMBOL = '₹'


# Enough digits to quantize any finite float (max ~1.8e308) to one decimal.
_ROUNDING_PRECISION = 400


def _round_half_up(value, places):
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        quantum = Decimal(1).scaleb(-places)
        return Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)


def _group_indian(digits):
    """Groups an integer string the en-IN way: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def _non_finite(value):
    if math.isnan(value):
        return 'NaN'
    return '-∞' if value < 0 else '∞'


def format_currency(value, symbol=DEFAULT_CURRENCY_SYMBOL):
    """
    Formats a rupee amount with no decimals and Indian digit grouping.
    Example: 1000000 -> "₹10,00,000"
    """
    value = float(value)
    if math.isnan(value):
        return f"{symbol}NaN"
    if math.isinf(value):
        return f"-{symbol}∞" if value < 0 else f"{symbol}∞"
    rounded = _round_half_up(value, 0)
    sign = '-' if rounded < 0 else ''
    return f"{sign}{symbol}{_group_indian(str(abs(int(rounded))))}"


def format_number(value):
    """
    Formats a quantity with thousands separators and at most one decimal.
    Example: 1234.56 -> "1,234.6", 1100.0000000000002 -> "1,100"
    """
    value = float(value)
    if not math.isfinite(value):
        return _non_finite(value)
    rounded = _round_half_up(value, 1)
    sign = '-' if rounded < 0 else ''
    rounded = rounded.copy_abs()
    whole = int(rounded)
    tenths = int((rounded - whole) * 10)
    text = f"{whole:,}"
    if tenths:
        text += f".{tenths}"
    return sign + text


@bp.app_template_filter('percent_total')
def format_percent_total(value):
    """One-decimal percentage used for the running product-value total."""
    return f"{float(value):.1f}"


# --- Jinja2 filters ---

@bp.app_template_filter('currency')
def currency_filter(value):
    try:
        return format_currency(value, current_app.config.get('CURRENCY_SYMBOL', DEFAULT_CURRENCY_SYMBOL))
    except (ValueError, TypeError):
        return value


@bp.app_template_filter('number')
def number_filter(value):
    try:
        return format_number(value)
    except (ValueError, TypeError):
        return value


@bp.app_template_filter('input_value')
def input_value_filter(value):
    """Renders a stored input back into a form field; unset stays blank."""
    if value is None:
        return ''
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
