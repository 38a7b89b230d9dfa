# ==============================================================================
# targetplanner/calculator/engine.py
# ------------------------------------------------------------------------------
# The chunking method: splits a revenue goal across products by percentage
# share and back-solves the units and leads each product needs.
# ==============================================================================

import math
import logging
from targetplanner.models import ResultRow, ResultTotals
from .schema import TARGET_UNITS_BUFFER, DOUBLE_LEADS_FACTOR

# --- Helper Functions ---

def _divide(numerator, denominator):
    """Float division with IEEE semantics: x/0 is +-inf and 0/0 is NaN."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _calculate_row(revenue_goal, product):
    revenue_goal_product = (revenue_goal * product.product_value) / 100
    units_to_sell = _divide(revenue_goal_product, product.price)
    target_units = units_to_sell * TARGET_UNITS_BUFFER
    leads_required = _divide(units_to_sell, product.conversion_ratio / 100)
    double_leads = leads_required * DOUBLE_LEADS_FACTOR

    return ResultRow(
        id=product.id,
        name=product.name,
        product_value=product.product_value,
        sales_ratio=product.sales_ratio,
        price=product.price,
        conversion_ratio=product.conversion_ratio,
        revenue_goal_product=revenue_goal_product,
        units_to_sell=units_to_sell,
        target_units=target_units,
        leads_required=leads_required,
        double_leads=double_leads,
    )

# --- Main Calculation ---

def calculate_targets(revenue_goal, products):
    """
    Calculates the sales targets for every product.

    Callers are expected to check validate_inputs() first; this function does
    not re-validate. A zero price or conversion ratio yields non-finite
    metrics instead of an exception.

    Args:
        revenue_goal (float): Total revenue target for the period.
        products (list[ProductInput]): Products in display order.

    Returns:
        tuple[ResultRow, ...]: One row per product, in input order.
    """
    logging.info(f"Calculating targets for {len(products)} product(s), revenue goal {revenue_goal:,.2f}")

    results = []
    for product in products:
        row = _calculate_row(revenue_goal, product)
        logging.debug(
            f"  {row.name}: revenue={row.revenue_goal_product:,.2f}, units={row.units_to_sell:,.2f}, "
            f"target_units={row.target_units:,.2f}, leads={row.leads_required:,.2f}, "
            f"double_leads={row.double_leads:,.2f}"
        )
        if row.non_finite_fields:
            logging.warning(f"Non-finite targets for '{row.name}' (price={row.price}, "
                            f"conversion={row.conversion_ratio}): {', '.join(row.non_finite_fields)}")
        results.append(row)

    return tuple(results)


def summarize_results(results):
    """
    Reduces a result set to its totals. Every view that shows a total uses
    this function so the numbers agree everywhere.
    """
    return ResultTotals(
        total_revenue_goal=sum(row.revenue_goal_product for row in results),
        total_units=sum(row.units_to_sell for row in results),
        total_leads=sum(row.leads_required for row in results),
        total_double_leads=sum(row.double_leads for row in results),
    )
