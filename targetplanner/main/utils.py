# ==============================================================================
# targetplanner/main/utils.py
# ------------------------------------------------------------------------------
# Turns planner state and engine output into the structures the templates,
# the PDF document and the JSON API render.
# ==============================================================================

import math
from datetime import date
from flask import current_app
from targetplanner.calculator.engine import summarize_results
from targetplanner.calculator.validator import validate_inputs
from targetplanner.calculator.export import paginate
from targetplanner.calculator.schema import PDF_COLUMNS


def validate_planner(planner):
    """Runs the validation gate with the configured tolerance."""
    tolerance = current_app.config.get('PRODUCT_VALUE_TOLERANCE', 0.0)
    return validate_inputs(planner.revenue_goal, planner.products, tolerance=tolerance)


def planner_form_data(planner):
    """Initial data for PlannerForm built from the stored inputs."""
    return {
        'revenue_goal': planner.revenue_goal,
        'products': [p.to_dict() for p in planner.products],
    }


def _chart_value(value):
    # Half-up rounding; non-finite bars are drawn as zero.
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def prepare_chart_data(results):
    """Rounded per-product series for the bar charts."""
    return {
        'labels': [row.name for row in results],
        'datasets': {
            'units': [_chart_value(row.units_to_sell) for row in results],
            'leads': [_chart_value(row.leads_required) for row in results],
            'doubleLeads': [_chart_value(row.double_leads) for row in results],
            'revenue': [_chart_value(row.revenue_goal_product) for row in results],
        },
    }


def prepare_frontend_data(planner):
    """
    Collects everything the planner page needs. Results and totals are None
    until a calculation has been run.
    """
    results = planner.results
    frontend_data = {
        'validation': validate_planner(planner),
        'results': results,
        'totals': None,
        'chart_data': None,
    }
    if results is not None:
        frontend_data['totals'] = summarize_results(results)
        frontend_data['chart_data'] = prepare_chart_data(results)
    return frontend_data


def prepare_report_data(planner):
    """
    Context for the PDF document: summary totals and paginated rows. The
    generation date is the server's local date.
    """
    results = planner.results or ()
    return {
        'revenue_goal': planner.results_revenue_goal,
        'totals': summarize_results(results),
        'pages': paginate(results),
        'columns': PDF_COLUMNS,
        'generated_on': date.today(),
    }


def _json_number(value):
    if value is None or not math.isfinite(value):
        return None
    return value


def serialize_results(results):
    """camelCase JSON view of a result set; non-finite numbers become null."""
    rows = []
    for row in results:
        rows.append({
            'id': row.id,
            'name': row.name,
            'productValue': row.product_value,
            'salesRatio': row.sales_ratio,
            'price': row.price,
            'conversionRatio': row.conversion_ratio,
            'revenueGoalProduct': _json_number(row.revenue_goal_product),
            'unitsToSell': _json_number(row.units_to_sell),
            'targetUnits': _json_number(row.target_units),
            'leadsRequired': _json_number(row.leads_required),
            'doubleLeads': _json_number(row.double_leads),
            'nonFiniteFields': row.non_finite_fields,
        })
    return rows


def serialize_totals(totals):
    return {
        'totalRevenueGoal': _json_number(totals.total_revenue_goal),
        'totalUnits': _json_number(totals.total_units),
        'totalLeads': _json_number(totals.total_leads),
        'totalDoubleLeads': _json_number(totals.total_double_leads),
    }


def serialize_validation(validation):
    return {
        'canCalculate': validation.can_calculate,
        'totalProductValue': validation.total_product_value,
        'isProductValueValid': validation.is_product_value_valid,
        'hasAllRequiredFields': validation.has_all_required_fields,
        'status': validation.status,
        'message': validation.message,
        'missingFields': validation.missing_fields,
    }
