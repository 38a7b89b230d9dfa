# ==============================================================================
# targetplanner/main/routes.py
# ------------------------------------------------------------------------------
# Defines all user-facing routes for the main application blueprint.
# This file acts as the main controller for the web interface.
# ==============================================================================

from flask import (render_template, request, flash, redirect, url_for, abort,
                   current_app, session, jsonify, Response)

from targetplanner.main import bp
from targetplanner.main.forms import PlannerForm
from targetplanner.main.utils import (validate_planner, planner_form_data, prepare_frontend_data,
                                      prepare_report_data, serialize_results, serialize_totals,
                                      serialize_validation)
from targetplanner.calculator.engine import calculate_targets, summarize_results
from targetplanner.calculator.validator import parse_plan, validate_inputs
from targetplanner.calculator.export import build_csv, build_pdf, export_filename

# --- Helper Functions ---

def get_planner():
    """Returns the planner state for this browser, creating it on first visit."""
    store = current_app.extensions['planner_sessions']
    token, planner = store.get_or_create(session.get('planner_token'))
    session['planner_token'] = token
    return planner


def _submitted_form():
    """
    Validates the posted planner form. Returns None (after flashing) when the
    CSRF check fails, so nothing gets applied.
    """
    form = PlannerForm()
    form.validate()
    if form.meta.csrf and form.csrf_token.errors:
        flash('Your session has expired. Please submit the form again.', 'danger')
        return None
    return form


def _field_was_submitted(field):
    return bool(field.raw_data)


def apply_form(planner, form):
    """
    Copies submitted values into the planner. Fields that failed validation
    keep their previous value and the error is flashed.
    """
    if _field_was_submitted(form.revenue_goal):
        if form.revenue_goal.errors:
            flash(f"Revenue Goal: {form.revenue_goal.errors[0]}", 'danger')
        else:
            planner.revenue_goal = form.revenue_goal.data

    for entry in form.products:
        product_form = entry.form
        try:
            product = planner.get_product(product_form.id.data)
        except KeyError:
            current_app.logger.warning(f"Ignoring submitted values for unknown product id {product_form.id.data!r}")
            continue

        updates = {}
        for field_name in ('name', 'product_value', 'sales_ratio', 'price', 'conversion_ratio'):
            field = product_form[field_name]
            if not _field_was_submitted(field):
                continue
            if field.errors:
                flash(f"{product.name} - {field.label.text}: {field.errors[0]}", 'danger')
                continue
            updates[field_name] = field.data
        planner.update_product(product.id, **updates)


def run_calculation(planner):
    """Runs the calculator if the gate is open; otherwise explains why not."""
    validation = validate_planner(planner)
    if not validation.can_calculate:
        if validation.status == 'warning':
            flash(validation.message, 'warning')
        else:
            flash('Fill in the revenue goal and every product field before calculating.', 'warning')
        return None

    results = calculate_targets(planner.revenue_goal, planner.snapshot())
    planner.set_results(planner.revenue_goal, results)
    current_app.logger.info(f"Calculated targets for {len(results)} product(s)")
    degenerate = [row.name for row in results if row.non_finite_fields]
    if degenerate:
        flash(f"Some targets could not be computed because a price or conversion ratio is 0: "
              f"{', '.join(degenerate)}", 'warning')
    else:
        flash('Sales targets calculated.', 'success')
    return results

# --- Main Application Routes ---

@bp.route('/', methods=['GET', 'POST'])
def index():
    """Shows the planner and handles saving, adding products and calculating."""
    planner = get_planner()

    if request.method == 'POST':
        form = _submitted_form()
        if form is None:
            return redirect(url_for('main.index'))

        apply_form(planner, form)
        action = form.action.data or 'save'
        if action == 'add':
            product = planner.add_product()
            flash(f'"{product.name}" added.', 'info')
        elif action == 'calculate':
            run_calculation(planner)
        return redirect(url_for('main.index'))

    form = PlannerForm(data=planner_form_data(planner))
    frontend_data = prepare_frontend_data(planner)
    return render_template('index.html', form=form, planner=planner, **frontend_data)


@bp.route('/product/<int:product_id>/delete', methods=['POST'])
def delete_product(product_id):
    """Removes a product, keeping any edits submitted alongside the request."""
    planner = get_planner()
    form = _submitted_form()
    if form is None:
        return redirect(url_for('main.index'))

    apply_form(planner, form)
    try:
        product = planner.remove_product(product_id)
    except KeyError:
        abort(404)
    flash(f'"{product.name}" removed.', 'info')
    return redirect(url_for('main.index'))


@bp.route('/reset', methods=['POST'])
def reset():
    """Discards the inputs and results of this session."""
    if _submitted_form() is None:
        return redirect(url_for('main.index'))
    get_planner().reset()
    flash('The planner has been reset.', 'info')
    return redirect(url_for('main.index'))

# --- Export Routes ---

@bp.route('/export/csv')
def export_csv():
    planner = get_planner()
    if planner.results is None:
        flash('Calculate the sales targets before exporting.', 'warning')
        return redirect(url_for('main.index'))

    filename = export_filename('csv')
    return Response(
        build_csv(planner.results),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )


@bp.route('/export/pdf')
def export_pdf():
    planner = get_planner()
    if planner.results is None:
        flash('Calculate the sales targets before exporting.', 'warning')
        return redirect(url_for('main.index'))

    html = render_template('report_pdf.html', **prepare_report_data(planner))
    try:
        pdf_bytes = build_pdf(html, current_app.config.get('WKHTMLTOPDF_PATH'))
    except OSError as e:
        current_app.logger.error(f"PDF generation failed: {e}", exc_info=True)
        flash('The PDF could not be generated. Please check that wkhtmltopdf is installed.', 'danger')
        return redirect(url_for('main.index'))

    filename = export_filename('pdf')
    return Response(
        pdf_bytes,
        mimetype='application/pdf',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )

# --- JSON API ---

@bp.route('/api/plan', methods=['POST'])
def api_plan():
    """
    Stateless calculation for API clients. Accepts
    {"revenueGoal": ..., "products": [...]} and returns the validation result,
    and when it passes, the result rows and totals.
    """
    plan, errors = parse_plan(request.get_json(silent=True))
    if errors:
        return jsonify({'errors': errors}), 400

    revenue_goal, products = plan
    validation = validate_inputs(revenue_goal, products,
                                 tolerance=current_app.config.get('PRODUCT_VALUE_TOLERANCE', 0.0))
    if not validation.can_calculate:
        return jsonify({'validation': serialize_validation(validation)}), 422

    results = calculate_targets(revenue_goal, products)
    return jsonify({
        'validation': serialize_validation(validation),
        'results': serialize_results(results),
        'totals': serialize_totals(summarize_results(results)),
    })
