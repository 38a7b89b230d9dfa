# ==============================================================================
# targetplanner/main/forms.py
# ------------------------------------------------------------------------------
# Defines web forms using Flask-WTF for user input and validation.
# These forms are the input boundary: raw text becomes a float or None here.
# ==============================================================================

import math
from flask_wtf import FlaskForm
from wtforms import Form, StringField, FloatField, IntegerField, FieldList, FormField
from wtforms.validators import InputRequired, NumberRange, Optional, Length, ValidationError
from wtforms.widgets import HiddenInput

PERCENT_MESSAGE = "Enter a percentage between 0 and 100."
NON_NEGATIVE_MESSAGE = "Enter a number that is 0 or greater."
FINITE_MESSAGE = "Enter a finite number."


def finite_number(form, field):
    """FloatField parses 'inf' and '1e400'; only finite values may be stored."""
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError(FINITE_MESSAGE)


class ProductForm(Form):
    """One product row. Plain wtforms Form: CSRF is handled by the parent."""
    id = IntegerField(widget=HiddenInput(), validators=[InputRequired()])
    name = StringField('Product', validators=[Length(max=120)])
    product_value = FloatField('Product Value (% of Revenue)',
                               validators=[Optional(), finite_number,
                                           NumberRange(min=0, max=100, message=PERCENT_MESSAGE)])
    sales_ratio = FloatField('Sales Ratio (Past %)',
                             validators=[Optional(), finite_number,
                                         NumberRange(min=0, max=100, message=PERCENT_MESSAGE)])
    price = FloatField('Product Price (₹)',
                       validators=[Optional(), finite_number, NumberRange(min=0, message=NON_NEGATIVE_MESSAGE)])
    conversion_ratio = FloatField('Sales Conversion Ratio (%)',
                                  validators=[Optional(), finite_number,
                                              NumberRange(min=0, max=100, message=PERCENT_MESSAGE)])


class PlannerForm(FlaskForm):
    """The whole planner: the revenue goal plus every product row."""
    revenue_goal = FloatField('Revenue Goal (₹)',
                              validators=[Optional(), finite_number,
                                          NumberRange(min=0, message=NON_NEGATIVE_MESSAGE)])
    products = FieldList(FormField(ProductForm))
    # Set by the submit button that was pressed: save, add or calculate.
    action = StringField(default='save')
