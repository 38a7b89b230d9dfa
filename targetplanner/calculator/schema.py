# ==============================================================================
# targetplanner/calculator/schema.py
# ------------------------------------------------------------------------------
# Defines the product input fields, their bounds and the export layouts.
# This schema is the single source of truth for the validator and exporters.
# ==============================================================================

# Fraction added on top of units to sell to form the target units.
TARGET_UNITS_BUFFER = 1.10

# Multiplier applied to required leads for the conservative planning target.
DOUBLE_LEADS_FACTOR = 2

# The percentage shares of all products must add up to this value.
PRODUCT_VALUE_TOTAL = 100

# field name: (label, minimum, maximum)
PRODUCT_FIELDS = {
    'product_value': ('Product Value (% of Revenue)', 0, 100),
    'sales_ratio': ('Sales Ratio (Past %)', 0, 100),
    'price': ('Product Price', 0, None),
    'conversion_ratio': ('Sales Conversion Ratio (%)', 0, 100),
}

# Fields the JSON API accepts, camelCase as the browser client sends them.
API_FIELD_NAMES = {
    'productValue': 'product_value',
    'salesRatio': 'sales_ratio',
    'price': 'price',
    'conversionRatio': 'conversion_ratio',
}

REVENUE_GOAL_BOUNDS = (0, None)

CSV_COLUMNS = [
    ('Product', 'name'),
    ('Product Value (%)', 'product_value'),
    ('Sales Ratio (%)', 'sales_ratio'),
    ('Price', 'price'),
    ('Conversion Ratio (%)', 'conversion_ratio'),
    ('Revenue Goal', 'revenue_goal_product'),
    ('Units to Sell', 'units_to_sell'),
    ('Target Units', 'target_units'),
    ('Leads Required', 'leads_required'),
    ('Double Leads', 'double_leads'),
]

# (header, attribute, formatter kind)
PDF_COLUMNS = [
    ('Product', 'name', 'text'),
    ('Revenue Goal', 'revenue_goal_product', 'currency'),
    ('Units', 'units_to_sell', 'number'),
    ('Target Units', 'target_units', 'number'),
    ('Leads', 'leads_required', 'number'),
    ('Double Leads', 'double_leads', 'number'),
]

# A4 landscape layout: the first page carries the summary block.
PDF_ROWS_FIRST_PAGE = 5
PDF_ROWS_PER_PAGE = 18

EXPORT_FILENAME_PREFIX = 'sales-target-plan'
