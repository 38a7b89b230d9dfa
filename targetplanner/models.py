# ==============================================================================
# targetplanner/models.py
# ------------------------------------------------------------------------------
# Defines the planner's data model: product inputs and calculated results.
# Nothing here is persisted; instances live in the in-memory planner session.
# ==============================================================================

import math
from dataclasses import dataclass, field, fields, replace


@dataclass
class ProductInput:
    """
    A single product row as entered by the user.
    Percentages are stored as 0-100 values; None means the field is unset.
    """
    id: int
    name: str
    product_value: float = None
    sales_ratio: float = None
    price: float = None
    conversion_ratio: float = None

    def __repr__(self):
        return f'<ProductInput {self.id}: {self.name}>'

    def copy(self):
        return replace(self)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ResultRow:
    """
    Calculated targets for one product. Carries a snapshot of the product's
    inputs so the row stays valid after the inputs are edited.
    """
    id: int
    name: str
    product_value: float
    sales_ratio: float
    price: float
    conversion_ratio: float
    revenue_goal_product: float
    units_to_sell: float
    target_units: float
    leads_required: float
    double_leads: float

    METRIC_FIELDS = ('revenue_goal_product', 'units_to_sell', 'target_units',
                     'leads_required', 'double_leads')

    def __repr__(self):
        return f'<ResultRow {self.id}: {self.name}>'

    @property
    def non_finite_fields(self):
        """Names of the metrics that came out infinite or NaN."""
        return [name for name in self.METRIC_FIELDS if not math.isfinite(getattr(self, name))]


@dataclass(frozen=True)
class ResultTotals:
    """Aggregate sums over a result set."""
    total_revenue_goal: float = 0.0
    total_units: float = 0.0
    total_leads: float = 0.0
    total_double_leads: float = 0.0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking whether the current inputs may be calculated."""
    total_product_value: float
    is_product_value_valid: bool
    has_all_required_fields: bool
    status: str = None
    message: str = None
    missing_fields: list = field(default_factory=list)

    @property
    def can_calculate(self):
        return self.has_all_required_fields and self.is_product_value_valid
