# ==============================================================================
# targetplanner/calculator/export.py
# ------------------------------------------------------------------------------
# Builds the CSV and PDF downloads for a calculated plan.
# ==============================================================================

import math
import logging
from datetime import datetime, timezone
import numpy as np
import pandas as pd
import pdfkit
from .schema import (CSV_COLUMNS, EXPORT_FILENAME_PREFIX,
                     PDF_ROWS_FIRST_PAGE, PDF_ROWS_PER_PAGE)

PDF_OPTIONS = {
    'page-size': 'A4',
    'orientation': 'Landscape',
    'encoding': 'UTF-8',
    'quiet': '',
}


def export_filename(extension, today=None):
    """e.g. 'sales-target-plan-2024-05-01.csv'. The date is taken in UTC."""
    today = today or datetime.now(timezone.utc).date()
    return f"{EXPORT_FILENAME_PREFIX}-{today.isoformat()}.{extension}"


def raw_number(value):
    """
    Renders a stored number the way a browser prints a plain JavaScript
    number, so exported files match those produced by the web client:
    1000000.0 -> '1000000', inf -> 'Infinity', 1e-07 -> '1e-7'.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        return np.format_float_positional(value, trim='-')
    return np.format_float_scientific(value, trim='-', exp_digits=1).replace('.e', 'e')


def results_dataframe(results):
    """One row per result, columns labelled with the CSV headers."""
    records = []
    for row in results:
        record = {}
        for header, attr in CSV_COLUMNS:
            value = getattr(row, attr)
            record[header] = value if attr == 'name' else raw_number(value)
        records.append(record)
    return pd.DataFrame(records, columns=[header for header, _ in CSV_COLUMNS])


def build_csv(results):
    """
    Returns the CSV text: a header line followed by one line per result,
    newline-separated, with no trailing newline.
    """
    df = results_dataframe(results)
    text = df.to_csv(index=False, lineterminator='\n')
    logging.info(f"Built CSV export with {len(df)} row(s)")
    return text.rstrip('\n')


def paginate(rows, first_page=PDF_ROWS_FIRST_PAGE, per_page=PDF_ROWS_PER_PAGE):
    """
    Splits table rows into pages. The first page holds fewer rows because it
    also carries the title and summary block.
    """
    rows = list(rows)
    pages = [rows[:first_page]]
    rest = rows[first_page:]
    while rest:
        pages.append(rest[:per_page])
        rest = rest[per_page:]
    return pages


def build_pdf(html, wkhtmltopdf_path=None):
    """
    Converts the rendered report HTML to PDF bytes with wkhtmltopdf.

    Raises:
        OSError: If wkhtmltopdf is missing or fails.
    """
    configuration = pdfkit.configuration(wkhtmltopdf=wkhtmltopdf_path) if wkhtmltopdf_path else None
    pdf_bytes = pdfkit.from_string(html, False, options=PDF_OPTIONS, configuration=configuration)
    logging.info(f"Built PDF export ({len(pdf_bytes)} bytes)")
    return pdf_bytes
