# tests/test_export.py

import math
from datetime import date
from unittest.mock import patch

import pytest

from targetplanner.calculator.engine import calculate_targets
from targetplanner.calculator.export import (build_csv, build_pdf, export_filename, paginate,
                                             raw_number, results_dataframe)

CSV_HEADER = ('Product,Product Value (%),Sales Ratio (%),Price,Conversion Ratio (%),'
              'Revenue Goal,Units to Sell,Target Units,Leads Required,Double Leads')


@pytest.mark.parametrize('value, expected', [
    (None, ''),
    (0, '0'),
    (100.0, '100'),
    (1000000.0, '1000000'),
    (12.5, '12.5'),
    (1100.0000000000002, '1100.0000000000002'),
    (0.30000000000000004, '0.30000000000000004'),
    (math.inf, 'Infinity'),
    (-math.inf, '-Infinity'),
    (math.nan, 'NaN'),
])
def test_raw_number_matches_browser_output(value, expected):
    assert raw_number(value) == expected


def test_export_filename_uses_iso_date():
    assert export_filename('csv', today=date(2024, 5, 1)) == 'sales-target-plan-2024-05-01.csv'
    assert export_filename('pdf', today=date(2024, 12, 31)) == 'sales-target-plan-2024-12-31.pdf'


def test_build_csv_header_and_rows(make_product):
    results = calculate_targets(1_000_000, [make_product()])
    lines = build_csv(results).split('\n')

    assert lines[0] == CSV_HEADER
    assert lines[1] == 'Product A,100,35,1000,10,1000000,1000,1100,10000,20000'
    assert len(lines) == 2


def test_build_csv_prints_float_noise_like_the_browser(make_product):
    # 3 * 1.1 is 3.3000000000000003 in binary floating point.
    results = calculate_targets(3_000, [make_product()])
    row = build_csv(results).split('\n')[1].split(',')

    assert row[6] == '3'
    assert row[7] == '3.3000000000000003'


def test_build_csv_has_no_trailing_newline(make_product):
    results = calculate_targets(1_000_000, [make_product()])
    assert not build_csv(results).endswith('\n')


def test_build_csv_keeps_result_order(make_product):
    products = [make_product(id=i, name=f'Product {name}', product_value=share)
                for i, (name, share) in enumerate([('B', 30), ('A', 70)], start=1)]
    lines = build_csv(calculate_targets(10_000, products)).split('\n')

    assert lines[1].startswith('Product B,30,')
    assert lines[2].startswith('Product A,70,')


def test_build_csv_renders_non_finite_values(make_product):
    results = calculate_targets(1_000_000, [make_product(price=0)])
    row = build_csv(results).split('\n')[1].split(',')

    assert row[6:] == ['Infinity', 'Infinity', 'Infinity', 'Infinity']


def test_build_csv_with_no_results_is_header_only():
    assert build_csv(()) == CSV_HEADER


def test_results_dataframe_columns(make_product):
    df = results_dataframe(calculate_targets(1_000, [make_product()]))
    assert list(df.columns) == CSV_HEADER.split(',')
    assert df.loc[0, 'Product'] == 'Product A'


@pytest.mark.parametrize('count, page_sizes', [
    (0, [0]),
    (3, [3]),
    (5, [5]),
    (6, [5, 1]),
    (23, [5, 18]),
    (24, [5, 18, 1]),
])
def test_paginate_first_page_is_shorter(count, page_sizes):
    pages = paginate(range(count))
    assert [len(page) for page in pages] == page_sizes


def test_paginate_preserves_order():
    pages = paginate(list(range(30)))
    assert [item for page in pages for item in page] == list(range(30))


def test_build_pdf_uses_landscape_a4():
    with patch('targetplanner.calculator.export.pdfkit.from_string', return_value=b'%PDF-1.4') as from_string:
        pdf_bytes = build_pdf('<h1>Report</h1>')

    assert pdf_bytes == b'%PDF-1.4'
    args, kwargs = from_string.call_args
    assert args == ('<h1>Report</h1>', False)
    assert kwargs['options']['orientation'] == 'Landscape'
    assert kwargs['options']['page-size'] == 'A4'
    assert kwargs['configuration'] is None


def test_build_pdf_with_explicit_binary_path():
    with patch('targetplanner.calculator.export.pdfkit.configuration', return_value='cfg') as configuration, \
         patch('targetplanner.calculator.export.pdfkit.from_string', return_value=b'%PDF') as from_string:
        build_pdf('<p></p>', wkhtmltopdf_path='/opt/wkhtmltopdf')

    configuration.assert_called_once_with(wkhtmltopdf='/opt/wkhtmltopdf')
    assert from_string.call_args.kwargs['configuration'] == 'cfg'


def test_build_pdf_propagates_missing_binary():
    with patch('targetplanner.calculator.export.pdfkit.from_string', side_effect=OSError('No wkhtmltopdf')):
        with pytest.raises(OSError):
            build_pdf('<p></p>')
