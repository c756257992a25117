# ==============================================================================
# app/calculator/validator.py
# ------------------------------------------------------------------------------
# Reads the uploaded performance report, checks its structure and converts
# the branch rows into BranchFigures.
# ==============================================================================

import logging
import math
import numbers
import re

import pandas as pd

from .engine import BranchFigures
from .schema import REPORT_SHEET_NAME, HEADER_ROW_INDEX, REPORT_COLUMNS, ROUNDED_COLUMNS

_LEADING_NUMBER = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')
_WHITESPACE = re.compile(r'\s')


def parse_decimal(text):
    """
    Parses a number written by a person: all whitespace is removed and a
    decimal comma becomes a point, then the leading number is read.
    "1 234,5" -> 1234.5, "12 Kč" -> 12.0, "abc" -> None, "1e999" -> None.
    """
    cleaned = _WHITESPACE.sub('', str(text)).replace(',', '.', 1)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_number(value):
    """
    Converts a raw cell value to a number.

    Numeric cells are returned as they are, empty/NaN cells become 0 and text
    goes through parse_decimal. Anything unparseable or infinite yields 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, numbers.Number):
        return value if math.isfinite(value) else 0
    if value is None:
        return 0
    parsed = parse_decimal(value)
    return 0 if parsed is None else parsed


def round_half_up(value):
    """Rounds to the nearest integer, halves towards positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _cell(row, index):
    return row[index] if index < len(row) else None


def _cell_text(value):
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _find_column(header_row, captions):
    wanted = {caption.strip().lower() for caption in captions}
    for index, cell in enumerate(header_row):
        text = _cell_text(cell)
        if text and text.lower() in wanted:
            return index
    return -1


def extract_branch_figures(rows):
    """
    Converts report rows (a list of cell lists, header on the 5th row) into
    branch figures.

    Args:
        rows (list): Every row of the report sheet, starting with the first.

    Returns:
        tuple: A tuple containing:
            - list: BranchFigures in report order, or None on error.
            - list: Human-readable error messages.
    """
    if len(rows) <= HEADER_ROW_INDEX:
        return None, [f"Soubor je příliš krátký. Záhlaví musí být na {HEADER_ROW_INDEX + 1}. řádku."]

    header_row = rows[HEADER_ROW_INDEX]
    column_indexes = {field: _find_column(header_row, captions) for field, captions in REPORT_COLUMNS.items()}
    missing = [REPORT_COLUMNS[field][0] for field, index in column_indexes.items() if index == -1]
    if missing:
        logging.warning(f"Report header is missing columns {missing}. Header row: {header_row}")
        return None, [
            f"Nepodařilo se najít všechny sloupce ({', '.join(missing)}). "
            f"Zkontrolujte názvy v Excelu na {HEADER_ROW_INDEX + 1}. řádku."
        ]

    figures = []
    seen_branches = set()
    for row_offset, row in enumerate(rows[HEADER_ROW_INDEX + 1:]):
        excel_row_num = HEADER_ROW_INDEX + row_offset + 2
        branch_name = _cell_text(_cell(row, column_indexes['branch_name']))
        if not branch_name:
            continue

        values = {
            field: parse_number(_cell(row, column_indexes[field]))
            for field in ('revenue_rr', 'service_asist_revenue', 'plan_asr_services_revenue')
        }
        for field in ROUNDED_COLUMNS:
            values[field] = round_half_up(values[field])

        if values['revenue_rr'] == 0 and values['plan_asr_services_revenue'] == 0:
            logging.debug(f"Skipping row {excel_row_num} ('{branch_name}'): no revenue RR and no plan.")
            continue

        if branch_name in seen_branches:
            logging.warning(f"Skipping row {excel_row_num}: branch '{branch_name}' already appeared earlier in the report.")
            continue
        seen_branches.add(branch_name)

        figures.append(BranchFigures(branch_name=branch_name, **values))

    logging.info(f"Extracted figures for {len(figures)} branches.")
    return figures, []


def validate_report_file(filepath, sheet_name=REPORT_SHEET_NAME):
    """
    Reads the uploaded .xlsx/.xls report and extracts the branch figures.

    Args:
        filepath (str): The path to the uploaded file.
        sheet_name (str): Preferred sheet; the first sheet is used if absent.

    Returns:
        tuple: A tuple containing:
            - list: BranchFigures if the file is valid, otherwise None.
            - list: A list of human-readable error messages if validation fails.
    """
    try:
        xls = pd.ExcelFile(filepath)
        sheet_to_read = sheet_name if sheet_name in xls.sheet_names else xls.sheet_names[0]
        df = pd.read_excel(xls, sheet_name=sheet_to_read, header=None)
    except Exception as e:
        logging.error(f"Could not read report '{filepath}': {e}", exc_info=True)
        return None, [f"Soubor se nepodařilo načíst jako sešit Excel. Technická chyba: {e}"]

    logging.info(f"Reading sheet '{sheet_to_read}' with {len(df)} rows from '{filepath}'.")
    return extract_branch_figures(df.values.tolist())
