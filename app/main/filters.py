# ==============================================================================
# app/main/filters.py
# ------------------------------------------------------------------------------
# Defines custom Jinja2 template filters for the application.
# ==============================================================================

from app.calculator.validator import round_half_up
from app.main import bp

@bp.app_template_filter('thousands')
def thousands_filter(s):
    """
    Formats a number as a whole number with space thousands separators.
    Example: 1234567.4 -> "1 234 567", 1234.5 -> "1 235"
    """
    try:
        return "{:,}".format(round_half_up(float(s))).replace(',', ' ')
    except (ValueError, TypeError, OverflowError):
        return s

@bp.app_template_filter('one_decimal')
def one_decimal_filter(s):
    """
    Formats a number with at most one decimal place.
    Example: 28.846 -> "28.8", 150.0 -> "150"
    """
    try:
        return "{:.1f}".format(float(s)).rstrip('0').rstrip('.')
    except (ValueError, TypeError):
        return s
