# ==============================================================================
# app/main/utils.py
# ------------------------------------------------------------------------------
# Glue between the routes, the database and the calculator: settings access,
# report replacement, override storage and preparation of view data.
# ==============================================================================
import logging
import math
from datetime import date

from flask import current_app

from app import db
from app.models import AppSetting, BranchFigure, BranchOverride, ReportUpload
from app.seed import DEFAULT_SETTINGS
from app.calculator.overrides import OverrideSet, OVERRIDABLE_FIELDS
from app.calculator.validator import round_half_up

# --- Settings ---

def get_setting(key, default):
    """Returns a stored setting cast to its type, or `default` when absent or broken."""
    setting = AppSetting.query.filter_by(key=key).first()
    if setting is None:
        return default
    try:
        return setting.get_value()
    except ValueError:
        logging.warning(f"Setting '{key}' holds an invalid value '{setting.value}'. Using default {default!r}.")
        return default

def _save_setting(key, value, value_type):
    setting = AppSetting.query.filter_by(key=key).first()
    if setting is None:
        description = DEFAULT_SETTINGS.get(key, [None, None, None])[1]
        setting = AppSetting(key=key, description=description, value_type=value_type)
        db.session.add(setting)
    setting.value = str(value)
    db.session.commit()

def load_weekend_weight():
    return get_setting('WEEKEND_WEIGHT', current_app.config['DEFAULT_WEEKEND_WEIGHT'])

def save_weekend_weight(weight):
    """Stores the weekend weight clamped to 0..1 and returns the stored value."""
    clamped = min(max(float(weight), 0.0), 1.0)
    _save_setting('WEEKEND_WEIGHT', clamped, 'float')
    logging.info(f"Weekend weight set to {clamped:.2f}.")
    return clamped

def load_default_branch():
    return get_setting('DEFAULT_BRANCH', '') or None

def save_default_branch(branch_name):
    _save_setting('DEFAULT_BRANCH', branch_name, 'string')
    logging.info(f"Default branch set to '{branch_name}'.")

def reference_date():
    """The day treated as "today" by the calendar."""
    return current_app.config.get('REFERENCE_DATE') or date.today()

# --- Report & Overrides ---

def get_active_report():
    return ReportUpload.query.order_by(ReportUpload.upload_timestamp.desc(), ReportUpload.id.desc()).first()

def replace_active_report(filename, figures):
    """
    Drops the previous report with all its figures and overrides, then stores
    the new figures. Commits the session.
    """
    BranchOverride.query.delete()
    BranchFigure.query.delete()
    ReportUpload.query.delete()

    report = ReportUpload(filename=filename)
    db.session.add(report)
    db.session.flush()

    for item in figures:
        db.session.add(BranchFigure(
            branch_name=item.branch_name,
            revenue_rr=item.revenue_rr,
            plan_asr_services_revenue=item.plan_asr_services_revenue,
            service_asist_revenue=item.service_asist_revenue,
            report_id=report.id
        ))

    db.session.commit()
    logging.info(f"Report '{filename}' loaded with {len(figures)} branches; previous data and overrides discarded.")
    return report

def get_branch_names(report):
    if report is None:
        return []
    return sorted(b.branch_name for b in report.branches)

def get_branch(report, branch_name):
    if report is None:
        return None
    return report.branches.filter_by(branch_name=branch_name).first()

def load_override_set(report):
    """Builds an OverrideSet from the overrides stored for the report."""
    override_set = OverrideSet()
    if report is None:
        return override_set
    for row in report.overrides:
        for field in OVERRIDABLE_FIELDS:
            value = getattr(row, field)
            if value is not None:
                override_set.set(row.branch_name, field, value)
    return override_set

def save_override(report, branch_name, field, value):
    """Stores one overridden field of a branch, keeping its other override."""
    if field not in OVERRIDABLE_FIELDS:
        raise ValueError(f"Field '{field}' cannot be overridden.")
    row = report.overrides.filter_by(branch_name=branch_name).first()
    if row is None:
        row = BranchOverride(branch_name=branch_name, report_id=report.id)
        db.session.add(row)
    setattr(row, field, value)
    db.session.commit()
    logging.info(f"Override for '{branch_name}': {field} = {value}")

# --- View preparation ---

def prepare_branch_view(result):
    """
    Derives the display values of a CalculationResult. Clamping happens only
    here: the daily targets are shown as non-negative whole numbers and the
    progress bar never leaves 0..100 %, while the percentage label keeps the
    real value. Non-finite values are shown as 0.
    """
    weight = result.weekend_weight
    percent_complete = _finite(result.percent_complete)
    return {
        'daily_target': max(0, round_half_up(_finite(result.final_value))),
        'weekend_day_target': max(0, round_half_up(_finite(result.weekend_day_target))),
        'target_total': round_half_up(_finite(result.target_total)),
        'percent_complete': percent_complete,
        'progress_width': min(max(percent_complete, 0), 100),
        'weekend_weight_percent': round_half_up(weight * 100),
        'weekend_loss_percent': round_half_up((1 - weight) * 100),
        'plan_percent': math.floor(_finite(result.plan_asr_services_revenue * 100 * 100)) / 100,
    }

def _finite(value):
    return value if math.isfinite(value) else 0
