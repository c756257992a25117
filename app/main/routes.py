# ==============================================================================
# app/main/routes.py
# ------------------------------------------------------------------------------
# Defines all user-facing routes for the main application blueprint.
# This file acts as the main controller for the web interface.
# ==============================================================================

import math
import os
from flask import (render_template, request, flash, redirect, url_for,
                   current_app, abort)
from werkzeug.utils import secure_filename

from app import db
from app.main import bp
from app.calculator.days import compute_remaining_days_info
from app.calculator.engine import calculate_branch_result
from app.calculator.overrides import OVERRIDABLE_FIELDS
from app.calculator.validator import validate_report_file, parse_decimal
from app.main.forms import UploadForm, WeekendWeightForm, OverrideForm, DefaultBranchForm
from app.main.utils import (get_active_report, replace_active_report, get_branch_names, get_branch,
                            load_override_set, save_override, load_weekend_weight, save_weekend_weight,
                            load_default_branch, save_default_branch, reference_date, prepare_branch_view)

OVERRIDE_LABELS = {
    'revenue_rr': 'Predikovaný obrat',
    'service_asist_revenue': 'ASR služby',
}

# --- Helper Functions ---

def allowed_file(filename):
    """Checks if the file extension is allowed based on the app config."""
    return '.' in filename and \
           os.path.splitext(filename)[1].lower() in current_app.config['ALLOWED_EXTENSIONS']

def flash_form_errors(form):
    for errors in form.errors.values():
        for error in errors:
            flash(error, 'danger')

def format_plain_number(value):
    """Number as typed into an input: no exponent, no trailing '.0'."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)

def weekend_weight_form(weight, next_url):
    form = WeekendWeightForm()
    if not form.is_submitted():
        form.weight_percent.data = round(weight * 100)
        form.next.data = next_url
    return form

def _target_is_finite(report, branch_name, field, value):
    """Checks that the branch result stays finite with the new override applied."""
    override_set = load_override_set(report)
    override_set.set(branch_name, field, value)
    result = calculate_branch_result(get_branch(report, branch_name).to_figures(), override_set,
                                     load_weekend_weight(), compute_remaining_days_info(reference_date()))
    return all(math.isfinite(x) for x in (result.target_total, result.final_value, result.percent_complete))

# --- Main Application Routes ---

@bp.route('/', methods=['GET', 'POST'])
def index():
    """Main page: report upload, branch selection and the weekend weight."""
    form = UploadForm()
    if form.validate_on_submit():
        file = form.file.data
        if not allowed_file(file.filename):
            flash('Nepodporovaný typ souboru. Nahrajte prosím soubor .xlsx nebo .xls.', 'danger')
            return redirect(url_for('main.index'))

        filename = secure_filename(file.filename)
        filepath = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
        os.makedirs(current_app.config['UPLOAD_FOLDER'], exist_ok=True)
        file.save(filepath)

        figures, errors = validate_report_file(filepath, current_app.config['REPORT_SHEET_NAME'])
        if errors:
            for error in errors:
                flash(error, 'danger')
            return redirect(url_for('main.index'))

        try:
            report = replace_active_report(filename, figures)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Storing report '{filename}' failed: {e}", exc_info=True)
            flash(f'Při ukládání reportu došlo k neočekávané chybě: {e}', 'danger')
            return redirect(url_for('main.index'))

        if not figures:
            flash('Report neobsahuje žádné pobočky s daty.', 'warning')
            return redirect(url_for('main.index'))

        flash(f'Report "{report.filename}" byl načten ({len(figures)} poboček).', 'success')
        default_branch = load_default_branch()
        if default_branch and get_branch(report, default_branch) is not None:
            return redirect(url_for('main.branch_view', branch_name=default_branch))
        return redirect(url_for('main.index'))

    if form.is_submitted():
        flash_form_errors(form)
        return redirect(url_for('main.index'))

    selected = request.args.get('branch')
    if selected:
        return redirect(url_for('main.branch_view', branch_name=selected))

    report = get_active_report()
    return render_template(
        'index.html',
        form=form,
        report=report,
        branches=get_branch_names(report),
        default_branch=load_default_branch(),
        weight_form=weekend_weight_form(load_weekend_weight(), url_for('main.index'))
    )

@bp.route('/branch/<path:branch_name>')
def branch_view(branch_name):
    """Daily target of one branch with its overrides applied."""
    report = get_active_report()
    branch = get_branch(report, branch_name)
    if branch is None:
        abort(404)

    override_set = load_override_set(report)
    weekend_weight = load_weekend_weight()
    days_info = compute_remaining_days_info(reference_date())
    result = calculate_branch_result(branch.to_figures(), override_set, weekend_weight, days_info)

    override_forms = {}
    for field in OVERRIDABLE_FIELDS:
        override_form = OverrideForm(formdata=None)
        override_form.field.data = field
        override_form.value.data = format_plain_number(getattr(result, field))
        override_forms[field] = override_form

    default_branch = load_default_branch()
    return render_template(
        'branch.html',
        report=report,
        branches=get_branch_names(report),
        result=result,
        view=prepare_branch_view(result),
        today=reference_date(),
        overridden=override_set.get(branch_name),
        override_forms=override_forms,
        override_labels=OVERRIDE_LABELS,
        weight_form=weekend_weight_form(weekend_weight, url_for('main.branch_view', branch_name=branch_name)),
        default_form=DefaultBranchForm(formdata=None),
        default_branch=default_branch,
        is_default=default_branch == branch_name
    )

@bp.route('/branch/<path:branch_name>/override', methods=['POST'])
def update_override(branch_name):
    """Replaces one figure of the branch with a manually entered value."""
    report = get_active_report()
    if get_branch(report, branch_name) is None:
        abort(404)

    form = OverrideForm()
    if form.validate_on_submit():
        value = parse_decimal(form.value.data)
        if value is None:
            flash(f'Hodnotu "{form.value.data}" nelze převést na číslo. Původní hodnota zůstává.', 'warning')
        elif not _target_is_finite(report, branch_name, form.field.data, value):
            flash(f'Hodnota "{form.value.data}" je příliš velká. Původní hodnota zůstává.', 'warning')
        else:
            save_override(report, branch_name, form.field.data, value)
            flash(f'{OVERRIDE_LABELS[form.field.data]} upraveno na {format_plain_number(value)}.', 'success')
    else:
        flash_form_errors(form)
    return redirect(url_for('main.branch_view', branch_name=branch_name))

@bp.route('/branch/<path:branch_name>/default', methods=['POST'])
def set_default_branch(branch_name):
    """Remembers the branch so it is selected after the next upload."""
    report = get_active_report()
    if get_branch(report, branch_name) is None:
        abort(404)

    form = DefaultBranchForm()
    if form.validate_on_submit():
        save_default_branch(branch_name)
        flash(f'Pobočka "{branch_name}" je nyní výchozí.', 'success')
    else:
        flash_form_errors(form)
    return redirect(url_for('main.branch_view', branch_name=branch_name))

@bp.route('/settings/weekend-weight', methods=['POST'])
def update_weekend_weight():
    """Stores the weekend weight entered as a percentage."""
    form = WeekendWeightForm()
    if form.validate_on_submit():
        weight = save_weekend_weight(form.weight_percent.data / 100)
        flash(f'Váha víkendu nastavena na {round(weight * 100)} %.', 'success')
    else:
        flash_form_errors(form)

    next_url = form.next.data or ''
    # Only local paths, never another host
    if not next_url.startswith('/') or next_url.startswith('//'):
        next_url = url_for('main.index')
    return redirect(next_url)
