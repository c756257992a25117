# tests/test_routes.py

import pytest

from app.calculator.engine import CalculationResult
from app.main.utils import prepare_branch_view
from app.models import AppSetting, BranchFigure, BranchOverride, ReportUpload

ROWS = [
    ['Brno', 10, 200, 50],
    ['Ostrava', 8, 1500, 100],
    ['Celkem', 0, 1700, 0],
]


def upload(client, report, filename='report.xlsx', follow_redirects=False):
    return client.post('/', data={'file': (report, filename)},
                       content_type='multipart/form-data', follow_redirects=follow_redirects)


@pytest.fixture
def loaded(client, report_factory):
    response = upload(client, report_factory(ROWS))
    assert response.status_code == 302
    return client


def test_index_shows_upload_form(client):
    response = client.get('/')

    assert response.status_code == 200
    assert 'type="file"' in response.get_data(as_text=True)


def test_upload_stores_branches(client, report_factory):
    response = upload(client, report_factory(ROWS), follow_redirects=True)
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'Brno' in html and 'Ostrava' in html
    assert sorted(b.branch_name for b in BranchFigure.query.all()) == ['Brno', 'Ostrava']
    assert ReportUpload.query.count() == 1


def test_upload_with_missing_columns_flashes_error(client, report_factory):
    report = report_factory([['Brno', 10]], header=['Pobočka', 'Revenue RR'])

    html = upload(client, report, follow_redirects=True).get_data(as_text=True)

    assert 'Nepodařilo se najít všechny sloupce' in html
    assert ReportUpload.query.count() == 0


def test_failed_upload_keeps_previous_report_and_overrides(loaded, report_factory):
    loaded.post('/branch/Brno/override', data={'field': 'revenue_rr', 'value': '20'})

    upload(loaded, report_factory([['Brno', 10]], header=['Pobočka', 'Revenue RR']))

    assert ReportUpload.query.count() == 1
    assert BranchOverride.query.filter_by(branch_name='Brno').first().revenue_rr == 20
    assert loaded.get('/branch/Ostrava').status_code == 200


def test_upload_rejects_other_file_types(client, report_factory):
    html = upload(client, report_factory(ROWS), filename='report.csv', follow_redirects=True).get_data(as_text=True)

    assert 'Nepodporovaný typ souboru' in html
    assert ReportUpload.query.count() == 0


def test_branch_view_shows_weighted_daily_target(loaded):
    # 2026-10-18: 10 weekdays and 4 weekend days left, weight 0.6 -> 12.4 days
    # target 10 * 50 = 500, gap 300, 300 / 12.4 = 24.19 per weekday
    html = loaded.get('/branch/Brno').get_data(as_text=True)

    assert 'id="daily-target">24<' in html
    assert 'Dnes víkend (15 CZK)' in html
    assert 'Zbývá <strong>14 dní</strong>' in html
    assert '40 % splněno' in html
    assert 'id="target-total">500 CZK<' in html


def test_branch_over_target_shows_zero_daily_target_and_full_percentage(loaded):
    html = loaded.get('/branch/Ostrava').get_data(as_text=True)

    assert 'id="daily-target">0<' in html
    assert '187.5 % splněno' in html
    assert 'width: 100%' in html


def test_unknown_branch_returns_404(loaded):
    assert loaded.get('/branch/Celkem').status_code == 404


def test_branch_query_argument_redirects_to_branch_view(loaded):
    response = loaded.get('/?branch=Brno')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/branch/Brno')


def test_override_recalculates_without_changing_ingested_figures(loaded):
    response = loaded.post('/branch/Brno/override',
                           data={'field': 'service_asist_revenue', 'value': '400'},
                           follow_redirects=True)
    html = response.get_data(as_text=True)

    # gap 100 over 12.4 weighted days
    assert 'id="daily-target">8<' in html
    assert '80 % splněno' in html
    assert BranchFigure.query.filter_by(branch_name='Brno').first().service_asist_revenue == 200
    override = BranchOverride.query.filter_by(branch_name='Brno').first()
    assert override.service_asist_revenue == 400
    assert override.revenue_rr is None


def test_override_accepts_decimal_comma_and_keeps_other_field(loaded):
    loaded.post('/branch/Brno/override', data={'field': 'revenue_rr', 'value': '12,5'})
    loaded.post('/branch/Brno/override', data={'field': 'service_asist_revenue', 'value': '1 000'})

    override = BranchOverride.query.filter_by(branch_name='Brno').first()
    assert override.revenue_rr == 12.5
    assert override.service_asist_revenue == 1000


def test_invalid_override_value_is_ignored(loaded):
    html = loaded.post('/branch/Brno/override', data={'field': 'revenue_rr', 'value': 'abc'},
                       follow_redirects=True).get_data(as_text=True)

    assert 'nelze převést na číslo' in html
    assert BranchOverride.query.count() == 0


def test_plan_cannot_be_overridden_through_the_form(loaded):
    loaded.post('/branch/Brno/override', data={'field': 'plan_asr_services_revenue', 'value': '1'})

    assert BranchOverride.query.count() == 0


def test_new_upload_discards_overrides(loaded, report_factory):
    loaded.post('/branch/Brno/override', data={'field': 'revenue_rr', 'value': '20'})
    assert BranchOverride.query.count() == 1

    upload(loaded, report_factory([['Brno', 11, 250, 50]]))

    assert BranchOverride.query.count() == 0
    assert ReportUpload.query.count() == 1
    assert BranchFigure.query.filter_by(branch_name='Brno').first().revenue_rr == 11


def test_weekend_weight_is_stored_and_used(loaded):
    response = loaded.post('/settings/weekend-weight',
                           data={'weight_percent': '0', 'next': '/branch/Brno'})

    assert response.headers['Location'].endswith('/branch/Brno')
    assert AppSetting.query.filter_by(key='WEEKEND_WEIGHT').first().get_value() == 0.0
    # Weekend days no longer count: 300 / 10 weekdays
    html = loaded.get('/branch/Brno').get_data(as_text=True)
    assert 'id="daily-target">30<' in html
    assert 'Dnes víkend (0 CZK)' in html


def test_weekend_weight_out_of_range_is_rejected(loaded):
    html = loaded.post('/settings/weekend-weight', data={'weight_percent': '150', 'next': '/'},
                       follow_redirects=True).get_data(as_text=True)

    assert 'mezi 0 a 100' in html
    assert AppSetting.query.filter_by(key='WEEKEND_WEIGHT').first() is None


def test_weekend_weight_redirect_stays_local(loaded):
    response = loaded.post('/settings/weekend-weight',
                           data={'weight_percent': '50', 'next': '//evil.example.com/'})

    assert response.headers['Location'].endswith('/')
    assert 'evil' not in response.headers['Location']


def test_default_branch_is_selected_after_next_upload(loaded, report_factory):
    loaded.post('/branch/Ostrava/default')
    assert AppSetting.query.filter_by(key='DEFAULT_BRANCH').first().value == 'Ostrava'

    response = upload(loaded, report_factory(ROWS))

    assert response.headers['Location'].endswith('/branch/Ostrava')


def test_default_branch_missing_from_new_report_goes_to_index(loaded, report_factory):
    loaded.post('/branch/Ostrava/default')

    response = upload(loaded, report_factory([['Brno', 10, 200, 50]]))

    assert response.headers['Location'].endswith('/')


def test_override_with_overflowing_target_is_rejected(loaded):
    # 1e308 * plan 50 overflows to infinity
    html = loaded.post('/branch/Brno/override', data={'field': 'revenue_rr', 'value': '1e308'},
                       follow_redirects=True).get_data(as_text=True)

    assert 'příliš velká' in html
    assert BranchOverride.query.count() == 0
    assert 'id="daily-target">24<' in html


def test_branch_view_shows_non_finite_results_as_zero():
    result = CalculationResult(
        branch_name='Brno', revenue_rr=float('inf'), plan_asr_services_revenue=50,
        service_asist_revenue=200, days_remaining=14, weekdays_remaining=10,
        weekends_remaining=4, is_today_weekend=True, weekend_weight=0.6,
        weighted_days=12.4, remaining_gap=float('inf'), target_total=float('inf'),
        final_value=float('inf'), percent_complete=float('nan'),
    )

    view = prepare_branch_view(result)

    assert view['daily_target'] == 0
    assert view['weekend_day_target'] == 0
    assert view['target_total'] == 0
    assert view['percent_complete'] == 0
    assert view['progress_width'] == 0


def test_thousands_filter_rounds_halves_up(app_with_db):
    thousands = app_with_db.jinja_env.filters['thousands']

    assert thousands(1234.5) == '1 235'
    assert thousands(2.5) == '3'
    assert thousands(1234567.4) == '1 234 567'
    assert thousands(float('inf')) == float('inf')
    assert thousands('abc') == 'abc'
