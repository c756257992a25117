# tests/conftest.py

from datetime import date
from io import BytesIO

import pytest
from openpyxl import Workbook

from config import Config

HEADER = ['Pobočka', 'Revenue RR', 'Service Asist Revenue', 'Plan ASR Services/Revenue']


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    # A Sunday: 14 days left, 10 weekdays and 4 weekend days
    REFERENCE_DATE = date(2026, 10, 18)
    DEFAULT_WEEKEND_WEIGHT = 0.6


@pytest.fixture
def app_with_db(tmp_path):
    """
    Creates a new app instance with an empty in-memory database and yields it
    within an application context.
    """
    from app import create_app, db

    app = create_app(TestConfig)
    app.config.update({"UPLOAD_FOLDER": str(tmp_path / "uploads")})

    with app.app_context():
        db.create_all()
        yield app  # The tests will run here
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app_with_db):
    return app_with_db.test_client()


def build_report(data_rows, header=HEADER, sheet_name='Branch Performance', preamble_rows=4):
    """Builds an .xlsx report in memory with the header on row preamble_rows + 1."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    for index in range(preamble_rows):
        sheet.append([f'Denní hlášení - řádek {index + 1}'])
    if header is not None:
        sheet.append(header)
    for row in data_rows:
        sheet.append(row)

    buffer = BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer


@pytest.fixture
def report_factory():
    return build_report
