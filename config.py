# ==============================================================================
# config.py
# ------------------------------------------------------------------------------
# Configuration settings for the Flask application.
# Uses environment variables for sensitive data to keep them out of version control.
# ==============================================================================

import os
from datetime import date
from dotenv import load_dotenv

# Determine the absolute path of the project directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load environment variables from a .env file located in the project root
load_dotenv(os.path.join(basedir, '.env'))


def _reference_date_from_env():
    value = os.environ.get('REFERENCE_DATE')
    return date.fromisoformat(value) if value else None


class Config:
    """
    Base configuration class. Contains default settings that can be overridden
    by environment-specific configurations.
    """
    # --- Security ---
    # Session cookies and CSRF tokens are signed with this key.
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-should-really-set-a-secret-key-in-your-env-file'

    # --- Database Configuration ---
    # SQLite file in the 'instance' folder unless DATABASE_URL is set.
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance/app.db')

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- File Upload Configuration ---
    # Uploaded reports are stored here before they are parsed.
    UPLOAD_FOLDER = os.path.join(basedir, 'instance/uploads')

    ALLOWED_EXTENSIONS = {'.xlsx', '.xls'}

    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # --- Report & Calculation ---
    REPORT_SHEET_NAME = os.environ.get('REPORT_SHEET_NAME') or 'Branch Performance'

    # Used until the WEEKEND_WEIGHT setting has been stored.
    DEFAULT_WEEKEND_WEIGHT = float(os.environ.get('DEFAULT_WEEKEND_WEIGHT') or 0.6)

    # Fixed "today" for the calendar (ISO date); None means the real date.
    REFERENCE_DATE = _reference_date_from_env()
