# ==============================================================================
# app/calculator/schema.py
# ------------------------------------------------------------------------------
# Defines the expected layout of the uploaded "Branch Performance" report.
# This schema is the single source of truth for the validator.
# ==============================================================================

# Sheet to read; the workbook's first sheet is used when it is missing.
REPORT_SHEET_NAME = 'Branch Performance'

# Zero-based index of the header row (the 5th row in Excel).
HEADER_ROW_INDEX = 4

# Field name -> accepted header captions (compared trimmed, case-insensitive).
REPORT_COLUMNS = {
    'branch_name': ['BranchName', 'Pobočka'],
    'revenue_rr': ['Revenue RR'],
    'service_asist_revenue': ['Service Asist Revenue'],
    'plan_asr_services_revenue': ['Plan ASR Services/Revenue'],
}

# Fields rounded to whole numbers on ingestion. The plan figure keeps its fraction.
ROUNDED_COLUMNS = ['revenue_rr', 'service_asist_revenue']
