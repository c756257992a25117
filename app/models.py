# ==============================================================================
# app/models.py
# ------------------------------------------------------------------------------
# Defines the database schema using SQLAlchemy ORM models.
# ==============================================================================

from datetime import datetime
from app import db
from app.calculator.engine import BranchFigures


class ReportUpload(db.Model):
    """
    The currently loaded performance report. A new upload replaces the
    previous one together with all its figures and overrides.
    """
    __tablename__ = 'report_upload'
    id = db.Column(db.Integer, primary_key=True)
    filename = db.Column(db.String(128), nullable=False)
    upload_timestamp = db.Column(db.DateTime, index=True, default=datetime.utcnow)

    branches = db.relationship('BranchFigure', backref='report', lazy='dynamic', cascade="all, delete-orphan")
    overrides = db.relationship('BranchOverride', backref='report', lazy='dynamic', cascade="all, delete-orphan")

    def __repr__(self):
        return f'<ReportUpload {self.id}: {self.filename}>'


class BranchFigure(db.Model):
    """Figures of one branch exactly as ingested from the report."""
    __tablename__ = 'branch_figure'
    id = db.Column(db.Integer, primary_key=True)
    branch_name = db.Column(db.String(128), index=True, nullable=False)
    revenue_rr = db.Column(db.Float, default=0)
    plan_asr_services_revenue = db.Column(db.Float, default=0)
    service_asist_revenue = db.Column(db.Float, default=0)

    report_id = db.Column(db.Integer, db.ForeignKey('report_upload.id'), nullable=False)

    __table_args__ = (db.UniqueConstraint('report_id', 'branch_name', name='_report_branch_uc'),)

    def __repr__(self):
        return f'<BranchFigure {self.id}: {self.branch_name}>'

    def to_figures(self):
        return BranchFigures(
            branch_name=self.branch_name,
            revenue_rr=self.revenue_rr,
            plan_asr_services_revenue=self.plan_asr_services_revenue,
            service_asist_revenue=self.service_asist_revenue,
        )


class BranchOverride(db.Model):
    """
    Manual corrections of a branch's figures. A NULL column means the
    ingested value is used.
    """
    __tablename__ = 'branch_override'
    id = db.Column(db.Integer, primary_key=True)
    branch_name = db.Column(db.String(128), index=True, nullable=False)
    revenue_rr = db.Column(db.Float, nullable=True)
    service_asist_revenue = db.Column(db.Float, nullable=True)

    report_id = db.Column(db.Integer, db.ForeignKey('report_upload.id'), nullable=False)

    __table_args__ = (db.UniqueConstraint('report_id', 'branch_name', name='_report_override_uc'),)

    def __repr__(self):
        return f'<BranchOverride {self.id}: {self.branch_name}>'


class AppSetting(db.Model):
    """
    Stores key-value pairs for user preferences that survive between
    sessions, such as the weekend weight and the default branch.
    """
    __tablename__ = 'app_setting'
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(128), unique=True, nullable=False, index=True)
    value = db.Column(db.String(256), nullable=False)
    description = db.Column(db.String(512))
    value_type = db.Column(db.String(32), default='string') # e.g., 'float', 'int', 'string'

    def __repr__(self):
        return f'<AppSetting {self.key}: {self.value}>'

    def get_value(self):
        """Casts the string value to its correct Python type."""
        if self.value_type == 'float':
            return float(self.value)
        if self.value_type == 'int':
            return int(self.value)
        return self.value
