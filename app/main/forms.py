# ==============================================================================
# app/main/forms.py
# ------------------------------------------------------------------------------
# Defines web forms using Flask-WTF for user input and validation.
# ==============================================================================

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import StringField, IntegerField, SubmitField, HiddenField
from wtforms.validators import DataRequired, NumberRange, InputRequired, AnyOf

from app.calculator.overrides import OVERRIDABLE_FIELDS

class UploadForm(FlaskForm):
    """Form for uploading the daily performance report."""
    file = FileField('Denní hlášení (.xlsx)', validators=[FileRequired(message="Nebyl vybrán žádný soubor.")])
    submit = SubmitField('Nahrát')

class WeekendWeightForm(FlaskForm):
    """Weekend weight entered as a whole percentage."""
    weight_percent = IntegerField(
        'Váha víkendu (%)',
        validators=[InputRequired(message="Zadejte váhu víkendu."),
                    NumberRange(min=0, max=100, message="Váha víkendu musí být mezi 0 a 100 %%.")]
    )
    next = HiddenField()
    submit = SubmitField('Uložit')

class OverrideForm(FlaskForm):
    """Manual correction of one branch figure. The value is parsed in the route."""
    field = HiddenField(validators=[AnyOf(OVERRIDABLE_FIELDS, message="Tuto hodnotu nelze upravit.")])
    value = StringField('Hodnota', validators=[DataRequired(message="Zadejte hodnotu.")])
    submit = SubmitField('Uložit')

class DefaultBranchForm(FlaskForm):
    """Marks the shown branch as the user's default."""
    submit = SubmitField('Nastavit jako výchozí pobočku')
