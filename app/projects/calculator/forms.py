from flask_wtf import FlaskForm
from wtforms import HiddenField, SubmitField
from wtforms.validators import DataRequired, Length


class KeyPressForm(FlaskForm):
    key = HiddenField('Key',
                      validators=[
                          DataRequired(message='No key pressed'),
                          Length(max=16, message='Unknown key')
                      ])
    submit = SubmitField('Press')


class ActionForm(FlaskForm):
    """Empty form used for CSRF on history and theme buttons."""
    submit = SubmitField('Go')
