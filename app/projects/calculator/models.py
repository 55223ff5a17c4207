from datetime import datetime

from app import db
from app.projects.calculator.core.constants import DEFAULT_THEME


class CalculatorProfile(db.Model):
    """Per-browser calculator state: saved history and theme."""
    __tablename__ = 'calculator_profile'

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.String(36), nullable=False, unique=True, index=True)  # UUID kept in the session
    theme = db.Column(db.String(10), nullable=False, default=DEFAULT_THEME)
    history_json = db.Column(db.Text, nullable=False, default='[]')
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    modified_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<CalculatorProfile {self.client_id}>'
