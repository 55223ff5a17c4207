"""
Logging utilities for tracking visitor activity across the site.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.models import LogEntry
from app import db

logger = logging.getLogger(__name__)


def log_activity(project_name, category, description, client_id=None):
    """
    Persist one activity row. A failed write is logged and rolled back so
    activity tracking never breaks the page being served.
    """
    log_entry = LogEntry(
        project=project_name,
        category=category,
        client_id=client_id,
        description=description
    )
    db.session.add(log_entry)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Could not write activity log ({project_name}/{category}): {e}")


def log_project_visit(project_name, project_display_name=None, client_id=None):
    """
    Log a visit to a project/page.
    
    Args:
        project_name (str): The project identifier (e.g., 'calculator')
        project_display_name (str, optional): Human-readable name for the description.
                                              Defaults to project_name if not provided.
        client_id (str, optional): Anonymous browser id from the session.
    """
    display_name = project_display_name or project_name
    visitor = f"Client {client_id}" if client_id else "Anonymous visitor"
    log_activity(project_name, 'Visit', f"{visitor} visited {display_name}", client_id)
