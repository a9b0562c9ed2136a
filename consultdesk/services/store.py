"""Persistence collaborator — insert/update/query/delete over named collections.

Every call commits its own transaction. Any SQLAlchemy failure rolls the
session back and is re-raised as PersistenceError with the original
exception chained; callers treat it as an opaque "write failed".
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from consultdesk.extensions import db
from consultdesk.models.activity import ActivityEntry
from consultdesk.models.consultation import ConsultationRequest
from consultdesk.models.email import EmailLog, EmailTemplate
from consultdesk.models.settings import AdminSettings, AnalyticsSettings, SeoSettings

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "consultations": ConsultationRequest,
    "activities": ActivityEntry,
    "email_templates": EmailTemplate,
    "email_logs": EmailLog,
    "admin_settings": AdminSettings,
    "seo_settings": SeoSettings,
    "analytics_settings": AnalyticsSettings,
}


class PersistenceError(Exception):
    """A write or read against the store failed."""


def _model(collection):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection '{collection}'.") from None


def _commit(action, collection):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Store {action} on {collection} failed: {e}")
        raise PersistenceError(f"Failed to {action} {collection}.") from e


def insert(collection, record):
    """Insert one record (dict of column values). Returns the stored row."""
    model = _model(collection)
    obj = model(**record)
    db.session.add(obj)
    _commit("insert", collection)
    return obj


def get(collection, record_id):
    """Fetch a row by primary key, or None."""
    model = _model(collection)
    try:
        return db.session.get(model, record_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError(f"Failed to read {collection}.") from e


def update(collection, record_id, patch):
    """Apply a patch dict to one row. Unknown id raises PersistenceError."""
    obj = get(collection, record_id)
    if obj is None:
        raise PersistenceError(f"{collection} record {record_id} not found.")
    for key, value in patch.items():
        setattr(obj, key, value)
    _commit("update", collection)
    return obj


def query(collection, filters=None, order_by=None, limit=None):
    """Equality-filtered select.

    Args:
        filters:  Dict of column -> value. A list/tuple value means IN.
        order_by: Column name; prefix with "-" for descending.
        limit:    Max rows.
    """
    model = _model(collection)
    q = model.query
    for column, value in (filters or {}).items():
        attr = getattr(model, column)
        if isinstance(value, (list, tuple, set)):
            q = q.filter(attr.in_(list(value)))
        else:
            q = q.filter(attr == value)

    if order_by:
        descending = order_by.startswith("-")
        attr = getattr(model, order_by.lstrip("-"))
        q = q.order_by(attr.desc() if descending else attr.asc())

    if limit:
        q = q.limit(limit)

    try:
        return q.all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError(f"Failed to query {collection}.") from e


def delete(collection, record_id):
    """Delete one row. Unknown id raises PersistenceError."""
    obj = get(collection, record_id)
    if obj is None:
        raise PersistenceError(f"{collection} record {record_id} not found.")
    db.session.delete(obj)
    _commit("delete", collection)
