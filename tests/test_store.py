"""Tests for the store collaborator (insert/get/update/query/delete)."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from consultdesk.extensions import db
from consultdesk.models.email import EmailTemplate
from consultdesk.services import store
from consultdesk.services.store import PersistenceError


def _template(name, status="draft", template_type="custom"):
    return store.insert("email_templates", {
        "name": name,
        "subject": f"{name} subject",
        "body": "<p>Hello</p>",
        "status": status,
        "type": template_type,
    })


class TestStore:

    def test_insert_and_get(self):
        row = _template("Welcome")
        assert row.id
        assert store.get("email_templates", row.id).name == "Welcome"

    def test_get_missing_returns_none(self):
        assert store.get("email_templates", "nope") is None

    def test_update(self):
        row = _template("Welcome")
        updated = store.update("email_templates", row.id, {"status": "active"})
        assert updated.status == "active"
        assert db.session.get(EmailTemplate, row.id).status == "active"

    def test_update_missing_raises(self):
        with pytest.raises(PersistenceError):
            store.update("email_templates", "nope", {"status": "active"})

    def test_delete(self):
        row = _template("Welcome")
        store.delete("email_templates", row.id)
        assert store.get("email_templates", row.id) is None

    def test_delete_missing_raises(self):
        with pytest.raises(PersistenceError):
            store.delete("email_templates", "nope")

    def test_query_equality_and_in(self):
        _template("A", status="active")
        _template("B", status="draft")
        _template("C", status="active", template_type="follow_up")

        active = store.query("email_templates", filters={"status": "active"})
        assert {t.name for t in active} == {"A", "C"}

        both = store.query("email_templates", filters={"type": ["custom", "follow_up"]})
        assert len(both) == 3

    def test_query_order_and_limit(self):
        for name in ("b", "c", "a"):
            _template(name)
        rows = store.query("email_templates", order_by="-name", limit=2)
        assert [r.name for r in rows] == ["c", "b"]
        rows = store.query("email_templates", order_by="name")
        assert [r.name for r in rows] == ["a", "b", "c"]

    def test_unknown_collection(self):
        with pytest.raises(ValueError):
            store.insert("widgets", {})

    def test_commit_failure_becomes_persistence_error(self):
        with patch.object(
            db.session, "commit", side_effect=OperationalError("INSERT", {}, Exception("locked"))
        ):
            with pytest.raises(PersistenceError) as exc:
                _template("Broken")
        assert isinstance(exc.value.__cause__, OperationalError)
        assert EmailTemplate.query.count() == 0

    def test_missing_required_column_becomes_persistence_error(self):
        with pytest.raises(PersistenceError):
            store.insert("email_templates", {"name": "No subject"})
