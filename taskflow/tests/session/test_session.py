"""Tests for the user session and identity providers."""

import json

import pytest

from taskflow.core.errors.errors import SessionError
from taskflow.persistence.adapter import RecordKind
from taskflow.session.identity import IdentityProvider, StaticIdentityProvider, UserIdentity
from taskflow.session.session import Session
from taskflow.tasks.models import Status, TaskDraft

ALICE = UserIdentity(uid="alice", display_name="Alice", email="alice@example.com")
BOB = UserIdentity(uid="bob")


@pytest.fixture
def session(adapter):
    return Session(adapter)


class TestIdentity:
    def test_static_provider_lifecycle(self):
        identity = StaticIdentityProvider()
        assert isinstance(identity, IdentityProvider)
        assert identity.current_user() is None
        identity.sign_in(ALICE)
        assert identity.current_user() == ALICE
        identity.sign_out()
        assert identity.current_user() is None

    def test_uid_required(self):
        with pytest.raises(ValueError):
            UserIdentity(uid="")


class TestSession:
    def test_stores_require_active_user(self, session):
        assert not session.active
        with pytest.raises(SessionError):
            session.tasks
        with pytest.raises(SessionError):
            session.notifications

    def test_first_sign_in_gets_seed_tasks(self, session):
        session.activate(ALICE)
        assert len(session.tasks) == 5
        assert len(session.notifications) == 0

    def test_mutations_written_through(self, session, memory_storage):
        session.activate(ALICE)
        task = session.tasks.create(TaskDraft(title="Persisted"))

        stored_tasks = json.loads(memory_storage.get("taskflow-tasks-alice"))
        stored_notifications = json.loads(memory_storage.get("taskflow-notifications-alice"))
        assert stored_tasks[0]["id"] == task.id
        assert stored_notifications[0]["message"] == 'New task added: "Persisted"'

    def test_mark_all_read_written_through(self, session, memory_storage):
        session.activate(ALICE)
        session.tasks.create(TaskDraft(title="x"))
        session.notifications.mark_all_read()
        stored = json.loads(memory_storage.get("taskflow-notifications-alice"))
        assert all(n["read"] for n in stored)

    def test_deactivate_keeps_records(self, session, adapter):
        session.activate(ALICE)
        task = session.tasks.create(TaskDraft(title="Keep me"))
        session.deactivate()

        with pytest.raises(SessionError):
            session.tasks
        session.activate(ALICE)
        assert session.tasks.get(task.id) is not None
        assert adapter.load("alice", RecordKind.TASKS)[0].id == task.id

    def test_switching_users_isolates_data(self, session):
        session.activate(ALICE)
        session.tasks.move("task-1", Status.DONE)
        session.activate(BOB)
        assert session.user == BOB
        assert session.tasks.get("task-1").status is Status.TODO

    def test_notification_limit_applied(self, adapter):
        session = Session(adapter, notification_limit=2)
        session.activate(ALICE)
        for i in range(4):
            session.tasks.create(TaskDraft(title=f"T{i}"))
        assert len(session.notifications) == 2

    def test_sync_follows_identity_provider(self, session):
        identity = StaticIdentityProvider()
        assert session.sync(identity) is None

        identity.sign_in(ALICE)
        assert session.sync(identity) == ALICE
        assert session.active

        identity.sign_out()
        assert session.sync(identity) is None
        assert not session.active
