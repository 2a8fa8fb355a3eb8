"""Tests for HandoverModifyService (create / update / delete)."""

import pytest
from sqlalchemy.exc import OperationalError

from core.db import read_session, transaction
from core.models import HandoverNote, HandoverRecipient
from repositories import HandoverNoteRepository, HandoverRecipientRepository
from shared.exceptions import (
    ConsistencyError,
    DataValidationError,
    EntityNotFoundError,
)


def _links(session_factory, note_id):
    with read_session(session_factory) as session:
        return [
            (link.id, link.recipient_id, link.created_at)
            for link in HandoverRecipientRepository(session).find_all_by_handover_note_id(note_id)
        ]


def _counts(session_factory):
    with read_session(session_factory) as session:
        return (
            HandoverNoteRepository(session).count(),
            HandoverRecipientRepository(session).count(),
        )


class TestCreateHandover:

    def test_creates_note_and_links(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3], "A", "B")

        with read_session(session_factory) as session:
            note = session.get(HandoverNote, note_id)
            assert note.author_id == 1
            assert note.title == "A"
            assert note.content == "B"
        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2, 3]

    def test_duplicate_recipients_linked_once(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3, 2], "t", "c")

        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2, 3]

    def test_empty_recipient_list_is_allowed(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [], "", "")

        assert _links(session_factory, note_id) == []
        assert _counts(session_factory) == (1, 0)

    def test_self_addressed_note(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [1], "t", "c")

        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [1]

    def test_unknown_author(self, modify_service, session_factory, users):
        with pytest.raises(EntityNotFoundError) as exc_info:
            modify_service.create_handover(99, [2], "t", "c")

        assert exc_info.value.entity_type == "User"
        assert exc_info.value.identifier == 99
        assert _counts(session_factory) == (0, 0)

    def test_unknown_recipient_creates_nothing(self, modify_service, session_factory, users):
        with pytest.raises(EntityNotFoundError) as exc_info:
            modify_service.create_handover(1, [2, 77, 88], "t", "c")

        assert exc_info.value.identifier == 77
        assert exc_info.value.details["missing_ids"] == [77, 88]
        assert _counts(session_factory) == (0, 0)

    def test_link_failure_rolls_back_note(self, modify_service, session_factory, users, monkeypatch):
        def failing_save_all(self, entities):
            raise OperationalError("INSERT INTO handover_recipient", {}, Exception("disk full"))

        monkeypatch.setattr(HandoverRecipientRepository, "save_all", failing_save_all)

        with pytest.raises(ConsistencyError) as exc_info:
            modify_service.create_handover(1, [2, 3], "t", "c")

        assert exc_info.value.operation == "create_handover"
        assert _counts(session_factory) == (0, 0)


class TestUpdateHandover:

    def test_updates_title_and_content(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2], "old", "old body")

        modify_service.update_handover(note_id, 1, [2], "new", "new body")

        with read_session(session_factory) as session:
            note = session.get(HandoverNote, note_id)
            assert (note.title, note.content, note.author_id) == ("new", "new body", 1)

    def test_author_is_not_changed(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2], "t", "c")

        modify_service.update_handover(note_id, 4, [2], "t", "c")

        with read_session(session_factory) as session:
            assert session.get(HandoverNote, note_id).author_id == 1

    def test_reconciles_with_partial_overlap(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3], "A", "B")
        kept_before = [link for link in _links(session_factory, note_id) if link[1] == 3][0]

        modify_service.update_handover(note_id, 1, [3, 4], "A", "B")

        links = _links(session_factory, note_id)
        assert [rid for _, rid, _ in links] == [3, 4]
        kept_after = [link for link in links if link[1] == 3][0]
        assert kept_after == kept_before

    @pytest.mark.parametrize(
        "initial, desired",
        [
            ([2, 3], [2, 3]),
            ([2, 3], [4, 5]),
            ([2, 3, 4], [3]),
            ([3], [2, 3, 4]),
            ([2, 3], []),
            ([], [2, 5]),
        ],
    )
    def test_final_links_equal_requested_set(
        self, modify_service, session_factory, users, initial, desired
    ):
        note_id = modify_service.create_handover(1, initial, "t", "c")

        modify_service.update_handover(note_id, 1, desired, "t", "c")

        recipient_ids = [rid for _, rid, _ in _links(session_factory, note_id)]
        assert sorted(recipient_ids) == sorted(desired)
        assert len(recipient_ids) == len(set(recipient_ids))

    def test_repeated_update_does_not_accumulate(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3], "t", "c")

        for _ in range(3):
            modify_service.update_handover(note_id, 1, [2, 3, 3], "t", "c")

        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2, 3]

    def test_unknown_note(self, modify_service, users):
        with pytest.raises(EntityNotFoundError) as exc_info:
            modify_service.update_handover(404, 1, [2], "t", "c")

        assert exc_info.value.entity_type == "HandoverNote"

    def test_author_id_required(self, modify_service, users):
        note_id = modify_service.create_handover(1, [2], "t", "c")

        with pytest.raises(DataValidationError):
            modify_service.update_handover(note_id, None, [2], "t", "c")

    def test_unknown_author_rolls_back(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2], "old", "old")

        with pytest.raises(EntityNotFoundError) as exc_info:
            modify_service.update_handover(note_id, 99, [3], "new", "new")

        assert exc_info.value.identifier == 99
        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2]

    def test_unknown_new_recipient_rolls_back(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3], "old", "old")

        with pytest.raises(EntityNotFoundError):
            modify_service.update_handover(note_id, 1, [3, 99], "new", "new")

        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2, 3]
        with read_session(session_factory) as session:
            assert session.get(HandoverNote, note_id).title == "old"


    def test_link_failure_restores_removed_links(
        self, modify_service, session_factory, users, monkeypatch
    ):
        note_id = modify_service.create_handover(1, [2, 3], "old", "old")
        before = _links(session_factory, note_id)

        def failing_save_all(self, entities):
            raise OperationalError("INSERT INTO handover_recipient", {}, Exception("disk full"))

        monkeypatch.setattr(HandoverRecipientRepository, "save_all", failing_save_all)

        with pytest.raises(ConsistencyError) as exc_info:
            modify_service.update_handover(note_id, 1, [3, 4], "new", "new")

        assert exc_info.value.operation == "update_handover"
        assert _links(session_factory, note_id) == before
        with read_session(session_factory) as session:
            note = session.get(HandoverNote, note_id)
            assert (note.title, note.content) == ("old", "old")


class TestDeleteHandover:

    def test_note_failure_keeps_links(self, modify_service, session_factory, users, monkeypatch):
        note_id = modify_service.create_handover(1, [2, 3], "t", "c")

        def failing_delete_by_id(self, id):
            raise OperationalError("DELETE FROM handover_note", {}, Exception("locked"))

        monkeypatch.setattr(HandoverNoteRepository, "delete_by_id", failing_delete_by_id)

        with pytest.raises(ConsistencyError) as exc_info:
            modify_service.delete_handover(note_id)

        assert exc_info.value.operation == "delete_handover"
        assert [rid for _, rid, _ in _links(session_factory, note_id)] == [2, 3]
        assert _counts(session_factory) == (1, 2)

    def test_deletes_note_and_links(self, modify_service, session_factory, users):
        note_id = modify_service.create_handover(1, [2, 3], "t", "c")
        other_id = modify_service.create_handover(1, [2], "t", "c")

        assert modify_service.delete_handover(note_id) is True

        assert _links(session_factory, note_id) == []
        assert _counts(session_factory) == (1, 1)
        with read_session(session_factory) as session:
            assert HandoverNoteRepository(session).exists_by_id(other_id)

    def test_delete_unknown_is_idempotent(self, modify_service, users):
        assert modify_service.delete_handover(12345) is False

    def test_delete_twice(self, modify_service, users):
        note_id = modify_service.create_handover(1, [2], "t", "c")

        assert modify_service.delete_handover(note_id) is True
        assert modify_service.delete_handover(note_id) is False


class TestTransaction:

    def test_duplicate_link_is_a_conflict(self, session_factory, users):
        with transaction(session_factory) as session:
            note = HandoverNote.create(None, "t", "c")
            session.add(note)
            session.flush()
            note_id = note.id
            session.add(HandoverRecipient(handover_note_id=note_id, recipient_id=2))

        with pytest.raises(ConsistencyError) as exc_info:
            with transaction(session_factory, "duplicate") as session:
                session.add(HandoverRecipient(handover_note_id=note_id, recipient_id=2))

        assert exc_info.value.conflict is True
        assert exc_info.value.http_status == 409
        assert _counts(session_factory) == (1, 1)

    def test_domain_errors_propagate_unchanged(self, session_factory, users):
        with pytest.raises(EntityNotFoundError):
            with transaction(session_factory) as session:
                session.add(HandoverNote.create(None, "t", "c"))
                session.flush()
                raise EntityNotFoundError("User", 9)

        assert _counts(session_factory) == (0, 0)
