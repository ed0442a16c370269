"""Tests for session.py - session record normalization and classification."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from opencode_notify.hook_utils.session import (
    ClientSessionLookup,
    SessionClassifier,
    SessionLookupError,
    SessionRecord,
    normalize_session,
)


def classifier_returning(result) -> SessionClassifier:
    lookup = MagicMock()
    lookup.get_session = AsyncMock(return_value=result)
    return SessionClassifier(lookup)


class TestNormalizeSession:
    """Tests for normalize_session."""

    def test_nested_mapping(self):
        record = normalize_session({"data": {"id": "ses_1", "parentID": "ses_0"}, "response": None})
        assert record == SessionRecord(id="ses_1", parent_id="ses_0")

    def test_bare_mapping(self):
        record = normalize_session({"id": "ses_1", "parentID": None})
        assert record == SessionRecord(id="ses_1", parent_id=None)

    def test_nested_object(self):
        result = SimpleNamespace(data=SimpleNamespace(id="ses_1", parentID="ses_0"))
        assert normalize_session(result).parent_id == "ses_0"

    def test_bare_object(self):
        result = SimpleNamespace(id="ses_1", parentID=None)
        assert normalize_session(result) == SessionRecord(id="ses_1")

    def test_null_data_falls_back_to_bare(self):
        record = normalize_session({"data": None, "id": "ses_1", "parentID": "ses_0"})
        assert record.parent_id == "ses_0"

    def test_missing_parent_field(self):
        assert normalize_session({"id": "ses_1", "title": "main"}).parent_id is None

    def test_record_passes_through(self):
        record = SessionRecord(id="ses_1", parent_id="ses_0")
        assert normalize_session({"data": record}) is record

    @pytest.mark.parametrize("result", [None, "ses_1", 42, ["ses_1"]])
    def test_rejects_non_records(self, result):
        with pytest.raises(SessionLookupError):
            normalize_session(result)

    def test_rejects_malformed_mapping(self):
        with pytest.raises(SessionLookupError):
            normalize_session({"parentID": {"nested": True}})


class TestSessionRecord:
    """Tests for SessionRecord.is_main."""

    @pytest.mark.parametrize("parent_id", [None, ""])
    def test_no_parent_is_main(self, parent_id):
        assert SessionRecord(id="ses_1", parent_id=parent_id).is_main

    def test_parent_is_subordinate(self):
        assert not SessionRecord(id="ses_1", parent_id="ses_0").is_main


class TestSessionClassifier:
    """Tests for SessionClassifier.is_main_session."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("session", [
        {"id": "ses_1"},
        {"id": "ses_1", "parentID": None},
        {"id": "ses_1", "parentID": ""},
        {"data": {"id": "ses_1", "parentID": None}},
    ])
    async def test_main_sessions(self, session):
        assert await classifier_returning(session).is_main_session("ses_1") is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("session", [
        {"id": "ses_1", "parentID": "ses_0"},
        {"data": {"id": "ses_1", "parentID": "ses_0"}},
    ])
    async def test_subordinate_sessions(self, session):
        assert await classifier_returning(session).is_main_session("ses_1") is False

    @pytest.mark.asyncio
    async def test_passes_session_id_to_lookup(self):
        classifier = classifier_returning({"id": "ses_9"})
        await classifier.is_main_session("ses_9")
        classifier.lookup.get_session.assert_awaited_once_with("ses_9")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionError("refused"),
        KeyError("ses_1"),
        RuntimeError("not found"),
    ])
    async def test_lookup_failure_is_main(self, error):
        lookup = MagicMock()
        lookup.get_session = AsyncMock(side_effect=error)
        assert await SessionClassifier(lookup).is_main_session("ses_1") is True

    @pytest.mark.asyncio
    async def test_malformed_response_is_main(self):
        assert await classifier_returning("garbage").is_main_session("ses_1") is True


class TestClientSessionLookup:
    """Tests for ClientSessionLookup."""

    @pytest.mark.asyncio
    async def test_awaits_async_client(self):
        client = MagicMock()
        client.session.get = AsyncMock(return_value={"data": {"id": "ses_1"}})

        result = await ClientSessionLookup(client).get_session("ses_1")

        client.session.get.assert_awaited_once_with(path={"id": "ses_1"})
        assert result == {"data": {"id": "ses_1"}}

    @pytest.mark.asyncio
    async def test_accepts_sync_client(self):
        client = SimpleNamespace(session=SimpleNamespace(get=lambda path: {"id": path["id"]}))

        assert await ClientSessionLookup(client).get_session("ses_2") == {"id": "ses_2"}

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self):
        client = MagicMock()
        client.session.get = AsyncMock(side_effect=LookupError("missing"))

        with pytest.raises(LookupError):
            await ClientSessionLookup(client).get_session("ses_1")
