"""
Tests for the Supabase store and Gemini helpers.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from core.clients.gemini_client import generate_chat_reply, response_text, to_langchain_messages
from core.clients.supabase_client import (
    CONTEXTS_TABLE,
    TAG_SEARCH_FUNCTION,
    ContextNotFoundError,
    ConversationStore,
    StoreError,
    health_check,
)


def result(data):
    return SimpleNamespace(data=data)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store(client):
    return ConversationStore(client)


class TestConversationStore:
    """Test query shapes and error wrapping."""

    def test_create_conversation(self, store, client):
        client.table.return_value.insert.return_value.execute.return_value = result([{'id': 'abc', 'created_at': 'now'}])

        assert store.create_conversation() == {'id': 'abc', 'created_at': 'now'}
        client.table.assert_called_with('conversations')
        client.table.return_value.insert.assert_called_once_with({})

    def test_create_conversation_without_row(self, store, client):
        client.table.return_value.insert.return_value.execute.return_value = result([])

        with pytest.raises(StoreError):
            store.create_conversation()

    def test_insert_message(self, store, client):
        client.table.return_value.insert.return_value.execute.return_value = result([{'id': 1}])

        store.insert_message('abc', 'user', 'Hello')

        client.table.assert_called_with('messages')
        client.table.return_value.insert.assert_called_once_with(
            {'conversation_id': 'abc', 'role': 'user', 'content': 'Hello'}
        )

    def test_insert_messages_skips_empty(self, store, client):
        assert store.insert_messages([]) == []
        client.table.assert_not_called()

    def test_upsert_context_uses_key_terms_as_tags(self, store, client):
        upsert = client.table.return_value.upsert
        upsert.return_value.execute.return_value = result([{'conversation_id': 'abc'}])

        store.upsert_context('abc', 'Summary.', ['ai', 'ethics'], 'raw text')

        client.table.assert_called_with(CONTEXTS_TABLE)
        row = upsert.call_args.args[0]
        assert row['tags'] == row['key_terms'] == ['ai', 'ethics']
        assert upsert.call_args.kwargs == {'on_conflict': 'conversation_id'}

    def test_get_context_missing(self, store, client):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = result([])

        with pytest.raises(ContextNotFoundError):
            store.get_context('missing')

    def test_search_by_tags_calls_function(self, store, client):
        client.rpc.return_value.execute.return_value = result([{'conversation_id': 'abc'}])

        rows = store.search_by_tags(('ethics',))

        assert rows == [{'conversation_id': 'abc'}]
        client.rpc.assert_called_once_with(TAG_SEARCH_FUNCTION, {'search_tags': ['ethics']})

    def test_request_failure_wrapped(self, store, client):
        client.rpc.return_value.execute.side_effect = ConnectionError("network down")

        with pytest.raises(StoreError, match="Failed to search by tags") as excinfo:
            store.search_by_tags(['ethics'])

        assert isinstance(excinfo.value.__cause__, ConnectionError)

    def test_has_conversations(self, store, client):
        query = client.table.return_value.select.return_value.limit.return_value
        query.execute.return_value = result([])
        assert store.has_conversations() is False

        query.execute.return_value = result([{'id': 'abc'}])
        assert store.has_conversations() is True


def test_health_check_reports_failure(client):
    client.table.return_value.select.return_value.limit.return_value.execute.side_effect = RuntimeError("bad key")

    assert health_check(client) is False


class TestGeminiHelpers:
    """Test message conversion and response parsing."""

    def test_to_langchain_messages(self):
        converted = to_langchain_messages([
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello."},
        ])

        assert [type(m) for m in converted] == [SystemMessage, HumanMessage, AIMessage]
        assert [m.content for m in converted] == ["Be brief.", "Hi", "Hello."]

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            to_langchain_messages([{"role": "tool", "content": "x"}])

    def test_response_text_string(self):
        assert response_text(AIMessage(content="plain")) == "plain"

    def test_response_text_parts(self):
        response = AIMessage(content=["a", {"type": "text", "text": "b"}, {"type": "image_url", "image_url": "x"}])

        assert response_text(response) == "ab"

    def test_generate_chat_reply(self):
        model = MagicMock()
        model.invoke.return_value = AIMessage(content="Hi there")

        assert generate_chat_reply(model, [{"role": "user", "content": "Hi"}]) == "Hi there"
        sent = model.invoke.call_args.args[0]
        assert isinstance(sent[0], HumanMessage)
