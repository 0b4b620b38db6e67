"""
Pytest configuration and fixtures for Context Chat tests.
"""

import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from core.clients.supabase_client import ContextNotFoundError, StoreError
from conversations import ConversationManager, RelayError


class FakeStore:
    """In-memory stand-in for ConversationStore, including tag overlap search."""

    def __init__(self):
        self.conversations: List[Dict] = []
        self.messages: List[Dict] = []
        self.contexts: Dict[str, Dict] = {}
        self.calls: List[str] = []
        self.fail_on = set()
        self._ids = itertools.count(1)

    def _record(self, name: str):
        self.calls.append(name)
        if name in self.fail_on:
            raise StoreError(f"Failed to {name.replace('_', ' ')}")

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def create_conversation(self) -> Dict:
        self._record('create_conversation')
        row = {'id': f"conv-{next(self._ids)}", 'created_at': self._now()}
        self.conversations.append(row)
        return row

    def has_conversations(self) -> bool:
        self._record('has_conversations')
        return bool(self.conversations)

    def insert_message(self, conversation_id: str, role: str, content: str) -> Dict:
        self._record('insert_message')
        row = {'conversation_id': conversation_id, 'role': role, 'content': content}
        self.messages.append(row)
        return row

    def insert_messages(self, rows) -> List[Dict]:
        self._record('insert_messages')
        self.messages.extend(dict(row) for row in rows)
        return list(rows)

    def upsert_context(self, conversation_id, summary, key_terms, raw_conversation) -> Dict:
        self._record('upsert_context')
        row = {
            'conversation_id': conversation_id,
            'summary': summary,
            'key_terms': list(key_terms),
            'tags': list(key_terms),
            'raw_conversation': raw_conversation,
            'created_at': self._now()
        }
        self.contexts[conversation_id] = row
        return row

    def get_context(self, conversation_id: str) -> Dict:
        self._record('get_context')
        if conversation_id not in self.contexts:
            raise ContextNotFoundError(f"No context found for conversation {conversation_id}")
        return dict(self.contexts[conversation_id])

    def search_by_tags(self, tags) -> List[Dict]:
        self._record('search_by_tags')
        wanted = set(tags)
        return [
            {
                'conversation_id': row['conversation_id'],
                'summary': row['summary'],
                'tags': row['tags'],
                'created_at': row['created_at'],
                'raw_conversation': row['raw_conversation']
            }
            for row in self.contexts.values()
            if wanted & set(row['tags'])
        ]

    def messages_for(self, conversation_id: str) -> List[Dict]:
        return [m for m in self.messages if m['conversation_id'] == conversation_id]


class FakeRelay:
    """Stand-in for RelayClient returning canned replies and summaries."""

    def __init__(self):
        self.chat_calls: List[Dict] = []
        self.summarize_calls: List[Dict] = []
        self.chat_error: Optional[Exception] = None
        self.summarize_error: Optional[Exception] = None
        self.summary = {"summary": "Talk about testing.", "keyTerms": ["Testing", "pytest "]}
        self.on_chat = None

    def chat(self, messages, conversation_id) -> str:
        self.chat_calls.append({'messages': list(messages), 'conversation_id': conversation_id})
        if self.on_chat:
            self.on_chat()
        if self.chat_error:
            raise self.chat_error
        return f"Reply to: {messages[-1]['content']}"

    def summarize(self, text, token_count=None) -> Dict:
        self.summarize_calls.append({'text': text, 'token_count': token_count})
        if self.summarize_error:
            raise self.summarize_error
        return dict(self.summary)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_relay() -> FakeRelay:
    return FakeRelay()


@pytest.fixture
def manager(fake_store, fake_relay) -> ConversationManager:
    return ConversationManager(store=fake_store, relay=fake_relay)


@pytest.fixture
def relay_failure() -> RelayError:
    return RelayError("Failed to process chat message", status=500, details={"error": "Failed to process chat message"})
