import logging
from functools import lru_cache
from typing import Dict, List, Optional, Sequence

from supabase import create_client, Client

from settings import settings

logger = logging.getLogger(__name__)

CONVERSATIONS_TABLE = 'conversations'
MESSAGES_TABLE = 'messages'
CONTEXTS_TABLE = 'conversation_contexts'
TAG_SEARCH_FUNCTION = 'search_conversations_by_tags'


class StoreError(Exception):
    """Raised when a Supabase request fails."""


class ContextNotFoundError(StoreError):
    """Raised when a conversation has no stored context row."""


class StoreConfigurationError(RuntimeError):
    """Raised when Supabase credentials are missing."""


@lru_cache
def get_supabase_client(service_role: bool = False) -> Client:
    """
    Get cached Supabase client instance.

    The backend writes with the service role key; client-initiated reads and
    writes use the anon key.
    """
    key = settings.supabase_service_key if service_role else settings.supabase_anon_key
    if not settings.supabase_url or not key:
        missing = "SUPABASE_SERVICE_KEY" if service_role else "SUPABASE_ANON_KEY"
        raise StoreConfigurationError(f"Missing Supabase environment variables (SUPABASE_URL, {missing})")
    return create_client(settings.supabase_url, key)


def health_check(client: Optional[Client] = None) -> bool:
    """Verify Supabase connection is working."""
    try:
        client = client or get_supabase_client(service_role=True)
        client.table(CONVERSATIONS_TABLE).select('id').limit(1).execute()
        logger.info("Supabase health check passed")
        return True
    except Exception as e:
        logger.error(f"Supabase health check failed: {str(e)}")
        return False


class ConversationStore:
    """Reads and writes conversations, messages and context rows."""

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, action: str, query):
        try:
            return query.execute()
        except Exception as e:
            logger.error(f"Supabase request failed ({action}): {str(e)}")
            raise StoreError(f"Failed to {action}") from e

    def create_conversation(self) -> Dict:
        """Insert an empty conversation row and return it (id, created_at)."""
        result = self._execute(
            "create conversation",
            self.client.table(CONVERSATIONS_TABLE).insert({})
        )
        if not result.data:
            raise StoreError("Failed to create conversation: no row returned")
        conversation = result.data[0]
        logger.info(f"Created conversation: {conversation['id']}")
        return conversation

    def has_conversations(self) -> bool:
        result = self._execute(
            "check for conversations",
            self.client.table(CONVERSATIONS_TABLE).select('id').limit(1)
        )
        return bool(result.data)

    def insert_message(self, conversation_id: str, role: str, content: str) -> Dict:
        """Persist a single message for a conversation."""
        result = self._execute(
            f"save {role} message",
            self.client.table(MESSAGES_TABLE).insert({
                'conversation_id': conversation_id,
                'role': role,
                'content': content
            })
        )
        logger.info(f"Saved {role} message to conversation {conversation_id}")
        return result.data[0] if result.data else {}

    def insert_messages(self, rows: Sequence[Dict]) -> List[Dict]:
        """Persist several messages in one request, keeping their order."""
        if not rows:
            return []
        result = self._execute(
            "save messages",
            self.client.table(MESSAGES_TABLE).insert(list(rows))
        )
        return result.data or []

    def upsert_context(
        self,
        conversation_id: str,
        summary: str,
        key_terms: List[str],
        raw_conversation: str
    ) -> Dict:
        """Create or replace the context row for a conversation. Key terms double as tags."""
        result = self._execute(
            "save context",
            self.client.table(CONTEXTS_TABLE).upsert(
                {
                    'conversation_id': conversation_id,
                    'summary': summary,
                    'key_terms': key_terms,
                    'tags': key_terms,
                    'raw_conversation': raw_conversation
                },
                on_conflict='conversation_id'
            )
        )
        logger.info(f"Saved context for conversation {conversation_id} ({len(key_terms)} tags)")
        return result.data[0] if result.data else {}

    def get_context(self, conversation_id: str) -> Dict:
        """Fetch the stored summary and raw conversation for a conversation."""
        result = self._execute(
            "load context",
            self.client.table(CONTEXTS_TABLE)
            .select('conversation_id, summary, key_terms, tags, raw_conversation, created_at')
            .eq('conversation_id', conversation_id)
            .limit(1)
        )
        if not result.data:
            raise ContextNotFoundError(f"No context found for conversation {conversation_id}")
        return result.data[0]

    def search_by_tags(self, tags: Sequence[str]) -> List[Dict]:
        """Return context rows whose tags overlap the given tags."""
        result = self._execute(
            "search by tags",
            self.client.rpc(TAG_SEARCH_FUNCTION, {'search_tags': list(tags)})
        )
        rows = result.data or []
        logger.info(f"Tag search {list(tags)} returned {len(rows)} conversations")
        return rows


def get_conversation_store(service_role: bool = False) -> ConversationStore:
    """Build a store on top of the cached Supabase client."""
    return ConversationStore(get_supabase_client(service_role=service_role))
