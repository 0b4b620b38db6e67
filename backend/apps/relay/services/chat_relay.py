import logging
from functools import lru_cache
from typing import Dict, List, Sequence

from apps.relay.tools.summarizer import Summarizer
from core.clients.gemini_client import generate_chat_reply, get_chat_model
from core.clients.supabase_client import ConversationStore, get_conversation_store
from settings import settings

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant that provides clear, accurate, and engaging responses."
)


class CompletionError(Exception):
    """Raised when the completion provider returns no usable reply."""


def merge_system_messages(messages: Sequence[Dict]) -> List[Dict]:
    """
    Fold every system message into a single leading system message.

    Gemini only reads a system message in the first position, so related
    context injected later in the history is moved up into it. The default
    prompt leads unless the client opened with its own system message.
    """
    prepared = [{"role": m["role"], "content": m["content"]} for m in messages]
    instructions = [m["content"] for m in prepared if m["role"] == "system"]
    if not prepared or prepared[0]["role"] != "system":
        instructions.insert(0, DEFAULT_SYSTEM_PROMPT)
    turns = [m for m in prepared if m["role"] != "system"]
    return [{"role": "system", "content": "\n\n".join(instructions)}] + turns


class ChatRelay:
    """
    Forwards chat turns to the completion provider and persists replies.

    The relay never retries: a provider or store failure propagates to the
    caller, which maps it to an HTTP error.
    """

    def __init__(self, store: ConversationStore, chat_model, summarizer: Summarizer):
        self.store = store
        self.chat_model = chat_model
        self.summarizer = summarizer

    def complete(self, messages: Sequence[Dict], conversation_id: str) -> str:
        """
        Get the assistant reply for a message list and save it.

        Args:
            messages: Ordered role/content dicts from the client
            conversation_id: Conversation the reply belongs to

        Returns:
            The assistant reply text
        """
        prepared = merge_system_messages(messages)
        logger.info(f"Sending {len(prepared)} messages to completion provider for conversation {conversation_id}")

        reply = generate_chat_reply(self.chat_model, prepared)
        if not reply or not reply.strip():
            raise CompletionError("Completion provider returned an empty reply")
        logger.info(f"Got {len(reply)} character reply for conversation {conversation_id}")

        self.store.insert_message(conversation_id, 'assistant', reply)
        return reply

    def summarize(self, text: str) -> Dict:
        """Produce {'summary', 'keyTerms'} for a block of conversation text."""
        return self.summarizer.summarize(text)


@lru_cache
def get_chat_relay() -> ChatRelay:
    """Build the relay from settings, using the privileged store key."""
    return ChatRelay(
        store=get_conversation_store(service_role=True),
        chat_model=get_chat_model(settings.chat_temperature),
        summarizer=Summarizer(get_chat_model(settings.summary_temperature))
    )
