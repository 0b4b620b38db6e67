"""
Conversation manager - holds chat session state and coordinates the relay,
the store and summarization.

Responsibilities:
1. Keeps the ordered message list, derived context, loading flag and last error
2. Creates the conversation row on the first send
3. Persists user messages and relays the history to the backend
4. Refreshes the conversation summary and tags after each successful send
5. Looks up related conversations by tag and injects their summaries
"""
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterable, List, Optional

from core.clients.supabase_client import ConversationStore, get_conversation_store
from core.text_processing import normalize_tags

from .exceptions import ConversationError
from .models import ConversationContext, Message, RelatedConversation
from .relay_client import RelayClient, get_relay_client
from .summarization import SummarizationService

logger = logging.getLogger(__name__)

# Summaries are computed once the session holds at least this many messages.
CONTEXT_MESSAGE_THRESHOLD = 3
RELATED_CONTEXT_LABEL = "Additional context from a related conversation:"

Listener = Callable[["ConversationManager"], None]


class ConversationManager:
    """Owns one chat session. Safe to call from several threads."""

    def __init__(
        self,
        store: ConversationStore,
        relay: RelayClient,
        summarizer: Optional[SummarizationService] = None
    ):
        self.store = store
        self.relay = relay
        self.summarizer = summarizer or SummarizationService(relay)

        self._messages: List[Message] = []
        self._context = ConversationContext()
        self._conversation_id: Optional[str] = None
        self._error: Optional[ConversationError] = None
        self._in_flight = 0
        self._listeners: List[Listener] = []

        self._state_lock = threading.Lock()
        self._send_lock = threading.Lock()

    # ----- change notification -----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Conversation listener failed")

    # ----- state helpers -----

    @contextmanager
    def _loading(self):
        with self._state_lock:
            self._in_flight += 1
        self._notify()
        try:
            yield
        finally:
            with self._state_lock:
                self._in_flight -= 1
            self._notify()

    def _append(self, message: Message) -> None:
        with self._state_lock:
            self._messages.append(message)
        self._notify()

    def _clear_error(self) -> None:
        self._error = None

    def _fail(self, message: str, cause: Exception, status: Optional[int] = None) -> ConversationError:
        error = ConversationError(
            message,
            status=status if status is not None else getattr(cause, "status", None),
            details=getattr(cause, "details", None) or str(cause)
        )
        error.__cause__ = cause
        self._error = error
        logger.error(f"ConversationManager error: {message} ({str(cause)})")
        self._notify()
        return error

    def _ensure_conversation(self) -> str:
        if self._conversation_id is None:
            conversation = self.store.create_conversation()
            self._conversation_id = str(conversation["id"])
        return self._conversation_id

    # ----- public operations -----

    def send_message(self, content: str) -> None:
        """
        Send a user message and append the assistant's reply.

        Blank content and calls made while another send is in flight are
        ignored. Relay or store failures are recorded as the current error
        and raised as ConversationError.
        """
        if not content or not content.strip():
            logger.info("Ignoring empty message")
            return

        if not self._send_lock.acquire(blocking=False):
            logger.warning("Send already in progress, ignoring message")
            return

        try:
            with self._loading():
                self._clear_error()
                try:
                    conversation_id = self._ensure_conversation()

                    self._append(Message(role="user", content=content))
                    self.store.insert_message(conversation_id, "user", content)

                    history = [message.to_payload() for message in self.get_current_messages()]
                    reply = self.relay.chat(history, conversation_id)

                    # The relay has already saved the reply.
                    self._append(Message(role="assistant", content=reply))
                except Exception as e:
                    raise self._fail(str(e) or "Failed to send message", e) from e

                self._update_context()
        finally:
            self._send_lock.release()

    def _update_context(self) -> None:
        """Summarize the session and save its context. Failures are logged only."""
        try:
            messages = self.get_current_messages()
            if len(messages) < CONTEXT_MESSAGE_THRESHOLD:
                return

            conversation_text = "\n\n".join(m.content for m in messages if m.role != "system")
            result = self.summarizer.summarize(conversation_text)
            if result.failed:
                logger.warning("Summarization failed, keeping previous context")
                return

            self._context = ConversationContext(
                summary=result.summary,
                key_terms=list(result.key_terms),
                tags=list(result.key_terms),
                raw_conversation=conversation_text
            )
            self._notify()

            if self._conversation_id:
                self.store.upsert_context(
                    self._conversation_id,
                    result.summary,
                    list(result.key_terms),
                    conversation_text
                )
        except Exception as e:
            logger.error(f"Error updating context: {str(e)}", exc_info=True)

    def search_by_tags(self, tags: Iterable[str]) -> List[RelatedConversation]:
        """
        Find stored conversations sharing at least one tag.

        An empty tag set returns no results. Failures are recorded as the
        current error and return an empty list.
        """
        search_tags = normalize_tags(tags)
        if not search_tags:
            return []

        with self._loading():
            self._clear_error()
            try:
                rows = self.store.search_by_tags(search_tags)
                return [RelatedConversation.from_row(row) for row in rows]
            except Exception as e:
                self._fail("Failed to search by tags", e, status=500)
                return []

    def inject_context(self, conversation_id: str) -> None:
        """Append another conversation's stored summary as a system message."""
        with self._loading():
            self._clear_error()
            try:
                context = self.store.get_context(conversation_id)
            except Exception as e:
                raise self._fail("Failed to inject context", e, status=500) from e

            summary = context.get("summary")
            if not summary:
                logger.warning(f"Conversation {conversation_id} has no summary to inject")
                return

            self._append(Message(role="system", content=f"{RELATED_CONTEXT_LABEL}\n{summary}"))
            logger.info(f"Injected context from conversation {conversation_id}")

    def reset(self) -> None:
        """Start a new session. The next send creates a new conversation."""
        if not self._send_lock.acquire(blocking=False):
            logger.warning("Send in progress, not resetting session")
            return
        try:
            with self._state_lock:
                self._messages = []
                self._context = ConversationContext()
                self._conversation_id = None
                self._error = None
        finally:
            self._send_lock.release()
        self._notify()

    # ----- accessors -----

    @property
    def conversation_id(self) -> Optional[str]:
        return self._conversation_id

    def get_current_messages(self) -> List[Message]:
        """All local messages in order, including injected related-context messages."""
        with self._state_lock:
            return list(self._messages)

    def get_context(self) -> ConversationContext:
        return self._context.model_copy(deep=True)

    def is_loading(self) -> bool:
        with self._state_lock:
            return self._in_flight > 0

    def get_error(self) -> Optional[ConversationError]:
        return self._error


def create_conversation_manager() -> ConversationManager:
    """Build a manager using the anon store key and the configured relay URL."""
    return ConversationManager(
        store=get_conversation_store(service_role=False),
        relay=get_relay_client()
    )
