from .chat_relay import ChatRelay, CompletionError, DEFAULT_SYSTEM_PROMPT, get_chat_relay
from .sample_data import SAMPLE_CONVERSATIONS, seed_sample_data

__all__ = [
    'ChatRelay', 'CompletionError', 'DEFAULT_SYSTEM_PROMPT', 'get_chat_relay',
    'SAMPLE_CONVERSATIONS', 'seed_sample_data'
]
