from .exceptions import ConversationError, RelayError
from .manager import ConversationManager, create_conversation_manager
from .models import ConversationContext, Message, RelatedConversation, Summary
from .relay_client import RelayClient, get_relay_client
from .summarization import SummarizationService

__all__ = [
    'ConversationError', 'RelayError',
    'ConversationManager', 'create_conversation_manager',
    'ConversationContext', 'Message', 'RelatedConversation', 'Summary',
    'RelayClient', 'get_relay_client',
    'SummarizationService'
]
