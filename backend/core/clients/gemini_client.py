import logging
from functools import lru_cache
from typing import Dict, List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from settings import settings

logger = logging.getLogger(__name__)

_MESSAGE_TYPES = {
    'system': SystemMessage,
    'user': HumanMessage,
    'assistant': AIMessage,
}


class CompletionConfigurationError(RuntimeError):
    """Raised when the Gemini API key is missing."""


@lru_cache
def get_chat_model(temperature: float = 0.7) -> ChatGoogleGenerativeAI:
    """Get cached Gemini chat model."""
    if not settings.google_api_key:
        raise CompletionConfigurationError("Missing Google API key (GOOGLE_API_KEY)")
    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        google_api_key=settings.google_api_key,
        temperature=temperature,
        timeout=settings.completion_timeout_seconds,
        # Single attempt; retries belong to the caller.
        max_retries=1
    )


def to_langchain_messages(messages: Sequence[Dict]) -> List[BaseMessage]:
    """Convert role/content dicts into LangChain chat messages."""
    converted = []
    for message in messages:
        message_type = _MESSAGE_TYPES.get(message["role"])
        if message_type is None:
            raise ValueError(f"Unsupported message role: {message['role']}")
        converted.append(message_type(content=message["content"]))
    return converted


def response_text(response) -> str:
    """Extract plain text from a chat model response."""
    content = response.content
    if isinstance(content, str):
        return content
    # Some Gemini models return a list of content parts.
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def generate_chat_reply(model, messages: Sequence[Dict]) -> str:
    """Generate the assistant reply for a role/content message list."""
    try:
        response = model.invoke(to_langchain_messages(messages))
        return response_text(response)
    except Exception as e:
        logger.error(f"Error generating chat reply: {str(e)}")
        raise


def generate_response(prompt: str, temperature: float = 0.7) -> str:
    """Generate a response using Gemini chat model."""
    try:
        model = get_chat_model(temperature)
        response = model.invoke(prompt)
        return response_text(response)
    except Exception as e:
        logger.error(f"Error generating response: {str(e)}")
        raise
