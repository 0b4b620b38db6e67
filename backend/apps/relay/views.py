import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.clients.supabase_client import get_conversation_store

from .serializers import (
    ChatRequestSerializer,
    SeedResponseSerializer,
    SummarizeRequestSerializer,
    SummaryResponseSerializer
)
from .services import get_chat_relay, seed_sample_data
from .utils import error_response, parse_request_body

logger = logging.getLogger(__name__)

CHAT_FIELD_ERRORS = {
    'messages': "Invalid messages format",
    'conversation_id': "Missing conversation_id",
}


def _validation_reason(errors, field_reasons, default="Invalid request body"):
    """Pick a plain-text reason for the first invalid field."""
    for field, reason in field_reasons.items():
        if field in errors:
            return reason
    return default


@api_view(['POST'])
def chat(request):
    """
    Relay a conversation to the completion provider.

    POST /api/chat
    {
        "messages": [{"role": "user", "content": "Hello"}],
        "conversation_id": "uuid"
    }
    """
    data = parse_request_body(request)
    if isinstance(data, Response):
        return data

    serializer = ChatRequestSerializer(data=data)
    if not serializer.is_valid():
        reason = _validation_reason(serializer.errors, CHAT_FIELD_ERRORS)
        logger.warning(f"Rejected chat request: {reason} - {serializer.errors}")
        return error_response(reason, status.HTTP_400_BAD_REQUEST, {"errors": serializer.errors})

    validated = serializer.validated_data

    try:
        relay = get_chat_relay()
        reply = relay.complete(validated['messages'], validated['conversation_id'])
    except Exception as e:
        logger.error(f"Error in chat endpoint: {str(e)}", exc_info=True)
        return error_response("Failed to process chat message", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({"message": reply})


@api_view(['POST'])
def summarize(request):
    """
    Summarize conversation text and name its key terms.

    POST /api/summarize
    {"text": "...", "tokenCount": 120}
    """
    data = parse_request_body(request)
    if isinstance(data, Response):
        return data

    serializer = SummarizeRequestSerializer(data=data)
    if not serializer.is_valid():
        reason = _validation_reason(serializer.errors, {'text': "Missing text"})
        logger.warning(f"Rejected summarize request: {reason} - {serializer.errors}")
        return error_response(reason, status.HTTP_400_BAD_REQUEST, {"errors": serializer.errors})

    text = serializer.validated_data['text']
    token_count = serializer.validated_data.get('tokenCount')
    logger.info(f"Summarizing {len(text)} characters (client estimate: {token_count} tokens)")

    try:
        result = get_chat_relay().summarize(text)
    except Exception as e:
        logger.error(f"Error in summarize endpoint: {str(e)}", exc_info=True)
        return error_response("Failed to generate summary", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(SummaryResponseSerializer(result).data)


@api_view(['POST'])
def sample_data(request):
    """
    Seed demo conversations into an empty store.

    POST /api/sample-data
    """
    try:
        result = seed_sample_data(get_conversation_store(service_role=True))
    except Exception as e:
        logger.error(f"Error seeding sample data: {str(e)}", exc_info=True)
        return error_response("Failed to create sample data", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(SeedResponseSerializer(result).data)
