from rest_framework import serializers

MESSAGE_ROLES = ['system', 'user', 'assistant']


class ChatMessageSerializer(serializers.Serializer):
    """A single role/content chat turn."""
    role = serializers.ChoiceField(choices=MESSAGE_ROLES)
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ChatRequestSerializer(serializers.Serializer):
    """Serializer for chat relay requests."""
    messages = ChatMessageSerializer(many=True, allow_empty=False)
    conversation_id = serializers.CharField()


class SummarizeRequestSerializer(serializers.Serializer):
    """Serializer for summarization requests."""
    text = serializers.CharField(trim_whitespace=False)
    # Client-side token estimate, logged only
    tokenCount = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def validate_text(self, value):
        """Ensure the text is not empty."""
        if not value.strip():
            raise serializers.ValidationError("Text cannot be empty.")
        return value


class SummaryResponseSerializer(serializers.Serializer):
    """Serializer for summarization output."""
    summary = serializers.CharField(allow_blank=True)
    keyTerms = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class SeedResponseSerializer(serializers.Serializer):
    """Serializer for the sample data seed result."""
    message = serializers.CharField()
    created = serializers.IntegerField()
