import logging

from core.text_processing import estimate_tokens, normalize_tags

from .models import Summary, failed_summary
from .relay_client import RelayClient

logger = logging.getLogger(__name__)


class SummarizationService:
    """
    Turns conversation text into a summary and key terms via the relay.

    summarize() never raises; any failure yields the "Failed to generate
    summary" result with no key terms.
    """

    def __init__(self, relay: RelayClient):
        self.relay = relay

    def summarize(self, text: str) -> Summary:
        try:
            token_count = estimate_tokens(text)
            logger.info(f"Estimated text length in tokens: {token_count}")

            data = self.relay.summarize(text, token_count=token_count)
            result = Summary.model_validate(data)
            return Summary(summary=result.summary, key_terms=normalize_tags(result.key_terms))
        except Exception as e:
            logger.error(f"Error in summarization: {str(e)}")
            return failed_summary()
