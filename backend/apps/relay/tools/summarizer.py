import logging
import re
from typing import Dict, List

from core.clients.gemini_client import response_text
from core.text_processing import parse_term_list

logger = logging.getLogger(__name__)

MIN_KEY_TERMS = 3
MAX_KEY_TERMS = 5

KEY_TERMS_PROMPT = """You label conversations so related ones can be found later.

Read the conversation below and name the {min_terms} to {max_terms} most important key terms.
Each term must be one to three words. Return only the terms as a single comma-separated list,
with no numbering, quotes or explanation.

CONVERSATION:
{text}

Key terms:"""

SUMMARY_PROMPT = """Summarize the conversation below in one or two sentences.
Mention the main topic and any conclusion that was reached. Return only the summary.

CONVERSATION:
{text}

Summary:"""

_ANSWER_LABEL = re.compile(r'^\s*(?:key terms|terms|tags|summary)\s*:\s*', re.IGNORECASE)


class Summarizer:
    """Turns conversation text into a short summary and a list of key terms."""

    def __init__(self, model):
        self.model = model

    def _ask(self, prompt: str) -> str:
        response = self.model.invoke(prompt)
        return _ANSWER_LABEL.sub('', response_text(response)).strip()

    def extract_key_terms(self, text: str) -> List[str]:
        """Ask the model for key terms and normalize them into tags."""
        raw = self._ask(KEY_TERMS_PROMPT.format(
            text=text,
            min_terms=MIN_KEY_TERMS,
            max_terms=MAX_KEY_TERMS
        ))
        terms = parse_term_list(raw, limit=MAX_KEY_TERMS)
        if len(terms) < MIN_KEY_TERMS:
            logger.warning(f"Model returned only {len(terms)} key terms")
        return terms

    def write_summary(self, text: str) -> str:
        """Ask the model for a one or two sentence summary."""
        return self._ask(SUMMARY_PROMPT.format(text=text))

    def summarize(self, text: str) -> Dict:
        """
        Summarize a block of conversation text.

        Args:
            text: Conversation contents joined by blank lines

        Returns:
            Dict with 'summary' and 'keyTerms' keys
        """
        key_terms = self.extract_key_terms(text)
        summary = self.write_summary(text)
        logger.info(f"Summarized {len(text)} characters into {len(key_terms)} key terms")
        return {
            "summary": summary,
            "keyTerms": key_terms
        }
