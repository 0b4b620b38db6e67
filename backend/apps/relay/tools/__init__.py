from .summarizer import Summarizer, MAX_KEY_TERMS

__all__ = ['Summarizer', 'MAX_KEY_TERMS']
