"""Management command to verify Gemini API connection."""
from django.core.management.base import BaseCommand

from apps.relay.tools.summarizer import Summarizer
from core.clients.gemini_client import generate_response, get_chat_model
from settings import settings


class Command(BaseCommand):
    help = "Verify Gemini API connection and summarization"

    def handle(self, *args, **options):
        self.stdout.write(f"Checking Gemini API connection ({settings.chat_model})...\n")

        # Test chat model
        self.stdout.write("Testing generate_response...")
        try:
            response = generate_response("Say 'Hello' in one word.", temperature=0)
            self.stdout.write(self.style.SUCCESS("  generate_response works!"))
            self.stdout.write(f"  Response: {response[:100]}...")
        except Exception as e:
            self.stdout.write(self.style.ERROR(f"  generate_response failed: {str(e)}"))
            return

        # Test summarization
        self.stdout.write("\nTesting summarizer...")
        try:
            summarizer = Summarizer(get_chat_model(settings.summary_temperature))
            result = summarizer.summarize(
                "How tall is Mount Everest?\n\nMount Everest is 8,849 metres tall, "
                "according to the 2020 survey by China and Nepal."
            )
            self.stdout.write(self.style.SUCCESS("  summarizer works!"))
            self.stdout.write(f"  Summary: {result['summary']}")
            self.stdout.write(f"  Key terms: {', '.join(result['keyTerms'])}")
        except Exception as e:
            self.stdout.write(self.style.ERROR(f"  summarizer failed: {str(e)}"))
            return

        self.stdout.write(self.style.SUCCESS("\nGemini API connection successful!"))
