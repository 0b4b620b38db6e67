"""Management command to seed demo conversations into Supabase."""
from django.core.management.base import BaseCommand, CommandError

from apps.relay.services import SAMPLE_CONVERSATIONS, seed_sample_data
from core.clients.supabase_client import StoreError, get_conversation_store


class Command(BaseCommand):
    help = "Insert demo conversations, messages and contexts unless conversations already exist"

    def add_arguments(self, parser):
        parser.add_argument(
            '--list',
            action='store_true',
            help='Show the sample conversations without writing anything'
        )

    def handle(self, *args, **options):
        if options['list']:
            for sample in SAMPLE_CONVERSATIONS:
                self.stdout.write(f"{sample['title']} ({len(sample['messages'])} messages)")
                self.stdout.write(f"  tags: {', '.join(sample['key_terms'])}")
            return

        try:
            result = seed_sample_data(get_conversation_store(service_role=True))
        except StoreError as e:
            raise CommandError(f"Seeding failed: {str(e)}") from e

        if result['created']:
            self.stdout.write(self.style.SUCCESS(result['message']))
        else:
            self.stdout.write(self.style.WARNING(result['message']))
