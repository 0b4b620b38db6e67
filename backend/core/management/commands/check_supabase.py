"""Management command to verify Supabase connection."""
from django.core.management.base import BaseCommand

from core.clients.supabase_client import (
    StoreConfigurationError,
    StoreError,
    get_conversation_store,
    get_supabase_client,
    health_check
)


class Command(BaseCommand):
    help = "Verify Supabase connection is working"

    def handle(self, *args, **options):
        self.stdout.write("Checking Supabase connection...\n")

        try:
            client = get_supabase_client(service_role=True)
        except StoreConfigurationError as e:
            self.stdout.write(self.style.ERROR(str(e)))
            return

        if health_check(client):
            self.stdout.write(self.style.SUCCESS("Supabase connection successful!"))

            # Test RPC function
            self.stdout.write("\nTesting search_conversations_by_tags RPC...")
            try:
                rows = get_conversation_store(service_role=True).search_by_tags(['ethics'])
                self.stdout.write(self.style.SUCCESS(f"  search_conversations_by_tags works! ({len(rows)} rows)"))
            except StoreError as e:
                self.stdout.write(self.style.WARNING(f"  search_conversations_by_tags failed: {str(e.__cause__ or e)}"))
        else:
            self.stdout.write(self.style.ERROR("Supabase connection failed!"))
            self.stdout.write("\nMake sure you have:")
            self.stdout.write("  1. SUPABASE_URL set in .env")
            self.stdout.write("  2. SUPABASE_SERVICE_KEY and SUPABASE_ANON_KEY set in .env")
            self.stdout.write("  3. Run the SQL from `manage.py show_schema` in Supabase SQL Editor")
