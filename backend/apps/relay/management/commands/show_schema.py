"""Management command to print the Supabase schema."""
from django.core.management.base import BaseCommand

from apps.relay.schemas.database_schema import CONVERSATION_TABLE_SCHEMA, SUPABASE_SCHEMA_SQL


class Command(BaseCommand):
    help = "Print the SQL to run in the Supabase SQL editor"

    def add_arguments(self, parser):
        parser.add_argument(
            '--tables',
            action='store_true',
            help='Print a short table overview instead of the SQL'
        )

    def handle(self, *args, **options):
        if not options['tables']:
            self.stdout.write(SUPABASE_SCHEMA_SQL)
            return

        for name, table in CONVERSATION_TABLE_SCHEMA.items():
            self.stdout.write(self.style.SUCCESS(f"{name}: {table['description']}"))
            for field, spec in table["fields"].items():
                self.stdout.write(f"  {field} {spec['type']}")
