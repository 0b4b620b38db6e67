"""Management command to report which settings the relay and client can see."""
from django.core.management.base import BaseCommand, CommandError

from settings import settings

# Secret settings are reported as present or missing, never printed.
REQUIRED_SECRETS = {
    'GOOGLE_API_KEY': ('google_api_key', "chat and summarize endpoints"),
    'SUPABASE_URL': ('supabase_url', "all storage"),
    'SUPABASE_ANON_KEY': ('supabase_anon_key', "the chat client"),
    'SUPABASE_SERVICE_KEY': ('supabase_service_key', "relay writes and sample data"),
}


class Command(BaseCommand):
    help = "Show loaded settings and list missing credentials"

    def add_arguments(self, parser):
        parser.add_argument(
            '--strict',
            action='store_true',
            help='Exit with an error if any credential is missing'
        )

    def handle(self, *args, **options):
        self.stdout.write(f"  DJANGO_DEBUG: {settings.django_debug}")
        self.stdout.write(f"  ALLOWED_HOSTS: {settings.allowed_hosts_list}")
        self.stdout.write(f"  CORS_ALLOWED_ORIGINS: {settings.cors_origins_list}")
        self.stdout.write(f"  CHAT_MODEL: {settings.chat_model} (temperature {settings.chat_temperature})")
        self.stdout.write(f"  API_URL: {settings.api_url} (timeout {settings.relay_timeout_seconds}s)")

        missing = []
        for env_name, (field, used_by) in REQUIRED_SECRETS.items():
            if getattr(settings, field):
                self.stdout.write(f"  {env_name}: configured")
            else:
                missing.append(env_name)
                self.stdout.write(self.style.WARNING(f"  {env_name}: NOT SET (needed by {used_by})"))

        if missing and options['strict']:
            raise CommandError(f"Missing settings: {', '.join(missing)}")
        self.stdout.write(self.style.SUCCESS("Settings loaded"))
