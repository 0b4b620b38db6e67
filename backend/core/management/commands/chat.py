"""Management command for chatting with the relay from a terminal."""
from django.core.management.base import BaseCommand, CommandError

from conversations import ConversationError, create_conversation_manager
from core.clients.supabase_client import StoreConfigurationError

HELP_TEXT = """Commands:
  /context              show the current summary and tags
  /search tag, tag      list stored conversations sharing a tag
  /inject <id>          add a related conversation's summary as context
  /new                  start a new conversation
  /quit                 exit"""


class Command(BaseCommand):
    help = "Interactive chat session backed by the relay and Supabase"

    def handle(self, *args, **options):
        try:
            self.manager = create_conversation_manager()
        except StoreConfigurationError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(HELP_TEXT + "\n")
        while True:
            try:
                line = input("you> ").strip()
            except (EOFError, KeyboardInterrupt):
                self.stdout.write("")
                break

            if not line:
                continue
            if line in ("/quit", "/exit"):
                break
            self.dispatch(line)

    def dispatch(self, line: str) -> None:
        command, _, argument = line.partition(" ")
        if command == "/context":
            self.show_context()
        elif command == "/search":
            self.search(argument)
        elif command == "/inject":
            self.inject(argument.strip())
        elif command == "/new":
            self.manager.reset()
            self.stdout.write("Started a new conversation.")
        elif command.startswith("/"):
            self.stdout.write(HELP_TEXT)
        else:
            self.send(line)

    def send(self, content: str) -> None:
        try:
            self.manager.send_message(content)
        except ConversationError as e:
            self.stdout.write(self.style.ERROR(f"Error: {e.message}"))
            return
        reply = self.manager.get_current_messages()[-1]
        self.stdout.write(f"assistant> {reply.content}\n")

    def show_context(self) -> None:
        context = self.manager.get_context()
        if not context.summary:
            self.stdout.write("No summary yet.")
            return
        self.stdout.write(f"Summary: {context.summary}")
        self.stdout.write(f"Tags: {', '.join(context.tags) or '-'}")

    def search(self, argument: str) -> None:
        results = self.manager.search_by_tags(argument.split(","))
        error = self.manager.get_error()
        if error:
            self.stdout.write(self.style.ERROR(f"Error: {error.message}"))
            return
        if not results:
            self.stdout.write("No related conversations.")
            return
        for related in results:
            self.stdout.write(self.style.SUCCESS(related.conversation_id))
            self.stdout.write(f"  {related.summary}")
            self.stdout.write(f"  tags: {', '.join(related.tags)}")

    def inject(self, conversation_id: str) -> None:
        if not conversation_id:
            self.stdout.write("Usage: /inject <conversation-id>")
            return
        try:
            self.manager.inject_context(conversation_id)
        except ConversationError as e:
            self.stdout.write(self.style.ERROR(f"Error: {e.message}"))
            return
        self.stdout.write("Context added.")
