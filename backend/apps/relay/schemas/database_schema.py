"""
Supabase schema for conversations, messages and conversation contexts.
Paste SUPABASE_SCHEMA_SQL into the Supabase SQL editor once per project.
"""

CONVERSATION_TABLE_SCHEMA = {
    "conversations": {
        "table": "conversations",
        "description": "One row per chat session",
        "fields": {
            "id": {"type": "UUID", "primary_key": True, "default": "gen_random_uuid()"},
            "created_at": {"type": "TIMESTAMPTZ", "default": "now()"}
        }
    },
    "messages": {
        "table": "messages",
        "description": "Chat turns in insertion order",
        "fields": {
            "id": {"type": "BIGINT", "primary_key": True, "identity": True},
            "conversation_id": {"type": "UUID", "not_null": True},
            "role": {"type": "TEXT", "not_null": True, "check": ["system", "user", "assistant"]},
            "content": {"type": "TEXT", "not_null": True},
            "created_at": {"type": "TIMESTAMPTZ", "default": "now()"}
        },
        "relationships": [
            {"from": "conversation_id", "to": "conversations.id", "type": "foreign_key", "on_delete": "CASCADE"}
        ]
    },
    "conversation_contexts": {
        "table": "conversation_contexts",
        "description": "Derived summary and tags, at most one per conversation",
        "fields": {
            "id": {"type": "BIGINT", "primary_key": True, "identity": True},
            "conversation_id": {"type": "UUID", "unique": True, "not_null": True},
            "summary": {"type": "TEXT", "default": "''"},
            "key_terms": {"type": "TEXT[]", "default": "'{}'"},
            "tags": {"type": "TEXT[]", "default": "'{}'", "index": "GIN"},
            "raw_conversation": {"type": "TEXT", "default": "''"},
            "created_at": {"type": "TIMESTAMPTZ", "default": "now()"}
        },
        "relationships": [
            {"from": "conversation_id", "to": "conversations.id", "type": "foreign_key", "on_delete": "CASCADE"}
        ]
    }
}

SUPABASE_SCHEMA_SQL = """
create table if not exists conversations (
    id uuid primary key default gen_random_uuid(),
    created_at timestamptz not null default now()
);

create table if not exists messages (
    id bigint generated always as identity primary key,
    conversation_id uuid not null references conversations(id) on delete cascade,
    role text not null check (role in ('system', 'user', 'assistant')),
    content text not null,
    created_at timestamptz not null default now()
);

create index if not exists messages_conversation_id_idx on messages (conversation_id, id);

create table if not exists conversation_contexts (
    id bigint generated always as identity primary key,
    conversation_id uuid not null unique references conversations(id) on delete cascade,
    summary text not null default '',
    key_terms text[] not null default '{}',
    tags text[] not null default '{}',
    raw_conversation text not null default '',
    created_at timestamptz not null default now()
);

create index if not exists conversation_contexts_tags_idx on conversation_contexts using gin (tags);

-- Contexts sharing at least one tag with search_tags, newest first
create or replace function search_conversations_by_tags(search_tags text[])
returns table (
    conversation_id uuid,
    summary text,
    tags text[],
    created_at timestamptz,
    raw_conversation text
)
language sql
stable
as $$
    select cc.conversation_id, cc.summary, cc.tags, cc.created_at, cc.raw_conversation
    from conversation_contexts cc
    where cc.tags && search_tags
    order by cc.created_at desc;
$$;

-- The client writes with the anon key; the backend uses the service role key.
alter table conversations enable row level security;
alter table messages enable row level security;
alter table conversation_contexts enable row level security;

create policy "anon access conversations" on conversations for all to anon using (true) with check (true);
create policy "anon access messages" on messages for all to anon using (true) with check (true);
create policy "anon access contexts" on conversation_contexts for all to anon using (true) with check (true);
""".strip()
