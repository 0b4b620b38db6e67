"""
Demo conversations used to seed an empty store.
Each entry carries its messages plus a precomputed summary and key terms.
"""
import logging
from typing import Dict, List

from core.clients.supabase_client import ConversationStore, StoreError

logger = logging.getLogger(__name__)

SAMPLE_CONVERSATIONS: List[Dict] = [
    {
        "title": "AI Development Discussion",
        "messages": [
            {"role": "user", "content": "What should a small team think about before shipping a machine learning feature?"},
            {"role": "assistant", "content": "Start with the data: where it comes from, whether users consented to its use, and how you will monitor the model once it is live. Then decide how you will explain its decisions to the people they affect."},
            {"role": "user", "content": "How do we handle the ethics side without a dedicated ethics team?"},
            {"role": "assistant", "content": "Write down the ways the feature could cause harm, review them at each release, and give users a clear way to appeal or opt out. A lightweight checklist owned by the whole team goes a long way."},
        ],
        "summary": "A discussion of what a small team should consider before shipping a machine learning feature, focusing on data consent, monitoring and a lightweight ethics review process.",
        "key_terms": ["ai", "ethics", "machine learning", "development"],
    },
    {
        "title": "Sustainable Gardening",
        "messages": [
            {"role": "user", "content": "How do I start composting in a small backyard?"},
            {"role": "assistant", "content": "A closed bin works well in small spaces. Mix green material like vegetable scraps with brown material like dry leaves, keep it as damp as a wrung-out sponge and turn it every week or two."},
            {"role": "user", "content": "Can I use the compost on vegetables right away?"},
            {"role": "assistant", "content": "Wait until it is dark, crumbly and smells earthy, usually after two to six months. Unfinished compost can tie up nitrogen and slow your plants down."},
        ],
        "summary": "Advice on starting a small backyard compost bin and knowing when the compost is ready to use on a vegetable garden.",
        "key_terms": ["gardening", "composting", "sustainability"],
    },
    {
        "title": "Python Web Frameworks",
        "messages": [
            {"role": "user", "content": "Should I pick Django or a lighter framework for a new API?"},
            {"role": "assistant", "content": "Django gives you an ORM, admin and authentication out of the box, which pays off when the API grows. A lighter framework is quicker to start with if you only need a handful of endpoints."},
            {"role": "user", "content": "What about Django REST Framework?"},
            {"role": "assistant", "content": "It adds serializers, viewsets and browsable API pages on top of Django, so you write far less boilerplate for JSON endpoints."},
        ],
        "summary": "A comparison of Django with lighter Python frameworks for building a new API, and what Django REST Framework adds.",
        "key_terms": ["python", "django", "web development"],
    },
]


def raw_conversation(messages: List[Dict]) -> str:
    """Join non-system message contents the same way live summaries do."""
    return "\n\n".join(m["content"] for m in messages if m["role"] != "system")


def seed_sample_data(store: ConversationStore) -> Dict:
    """
    Insert the demo conversations unless the store already has conversations.

    Returns:
        Dict with a message and the number of conversations created
    """
    if store.has_conversations():
        logger.info("Conversations already exist, skipping sample data")
        return {"message": "Sample data already exists", "created": 0}

    created = 0
    for sample in SAMPLE_CONVERSATIONS:
        try:
            conversation = store.create_conversation()
            conversation_id = conversation["id"]

            store.insert_messages([
                {
                    "conversation_id": conversation_id,
                    "role": message["role"],
                    "content": message["content"]
                }
                for message in sample["messages"]
            ])
            store.upsert_context(
                conversation_id,
                sample["summary"],
                sample["key_terms"],
                raw_conversation(sample["messages"])
            )
        except StoreError:
            # Later seed calls see the existing rows and skip, so the gap is not filled.
            logger.error(
                f"Sample data only partially seeded: failed on '{sample['title']}' "
                f"after {created} of {len(SAMPLE_CONVERSATIONS)} conversations"
            )
            raise
        created += 1
        logger.info(f"Seeded sample conversation '{sample['title']}' as {conversation_id}")

    return {"message": f"Created {created} sample conversations", "created": created}
