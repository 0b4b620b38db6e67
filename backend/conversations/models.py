from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MessageRole = Literal["system", "user", "assistant"]

FAILED_SUMMARY_TEXT = "Failed to generate summary"


class Message(BaseModel):
    """A single chat turn."""
    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    created_at: Optional[str] = None

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class Summary(BaseModel):
    """Summarization output. Serialized as {summary, keyTerms}."""
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    key_terms: List[str] = Field(default_factory=list, alias="keyTerms")

    @property
    def failed(self) -> bool:
        return self.summary == FAILED_SUMMARY_TEXT and not self.key_terms


def failed_summary() -> Summary:
    return Summary(summary=FAILED_SUMMARY_TEXT, key_terms=[])


class ConversationContext(BaseModel):
    """Derived summary and tags for the active conversation."""
    summary: str = ""
    key_terms: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    raw_conversation: str = ""


class RelatedConversation(BaseModel):
    """A context row returned by tag search."""
    conversation_id: str
    summary: str = ""
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    raw_conversation: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "RelatedConversation":
        return cls(
            conversation_id=str(row["conversation_id"]),
            summary=row.get("summary") or "",
            tags=row.get("tags") or [],
            created_at=str(row["created_at"]) if row.get("created_at") else None,
            raw_conversation=row.get("raw_conversation") or ""
        )
