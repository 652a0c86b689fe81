"""Knowledge snippet data class."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class KnowledgeSnippet:
    """Reference documentation attached to a bot.

    Attributes:
        bot_id: Bot that owns the document
        title: File name of the document
        body: Plain text content of the document
    """

    bot_id: str
    title: str
    body: str

    def to_dict(self) -> Dict[str, Any]:
        return {"bot_id": self.bot_id, "file_name": self.title, "document": self.body}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnowledgeSnippet":
        return cls(
            bot_id=str(data["bot_id"]),
            title=data.get("file_name") or "",
            body=data.get("document") or "",
        )
