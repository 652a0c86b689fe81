"""Bot profile data class."""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class BotProfile:
    """Configuration of one bot, read-only for the conversation pipeline.

    Attributes:
        id: Stable bot identifier
        api_key: Telegram bot token, also used to select the bot on the webhook
        persona: Persona descriptor, free text or a structured JSON object
        fallback_response: Reply used when generation fails or returns nothing
        name: Display name of the bot
    """

    id: str
    api_key: str
    persona: Union[str, Dict[str, Any]]
    fallback_response: str = ""
    name: str = ""

    def persona_text(self) -> str:
        """Render the persona for prompt assembly.

        Structured personas are serialized with sorted keys so that identical
        profiles always render to identical text.
        """
        if isinstance(self.persona, str):
            return self.persona
        return json.dumps(self.persona, sort_keys=True, ensure_ascii=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BotProfile":
        """Create a BotProfile from a stored record.

        Accepts both the attribute names and the column names used by the
        dashboard (``ai_persona``, ``fallback_response``).
        """
        return cls(
            id=str(data["id"]),
            api_key=data["api_key"],
            persona=data.get("persona", data.get("ai_persona", "")),
            fallback_response=data.get("fallback_response") or "",
            name=data.get("name") or "",
        )
