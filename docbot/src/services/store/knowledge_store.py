"""Documentation store backed by a JSON file."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from docbot.conf.config import Config
from docbot.src.data_classes import KnowledgeSnippet
from docbot.src.services.store.base import BaseKnowledgeStore, StoreError
from docbot.src.services.store.json_file import JsonFile

logger = logging.getLogger(__name__)


class JsonKnowledgeStore(BaseKnowledgeStore):
    """Read-only view of `{bot_id, file_name, document}` records."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        self.storage = JsonFile(file_path or Config.DOCUMENTATION_PATH)

    def for_bot(self, bot_id: str) -> List[KnowledgeSnippet]:
        try:
            snippets = [
                KnowledgeSnippet.from_dict(record)
                for record in self.storage.read()
                if str(record.get("bot_id")) == bot_id
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Malformed documentation record: {str(e)}") from e
        logger.info(f"Fetched {len(snippets)} documentation entries for bot {bot_id}")
        return snippets
