"""Bot registry backed by a JSON file."""

import logging
from pathlib import Path
from typing import Optional, Union

from docbot.conf.config import Config
from docbot.src.data_classes import BotProfile
from docbot.src.services.store.base import BaseBotRegistry, StoreError
from docbot.src.services.store.json_file import JsonFile

logger = logging.getLogger(__name__)


class JsonBotRegistry(BaseBotRegistry):
    """Looks up bot profiles by the api key they were registered with."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        self.storage = JsonFile(file_path or Config.BOTS_PATH)

    def get_by_api_key(self, api_key: str) -> Optional[BotProfile]:
        """Return the bot whose api key matches, or None when unknown.

        Raises:
            StoreError: If the registry file is unreadable or a record is malformed
        """
        for record in self.storage.read():
            if record.get("api_key") == api_key:
                try:
                    return BotProfile.from_dict(record)
                except KeyError as e:
                    raise StoreError(f"Malformed bot record: missing {e}") from e
        return None
