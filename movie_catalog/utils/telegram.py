# movie_catalog/utils/telegram.py
"""
Async Telegram Bot API client used for movie announcements

FEATURES:
- Fully async/non-blocking (aiohttp)
- sendPhoto / sendMessage with inline keyboards
- Skips silently (with a warning) when the bot is not configured
"""

import logging
from typing import Any, Optional

import aiohttp

from ..config import settings
from ..exceptions import NotificationError

logger = logging.getLogger(__name__)


class TelegramService:
    """Thin wrapper over the Bot API methods the catalog needs"""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        chat_id: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.bot_token = bot_token if bot_token is not None else settings.TELEGRAM_BOT_TOKEN
        self.chat_id = chat_id if chat_id is not None else settings.TELEGRAM_CHAT_ID
        self.api_url = (api_url or settings.TELEGRAM_API_URL).rstrip("/")
        self.timeout = timeout or settings.TELEGRAM_TIMEOUT

    @property
    def is_enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send_photo(self, photo: str, caption: Optional[str] = None) -> Optional[dict]:
        payload: dict[str, Any] = {"chat_id": self.chat_id, "photo": photo}
        if caption:
            payload["caption"] = caption
            payload["parse_mode"] = "HTML"
        return await self._call("sendPhoto", payload)

    async def send_message(
        self,
        text: str,
        reply_markup: Optional[dict] = None,
        parse_mode: str = "HTML",
    ) -> Optional[dict]:
        payload: dict[str, Any] = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": parse_mode,
        }
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._call("sendMessage", payload)

    async def _call(self, method: str, payload: dict) -> Optional[dict]:
        """POST a Bot API method and return its `result`"""
        if not self.is_enabled:
            logger.warning(f"⚠️ Telegram not configured, skipping {method}")
            return None

        url = f"{self.api_url}/bot{self.bot_token}/{method}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as response:
                    body = await response.json(content_type=None)

                    # Proxies in front of the Bot API can answer with an empty body
                    if not isinstance(body, dict):
                        body = {}

                    if response.status >= 400 or not body.get("ok"):
                        description = body.get("description", f"HTTP {response.status}")
                        logger.error(f"❌ Telegram {method} rejected: {description}")
                        raise NotificationError(f"Telegram {method} failed: {description}")

                    logger.info(f"✅ Telegram {method} sent to chat {self.chat_id}")
                    return body.get("result")

        except aiohttp.ClientError as e:
            logger.error(f"❌ Telegram API error: {str(e)}")
            raise NotificationError(f"Telegram {method} failed: {e}") from e
        except ValueError as e:
            logger.error(f"❌ Telegram {method} returned a non-JSON body")
            raise NotificationError(f"Telegram {method} failed: malformed response") from e


telegram_service = TelegramService()

__all__ = ['TelegramService', 'telegram_service']
