from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # 🎯 Application
    APP_NAME: str = "Movie Catalog API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 🌐 Server
    HOST: str = '0.0.0.0'
    PORT: int = 8000

    # 🗄️ Database
    DATABASE_URL: str  # ⚠️ No default, must come from env
    DB_ECHO: bool = False
    DB_CREATE_ALL: bool = False  # create missing tables on startup (dev only)

    # 🔒 CORS
    ALLOWED_ORIGINS: str = "*"

    # 📣 Telegram announcements
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT: int = 30
    TELEGRAM_ANNOUNCE_PHOTO_URL: str = (
        "https://avatars.mds.yandex.net/i?id=25f7f9fe7381b621f530a9996da84d7c_l-9181172-images-thumbs&n=13"
    )
    TELEGRAM_WATCH_URL: str = "https://yupikex.com/?watch=Леди%20Баг%20ФИЛЬМ"
    TELEGRAM_WATCH_BUTTON_TEXT: str = "Посмотреть"

    # 🖼️ Collections
    COLLECTION_PLACEHOLDER_IMAGE: str = ""

    # 📊 Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = 'ignore'

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',')]

    @property
    def is_telegram_enabled(self) -> bool:
        """Check if the announcement bot is configured"""
        return bool(self.TELEGRAM_BOT_TOKEN and self.TELEGRAM_CHAT_ID)

settings = Settings()
