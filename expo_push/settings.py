# expo_push/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PUSH_URL    = "https://exp.host/--/api/v2/push/send"
DEFAULT_RECEIPT_URL = "https://exp.host/--/api/v2/push/getReceipts"

# limity narzucane przez bramkę
DEFAULT_PUSH_CHUNK_SIZE    = 100
DEFAULT_RECEIPT_CHUNK_SIZE = 300
DEFAULT_TIMEOUT            = 20.0

# ====================================
# SETTINGS
# ====================================

class PushSettings(BaseSettings):
    # Wczytujemy zmienne środowiskowe (opcjonalnie z pliku .env)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    EXPO_PUSH_URL: str = DEFAULT_PUSH_URL
    EXPO_RECEIPT_URL: str = DEFAULT_RECEIPT_URL
    EXPO_ACCESS_TOKEN: str = ""
    # "never" | "always" | próg w bajtach
    EXPO_GZIP: str = "never"
    EXPO_PUSH_CHUNK_SIZE: int = DEFAULT_PUSH_CHUNK_SIZE
    EXPO_RECEIPT_CHUNK_SIZE: int = DEFAULT_RECEIPT_CHUNK_SIZE
    EXPO_TIMEOUT: float = DEFAULT_TIMEOUT


def get_settings() -> PushSettings:
    return PushSettings()
