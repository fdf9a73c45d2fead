# expo_push/config.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from expo_push.gzip_policy import GzipPolicy
from expo_push.settings import (
    DEFAULT_PUSH_CHUNK_SIZE,
    DEFAULT_PUSH_URL,
    DEFAULT_RECEIPT_CHUNK_SIZE,
    DEFAULT_RECEIPT_URL,
    DEFAULT_TIMEOUT,
    PushSettings,
    get_settings,
)


class ClientConfig(BaseModel):
    """
    Niezmienna konfiguracja klienta. Metody with_* zwracają zwalidowaną kopię,
    np. ClientConfig().with_access_token("...").with_gzip(GzipPolicy.always()).
    """
    model_config = ConfigDict(frozen=True)

    push_url: str = DEFAULT_PUSH_URL
    receipt_url: str = DEFAULT_RECEIPT_URL
    access_token: Optional[str] = Field(default=None, repr=False)
    gzip: GzipPolicy = Field(default_factory=GzipPolicy.never)
    push_chunk_size: int = Field(default=DEFAULT_PUSH_CHUNK_SIZE, gt=0)
    receipt_chunk_size: int = Field(default=DEFAULT_RECEIPT_CHUNK_SIZE, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def from_settings(cls, settings: Optional[PushSettings] = None) -> "ClientConfig":
        settings = settings or get_settings()
        return cls(
            push_url=settings.EXPO_PUSH_URL,
            receipt_url=settings.EXPO_RECEIPT_URL,
            access_token=settings.EXPO_ACCESS_TOKEN or None,
            gzip=GzipPolicy.parse(settings.EXPO_GZIP),
            push_chunk_size=settings.EXPO_PUSH_CHUNK_SIZE,
            receipt_chunk_size=settings.EXPO_RECEIPT_CHUNK_SIZE,
            timeout=settings.EXPO_TIMEOUT,
        )

    def _with(self, **changes) -> "ClientConfig":
        # model_copy(update=...) nie waliduje – budujemy od nowa
        return type(self).model_validate({**dict(self), **changes})

    def with_push_url(self, url: str) -> "ClientConfig":
        return self._with(push_url=url)

    def with_receipt_url(self, url: str) -> "ClientConfig":
        return self._with(receipt_url=url)

    def with_access_token(self, token: Optional[str]) -> "ClientConfig":
        return self._with(access_token=token)

    def with_gzip(self, gzip: GzipPolicy) -> "ClientConfig":
        return self._with(gzip=gzip)

    def with_push_chunk_size(self, chunk_size: int) -> "ClientConfig":
        """Nie więcej niż 100 – większe paczki bramka odrzuci."""
        return self._with(push_chunk_size=chunk_size)

    def with_receipt_chunk_size(self, chunk_size: int) -> "ClientConfig":
        """Nie więcej niż 300 – większe paczki bramka odrzuci."""
        return self._with(receipt_chunk_size=chunk_size)

    def with_timeout(self, timeout: float) -> "ClientConfig":
        return self._with(timeout=timeout)
