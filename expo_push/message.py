# expo_push/message.py

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from expo_push.errors import PushTokenError

TOKEN_PREFIXES = ("ExponentPushToken[", "ExpoPushToken[")

Priority = Literal["default", "normal", "high"]


class PushToken(RootModel[str]):
    """Token urządzenia w formacie ExponentPushToken[...] / ExpoPushToken[...]."""
    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def _check_format(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(TOKEN_PREFIXES) or not v.endswith("]"):
            raise ValueError(f"Invalid Expo push token {v!r}")
        return v

    @classmethod
    def from_str(cls, value: str) -> "PushToken":
        try:
            return cls(value)
        except ValidationError as e:
            raise PushTokenError(f"Invalid Expo push token {value!r}") from e

    def __str__(self) -> str:
        return self.root


class PushMessage(BaseModel):
    """
    Jedna wiadomość push. Model jest zamrożony – metody with_* zwracają kopię,
    więc raz przekazany do klienta obiekt się nie zmienia.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: List[PushToken] = Field(min_length=1)
    data: Optional[Dict[str, Any]] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: Optional[str] = None
    sound: Optional[Union[str, Dict[str, Any]]] = None
    ttl: Optional[int] = Field(default=None, ge=0)
    expiration: Optional[int] = None
    priority: Optional[Priority] = None
    badge: Optional[int] = Field(default=None, ge=0)
    channel_id: Optional[str] = Field(default=None, alias="channelId")
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    mutable_content: Optional[bool] = Field(default=None, alias="mutableContent")

    @field_validator("to", mode="before")
    @classmethod
    def _single_token(cls, v):
        # pojedynczy token -> lista
        if isinstance(v, (str, PushToken)):
            return [v]
        return v

    @classmethod
    def new(cls, *tokens: Union[str, PushToken]) -> "PushMessage":
        return cls(to=list(tokens))

    def _with(self, **changes) -> "PushMessage":
        return type(self).model_validate({**self.model_dump(exclude_none=True), **changes})

    def with_title(self, title: str) -> "PushMessage":
        return self._with(title=title)

    def with_subtitle(self, subtitle: str) -> "PushMessage":
        return self._with(subtitle=subtitle)

    def with_body(self, body: str) -> "PushMessage":
        return self._with(body=body)

    def with_data(self, data: Dict[str, Any]) -> "PushMessage":
        return self._with(data=data)

    def with_sound(self, sound: Union[str, Dict[str, Any]] = "default") -> "PushMessage":
        return self._with(sound=sound)

    def with_ttl(self, ttl: int) -> "PushMessage":
        return self._with(ttl=ttl)

    def with_expiration(self, expiration: int) -> "PushMessage":
        return self._with(expiration=expiration)

    def with_priority(self, priority: Priority) -> "PushMessage":
        return self._with(priority=priority)

    def with_badge(self, badge: int) -> "PushMessage":
        return self._with(badge=badge)

    def with_channel_id(self, channel_id: str) -> "PushMessage":
        return self._with(channel_id=channel_id)

    def with_category_id(self, category_id: str) -> "PushMessage":
        return self._with(category_id=category_id)

    def with_mutable_content(self, mutable_content: bool = True) -> "PushMessage":
        return self._with(mutable_content=mutable_content)
