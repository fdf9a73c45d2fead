# expo_push/response.py

from typing import Any, Dict, List, Literal, NewType, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from expo_push.errors import PushDecodeError

PushReceiptId = NewType("PushReceiptId", str)


class PushErrorDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    # np. DeviceNotRegistered, MessageTooBig, MessageRateExceeded, InvalidCredentials
    error: Optional[str] = None


class PushTicket(BaseModel):
    """Wynik wysłania jednej wiadomości: id receipta albo opis błędu."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    status: Literal["ok", "error"]
    id: Optional[PushReceiptId] = None
    message: Optional[str] = None
    details: Optional[PushErrorDetails] = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @property
    def error(self) -> Optional[str]:
        return self.details.error if self.details else None


class PushReceipt(BaseModel):
    """Status doręczenia dla jednego receipt id."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    status: Literal["ok", "error"]
    message: Optional[str] = None
    details: Optional[PushErrorDetails] = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @property
    def error(self) -> Optional[str]:
        return self.details.error if self.details else None


# Koperty odpowiedzi bramki: {"data": ...}
class PushResponse(BaseModel):
    data: List[PushTicket]


class ReceiptResponse(BaseModel):
    data: Dict[PushReceiptId, PushReceipt]


def _decode(model: type, content: bytes, spot: str) -> Any:
    try:
        return model.model_validate_json(content).data
    except ValidationError as e:
        raise PushDecodeError(f"Unexpected {spot} response envelope: {e}") from e


def decode_tickets(content: bytes) -> List[PushTicket]:
    return _decode(PushResponse, content, "push")


def decode_receipts(content: bytes) -> Dict[PushReceiptId, PushReceipt]:
    return _decode(ReceiptResponse, content, "receipts")
