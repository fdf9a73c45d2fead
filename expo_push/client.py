# expo_push/client.py

from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar

import httpx

from expo_push.config import ClientConfig
from expo_push.errors import PushDecodeError, PushTransportError
from expo_push.gzip_policy import gzip_body, should_compress
from expo_push.message import PushMessage
from expo_push.response import (
    PushReceipt,
    PushReceiptId,
    PushTicket,
    decode_receipts,
    decode_tickets,
)
from expo_push.serializer import serialize_json_list, serialize_receipt_ids
from expo_push.utils import Utils

T = TypeVar("T")


def iter_chunks(items: Iterable[T], size: int) -> Iterator[List[T]]:
    """Leniwie tnie dowolny iterable na listy po `size` elementów."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    it = iter(items)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


class PushClientCommon:
    """
    Wspólna część klienta sync/async: nagłówki, kompresja, serializacja,
    mapowanie odpowiedzi i liczniki. Samo wysyłanie robią podklasy.
    """

    def __init__(self, config: Optional[ClientConfig] = None, utils=None, debug_logging: bool = False):
        if not utils:
            utils = Utils()
        self.config = config or ClientConfig()
        self.utils = utils
        self.request_counter = 0
        self.error_counter   = 0
        self.debug_logging   = debug_logging

    def _prepare_request(self, body: bytes) -> Tuple[Dict[str, str], bytes]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self.config.access_token:
            headers["Authorization"] = f"Bearer {self.config.access_token}"

        if should_compress(self.config.gzip, len(body)):
            headers["Content-Encoding"] = "gzip"
            body = gzip_body(body)
        return headers, body

    def _count_request(self, spot: str, raw_size: int, sent_size: int):
        self.request_counter += 1
        if self.debug_logging:
            self.utils.log_this(f"{spot}: sending {raw_size} bytes ({sent_size} on the wire)", 'debug')
        if self.request_counter % 10 == 0:
            self.utils.log_this(f"Requests so far: {self.request_counter}", 'info')

    def _transport_error(self, e: httpx.HTTPError, spot: str) -> PushTransportError:
        self.error_counter += 1
        if isinstance(e, httpx.HTTPStatusError):
            status = e.response.status_code
            text = e.response.text[:400]
            self.utils.log_this(f"HTTP {status} at {spot}: {text}", 'warning')
            return PushTransportError(f"{spot} failed with HTTP {status}: {text}", status_code=status, body=text)
        self.utils.log_this(f"HTTP error at {spot}: {e!r}", 'warning')
        return PushTransportError(f"{spot} request failed: {e!r}")

    def _map_tickets(self, content: bytes, expected: int) -> List[PushTicket]:
        try:
            tickets = decode_tickets(content)
            if len(tickets) != expected:
                raise PushDecodeError(f"Expected {expected} tickets, gateway returned {len(tickets)}")
        except PushDecodeError as e:
            self.error_counter += 1
            self.utils.log_this(f"push: {e}", 'warning')
            raise
        return tickets

    def _map_receipts(self, content: bytes) -> Dict[PushReceiptId, PushReceipt]:
        try:
            return decode_receipts(content)
        except PushDecodeError as e:
            self.error_counter += 1
            self.utils.log_this(f"receipts: {e}", 'warning')
            raise


class AsyncPushClient(PushClientCommon):
    """
    Klient bramki Expo na httpx.AsyncClient.

    Paczki w ramach jednego wywołania idą po kolei – następna jest budowana
    dopiero po odebraniu i zdekodowaniu odpowiedzi na poprzednią.
    Błąd na dowolnej paczce przerywa całe wywołanie bez częściowego wyniku.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        utils=None,
        debug_logging: bool = False,
    ):
        super().__init__(config=config, utils=utils, debug_logging=debug_logging)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.config.timeout)

    async def __aenter__(self) -> "AsyncPushClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        # wstrzykniętego klienta zamyka jego właściciel
        if self._owns_client:
            await self.client.aclose()

    async def send_push_notification(self, message: PushMessage) -> PushTicket:
        tickets = await self.send_push_notifications_in_one_chunk([message])
        return tickets[0]

    async def send_push_notifications(self, messages: Iterable[PushMessage]) -> List[PushTicket]:
        tickets: List[PushTicket] = []
        for chunk in iter_chunks(messages, self.config.push_chunk_size):
            tickets.extend(await self.send_push_notifications_in_one_chunk(chunk))
        return tickets

    async def send_push_notifications_in_one_chunk(self, messages: Iterable[PushMessage]) -> List[PushTicket]:
        """Jedna paczka, bez dzielenia. Powyżej 100 wiadomości bramka odrzuci żądanie."""
        messages = list(messages)
        body = serialize_json_list(messages)
        resp = await self._send_request(self.config.push_url, body, 'push')
        return self._map_tickets(resp.content, len(messages))

    async def get_push_receipt(self, receipt_id: PushReceiptId) -> Optional[PushReceipt]:
        receipts = await self.get_push_receipts_in_one_chunk([receipt_id])
        return receipts.get(receipt_id)

    async def get_push_receipts(self, receipt_ids: Iterable[PushReceiptId]) -> Dict[PushReceiptId, PushReceipt]:
        # przy powtórzonych id wygrywa późniejsza paczka
        out: Dict[PushReceiptId, PushReceipt] = {}
        for chunk in iter_chunks(receipt_ids, self.config.receipt_chunk_size):
            out.update(await self.get_push_receipts_in_one_chunk(chunk))
        return out

    async def get_push_receipts_in_one_chunk(
        self, receipt_ids: Iterable[PushReceiptId]
    ) -> Dict[PushReceiptId, PushReceipt]:
        """Jedna paczka receipt id. Nie wysyłaj więcej niż 300 naraz."""
        body = serialize_receipt_ids(receipt_ids)
        resp = await self._send_request(self.config.receipt_url, body, 'receipts')
        return self._map_receipts(resp.content)

    async def _send_request(self, url: str, body: bytes, spot: str) -> httpx.Response:
        headers, content = self._prepare_request(body)
        self._count_request(spot, len(body), len(content))
        try:
            resp = await self.client.post(url, content=content, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise self._transport_error(e, spot) from e
        return resp


class PushClient(PushClientCommon):
    """Blokujący odpowiednik AsyncPushClient na httpx.Client."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.Client] = None,
        utils=None,
        debug_logging: bool = False,
    ):
        super().__init__(config=config, utils=utils, debug_logging=debug_logging)
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=self.config.timeout)

    def __enter__(self) -> "PushClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_client:
            self.client.close()

    def send_push_notification(self, message: PushMessage) -> PushTicket:
        return self.send_push_notifications_in_one_chunk([message])[0]

    def send_push_notifications(self, messages: Iterable[PushMessage]) -> List[PushTicket]:
        tickets: List[PushTicket] = []
        for chunk in iter_chunks(messages, self.config.push_chunk_size):
            tickets.extend(self.send_push_notifications_in_one_chunk(chunk))
        return tickets

    def send_push_notifications_in_one_chunk(self, messages: Iterable[PushMessage]) -> List[PushTicket]:
        messages = list(messages)
        body = serialize_json_list(messages)
        resp = self._send_request(self.config.push_url, body, 'push')
        return self._map_tickets(resp.content, len(messages))

    def get_push_receipt(self, receipt_id: PushReceiptId) -> Optional[PushReceipt]:
        return self.get_push_receipts_in_one_chunk([receipt_id]).get(receipt_id)

    def get_push_receipts(self, receipt_ids: Iterable[PushReceiptId]) -> Dict[PushReceiptId, PushReceipt]:
        out: Dict[PushReceiptId, PushReceipt] = {}
        for chunk in iter_chunks(receipt_ids, self.config.receipt_chunk_size):
            out.update(self.get_push_receipts_in_one_chunk(chunk))
        return out

    def get_push_receipts_in_one_chunk(self, receipt_ids: Iterable[PushReceiptId]) -> Dict[PushReceiptId, PushReceipt]:
        body = serialize_receipt_ids(receipt_ids)
        resp = self._send_request(self.config.receipt_url, body, 'receipts')
        return self._map_receipts(resp.content)

    def _send_request(self, url: str, body: bytes, spot: str) -> httpx.Response:
        headers, content = self._prepare_request(body)
        self._count_request(spot, len(body), len(content))
        try:
            resp = self.client.post(url, content=content, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise self._transport_error(e, spot) from e
        return resp
