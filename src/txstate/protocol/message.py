"""Typed request and response messages exchanged with the context manager.

These are semantic shapes; the byte encoding is JSON via :mod:`txstate.json`,
with ``bytes`` fields carried as base64 strings. Each class knows how to
encode itself, and each response class knows how to decode itself from the
raw reply handed back by a stream.
"""

from typing import ClassVar, List, Optional, Tuple

import msgspec

from .. import json
from . import fields


class _Struct(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Common behavior for every message on the wire."""

    def encode(self) -> bytes:
        return json.dumps(self)

    @classmethod
    def decode(cls, content: Optional[bytes]):
        """Return an instance decoded from *content*, or None if there is no
        content at all. Malformed content raises :class:`json.DecodeError`.
        """

        if content is None or content == b"":
            return None

        return json.decode(content, cls)


class Entry(_Struct):
    """One address and the opaque data stored there."""

    address: str
    data: bytes = b""


class Event(_Struct):
    event_type: str
    attributes: List[Tuple[str, str]] = []
    data: bytes = b""


# --- requests ---

class GetRequest(_Struct):
    message_type: ClassVar[str] = fields.GET_REQUEST

    context_id: str
    addresses: List[str] = []


class SetRequest(_Struct):
    message_type: ClassVar[str] = fields.SET_REQUEST

    context_id: str
    entries: List[Entry] = []


class DeleteRequest(_Struct):
    message_type: ClassVar[str] = fields.DEL_REQUEST

    context_id: str
    addresses: List[str] = []


class ReceiptDataRequest(_Struct):
    message_type: ClassVar[str] = fields.RECEIPT_DATA_REQUEST

    context_id: str
    data: bytes = b""


class EventRequest(_Struct):
    message_type: ClassVar[str] = fields.EVENT_REQUEST

    context_id: str
    event: Event


# --- responses ---

class GetResponse(_Struct):
    message_type: ClassVar[str] = fields.GET_RESPONSE

    entries: List[Entry] = []


class SetResponse(_Struct):
    message_type: ClassVar[str] = fields.SET_RESPONSE

    addresses: List[str] = []


class DeleteResponse(_Struct):
    message_type: ClassVar[str] = fields.DEL_RESPONSE

    addresses: List[str] = []


class ReceiptDataResponse(_Struct):
    message_type: ClassVar[str] = fields.RECEIPT_DATA_RESPONSE

    status: str = fields.OK


class EventResponse(_Struct):
    message_type: ClassVar[str] = fields.EVENT_RESPONSE

    status: str = fields.OK
