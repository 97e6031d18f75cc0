"""Principals, accounts and the generic ledger value type."""

from __future__ import annotations

import base64
import binascii
import zlib
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Iterable, Mapping, Union

_MAX_PRINCIPAL_BYTES = 29
_SUBACCOUNT_BYTES = 32
_CHECKSUM_BYTES = 4


@dataclass(frozen=True, order=True)
class Principal:
    """An opaque identity of up to 29 bytes."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) > _MAX_PRINCIPAL_BYTES:
            raise ValueError(
                f"principal is {len(self.data)} bytes long, "
                f"at most {_MAX_PRINCIPAL_BYTES} are allowed"
            )

    @classmethod
    def anonymous(cls) -> Principal:
        """The principal of an unauthenticated caller."""
        return cls(b"\x04")

    @classmethod
    def from_text(cls, text: str) -> Principal:
        """Parse the dashed, checksummed base32 form of a principal."""
        normalized = text.lower()
        compact = normalized.replace("-", "").upper()
        padded = compact + "=" * (-len(compact) % 8)
        try:
            raw = base64.b32decode(padded)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid principal text {text!r}: {exc}") from None
        if len(raw) < _CHECKSUM_BYTES:
            raise ValueError(f"principal text {text!r} is too short")
        checksum, data = raw[:_CHECKSUM_BYTES], raw[_CHECKSUM_BYTES:]
        if zlib.crc32(data).to_bytes(_CHECKSUM_BYTES, "big") != checksum:
            raise ValueError(f"principal text {text!r} has a wrong checksum")
        principal = cls(data)
        if principal.to_text() != normalized:
            raise ValueError(f"principal text {text!r} is not in canonical form")
        return principal

    def to_text(self) -> str:
        """The dashed, checksummed base32 form of this principal."""
        checksum = zlib.crc32(self.data).to_bytes(_CHECKSUM_BYTES, "big")
        encoded = base64.b32encode(checksum + self.data).decode("ascii")
        encoded = encoded.rstrip("=").lower()
        return "-".join(encoded[i : i + 5] for i in range(0, len(encoded), 5))

    def __str__(self) -> str:
        return self.to_text()


@total_ordering
@dataclass(frozen=True)
class Account:
    """A principal together with an optional 32-byte subaccount."""

    owner: Principal
    subaccount: bytes | None = None

    def __post_init__(self) -> None:
        if self.subaccount is not None:
            sub = bytes(self.subaccount)
            if len(sub) != _SUBACCOUNT_BYTES:
                raise ValueError(
                    f"subaccount must be {_SUBACCOUNT_BYTES} bytes, got {len(sub)}"
                )
            object.__setattr__(self, "subaccount", sub)

    def _key(self) -> tuple[Principal, bool, bytes]:
        return (self.owner, self.subaccount is not None, self.subaccount or b"")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._key() < other._key()


class ValueKind(Enum):
    NAT = "Nat"
    INT = "Int"
    TEXT = "Text"
    BLOB = "Blob"
    ARRAY = "Array"
    MAP = "Map"


Payload = Union[int, str, bytes, tuple]


@dataclass(frozen=True)
class Value:
    """A generic, self-describing ledger value."""

    kind: ValueKind
    payload: Payload

    @classmethod
    def nat(cls, number: int) -> Value:
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError("a Nat value needs an integer")
        if number < 0:
            raise ValueError("a Nat value cannot be negative")
        return cls(ValueKind.NAT, number)

    @classmethod
    def int(cls, number: int) -> Value:
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError("an Int value needs an integer")
        return cls(ValueKind.INT, number)

    @classmethod
    def text(cls, string: str) -> Value:
        if not isinstance(string, str):
            raise TypeError("a Text value needs a string")
        return cls(ValueKind.TEXT, string)

    @classmethod
    def blob(cls, data: bytes | bytearray | memoryview) -> Value:
        return cls(ValueKind.BLOB, bytes(data))

    @classmethod
    def array(cls, items: Iterable[Value]) -> Value:
        items = tuple(items)
        if not all(isinstance(item, Value) for item in items):
            raise TypeError("an Array value holds only values")
        return cls(ValueKind.ARRAY, items)

    @classmethod
    def map(cls, entries: Mapping[str, Value] | Iterable[tuple[str, Value]]) -> Value:
        pairs = dict(entries.items() if isinstance(entries, Mapping) else entries)
        for key, item in pairs.items():
            if not isinstance(key, str) or not isinstance(item, Value):
                raise TypeError("a Map value maps strings to values")
        return cls(ValueKind.MAP, tuple(sorted(pairs.items())))

    def _expect(self, kind: ValueKind) -> Payload:
        if self.kind is not kind:
            raise TypeError(f"expected a {kind.value} value, got {self.kind.value}")
        return self.payload

    def as_nat(self) -> int:
        return self._expect(ValueKind.NAT)  # type: ignore[return-value]

    def as_int(self) -> int:
        return self._expect(ValueKind.INT)  # type: ignore[return-value]

    def as_text(self) -> str:
        return self._expect(ValueKind.TEXT)  # type: ignore[return-value]

    def as_blob(self) -> bytes:
        return self._expect(ValueKind.BLOB)  # type: ignore[return-value]

    def as_array(self) -> list[Value]:
        return list(self._expect(ValueKind.ARRAY))  # type: ignore[arg-type]

    def as_map(self) -> dict[str, Value]:
        return dict(self._expect(ValueKind.MAP))  # type: ignore[arg-type]