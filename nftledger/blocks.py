"""Ledger blocks, archive settings and the records exchanged with archives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from .values import Account, Principal, Value, ValueKind

if TYPE_CHECKING:
    from .transactions import Transaction

_HASH_BYTES = 32

_ICRC7_SPEC = "ICRCs/ICRC-7/ICRC-7.md"
_ICRC37_SPEC = "ICRCs/ICRC-37/ICRC-37.md"

_SUPPORTED_BLOCK_TYPES = (
    ("7mint", _ICRC7_SPEC),
    ("7burn", _ICRC7_SPEC),
    ("7xfer", _ICRC7_SPEC),
    ("7update", _ICRC7_SPEC),
    ("37appr", _ICRC37_SPEC),
    ("37appr_coll", _ICRC37_SPEC),
    ("37revoke", _ICRC37_SPEC),
    ("37revoke_coll", _ICRC37_SPEC),
    ("37xfer", _ICRC37_SPEC),
)


def account_value(account: Account) -> Value:
    """Encode an account as an array of its owner and, if any, its subaccount."""
    parts = [Value.blob(account.owner.data)]
    if account.subaccount is not None:
        parts.append(Value.blob(account.subaccount))
    return Value.array(parts)


@dataclass(frozen=True)
class Block:
    """One entry of the ledger's log, holding a generic value."""

    value: Value

    @classmethod
    def from_transaction(cls, phash: Optional[bytes], tx: Transaction) -> Block:
        """Build the block that records a transaction, chained to the previous hash."""
        block: dict[str, Value] = {}
        if phash is not None:
            phash = bytes(phash)
            if len(phash) != _HASH_BYTES:
                raise ValueError(
                    f"a block hash is {_HASH_BYTES} bytes, got {len(phash)}"
                )
            block["phash"] = Value.blob(phash)
        block["btype"] = Value.text(tx.op)
        block["ts"] = Value.nat(tx.ts)

        body: dict[str, Value] = {"tid": Value.nat(tx.tid)}
        if tx.from_ is not None:
            body["from"] = account_value(tx.from_)
        if tx.to is not None:
            body["to"] = account_value(tx.to)
        if tx.spender is not None:
            body["spender"] = account_value(tx.spender)
        if tx.exp is not None:
            body["exp"] = Value.nat(tx.exp)
        if tx.meta is not None:
            body["meta"] = Value.map(tx.meta)
        if tx.memo is not None:
            body["memo"] = Value.blob(tx.memo)
        body["ts"] = Value.nat(tx.ts)
        block["tx"] = Value.map(body)
        return cls(Value.map(block))

    @classmethod
    def from_value(cls, value: Value) -> Block:
        """Wrap a value as a block; only map values are blocks."""
        if value.kind is not ValueKind.MAP:
            raise ValueError("block must be a map value")
        return cls(value)

    @classmethod
    def from_map(
        cls, entries: Mapping[str, Value] | Iterable[tuple[str, Value]]
    ) -> Block:
        return cls(Value.map(entries))

    def into_map(self) -> dict[str, Value]:
        """The block's entries; the block must hold a map."""
        return self.value.as_map()


class IndexType(Enum):
    MANAGED = "Managed"
    STABLE = "Stable"
    STABLE_TYPED = "StableTyped"


@dataclass(frozen=True)
class TransactionRange:
    start: int
    length: int


@dataclass(frozen=True)
class BlockType:
    block_type: str
    url: str


@dataclass
class ArchiveSetting:
    archive_controllers: Optional[list[Principal]] = None
    archive_cycles: int = 2_000_000_000_000
    archive_index_type: IndexType = IndexType.STABLE
    max_active_records: int = 2000
    max_archive_pages: int = 62500
    max_records_in_archive_instance: int = 10_000_000
    max_records_to_archive: int = 10_000
    settle_to_records: int = 1000


@dataclass(kw_only=True)
class InitArchiveArg:
    archive_controllers: Optional[list[Principal]] = None
    archive_cycles: int
    archive_index_type: IndexType
    max_active_records: int
    max_archive_pages: int
    max_records_in_archive_instance: int
    max_records_to_archive: int
    settle_to_records: int

    def to_archive_setting(self) -> ArchiveSetting:
        return ArchiveSetting(
            archive_controllers=self.archive_controllers,
            archive_cycles=self.archive_cycles,
            archive_index_type=self.archive_index_type,
            max_active_records=self.max_active_records,
            max_archive_pages=self.max_archive_pages,
            max_records_in_archive_instance=self.max_records_in_archive_instance,
            max_records_to_archive=self.max_records_to_archive,
            settle_to_records=self.settle_to_records,
        )


@dataclass
class ArchiveLedgerInfo:
    """What the ledger knows of its archives and of its local log."""

    archives: dict[Principal, TransactionRange] = field(default_factory=dict)
    local_ledger_size: int = 0
    supported_blocks: list[BlockType] = field(default_factory=list)
    last_index: int = 0
    first_index: int = 0
    is_cleaning: bool = False
    latest_hash: Optional[bytes] = None
    setting: ArchiveSetting = field(default_factory=ArchiveSetting)

    @classmethod
    def create(cls, setting: Optional[ArchiveSetting] = None) -> ArchiveLedgerInfo:
        """A fresh ledger info listing every supported block type."""
        return cls(
            setting=setting if setting is not None else ArchiveSetting(),
            supported_blocks=[
                BlockType(block_type, url) for block_type, url in _SUPPORTED_BLOCK_TYPES
            ],
        )


@dataclass(frozen=True)
class QueryBlock:
    id: int
    block: Value


@dataclass(frozen=True)
class GetTransactionsFn:
    """A reference to a query method of another canister."""

    canister_id: Principal
    method: str


@dataclass
class ArchivedTransactionResponse:
    args: list[TransactionRange]
    callback: GetTransactionsFn


@dataclass
class GetBlocksResult:
    blocks: list[QueryBlock]
    log_length: int
    archived_blocks: list[ArchivedTransactionResponse] = field(default_factory=list)


@dataclass(frozen=True)
class GetArchivesResultItem:
    canister_id: Principal
    start: int
    end: int


@dataclass
class ArchiveCreateArgs:
    max_pages: int
    max_records: int
    first_index: int
    controllers: Optional[list[Principal]] = None