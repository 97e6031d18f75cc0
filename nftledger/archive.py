"""An archive that stores a bounded run of ledger blocks for its owning ledger."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from .blocks import Block, GetBlocksResult, IndexType, QueryBlock
from .values import Principal

DEFAULT_MAX_TRANSACTIONS_PER_GET_TRANSACTION_RESPONSE = 2000
MAX_BLOCKS_PER_RESPONSE = 100

_U64_MAX = (1 << 64) - 1


class ArchiveTrap(RuntimeError):
    """A call was aborted; nothing it did is kept."""


class NotOwnerError(PermissionError):
    """The caller of an owner-only method is not the archive's ledger."""


@dataclass(kw_only=True)
class ArchiveInitArgs:
    first_index: int
    index_type: IndexType
    max_pages: int
    max_records: int


@dataclass(frozen=True)
class GetBlocksRequest:
    start: int
    length: int

    def as_start_and_length(self) -> tuple[int, int]:
        """Both bounds as 64-bit numbers."""
        if not 0 <= self.start <= _U64_MAX:
            raise ArchiveTrap(f"start {self.start} does not fit in 64 bits")
        if not 0 <= self.length <= _U64_MAX:
            raise ArchiveTrap(f"length {self.length} does not fit in 64 bits")
        return self.start, self.length


@dataclass(frozen=True)
class WalletReceiveResult:
    accepted: int


@dataclass
class _State:
    max_records: int = 0
    max_pages: int = 0
    max_transactions_per_response: int = (
        DEFAULT_MAX_TRANSACTIONS_PER_GET_TRANSACTION_RESPONSE
    )
    index_type: IndexType = IndexType.STABLE
    ledger_id: Principal = field(default_factory=Principal.anonymous)
    block_index_offset: int = 0
    block_index: int = 0


@dataclass(frozen=True)
class _Snapshot:
    state: _State
    blocks: dict[int, Block]
    balance: int


class Archive:
    """Blocks handed over by a ledger, served back by index."""

    def __init__(self, args: ArchiveInitArgs, caller: Principal, balance: int = 0) -> None:
        self._state = _State(
            max_pages=args.max_pages,
            max_records=args.max_records,
            block_index_offset=args.first_index,
            block_index=args.first_index,
            index_type=args.index_type,
            ledger_id=caller,
        )
        self._blocks: dict[int, Block] = {}
        self._balance = balance

    def _owner_guard(self, caller: Principal) -> None:
        if caller != self._state.ledger_id:
            raise NotOwnerError("The caller is not the owner of contract")

    def get_owner(self) -> Principal:
        return self._state.ledger_id

    def remaining_capacity(self) -> int:
        remaining = self._state.max_records - len(self._blocks)
        if remaining < 0:
            raise ArchiveTrap("bug: archive capacity underflow")
        return remaining

    def get_transaction(self, index: int) -> Block | None:
        offset = self._state.block_index_offset
        if index < offset:
            return None
        return self._blocks.get(index - offset)

    def icrc3_get_blocks(self, requests: list[GetBlocksRequest]) -> GetBlocksResult:
        """Serve up to a hundred blocks over all requests, in request order."""
        found: list[QueryBlock] = []
        for request in requests:
            start, length = request.as_start_and_length()
            max_length = max(MAX_BLOCKS_PER_RESPONSE - len(found), 0)
            if max_length == 0:
                break
            blocks = self._block_range(start, min(length, max_length))
            found.extend(
                QueryBlock(id=request.start + n, block=block.value)
                for n, block in enumerate(blocks)
            )
        # The archive only knows the length of its own local log.
        return GetBlocksResult(blocks=found, log_length=len(self._blocks), archived_blocks=[])

    def _block_range(self, start: int, length: int) -> list[Block]:
        offset = self._state.block_index_offset
        if start < offset:
            raise ArchiveTrap(
                f"requested index {start} is less than the minimal index "
                f"{offset} this archive serves"
            )
        relative = start - offset
        length = min(length, self._state.max_transactions_per_response)
        limit = min(len(self._blocks), relative + length)
        try:
            return [self._blocks[i] for i in range(relative, limit)]
        except KeyError as exc:
            raise ArchiveTrap(f"block {exc.args[0]} is missing") from None

    def append_blocks(self, caller: Principal, new_blocks: list[Block]) -> None:
        """Store blocks after the last stored index; all or none."""
        self._owner_guard(caller)
        new_blocks = list(new_blocks)
        if self._state.max_records < len(self._blocks) + len(new_blocks):
            raise ArchiveTrap("no space left")
        block_index = self._state.block_index
        for block in new_blocks:
            block_index += 1
            self._blocks[block_index] = block
        self._state.block_index = block_index

    def update_owner(self, caller: Principal, owner: Principal) -> bool:
        self._owner_guard(caller)
        self._state.ledger_id = owner
        return True

    def wallet_balance(self) -> int:
        return self._balance

    def wallet_receive(self, available: int) -> WalletReceiveResult:
        """Accept every cycle offered with the call."""
        if available == 0:
            return WalletReceiveResult(accepted=0)
        self._balance += available
        return WalletReceiveResult(accepted=available & _U64_MAX)

    def snapshot(self) -> _Snapshot:
        """What survives an upgrade: the settings, the blocks and the balance."""
        return _Snapshot(
            state=copy.deepcopy(self._state),
            blocks=dict(self._blocks),
            balance=self._balance,
        )

    @classmethod
    def restore(cls, snapshot: _Snapshot) -> Archive:
        archive = cls.__new__(cls)
        archive._state = copy.deepcopy(snapshot.state)
        archive._blocks = dict(snapshot.blocks)
        archive._balance = snapshot.balance
        return archive