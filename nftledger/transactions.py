"""Ledger transactions and the arguments of the ledger's calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from .values import Account, Value

if TYPE_CHECKING:
    from .approvals import InitApprovalsArg
    from .blocks import Block, InitArchiveArg

Icrc7TokenMetadata = dict[str, Value]

MINT_OP = "7mint"
BURN_OP = "7burn"
TRANSACTION_TRANSFER_OP = "7xfer"
UPDATE_OP = "7update"
APPROVE_OP = "37appr"
APPROVE_COLLECTION_OP = "37appr_coll"
REVOKE_OP = "37revoke"
REVOKE_COLLECTION_OP = "37revoke_coll"
TRANSACTION_TRANSFER_FROM_OP = "37xfer"


@dataclass(frozen=True)
class MintTx:
    tid: int
    from_: Account
    to: Account
    meta: Icrc7TokenMetadata


@dataclass(frozen=True)
class BurnTx:
    tid: int
    from_: Account
    to: Account


@dataclass(frozen=True)
class TransferTx:
    tid: int
    from_: Account
    to: Account


@dataclass(frozen=True)
class TransferFromTx:
    tid: int
    from_: Account
    to: Account
    spender: Account


@dataclass(frozen=True)
class ApprovalTx:
    tid: int
    from_: Account
    to: Account
    exp_sec: Optional[int] = None


@dataclass(frozen=True)
class ApproveCollectionTx:
    from_: Account
    to: Account
    exp_sec: Optional[int] = None


@dataclass(frozen=True)
class RevokeTx:
    tid: int
    from_: Account
    to: Optional[Account] = None


@dataclass(frozen=True)
class RevokeCollectionTx:
    from_: Account
    to: Optional[Account] = None


TransactionType = Union[
    MintTx,
    BurnTx,
    TransferTx,
    TransferFromTx,
    ApprovalTx,
    ApproveCollectionTx,
    RevokeTx,
    RevokeCollectionTx,
]


@dataclass
class Transaction:
    """One ledger operation as it is recorded."""

    ts: int = 0
    op: str = ""
    tid: int = 0
    from_: Optional[Account] = None
    to: Optional[Account] = None
    spender: Optional[Account] = None
    exp: Optional[int] = None
    meta: Optional[Icrc7TokenMetadata] = None
    memo: Optional[bytes] = None
    block: Optional[Block] = None

    @classmethod
    def mint(cls, now_sec, tid, from_, to, meta, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=MINT_OP, tid=tid, from_=from_, to=to,
            meta=dict(meta), memo=memo,
        )

    @classmethod
    def burn(cls, now_sec, tid, from_, to, memo=None) -> Transaction:
        return cls(ts=now_sec, op=BURN_OP, tid=tid, from_=from_, to=to, memo=memo)

    @classmethod
    def transfer(cls, now_sec, tid, from_, to, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=TRANSACTION_TRANSFER_OP, tid=tid, from_=from_, to=to,
            memo=memo,
        )

    @classmethod
    def update(cls, now_sec, tid, from_, meta, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=UPDATE_OP, tid=tid, from_=from_, meta=dict(meta),
            memo=memo,
        )

    @classmethod
    def approve(cls, now_sec, tid, from_, spender, exp_sec=None, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=APPROVE_OP, tid=tid, from_=from_, spender=spender,
            exp=exp_sec, memo=memo,
        )

    @classmethod
    def approve_collection(cls, now_sec, from_, spender, exp_sec=None, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=APPROVE_COLLECTION_OP, from_=from_, spender=spender,
            exp=exp_sec, memo=memo,
        )

    @classmethod
    def revoke(cls, now_sec, tid, from_, spender=None, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=REVOKE_OP, tid=tid, from_=from_, spender=spender,
            memo=memo,
        )

    @classmethod
    def revoke_collection(cls, now_sec, from_, spender=None, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=REVOKE_COLLECTION_OP, from_=from_, spender=spender,
            memo=memo,
        )

    @classmethod
    def transfer_from(cls, now_sec, tid, from_, to, spender, memo=None) -> Transaction:
        return cls(
            ts=now_sec, op=TRANSACTION_TRANSFER_FROM_OP, tid=tid, from_=from_,
            to=to, spender=spender, memo=memo,
        )

    @classmethod
    def from_type(cls, txn_type: TransactionType, at: int, memo: Optional[bytes] = None) -> Transaction:
        """Build the recorded transaction for one kind of operation.

        Revocations are recorded without a spender, whatever the operation named.
        """
        match txn_type:
            case TransferTx(tid=tid, from_=src, to=dst):
                return cls.transfer(at, tid, src, dst, memo)
            case MintTx(tid=tid, from_=src, to=dst, meta=meta):
                return cls.mint(at, tid, src, dst, meta, memo)
            case BurnTx(tid=tid, from_=src, to=dst):
                return cls.burn(at, tid, src, dst, memo)
            case ApprovalTx(tid=tid, from_=src, to=dst, exp_sec=exp):
                return cls.approve(at, tid, src, dst, exp, memo)
            case ApproveCollectionTx(from_=src, to=dst, exp_sec=exp):
                return cls.approve_collection(at, src, dst, exp, memo)
            case RevokeTx(tid=tid, from_=src):
                return cls.revoke(at, tid, src, None, memo)
            case RevokeCollectionTx(from_=src):
                return cls.revoke_collection(at, src, None, memo)
            case TransferFromTx(tid=tid, from_=src, to=dst, spender=spender):
                return cls.transfer_from(at, tid, src, dst, spender, memo)
        raise TypeError(f"unknown transaction type {type(txn_type).__name__}")


@dataclass(kw_only=True)
class TransferArg:
    to: Account
    token_id: int
    from_subaccount: Optional[bytes] = None
    memo: Optional[bytes] = None
    created_at_time: Optional[int] = None


@dataclass(kw_only=True)
class MintArg:
    to: Account
    token_id: int
    from_subaccount: Optional[bytes] = None
    memo: Optional[bytes] = None
    # Without a name the collection's symbol and the token id are used, e.g. "ICRC7 100".
    token_name: Optional[str] = None
    token_description: Optional[str] = None
    token_logo: Optional[str] = None


@dataclass(kw_only=True)
class BurnArg:
    token_id: int
    from_subaccount: Optional[bytes] = None
    memo: Optional[bytes] = None


@dataclass(kw_only=True)
class InitArg:
    icrc7_symbol: str
    icrc7_name: str
    minting_account: Optional[Account] = None
    icrc7_description: Optional[str] = None
    icrc7_logo: Optional[str] = None
    icrc7_supply_cap: Optional[int] = None
    icrc7_max_query_batch_size: Optional[int] = None
    icrc7_max_update_batch_size: Optional[int] = None
    icrc7_max_take_value: Optional[int] = None
    icrc7_default_take_value: Optional[int] = None
    icrc7_max_memo_size: Optional[int] = None
    icrc7_atomic_batch_transfers: Optional[bool] = None
    tx_window: Optional[int] = None
    permitted_drift: Optional[int] = None
    approval_init: Optional[InitApprovalsArg] = None
    archive_init: Optional[InitArchiveArg] = None


@dataclass(frozen=True)
class Standard:
    name: str
    url: str


@dataclass(kw_only=True)
class ApprovalArg:
    spender: Account
    token_id: int
    from_subaccount: Optional[bytes] = None
    expires_at: Optional[int] = None
    memo: Optional[bytes] = None