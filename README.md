# nftledger

A pure-Python data model for NFT ledgers that follow the ICRC-7 token,
ICRC-37 approval and ICRC-3 block-log conventions, plus an in-memory block
archive that stores ledger blocks and serves them back.

## Installation

```
pip install nftledger
```

## Modules

- `nftledger.values`: `Principal` (with `anonymous()`, `from_text()` and
  `to_text()` for the dashed, checksummed text form), `Account` (an owner
  principal and an optional 32-byte subaccount) and the generic `Value` tree,
  built with `Value.nat`, `Value.int`, `Value.text`, `Value.blob`,
  `Value.array` and `Value.map` and read back with `as_nat`, `as_text`,
  `as_map` and the like.
- `nftledger.errors`: the ledger's error variants (`TransferError`,
  `MintError`, `BurnError`, `InsertTransactionError`, `ApproveTokenError`,
  `ApproveCollectionError`, `RevokeTokenApprovalError`,
  `RevokeCollectionApprovalError`, `TransferFromError`). All derive from
  `LedgerError` and are built as `TransferError("Duplicate", duplicate_of=3)`;
  an unknown variant or wrong fields raise at once.
- `nftledger.transactions`: `Transaction` with one constructor per operation
  (`mint`, `burn`, `transfer`, `update`, `approve`, `approve_collection`,
  `revoke`, `revoke_collection`, `transfer_from`). `Transaction.from_type`
  builds one from a typed description such as `TransferTx` or `MintTx`;
  revocations are recorded without a spender. The module also holds the call
  arguments `TransferArg`, `MintArg`, `BurnArg`, `ApprovalArg`, `InitArg`
  and `Standard`.
- `nftledger.blocks`: `Block.from_transaction(phash, tx)` turns a
  transaction into an ICRC-3 block map, with an optional 32-byte parent hash.
  `Block.from_value` accepts only map values. The module also holds the
  archive settings (`ArchiveSetting`, `InitArchiveArg`,
  `ArchiveLedgerInfo.create()`, which lists the supported block types) and
  the query records (`QueryBlock`, `GetBlocksResult`, `TransactionRange`,
  `GetTransactionsFn`, `ArchivedTransactionResponse`,
  `GetArchivesResultItem`, `ArchiveCreateArgs`).
- `nftledger.approvals`: per-token and per-collection approval tables
  (`TokenApprovalInfo`, `CollectionApprovalInfo`) with `create`, `approve`,
  `remove_approve` and `into_map`, plus the approval call arguments.
- `nftledger.archive`: `Archive`, a bounded block store owned by one ledger
  principal.

## Example

```python
from nftledger.values import Account, Principal
from nftledger.transactions import Transaction
from nftledger.blocks import Block, IndexType
from nftledger.archive import Archive, ArchiveInitArgs

ledger = Principal.from_text("aaaaa-aa")
alice = Account(owner=Principal.anonymous())
bob = Account(owner=ledger)

tx = Transaction.transfer(1_700_000_000, 7, alice, bob, None)
block = Block.from_transaction(None, tx)

archive = Archive(
    ArchiveInitArgs(first_index=0, index_type=IndexType.STABLE,
                    max_pages=10, max_records=100),
    caller=ledger,
    balance=0,
)
archive.append_blocks(ledger, [block])
print(archive.remaining_capacity())          # 99
print(archive.get_transaction(1) == block)   # True
```

## The archive

- `append_blocks(caller, blocks)` stores blocks under the indexes that follow
  the last stored one. It raises `NotOwnerError` when the caller is not the
  owner, and `ArchiveTrap` when the blocks do not fit in `max_records`; in
  that case nothing is stored.
- `get_transaction(index)` returns the block at an index, or `None`.
- `icrc3_get_blocks(requests)` takes `GetBlocksRequest(start, length)`
  records and returns at most 100 blocks over all requests, each request also
  capped at 2000. `log_length` is the number of blocks held locally. A start
  below the archive's first index raises `ArchiveTrap`.
- `update_owner(caller, owner)` hands the archive to another principal.
- `wallet_balance()` and `wallet_receive(available)` keep a cycle balance;
  every offered cycle is accepted.
- `snapshot()` captures settings, blocks and balance, and
  `Archive.restore(snapshot)` builds an archive from one.

## What it does not do

The package is a data model and an in-memory store. It does not run a
ledger (no minting, transfer or approval logic), does not talk to a network,
does not serialize to any wire format and does not write anything to disk;
a snapshot lives only in memory.

## Running the tests

```
pip install "nftledger[test]"
pytest
```