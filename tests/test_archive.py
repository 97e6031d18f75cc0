import pytest

from nftledger.archive import (
    Archive,
    ArchiveInitArgs,
    ArchiveTrap,
    GetBlocksRequest,
    NotOwnerError,
)
from nftledger.blocks import Block, IndexType
from nftledger.values import Principal, Value

LEDGER = Principal(b"\x01\x02\x03")
OTHER = Principal(b"\x09\x09")


def make_archive(max_records=10, first_index=0, balance=0):
    args = ArchiveInitArgs(
        first_index=first_index,
        index_type=IndexType.STABLE,
        max_pages=5,
        max_records=max_records,
    )
    return Archive(args, LEDGER, balance)


def block(n):
    return Block.from_map({"n": Value.nat(n)})


def test_init_sets_owner_and_capacity():
    archive = make_archive(max_records=7)
    assert archive.get_owner() == LEDGER
    assert archive.remaining_capacity() == 7


def test_append_reduces_capacity():
    archive = make_archive(max_records=5)
    archive.append_blocks(LEDGER, [block(1), block(2)])
    assert archive.remaining_capacity() == 3


def test_append_by_stranger_is_rejected():
    archive = make_archive()
    with pytest.raises(NotOwnerError, match="The caller is not the owner of contract"):
        archive.append_blocks(OTHER, [block(1)])
    assert archive.remaining_capacity() == 10


def test_append_beyond_capacity_traps_and_keeps_nothing():
    archive = make_archive(max_records=2)
    archive.append_blocks(LEDGER, [block(1)])
    with pytest.raises(ArchiveTrap, match="no space left"):
        archive.append_blocks(LEDGER, [block(2), block(3)])
    assert archive.remaining_capacity() == 1


def test_get_transaction_follows_stored_indexes():
    archive = make_archive()
    archive.append_blocks(LEDGER, [block(10), block(20)])
    assert archive.get_transaction(1) == block(10)
    assert archive.get_transaction(2) == block(20)
    assert archive.get_transaction(0) is None
    assert archive.get_transaction(3) is None


def test_get_transaction_below_offset_is_none():
    archive = make_archive(first_index=5)
    archive.append_blocks(LEDGER, [block(1)])
    assert archive.get_transaction(4) is None


def test_get_blocks_returns_requested_range():
    archive = make_archive()
    blocks = [block(1), block(2), block(3)]
    archive.append_blocks(LEDGER, blocks)
    result = archive.icrc3_get_blocks([GetBlocksRequest(start=1, length=2)])
    assert [q.id for q in result.blocks] == [1, 2]
    assert [q.block for q in result.blocks] == [blocks[0].value, blocks[1].value]
    assert result.log_length == 3
    assert result.archived_blocks == []


def test_get_blocks_caps_total_per_response():
    archive = make_archive(max_records=200)
    archive.append_blocks(LEDGER, [block(n) for n in range(150)])
    result = archive.icrc3_get_blocks(
        [GetBlocksRequest(start=1, length=80), GetBlocksRequest(start=1, length=80)]
    )
    assert len(result.blocks) == 100
    assert result.blocks[80].id == 1
    assert result.log_length == 150


def test_get_blocks_below_minimal_index_traps():
    archive = make_archive(first_index=5)
    with pytest.raises(ArchiveTrap, match="less than the minimal index 5"):
        archive.icrc3_get_blocks([GetBlocksRequest(start=2, length=1)])


def test_get_blocks_missing_block_traps():
    archive = make_archive()
    archive.append_blocks(LEDGER, [block(1)])
    with pytest.raises(ArchiveTrap):
        archive.icrc3_get_blocks([GetBlocksRequest(start=0, length=1)])


def test_get_blocks_rejects_oversized_start():
    archive = make_archive()
    with pytest.raises(ArchiveTrap):
        archive.icrc3_get_blocks([GetBlocksRequest(start=1 << 64, length=1)])


def test_get_blocks_empty_archive():
    archive = make_archive()
    result = archive.icrc3_get_blocks([GetBlocksRequest(start=1, length=5)])
    assert result.blocks == []
    assert result.log_length == 0


def test_update_owner_transfers_control():
    archive = make_archive()
    assert archive.update_owner(LEDGER, OTHER) is True
    assert archive.get_owner() == OTHER
    with pytest.raises(NotOwnerError):
        archive.update_owner(LEDGER, LEDGER)
    archive.append_blocks(OTHER, [block(1)])
    assert archive.get_transaction(1) == block(1)


def test_wallet_receive_accepts_everything():
    archive = make_archive(balance=1000)
    assert archive.wallet_receive(0).accepted == 0
    assert archive.wallet_balance() == 1000
    assert archive.wallet_receive(500).accepted == 500
    assert archive.wallet_balance() == 1500


def test_snapshot_restore_round_trip():
    archive = make_archive(max_records=4, balance=42)
    archive.append_blocks(LEDGER, [block(1), block(2)])
    archive.update_owner(LEDGER, OTHER)
    restored = Archive.restore(archive.snapshot())
    assert restored.get_owner() == OTHER
    assert restored.remaining_capacity() == 2
    assert restored.wallet_balance() == 42
    assert restored.get_transaction(2) == block(2)
    restored.append_blocks(OTHER, [block(3)])
    assert restored.get_transaction(3) == block(3)
    assert archive.get_transaction(3) is None


def test_single_large_request_is_capped():
    archive = make_archive(max_records=300)
    archive.append_blocks(LEDGER, [block(n) for n in range(250)])
    result = archive.icrc3_get_blocks([GetBlocksRequest(start=1, length=5000)])
    assert len(result.blocks) == 100
    assert result.blocks[0].id == 1
    assert result.blocks[-1].id == 100