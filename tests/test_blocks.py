import pytest

from nftledger.blocks import (
    ArchiveLedgerInfo,
    ArchiveSetting,
    Block,
    IndexType,
    InitArchiveArg,
    account_value,
)
from nftledger.transactions import Transaction
from nftledger.values import Account, Principal, Value


def _account(tag: int, sub: bool = False) -> Account:
    return Account(Principal(bytes([tag])), bytes(32) if sub else None)


def test_account_value_without_subaccount():
    acc = _account(7)
    value = account_value(acc)
    assert value.as_array() == [Value.blob(b"\x07")]


def test_account_value_with_subaccount():
    acc = _account(7, sub=True)
    assert account_value(acc).as_array() == [Value.blob(b"\x07"), Value.blob(bytes(32))]


def test_transfer_block_layout():
    src, dst = _account(1), _account(2)
    tx = Transaction.transfer(50, 9, src, dst, b"hi")
    entries = Block.from_transaction(None, tx).into_map()
    assert set(entries) == {"btype", "ts", "tx"}
    assert entries["btype"] == Value.text("7xfer")
    assert entries["ts"] == Value.nat(50)
    body = entries["tx"].as_map()
    assert set(body) == {"tid", "from", "to", "memo", "ts"}
    assert body["tid"] == Value.nat(9)
    assert body["from"] == account_value(src)
    assert body["to"] == account_value(dst)
    assert body["memo"] == Value.blob(b"hi")
    assert body["ts"] == entries["ts"]


def test_block_with_parent_hash_and_meta():
    meta = {"name": Value.text("nft")}
    tx = Transaction.mint(3, 1, None, _account(2), meta)
    phash = bytes(range(32))
    entries = Block.from_transaction(phash, tx).into_map()
    assert entries["phash"] == Value.blob(phash)
    body = entries["tx"].as_map()
    assert body["meta"] == Value.map(meta)
    assert "from" not in body


def test_approve_block_records_spender_and_expiry():
    tx = Transaction.approve(5, 4, _account(1), _account(3), 99)
    body = Block.from_transaction(None, tx).into_map()["tx"].as_map()
    assert body["spender"] == account_value(_account(3))
    assert body["exp"] == Value.nat(99)


def test_bad_parent_hash_rejected():
    tx = Transaction.transfer(1, 1, _account(1), _account(2))
    with pytest.raises(ValueError):
        Block.from_transaction(b"short", tx)


def test_from_value_requires_map():
    with pytest.raises(ValueError):
        Block.from_value(Value.nat(1))
    block = Block.from_value(Value.map({"a": Value.nat(1)}))
    assert block.into_map() == {"a": Value.nat(1)}


def test_from_map_round_trip():
    entries = {"x": Value.text("y"), "n": Value.nat(2)}
    assert Block.from_map(entries).into_map() == entries


def test_into_map_of_non_map_block():
    with pytest.raises(TypeError):
        Block(Value.nat(1)).into_map()


def test_archive_setting_defaults():
    info = ArchiveLedgerInfo.create(None)
    assert info.setting.archive_cycles == 2_000_000_000_000
    assert info.setting.max_records_in_archive_instance == 10_000_000
    assert info.setting.archive_index_type is IndexType.STABLE
    assert info.setting == ArchiveSetting()


def test_create_lists_supported_blocks():
    info = ArchiveLedgerInfo.create(None)
    names = [b.block_type for b in info.supported_blocks]
    assert names == [
        "7mint", "7burn", "7xfer", "7update",
        "37appr", "37appr_coll", "37revoke", "37revoke_coll", "37xfer",
    ]
    assert all(
        ("ICRC-7" in b.url) == b.block_type.startswith("7")
        for b in info.supported_blocks
    )


def test_default_info_has_no_blocks():
    info = ArchiveLedgerInfo()
    assert info.supported_blocks == []
    assert info.archives == {}


def test_create_keeps_given_setting():
    setting = ArchiveSetting(max_active_records=5)
    assert ArchiveLedgerInfo.create(setting).setting is setting


def test_init_archive_arg_to_setting():
    controllers = [Principal(b"\x01")]
    arg = InitArchiveArg(
        archive_controllers=controllers,
        archive_cycles=10,
        archive_index_type=IndexType.MANAGED,
        max_active_records=20,
        max_archive_pages=30,
        max_records_in_archive_instance=40,
        max_records_to_archive=50,
        settle_to_records=60,
    )
    setting = arg.to_archive_setting()
    assert setting == ArchiveSetting(controllers, 10, IndexType.MANAGED, 20, 30, 40, 50, 60)