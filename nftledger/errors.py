"""Errors reported by the ledger's operations."""

from __future__ import annotations

from typing import ClassVar, Mapping

_INT_FIELDS = frozenset({"ledger_time", "duplicate_of", "error_code"})
_TEXT_FIELDS = frozenset({"message"})

_GENERIC = {
    "GenericError": ("error_code", "message"),
    "GenericBatchError": ("error_code", "message"),
}


class LedgerError(Exception):
    """Base of all ledger errors; each names one variant and its fields."""

    VARIANTS: ClassVar[Mapping[str, tuple[str, ...]]] = {}

    def __init__(self, variant: str, **fields: object) -> None:
        try:
            expected = self.VARIANTS[variant]
        except KeyError:
            raise ValueError(
                f"{type(self).__name__} has no variant {variant!r}"
            ) from None
        missing = [name for name in expected if name not in fields]
        extra = sorted(set(fields) - set(expected))
        if missing or extra:
            raise TypeError(
                f"{type(self).__name__}.{variant} takes fields {list(expected)}, "
                f"missing {missing}, unexpected {extra}"
            )
        for name, value in fields.items():
            if name in _INT_FIELDS and (
                isinstance(value, bool) or not isinstance(value, int) or value < 0
            ):
                raise ValueError(f"{name} must be a non-negative integer")
            if name in _TEXT_FIELDS and not isinstance(value, str):
                raise TypeError(f"{name} must be a string")
        self.variant = variant
        self.fields = {name: fields[name] for name in expected}
        for name, value in self.fields.items():
            setattr(self, name, value)
        super().__init__(self._describe())

    def _describe(self) -> str:
        if not self.fields:
            return self.variant
        inner = ", ".join(f"{name}={value!r}" for name, value in self.fields.items())
        return f"{self.variant}({inner})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.variant, self.fields) == (other.variant, other.fields)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.variant, tuple(self.fields.items())))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self._describe()}"


class TransferError(LedgerError):
    VARIANTS = {
        "NonExistingTokenId": (),
        "InvalidRecipient": (),
        "Unauthorized": (),
        "TooOld": (),
        "CreatedInFuture": ("ledger_time",),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }


class BurnError(LedgerError):
    VARIANTS = {
        "Unauthorized": (),
        "NonExistingTokenId": (),
        **_GENERIC,
    }


class MintError(LedgerError):
    VARIANTS = {
        "SupplyCapReached": (),
        "Unauthorized": (),
        "TokenIdAlreadyExist": (),
        "TokenIdMinimumLimit": (),
        **_GENERIC,
    }


class InsertTransactionError(LedgerError):
    VARIANTS = {
        "SyncPending": (),
        "NotSetArchiveCanister": (),
        "RemoteError": (),
        "Unexpected": ("message",),
        "CantWrite": (),
        "InvalidId": (),
    }


class ApproveTokenError(LedgerError):
    VARIANTS = {
        "TooOld": (),
        "InvalidSpender": (),
        "CreatedInFuture": ("ledger_time",),
        "NonExistingTokenId": (),
        "Unauthorized": (),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }


class ApproveCollectionError(LedgerError):
    VARIANTS = {
        "InvalidSpender": (),
        "TooOld": (),
        "CreatedInFuture": ("ledger_time",),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }


class RevokeTokenApprovalError(LedgerError):
    VARIANTS = {
        "TooOld": (),
        "CreatedInFuture": ("ledger_time",),
        "NonExistingTokenId": (),
        "Unauthorized": (),
        "ApprovalDoesNotExist": (),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }


class RevokeCollectionApprovalError(LedgerError):
    VARIANTS = {
        "TooOld": (),
        "CreatedInFuture": ("ledger_time",),
        "Unauthorized": (),
        "ApprovalDoesNotExist": (),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }


class TransferFromError(LedgerError):
    VARIANTS = {
        "NonExistingTokenId": (),
        "InvalidRecipient": (),
        "Unauthorized": (),
        "TooOld": (),
        "CreatedInFuture": ("ledger_time",),
        "Duplicate": ("duplicate_of",),
        **_GENERIC,
    }