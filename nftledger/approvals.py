"""Approvals of tokens and collections, and the arguments of approval calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .values import Account, Value

Metadata = dict[str, Value]


@dataclass
class LedgerInfo:
    max_approvals_per_token_or_collection: int
    max_revoke_approvals: int
    max_approvals: int
    settle_to_approvals: int
    collection_approval_requires_token: bool


@dataclass(kw_only=True)
class ApprovalInfo:
    """An approval given to a spender account."""

    spender: Account
    from_subaccount: Optional[bytes] = None
    memo: Optional[bytes] = None
    expires_at: Optional[int] = None
    created_at_time: Optional[int] = None


CollectionApproval = ApprovalInfo


@dataclass
class TokenApprovalInfo:
    """The approvals of one token, by owner and then by spender."""

    approvals: dict[Account, dict[Account, ApprovalInfo]] = field(default_factory=dict)

    @classmethod
    def create(cls, owner: Account, approval: ApprovalInfo) -> TokenApprovalInfo:
        info = cls()
        info.approve(owner, approval)
        return info

    def approve(self, owner: Account, approval: ApprovalInfo) -> None:
        """Record an approval, replacing an earlier one for the same spender."""
        self.approvals.setdefault(owner, {})[approval.spender] = approval

    def remove_approve(self, owner: Account, spender: Optional[Account] = None) -> None:
        """Drop one spender's approval, or all of the owner's when no spender is named."""
        approvals = self.approvals.get(owner)
        if approvals is None:
            return
        if spender is None:
            del self.approvals[owner]
        else:
            approvals.pop(spender, None)

    def into_map(self) -> dict[Account, dict[Account, ApprovalInfo]]:
        """The approvals as nested dictionaries ordered by account."""
        return {
            owner: dict(sorted(self.approvals[owner].items()))
            for owner in sorted(self.approvals)
        }


@dataclass
class CollectionApprovalInfo:
    """The approvals of a whole collection, by spender."""

    approvals: dict[Account, ApprovalInfo] = field(default_factory=dict)

    @classmethod
    def create(cls, spender: Account, approval: ApprovalInfo) -> CollectionApprovalInfo:
        info = cls()
        info.approve(spender, approval)
        return info

    def approve(self, spender: Account, approval: ApprovalInfo) -> None:
        self.approvals[spender] = approval

    def remove_approve(self, spender: Account) -> None:
        self.approvals.pop(spender, None)

    def into_map(self) -> dict[Account, ApprovalInfo]:
        return dict(sorted(self.approvals.items()))


@dataclass(frozen=True, order=True)
class CollectionApprovalAccount:
    owner: Account
    spender: Account


@dataclass(kw_only=True)
class InitApprovalsArg:
    max_approvals: Optional[int] = None
    max_approvals_per_token_or_collection: Optional[int] = None
    max_revoke_approvals: Optional[int] = None
    settle_to_approvals: Optional[int] = None
    collection_approval_requires_token: Optional[bool] = None


@dataclass
class ApproveTokenArg:
    token_id: int
    approval_info: ApprovalInfo


@dataclass
class TokenApproval:
    token_id: int
    approval_info: ApprovalInfo


@dataclass
class ApproveCollectionArg:
    approval_info: ApprovalInfo


@dataclass(kw_only=True)
class RevokeTokenApprovalArg:
    token_id: int
    from_subaccount: Optional[bytes] = None
    spender: Optional[Account] = None
    memo: Optional[bytes] = None
    created_at_time: Optional[int] = None


@dataclass(kw_only=True)
class RevokeCollectionApprovalArg:
    from_subaccount: Optional[bytes] = None
    spender: Optional[Account] = None
    memo: Optional[bytes] = None
    created_at_time: Optional[int] = None


@dataclass(kw_only=True)
class IsApprovedArg:
    spender: Account
    token_id: int
    from_subaccount: Optional[bytes] = None


@dataclass(kw_only=True)
class TransferFromArg:
    from_: Account
    to: Account
    token_id: int
    spender_subaccount: Optional[bytes] = None
    memo: Optional[bytes] = None
    created_at_time: Optional[int] = None