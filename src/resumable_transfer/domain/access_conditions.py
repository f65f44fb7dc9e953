"""Optimistic-concurrency preconditions and live resource state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from resumable_transfer.domain.errors import InvalidArgumentError

ANY_FINGERPRINT = "*"


class AccessConditionKind(StrEnum):
    """Condition tags."""

    NONE = "none"
    IF_MATCH = "if-match"
    IF_NONE_MATCH = "if-none-match"
    IF_NOT_EXISTS = "if-not-exists"
    IF_EXISTS = "if-exists"


_FINGERPRINT_KINDS = frozenset({AccessConditionKind.IF_MATCH, AccessConditionKind.IF_NONE_MATCH})


@dataclass(slots=True, frozen=True)
class ResourceState:
    """Metadata returned by a single backend probe."""

    exists: bool
    fingerprint: str | None = None
    parent_exists: bool = True


@dataclass(slots=True, frozen=True)
class AccessCondition:
    """Precondition evaluated once against the live resource.

    `if-match` and `if-none-match` carry a fingerprint; `*` stands for any
    existing version, mirroring HTTP conditional headers.
    """

    kind: AccessConditionKind = AccessConditionKind.NONE
    fingerprint: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _FINGERPRINT_KINDS:
            if self.fingerprint is None or not self.fingerprint.strip():
                raise InvalidArgumentError(
                    f"Access condition '{self.kind.value}' requires a fingerprint."
                )
        elif self.fingerprint is not None:
            raise InvalidArgumentError(
                f"Access condition '{self.kind.value}' does not take a fingerprint."
            )

    @classmethod
    def none(cls) -> AccessCondition:
        return cls()

    @classmethod
    def if_match(cls, fingerprint: str) -> AccessCondition:
        return cls(AccessConditionKind.IF_MATCH, fingerprint)

    @classmethod
    def if_none_match(cls, fingerprint: str) -> AccessCondition:
        return cls(AccessConditionKind.IF_NONE_MATCH, fingerprint)

    @classmethod
    def if_not_exists(cls) -> AccessCondition:
        return cls(AccessConditionKind.IF_NOT_EXISTS)

    @classmethod
    def if_exists(cls) -> AccessCondition:
        return cls(AccessConditionKind.IF_EXISTS)

    @property
    def is_none(self) -> bool:
        return self.kind is AccessConditionKind.NONE

    def is_satisfied_by(self, state: ResourceState) -> bool:
        """Evaluate the condition against probed resource state."""

        if self.kind is AccessConditionKind.NONE:
            return True
        if self.kind is AccessConditionKind.IF_EXISTS:
            return state.exists
        if self.kind is AccessConditionKind.IF_NOT_EXISTS:
            return not state.exists
        if self.kind is AccessConditionKind.IF_MATCH:
            if not state.exists:
                return False
            return self.fingerprint == ANY_FINGERPRINT or state.fingerprint == self.fingerprint
        # if-none-match
        if not state.exists:
            return True
        if self.fingerprint == ANY_FINGERPRINT:
            return False
        return state.fingerprint != self.fingerprint

    def describe(self) -> str:
        """Short human-readable rendering for error messages."""

        if self.fingerprint is None:
            return self.kind.value
        return f"{self.kind.value}({self.fingerprint})"


__all__ = [
    "ANY_FINGERPRINT",
    "AccessCondition",
    "AccessConditionKind",
    "ResourceState",
]
