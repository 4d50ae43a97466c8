"""Membership lifecycle transition table."""

from nsregistry.core.exceptions import InvalidTransition
from nsregistry.core.membership.types import MembershipState

# Allowed moves out of each state. Terminal states map to an empty set.
TRANSITIONS: dict[MembershipState, frozenset[MembershipState]] = {
    MembershipState.PENDING: frozenset(
        {MembershipState.ACTIVE, MembershipState.DECLINED, MembershipState.REMOVED}
    ),
    MembershipState.ACTIVE: frozenset({MembershipState.REMOVED}),
    MembershipState.DECLINED: frozenset(),
    MembershipState.REMOVED: frozenset(),
}


def can_transition(current: MembershipState, target: MembershipState) -> bool:
    """Check whether a membership may move from ``current`` to ``target``."""
    return target in TRANSITIONS[current]


def ensure_transition(current: MembershipState, target: MembershipState) -> None:
    """Validate a transition before handing it to the repository.

    Raises:
        InvalidTransition: If the move is not in the table.
    """
    if not can_transition(current, target):
        raise InvalidTransition(current.value, target.value)


def is_terminal(state: MembershipState) -> bool:
    """Check whether no further transitions are possible from ``state``."""
    return not TRANSITIONS[state]
