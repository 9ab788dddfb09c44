"""Booking status state machine — transition table and authorization matrix.

Everything the workflow needs to decide whether a status change is legal
lives here as plain data, so the rules can be read (and tested) in one place:

- ALLOWED_TRANSITIONS: source status → statuses it may move to
- TARGET_ROLES: target status → the role allowed to set it
- PENDING_STATUS / PROCESSED_STATUSES: role → dashboard queues
- STAGE_FIELDS: target status → (timestamp column, remarks column)
"""
from datetime import datetime
from typing import Optional

from app.errors import Forbidden, InvalidTransition
from app.models.booking import Booking, BookingStatus as S
from app.models.user import User, UserRole as R

ACTIVE_STATUSES = frozenset({
    S.submitted,
    S.gd_approved,
    S.secretary_approved,
    S.it_setup_complete,
    S.completed,
})

EDITABLE_STATUSES = frozenset({S.submitted, S.gd_rejected, S.secretary_rejected})

TERMINAL_STATUSES = frozenset({S.completed, S.cancelled})

# `submitted` never appears as a target: it is entered by creation or resubmission only.
ALLOWED_TRANSITIONS: dict[S, frozenset[S]] = {
    S.submitted: frozenset({S.gd_approved, S.gd_rejected, S.cancelled}),
    S.gd_approved: frozenset({S.secretary_approved, S.secretary_rejected, S.cancelled}),
    S.gd_rejected: frozenset({S.cancelled}),
    S.secretary_approved: frozenset({S.it_setup_complete, S.cancelled}),
    S.secretary_rejected: frozenset({S.cancelled}),
    S.it_setup_complete: frozenset({S.completed}),
    S.completed: frozenset(),
    S.cancelled: frozenset(),
}

# Cancellation is owner-gated rather than role-gated, see authorize_transition.
TARGET_ROLES: dict[S, R] = {
    S.gd_approved: R.group_director,
    S.gd_rejected: R.group_director,
    S.secretary_approved: R.secretary,
    S.secretary_rejected: R.secretary,
    S.it_setup_complete: R.it_team,
    S.completed: R.it_team,
}

PENDING_STATUS: dict[R, S] = {
    R.group_director: S.submitted,
    R.secretary: S.gd_approved,
    R.it_team: S.secretary_approved,
}

PROCESSED_STATUSES: dict[R, frozenset[S]] = {
    R.group_director: frozenset({
        S.gd_approved, S.gd_rejected, S.secretary_approved, S.secretary_rejected,
        S.it_setup_complete, S.completed, S.cancelled,
    }),
    R.secretary: frozenset({
        S.secretary_approved, S.secretary_rejected, S.it_setup_complete, S.completed, S.cancelled,
    }),
    R.it_team: frozenset({S.it_setup_complete, S.completed, S.cancelled}),
}

STAGE_FIELDS: dict[S, tuple[str, str]] = {
    S.gd_approved: ("gd_approval_date", "gd_remarks"),
    S.gd_rejected: ("gd_approval_date", "gd_remarks"),
    S.secretary_approved: ("secretary_approval_date", "secretary_remarks"),
    S.secretary_rejected: ("secretary_approval_date", "secretary_remarks"),
    S.it_setup_complete: ("it_setup_date", "it_remarks"),
}

DEFAULT_REMARKS: dict[S, str] = {
    S.submitted: "Booking request submitted",
    S.gd_approved: "Approved by group director",
    S.gd_rejected: "Rejected by group director",
    S.secretary_approved: "Approved by secretary",
    S.secretary_rejected: "Rejected by secretary",
    S.it_setup_complete: "IT setup completed",
    S.completed: "Booking completed",
    S.cancelled: "Booking cancelled by user",
}

RESUBMITTED_REMARKS = "Booking updated and resubmitted for approval"


def parse_status(value) -> S:
    """Coerce a raw value to BookingStatus, raising InvalidTransition for unknown values."""
    try:
        return S(value)
    except ValueError:
        raise InvalidTransition(f"Unknown booking status: {value!r}")


def authorize_transition(booking: Booking, target: S, actor: User) -> None:
    """Raise Forbidden unless `actor` may move `booking` to `target`."""
    if target == S.cancelled:
        if booking.user_id != actor.user_id:
            raise Forbidden("Only the booking owner may cancel this booking")
        return

    required = TARGET_ROLES.get(target)
    if required is not None and actor.role != required:
        raise Forbidden(f"Role '{actor.role.value}' may not set status '{target.value}'")


def validate_transition(current: S, target: S) -> None:
    """Raise InvalidTransition unless the transition table permits current → target."""
    if target == S.submitted:
        raise InvalidTransition("Bookings re-enter 'submitted' only by editing and resubmitting")
    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransition(f"Cannot move booking from '{current.value}' to '{target.value}'")


def apply_stage_fields(booking: Booking, target: S, remarks: Optional[str], at: datetime) -> None:
    """Stamp the stage timestamp and remarks columns for `target`, if it has a stage."""
    fields = STAGE_FIELDS.get(target)
    if fields is None:
        return
    date_field, remarks_field = fields
    setattr(booking, date_field, at)
    setattr(booking, remarks_field, remarks)
