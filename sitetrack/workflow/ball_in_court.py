"""
Ball-in-court resolution for RFIs: who has to act next, and what they
should do.
"""

from enum import Enum
from typing import Optional, Union

from typing_extensions import assert_never

from ..models.rfi import RFI, BallInCourt
from ..models.status import RFIStatus

ACTION_COMPLETE_DRAFT = "Complete and submit RFI"
ACTION_RESPOND = "Review and provide response"
ACTION_CLOSE = "Review answer and close RFI"
ACTION_NONE = "No action required"
ACTION_UNKNOWN = "Unknown status"


class ColorToken(str, Enum):
    """Semantic color category used when rendering an RFI status"""
    GRAY = "gray"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"


def resolve_ball_in_court(rfi: RFI) -> BallInCourt:
    """
    Determine the current ball-in-court holder and suggested next action.

    Defined for every input: an unrecognised status yields
    ``"Unknown status"`` with ``is_blocked`` set. An RFI under review with
    neither a user nor an organisation assigned is also blocked.
    """
    status = rfi.rfi_status

    if status is None:
        return BallInCourt(None, None, ACTION_UNKNOWN, True)

    if status is RFIStatus.DRAFT:
        return BallInCourt(rfi.created_by, None, ACTION_COMPLETE_DRAFT, False)
    elif status is RFIStatus.SUBMITTED or status is RFIStatus.UNDER_REVIEW:
        return BallInCourt(
            rfi.assigned_to_id,
            rfi.assigned_to_org,
            ACTION_RESPOND,
            not rfi.assigned_to_id and not rfi.assigned_to_org,
        )
    elif status is RFIStatus.ANSWERED:
        return BallInCourt(rfi.created_by, None, ACTION_CLOSE, False)
    elif status is RFIStatus.CLOSED or status is RFIStatus.CANCELLED:
        return BallInCourt(None, None, ACTION_NONE, False)
    else:
        assert_never(status)


def is_held_by(rfi: RFI, user_id: Optional[str]) -> bool:
    """
    Check if the given user holds the ball-in-court.

    A ``None`` user never holds it, even for closed or cancelled RFIs where
    nobody does.
    """
    if user_id is None:
        return False
    return resolve_ball_in_court(rfi).user_id == user_id


def status_color(status: Union[RFIStatus, str, None]) -> ColorToken:
    """Color category for an RFI status; unrecognised statuses are gray"""
    try:
        member = RFIStatus(status)
    except (TypeError, ValueError):
        return ColorToken.GRAY

    if member is RFIStatus.DRAFT:
        return ColorToken.GRAY
    elif member is RFIStatus.SUBMITTED or member is RFIStatus.UNDER_REVIEW:
        return ColorToken.BLUE
    elif member is RFIStatus.ANSWERED:
        return ColorToken.YELLOW
    elif member is RFIStatus.CLOSED:
        return ColorToken.GREEN
    elif member is RFIStatus.CANCELLED:
        return ColorToken.RED
    else:
        assert_never(member)
