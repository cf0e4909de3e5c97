from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from ...assignments.model import DepartmentAssignment
from ...core.enums import RequestStatus
from ...users.model import User
from ..model import LeaveRequestWithStudent
from .factory import VisibilityPolicyFactory

_EPOCH = datetime.min


class OrderBy(str, Enum):
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"


def _sort_key(order_by: OrderBy):
    if order_by == OrderBy.REVIEWED:
        return lambda item: (item.request.reviewed_at or _EPOCH, item.request.request_id)
    return lambda item: (item.request.submitted_at or _EPOCH, item.request.request_id)


def resolve_visible_requests(
    reviewer: User,
    requests: Iterable[LeaveRequestWithStudent],
    *,
    advisor_assignments: Iterable[DepartmentAssignment] = (),
    status: Optional[RequestStatus] = RequestStatus.PENDING,
    order_by: OrderBy = OrderBy.SUBMITTED,
    factory: Optional[VisibilityPolicyFactory] = None,
) -> List[LeaveRequestWithStudent]:
    """Return the requests `reviewer` may see, newest first.

    Pure function of its inputs: `status=None` keeps every status; the
    student's department/year decide scoping, so students without them are
    visible to admins only.
    """
    policy = (factory or VisibilityPolicyFactory()).for_reviewer(reviewer, advisor_assignments)

    visible = [
        item
        for item in requests
        if (status is None or item.request.status == status)
        and policy.allows(item.student.department, item.student.year)
    ]
    return sorted(visible, key=_sort_key(order_by), reverse=True)
