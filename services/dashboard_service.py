"""
Dashboard aggregation over the proposal collection.

Pure reductions; the route decides which proposals are visible.
"""

from datetime import date
from typing import Iterable, Optional

from models.dashboard import DashboardStats
from models.proposal import Proposal, ProposalStatus
from models.user import User


def filter_proposals(
    proposals: Iterable[Proposal],
    praca_id: Optional[str] = None,
    owner_user_id: Optional[str] = None,
    viewer: Optional[User] = None,
) -> list[Proposal]:
    """
    Narrow proposals to what a dashboard should show.

    Non-admin viewers only see proposals they own or that belong to one
    of their praças.
    """
    result = list(proposals)

    if praca_id:
        result = [p for p in result if p.praca_id == praca_id]
    if owner_user_id:
        result = [p for p in result if p.owner_user_id == owner_user_id]
    if viewer is not None and not viewer.is_admin:
        result = [
            p for p in result
            if p.owner_user_id == viewer.id or p.praca_id in viewer.praca_ids
        ]

    return result


def compute_dashboard_stats(proposals: Iterable[Proposal], today: date) -> DashboardStats:
    """
    Aggregate counts and values.

    Args:
        proposals: Visible proposals
        today: Reference date for follow-ups

    Returns:
        DashboardStats with every status present in by_status
    """
    by_status = {status.value: 0 for status in ProposalStatus}
    total_proposed_value = 0.0
    total_approved_value = 0.0
    total_slots = 0
    follow_ups_today = 0
    follow_ups_delayed = 0
    count = 0

    for p in proposals:
        count += 1
        by_status[p.status.value] += 1

        value = p.total_value
        total_proposed_value += value
        total_slots += p.total_slots
        if p.status == ProposalStatus.CONCLUIDA:
            total_approved_value += value

        if p.return_date == today:
            follow_ups_today += 1
        elif p.is_overdue(today):
            follow_ups_delayed += 1

    return DashboardStats(
        total_count=count,
        by_status=by_status,
        total_value=round(total_proposed_value, 2),
        total_slots=total_slots,
        follow_ups_today=follow_ups_today,
        follow_ups_delayed=follow_ups_delayed,
        sent_count=count,
        approved_count=by_status[ProposalStatus.CONCLUIDA.value],
        total_proposed_value=round(total_proposed_value, 2),
        total_approved_value=round(total_approved_value, 2),
        as_of=today,
    )
