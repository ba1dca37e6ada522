"""
Unit tests for dashboard aggregation.
"""

from datetime import date, timedelta

from models.proposal import Proposal, ProposalStatus
from models.user import User
from services.dashboard_service import compute_dashboard_stats, filter_proposals

from tests.factories import ProposalFactory, UserFactory

TODAY = date(2025, 3, 10)


def proposal(**kwargs) -> Proposal:
    return Proposal(**ProposalFactory.create(**kwargs))


class TestComputeDashboardStats:

    def test_empty(self):
        stats = compute_dashboard_stats([], TODAY)

        assert stats.total_count == 0
        assert stats.total_value == 0
        assert set(stats.by_status) == {s.value for s in ProposalStatus}
        assert all(count == 0 for count in stats.by_status.values())

    def test_counts_and_values(self):
        proposals = [
            proposal(status="Primeira proposta", slots=10, unit_value=50.0),
            proposal(status="Concluída", slots=2, unit_value=100.0),
            proposal(status="Concluída", slots=1, unit_value=30.0),
        ]

        stats = compute_dashboard_stats(proposals, TODAY)

        assert stats.total_count == 3
        assert stats.sent_count == 3
        assert stats.by_status["Concluída"] == 2
        assert stats.by_status["Pendente"] == 0
        assert stats.approved_count == 2
        assert stats.total_slots == 13
        assert stats.total_value == 730.0
        assert stats.total_proposed_value == 730.0
        assert stats.total_approved_value == 230.0

    def test_package_items_count_toward_value(self):
        p = proposal(slots=0, package_items=[
            {"event_id": "evt-1", "quantidade_vagas": 4, "valor_unitario": 25.0},
        ])

        stats = compute_dashboard_stats([p], TODAY)

        assert stats.total_value == 100.0
        assert stats.total_slots == 4

    def test_value_uses_stored_item_total(self):
        p = proposal(slots=3, unit_value=33.333)

        stats = compute_dashboard_stats([p], TODAY)

        assert p.items[0].total_value == 100.0
        assert stats.total_value == 100.0
        assert stats.total_proposed_value == 100.0

    def test_follow_ups(self):
        proposals = [
            proposal(return_date=TODAY),
            proposal(return_date=TODAY - timedelta(days=2)),
            proposal(return_date=TODAY - timedelta(days=2), status="Concluída"),
            proposal(return_date=TODAY + timedelta(days=1)),
        ]

        stats = compute_dashboard_stats(proposals, TODAY)

        assert stats.follow_ups_today == 1
        assert stats.follow_ups_delayed == 1
        assert stats.as_of == TODAY


class TestFilterProposals:

    def test_filters_by_praca_and_owner(self):
        proposals = [
            proposal(praca_id="SP", owner_user_id="u1"),
            proposal(praca_id="RJ", owner_user_id="u1"),
            proposal(praca_id="SP", owner_user_id="u2"),
        ]

        assert len(filter_proposals(proposals, praca_id="SP")) == 2
        assert len(filter_proposals(proposals, owner_user_id="u1")) == 2
        assert len(filter_proposals(proposals, praca_id="SP", owner_user_id="u2")) == 1

    def test_non_admin_sees_own_and_praca_proposals(self):
        viewer = User(**UserFactory.create(id="u1", praca_ids=["CAMP"]))
        proposals = [
            proposal(praca_id="RJ", owner_user_id="u1"),
            proposal(praca_id="CAMP", owner_user_id="u2"),
            proposal(praca_id="SP", owner_user_id="u3"),
        ]

        visible = filter_proposals(proposals, viewer=viewer)

        assert [(p.praca_id, p.owner_user_id) for p in visible] == [("RJ", "u1"), ("CAMP", "u2")]

    def test_admin_sees_everything(self):
        viewer = User(**UserFactory.create(role="admin", praca_ids=[]))
        proposals = [proposal(praca_id="RJ"), proposal(praca_id="SP")]

        assert len(filter_proposals(proposals, viewer=viewer)) == 2
