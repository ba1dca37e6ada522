"""
Unit tests for ProposalService and UserService.

Run: pytest tests/unit/test_proposal_service.py -v
"""

import pytest

from services.proposal_service import ProposalService, get_proposal_service
from services.user_service import UserService
from models.proposal import Proposal
from exceptions import DatabaseError, UserNotFoundError

from tests.factories import ProposalFactory, UserFactory


class TestProposalServiceGetAll:
    """Tests for ProposalService.get_all()"""

    def test_get_all_returns_proposals(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("proposals", ProposalFactory.create_batch(3))
        service = ProposalService()

        proposals = service.get_all()

        assert len(proposals) == 3
        assert all(isinstance(p, Proposal) for p in proposals)

    def test_get_all_filters(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("proposals", [
            ProposalFactory.create(praca_id="SP", owner_user_id="u1"),
            ProposalFactory.create(praca_id="RJ", owner_user_id="u1"),
            ProposalFactory.create(praca_id="SP", owner_user_id="u2"),
        ])
        service = ProposalService()

        assert len(service.get_all(praca_id="SP")) == 2
        assert len(service.get_all(praca_id="SP", owner_user_id="u2")) == 1

    def test_get_all_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_failure("proposals", Exception("timeout"))
        service = ProposalService()

        with pytest.raises(DatabaseError):
            service.get_all()


class TestProposalServiceAppendMany:
    """Tests for ProposalService.append_many()"""

    def test_appends_in_one_insert(self, mock_db, mock_supabase):
        proposals = [Proposal(**row) for row in ProposalFactory.create_batch(3)]
        service = ProposalService()

        result = service.append_many(proposals)

        assert result == proposals
        assert mock_supabase.insert_calls == 1
        stored = mock_supabase.inserted["proposals"]
        assert [row["id"] for row in stored] == [p.id for p in proposals]
        assert stored[0]["items"][0]["slots"] == 10
        assert isinstance(stored[0]["sent_date"], str)

    def test_empty_is_noop(self, mock_db, mock_supabase):
        assert ProposalService().append_many([]) == []
        assert mock_supabase.insert_calls == 0

    def test_failure_raises_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_failure("proposals", Exception("insert rejected"))
        proposals = [Proposal(**ProposalFactory.create())]

        with pytest.raises(DatabaseError) as exc_info:
            ProposalService().append_many(proposals)

        assert exc_info.value.details["count"] == 1
        assert "proposals" not in mock_supabase.inserted

    def test_singleton(self, mock_db):
        assert get_proposal_service() is get_proposal_service()


class TestUserServiceGetById:
    """Tests for UserService.get_by_id()"""

    def test_returns_user(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("users", [
            UserFactory.create(id="u1", praca_ids=None, praca_padrao_id="SP"),
            UserFactory.create(id="u2"),
        ])

        user = UserService().get_by_id("u2")

        assert user.id == "u2"

    def test_splits_legacy_praca_string(self, mock_db, mock_supabase):
        row = UserFactory.create(id="u1")
        row["praca_ids"] = "SP; CAMP;"
        mock_supabase.set_table_data("users", [row])

        user = UserService().get_by_id("u1")

        assert user.praca_ids == ["SP", "CAMP"]

    def test_unknown_user(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("users", [])

        with pytest.raises(UserNotFoundError):
            UserService().get_by_id("ghost")

    def test_inactive_user(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("users", [UserFactory.create(id="u1", active=False)])

        with pytest.raises(UserNotFoundError):
            UserService().get_by_id("u1")

    def test_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_failure("users", Exception("timeout"))

        with pytest.raises(DatabaseError):
            UserService().get_by_id("u1")
