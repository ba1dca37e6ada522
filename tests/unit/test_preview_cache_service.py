"""
Unit tests for the import preview cache.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

from services import preview_cache_service


class TestPreviewCache:

    def test_store_and_retrieve(self):
        session = MagicMock()

        preview_id = preview_cache_service.store_session(session)

        assert preview_cache_service.retrieve_session(preview_id) is session

    def test_ids_are_unique(self):
        first = preview_cache_service.store_session(MagicMock())
        second = preview_cache_service.store_session(MagicMock())

        assert first != second

    def test_unknown_id(self):
        assert preview_cache_service.retrieve_session("missing") is None

    def test_delete(self):
        preview_id = preview_cache_service.store_session(MagicMock())

        preview_cache_service.delete_session(preview_id)
        preview_cache_service.delete_session(preview_id)

        assert preview_cache_service.retrieve_session(preview_id) is None

    def test_expired_session_is_dropped(self):
        preview_id = preview_cache_service.store_session(MagicMock(), ttl_minutes=5)
        later = datetime.now() + timedelta(minutes=6)

        with patch("services.preview_cache_service.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert preview_cache_service.retrieve_session(preview_id) is None

        assert preview_id not in preview_cache_service._cache
