"""Tests for the in-memory user registry."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from driver_auth.exceptions import DuplicateUserError, UserNotFoundError


class TestInMemoryUserRegistry:
    def test_save_and_get(self, memory_registry):
        user_id = memory_registry.save_user("a@x.com", b"hash")

        record = memory_registry.get_user_by_email("a@x.com")
        assert user_id == 1
        assert record.id == 1
        assert record.password_hash == b"hash"

    def test_duplicate(self, memory_registry):
        memory_registry.save_user("a@x.com", b"hash")
        with pytest.raises(DuplicateUserError):
            memory_registry.save_user("a@x.com", b"other")
        assert memory_registry.get_user_by_email("a@x.com").password_hash == b"hash"

    def test_not_found(self, memory_registry):
        with pytest.raises(UserNotFoundError):
            memory_registry.get_user_by_email("a@x.com")

    def test_parallel_saves_of_distinct_emails_get_unique_ids(self, memory_registry):
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(
                lambda i: memory_registry.save_user(f"user{i}@x.com", b"hash"),
                range(50),
            ))

        assert sorted(ids) == list(range(1, 51))
        assert memory_registry.count_users() == 50
