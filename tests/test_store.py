"""Tests for the SQLite link store."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from shortlink.database.models import ShortLink
from shortlink.database.sqlite import SQLiteLinkStore
from shortlink.errors import StoreError


class TestSQLiteLinkStore:
    """Test link store operations."""

    def test_ids_start_at_one_and_increase(self, test_store, sample_urls):
        """Auto-increment ids start at 1."""
        ids = [test_store.insert(url) for url in sample_urls]
        assert ids == [1, 2, 3]

    def test_find_by_id(self, test_store):
        """Inserted links are immediately visible."""
        created_at = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        record_id = test_store.insert("https://example.com/a", created_at=created_at)

        link = test_store.find_by_id(record_id)

        assert isinstance(link, ShortLink)
        assert link.id == record_id
        assert link.url == "https://example.com/a"
        assert link.created_at == created_at
        assert link.chunk == "AQAAAA"

    def test_find_missing(self, test_store):
        """Unknown ids are None, not errors."""
        assert test_store.find_by_id(999999) is None
        assert test_store.find_by_id(-1) is None

    def test_duplicate_urls_get_distinct_ids(self, test_store):
        """The store does not deduplicate."""
        first = test_store.insert("https://example.com")
        second = test_store.insert("https://example.com")
        assert first != second

    def test_count(self, test_store, sample_urls):
        """Count reflects inserts."""
        assert test_store.count() == 0
        for url in sample_urls:
            test_store.insert(url)
        assert test_store.count() == len(sample_urls)

    def test_persists_across_reopen(self, db_path, logger):
        """Links survive closing and reopening the file."""
        with SQLiteLinkStore(db_path=db_path, logger=logger) as store:
            record_id = store.insert("https://example.com/persisted")

        with SQLiteLinkStore(db_path=db_path, logger=logger) as store:
            link = store.find_by_id(record_id)
            assert link is not None
            assert link.url == "https://example.com/persisted"
            # Ids keep increasing after reopen
            assert store.insert("https://example.com/next") == record_id + 1

    def test_in_memory(self, logger):
        """":memory:" gives a private database."""
        with SQLiteLinkStore(db_path=":memory:", logger=logger) as store:
            assert store.insert("https://example.com") == 1

    def test_creates_parent_directory(self, tmp_path, logger):
        """Missing directories are created."""
        path = tmp_path / "nested" / "dir" / "links.db"
        with SQLiteLinkStore(db_path=str(path), logger=logger) as store:
            store.insert("https://example.com")
        assert path.exists()

    def test_health_check(self, test_store):
        """Open store is healthy, closed store is not."""
        assert test_store.health_check()
        test_store.close()
        assert not test_store.health_check()

    def test_closed_store_raises(self, test_store):
        """Operations after close raise StoreError."""
        test_store.close()

        with pytest.raises(StoreError, match="closed"):
            test_store.insert("https://example.com")
        with pytest.raises(StoreError):
            test_store.find_by_id(1)
        with pytest.raises(StoreError):
            test_store.count()

    def test_close_is_idempotent(self, test_store):
        """Closing twice is harmless."""
        test_store.close()
        test_store.close()

    def test_id_space_exhausted(self, test_store):
        """Ids beyond int32 are never handed out."""
        # Move the AUTOINCREMENT counter to the last int32 id
        with test_store._conn:
            test_store._conn.execute(
                "INSERT INTO sqlite_sequence (name, seq) VALUES ('short_links', ?)",
                (2 ** 31 - 2,),
            )

        assert test_store.insert("https://example.com/last") == 2 ** 31 - 1

        with pytest.raises(StoreError, match="exhausted"):
            test_store.insert("https://example.com/overflow")

        assert test_store.count() == 1

    def test_concurrent_inserts_unique(self, test_store):
        """Threaded inserts never share an id."""
        urls = [f"https://example.com/page_{i}" for i in range(100)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(test_store.insert, urls))

        assert len(set(ids)) == len(urls)
        assert sorted(ids) == list(range(1, len(urls) + 1))
        for record_id, url in zip(ids, urls):
            assert test_store.find_by_id(record_id).url == url
