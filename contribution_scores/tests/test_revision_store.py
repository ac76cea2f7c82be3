"""
Test suite for the revision store adapter.

Verifies:
1. Generated SQL (namespace exclusions, window placeholder, parent join)
2. Row to RevisionEvent mapping, including NULL parents and naive timestamps
3. Snapshot reads on a mocked asyncpg pool: query count, arguments, transaction
4. Store errors propagate
"""

from datetime import datetime, timezone

import pytest

from contribution_scores.services.revision_store import (
    PostgresRevisionStore,
    RevisionSnapshot,
    row_to_revision_event,
)
from contribution_scores.sql.revision_queries import (
    get_blocked_users_query,
    get_bot_users_query,
    get_excluded_namespaces,
    get_revision_events_query,
)
from contribution_scores.tests.conftest import REFERENCE_NOW


def make_row(**overrides):
    row = {
        'revision_id': 1,
        'author_id': 7,
        'author_name': 'ExampleUser',
        'author_real_name': '',
        'page_id': 311,
        'namespace': 0,
        'edit_timestamp': datetime(2026, 1, 14, 8, 0, 0),
        'length': 5120,
        'parent_length': 4980,
    }
    row.update(overrides)
    return row


def connection_of(pool):
    return pool.acquire.return_value.__aenter__.return_value


# =============================================================================
# TEST CLASS: SQL Generation
# =============================================================================


class TestRevisionQueries:
    """Text of the generated queries."""

    def test_excluded_namespaces(self) -> None:
        assert get_excluded_namespaces(False) == frozenset({2, 3002})
        assert get_excluded_namespaces(True) == frozenset({3002})

    def test_windowed_query_takes_cutoff_parameter(self) -> None:
        sql = get_revision_events_query(with_window=True)

        assert "r.rev_timestamp > $1" in sql
        assert "NOT IN (2, 3002)" in sql

    def test_unbounded_query_has_no_parameter(self) -> None:
        sql = get_revision_events_query(with_window=False, include_user_namespace=True)

        assert "$1" not in sql
        assert "NOT IN (3002)" in sql

    def test_query_filters_talk_and_anonymous(self) -> None:
        sql = get_revision_events_query(with_window=False)

        assert "MOD(p.page_namespace, 2) = 0" in sql
        assert "r.rev_user <> 0" in sql

    def test_parent_length_from_left_join(self) -> None:
        sql = get_revision_events_query(with_window=True)

        assert "LEFT JOIN revision parent ON parent.rev_id = r.rev_parent_id" in sql
        assert "parent.rev_len AS parent_length" in sql

    def test_real_name_from_postgres_user_table(self) -> None:
        sql = get_revision_events_query(with_window=False)

        assert "LEFT JOIN mwuser u ON u.user_id = r.rev_user" in sql
        assert '"user"' not in sql

    def test_user_status_queries(self) -> None:
        assert "ipb_user <> 0" in get_blocked_users_query()
        assert "ug_group = 'bot'" in get_bot_users_query()


# =============================================================================
# TEST CLASS: Row Mapping
# =============================================================================


class TestRowMapping:
    """asyncpg rows into RevisionEvent."""

    def test_naive_timestamp_is_utc(self) -> None:
        event = row_to_revision_event(make_row())

        assert event.timestamp == datetime(2026, 1, 14, 8, 0, 0, tzinfo=timezone.utc)

    def test_aware_timestamp_kept(self) -> None:
        event = row_to_revision_event(make_row(edit_timestamp=REFERENCE_NOW))

        assert event.timestamp == REFERENCE_NOW

    def test_null_parent_stays_none(self) -> None:
        event = row_to_revision_event(make_row(parent_length=None))

        assert event.parent_length is None

    def test_empty_real_name_becomes_none(self) -> None:
        assert row_to_revision_event(make_row()).author_real_name is None
        assert row_to_revision_event(
            make_row(author_real_name='Example User')
        ).author_real_name == 'Example User'

    def test_fields_copied(self) -> None:
        event = row_to_revision_event(make_row())

        assert event.revision_id == 1
        assert event.author_id == 7
        assert event.page_id == 311
        assert event.length == 5120
        assert event.parent_length == 4980


# =============================================================================
# TEST CLASS: Snapshot Reads
# =============================================================================


class TestPostgresRevisionStore:
    """read_snapshot against a mocked pool."""

    @pytest.mark.asyncio
    async def test_reads_only_events_when_no_exclusions(self, mock_db_pool) -> None:
        conn = connection_of(mock_db_pool)
        conn.fetch.side_effect = [[make_row()]]

        snapshot = await PostgresRevisionStore(mock_db_pool).read_snapshot(
            since=None,
            include_user_namespace=False,
            with_blocked=False,
            with_bots=False,
        )

        assert isinstance(snapshot, RevisionSnapshot)
        assert len(snapshot.events) == 1
        assert snapshot.blocked_author_ids == frozenset()
        assert snapshot.bot_author_ids == frozenset()
        assert conn.fetch.await_count == 1
        # unbounded reads pass no cutoff argument
        assert len(conn.fetch.await_args_list[0].args) == 1

    @pytest.mark.asyncio
    async def test_reads_user_status_when_excluding(self, mock_db_pool) -> None:
        conn = connection_of(mock_db_pool)
        conn.fetch.side_effect = [
            [make_row(), make_row(revision_id=2, author_id=8)],
            [{'user_id': 8}],
            [{'user_id': 9}, {'user_id': 10}],
        ]

        snapshot = await PostgresRevisionStore(mock_db_pool).read_snapshot(
            since=REFERENCE_NOW,
            include_user_namespace=True,
            with_blocked=True,
            with_bots=True,
        )

        assert len(snapshot.events) == 2
        assert snapshot.blocked_author_ids == frozenset({8})
        assert snapshot.bot_author_ids == frozenset({9, 10})
        assert conn.fetch.await_count == 3

        events_call = conn.fetch.await_args_list[0]
        assert events_call.args[1] == REFERENCE_NOW
        assert "NOT IN (3002)" in events_call.args[0]
        assert "ipblocks" in conn.fetch.await_args_list[1].args[0]
        assert "user_groups" in conn.fetch.await_args_list[2].args[0]

    @pytest.mark.asyncio
    async def test_reads_inside_readonly_transaction(self, mock_db_pool) -> None:
        conn = connection_of(mock_db_pool)

        await PostgresRevisionStore(mock_db_pool).read_snapshot(
            since=None,
            include_user_namespace=False,
            with_blocked=False,
            with_bots=True,
        )

        conn.transaction.assert_called_once_with(isolation='repeatable_read', readonly=True)
        assert conn.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_db_pool) -> None:
        conn = connection_of(mock_db_pool)
        conn.fetch.side_effect = ConnectionError("connection reset")

        with pytest.raises(ConnectionError):
            await PostgresRevisionStore(mock_db_pool).read_snapshot(
                since=REFERENCE_NOW,
                include_user_namespace=False,
                with_blocked=True,
                with_bots=True,
            )
