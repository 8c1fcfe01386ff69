# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# Tests for lib/supabase_client.py using a mocked Supabase client:
# - Each operation builds the expected PostgREST query
# - Empty results map to None / False (not found)
# - Driver exceptions are wrapped in SupabaseClientError
# =============================================================================

from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


@pytest.fixture
def mock_table():
    """Patch the products table with a chainable mock."""
    table = MagicMock()
    # Every builder method returns the same mock so chains resolve to it
    for method in ("insert", "select", "update", "delete", "eq", "order", "limit"):
        getattr(table, method).return_value = table
    with patch.object(SupabaseClient, "_table", return_value=table):
        yield table


def _respond(table, data):
    table.execute.return_value = MagicMock(data=data)


class TestInsertProduct:

    def test_returns_inserted_row(self, mock_table, sample_product_row):
        _respond(mock_table, [sample_product_row])

        row = SupabaseClient.insert_product("Widget", "A widget", 500)

        assert row == sample_product_row
        mock_table.insert.assert_called_once_with(
            {"name": "Widget", "description": "A widget", "price": 500}
        )

    def test_empty_response_is_an_error(self, mock_table):
        _respond(mock_table, [])

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_product("Widget", "A widget", 500)

        assert exc_info.value.code == "INSERT_PRODUCT_FAILED"

    def test_driver_error_wrapped(self, mock_table):
        mock_table.execute.side_effect = ConnectionError("connection refused")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_product("Widget", "A widget", 500)

        assert "connection refused" in exc_info.value.message


class TestFetchProducts:

    def test_orders_by_updated_at_desc(self, mock_table, sample_product_row):
        _respond(mock_table, [sample_product_row])

        rows = SupabaseClient.fetch_products()

        assert rows == [sample_product_row]
        mock_table.order.assert_called_once_with("updated_at", desc=True)

    def test_none_data_is_empty_list(self, mock_table):
        _respond(mock_table, None)

        assert SupabaseClient.fetch_products() == []


class TestFetchProduct:

    def test_found(self, mock_table, sample_product_row):
        _respond(mock_table, [sample_product_row])

        row = SupabaseClient.fetch_product(UUID(sample_product_row["id"]))

        assert row == sample_product_row
        mock_table.eq.assert_called_once_with("id", sample_product_row["id"])

    def test_not_found_returns_none(self, mock_table):
        _respond(mock_table, [])

        assert SupabaseClient.fetch_product("550e8400-e29b-41d4-a716-446655440000") is None

    def test_query_failure_is_not_not_found(self, mock_table):
        mock_table.execute.side_effect = TimeoutError("timed out")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_product("550e8400-e29b-41d4-a716-446655440000")

        assert exc_info.value.code == "FETCH_PRODUCT_FAILED"


class TestUpdateProduct:

    def test_sends_only_given_fields(self, mock_table, sample_product_row):
        _respond(mock_table, [sample_product_row])

        SupabaseClient.update_product(sample_product_row["id"], {"price": 750})

        mock_table.update.assert_called_once_with({"price": 750})
        mock_table.eq.assert_called_once_with("id", sample_product_row["id"])

    def test_not_found_returns_none(self, mock_table):
        _respond(mock_table, [])

        assert SupabaseClient.update_product("550e8400-e29b-41d4-a716-446655440000", {"price": 1}) is None


class TestDeleteProduct:

    def test_deleted(self, mock_table, sample_product_row):
        _respond(mock_table, [sample_product_row])

        assert SupabaseClient.delete_product(sample_product_row["id"]) is True

    def test_not_found(self, mock_table):
        _respond(mock_table, [])

        assert SupabaseClient.delete_product("550e8400-e29b-41d4-a716-446655440000") is False


class TestClientInit:

    def test_init_failure_has_actionable_message(self):
        with patch.object(SupabaseClient, "_instance", None), \
                patch("lib.supabase_client.create_client", side_effect=ValueError("bad url")):
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_client()

        assert exc_info.value.code == "CLIENT_INIT_FAILED"
        assert "SUPABASE_URL" in str(exc_info.value)
