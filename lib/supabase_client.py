# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the row-level helpers shared by every resource service:
# - Fetching single rows and batches of rows by id
# - Inserting, updating and deleting rows
#
# Listing queries (filter/sort/paginate) are built in core/services/listing.py
# on top of the raw client returned by get_client().
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   project = SupabaseClient.fetch_by_id("projects", 42)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an optional suggestion so callers can surface
    something more useful than the raw PostgREST message.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        user = SupabaseClient.fetch_by_id("users", 1)
        SupabaseClient.update("users", 1, {"name": "Ada"})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        record_id: int,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Returns:
            Row dict, or None if no row has this id

        Raises:
            SupabaseClientError: If query fails
        """
        return cls.fetch_one_by(table, "id", record_id, columns=columns)

    @classmethod
    def fetch_one_by(
        cls,
        table: str,
        column: str,
        value: Any,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch the first row where `column` equals `value`.

        Used for id lookups and for unique columns such as users.email.
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, column: value}
            )

        rows = response.data or []
        return rows[0] if rows else None

    @classmethod
    def fetch_many(
        cls,
        table: str,
        ids: Iterable[int],
        columns: str = "*",
    ) -> dict[int, dict[str, Any]]:
        """
        Fetch several rows by id in one round trip.

        Returns:
            Dict mapping id -> row. Missing ids are simply absent.
        """
        wanted = sorted({i for i in ids if i is not None})
        if not wanted:
            return {}

        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .in_("id", wanted)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_MANY_FAILED",
                details={"table": table, "ids": wanted}
            )

        return {row["id"]: row for row in response.data or []}

    @classmethod
    def fetch_where(
        cls,
        table: str,
        column: str,
        value: Any,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Fetch every row where `column` equals `value`."""
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq(column, value)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_WHERE_FAILED",
                details={"table": table, column: value}
            )

        return response.data or []

    @classmethod
    def fetch_all_ordered(
        cls,
        table: str,
        columns: str = "*",
        order_by: str = "name",
    ) -> list[dict[str, Any]]:
        """
        Fetch every row of a table ordered ascending by one column.

        Used for the option lists of the task form (projects and users by name).
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .order(order_by)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_ALL_FAILED",
                details={"table": table, "order_by": order_by}
            )

        return response.data or []

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it with generated id and timestamps.

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Insert returned no data",
            code="INSERT_NO_DATA",
            details={"table": table}
        )

    @classmethod
    def update(
        cls,
        table: str,
        record_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update one row by id and return the new version.

        Raises:
            SupabaseClientError: If update fails or the row vanished
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": record_id}
            )

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message=f"Update matched no rows in {table}",
            code="UPDATE_NO_DATA",
            details={"table": table, "id": record_id}
        )

    @classmethod
    def delete(cls, table: str, record_id: int) -> None:
        """Delete one row by id."""
        cls.delete_where(table, "id", record_id)

    @classmethod
    def delete_where(cls, table: str, column: str, value: Any) -> None:
        """Delete every row where `column` equals `value`."""
        client = cls.get_client()

        try:
            (
                client.table(table)
                .delete()
                .eq(column, value)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, column: value}
            )

        logger.debug(f"Deleted from {table} where {column}={value}")
