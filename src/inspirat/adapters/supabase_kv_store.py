"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from inspirat.domain.errors import PersistenceReadFailed, PersistenceWriteFailed
from inspirat.services.collection import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing one row per key with a JSON value."""

    client: Client
    table: str = "kv_store"

    def get(self, key: str) -> object | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise PersistenceReadFailed(f"Failed to read {key!r}: {exc}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def keys(self) -> set[str]:
        """Return all stored keys."""
        try:
            response = self.client.table(self.table).select("key").execute()
        except Exception as exc:
            raise PersistenceReadFailed(f"Failed to list keys: {exc}") from exc
        return {row["key"] for row in response.data or []}

    def set(self, key: str, value: object) -> None:
        """Upsert the value for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).execute()
        except Exception as exc:
            raise PersistenceWriteFailed(f"Failed to store {key!r}: {exc}") from exc
