"""Domain models for the photo collection."""

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class PhotoUrls(BaseModel):
    """Image URLs for a photo."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    full: str


class PhotoRecord(BaseModel):
    """Single photo in the remote collection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    color: str
    urls: PhotoUrls


PhotoCollection = list[PhotoRecord]


class CollectionCacheEntry(BaseModel):
    """Collection snapshot persisted in the key-value store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    photos: PhotoCollection = Field(min_length=1)
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("updated_at", mode="before")
    @classmethod
    def _from_epoch_ms(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        return value

    @field_validator("updated_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_serializer("updated_at")
    def _to_epoch_ms(self, value: datetime) -> int:
        return int(value.timestamp() * 1000)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-compatible form written to the store."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class RotationState:
    """Shuffled collection plus the current index.

    The index is stored as navigated and may fall outside the collection
    bounds; readers normalize it before use.
    """

    collection: tuple[PhotoRecord, ...]
    index: int
