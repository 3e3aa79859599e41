"""Day-based index selection and cyclic navigation."""

from collections.abc import Sized
from datetime import UTC, date, datetime

from inspirat.domain.photos import PhotoRecord, RotationState

_EPOCH = date(1970, 1, 1)


def days_since_epoch(now: datetime | None = None) -> int:
    """Return whole UTC calendar days elapsed since the Unix epoch.

    Naive datetimes are read as UTC.
    """
    moment = now or datetime.now(tz=UTC)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment.astimezone(UTC).date() - _EPOCH).days


def normalize_index(index: int, length: int) -> int:
    """Wrap any integer index, including negatives, into [0, length)."""
    if length <= 0:
        raise ValueError("Cannot normalize an index into an empty collection")
    return ((index % length) + length) % length


def day_index(collection: Sized, now: datetime | None = None) -> int:
    """Return today's position in the collection."""
    return normalize_index(days_since_epoch(now), len(collection))


def step(state: RotationState, delta: int) -> RotationState:
    """Move the index by delta without normalizing it."""
    return RotationState(collection=state.collection, index=state.index + delta)


def current_photo(state: RotationState) -> PhotoRecord:
    """Return the photo at the normalized index."""
    return state.collection[normalize_index(state.index, len(state.collection))]
