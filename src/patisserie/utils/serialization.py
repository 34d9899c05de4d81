"""Turn domain objects into JSON-ready dictionaries for API envelopes."""

from typing import Any


def to_data(record: Any, **extra: Any) -> dict:
    """Return ``record.to_dict()`` without framework bookkeeping fields."""
    data = {key: value for key, value in record.to_dict().items() if not key.startswith("_")}
    data.update(extra)
    return data


def compact(**values: Any) -> dict:
    """Keyword arguments without the ones left unset, so field defaults apply."""
    return {key: value for key, value in values.items() if value is not None}
