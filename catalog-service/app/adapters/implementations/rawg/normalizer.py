"""
RAWG payload normalizer.

Flattens RAWG's nested listing and detail records into the shapes the
response schemas validate:

- genres: ``[{id, name, slug, ...}]`` -> ``[name]``
- platforms: ``[{platform: {name, ...}, ...}]`` -> ``[platform.name]``
- stores: ``[{store: {domain, ...}, ...}]`` -> ``[store.domain]``
- ``background_image`` -> ``image``, ``released`` -> ``release_date``,
  ``ratings_count`` -> ``total_reviews``

Top-level scalars absent from a record are left out of the normalized record
so the schema gate reports them. Nested fields that must be dereferenced
raise ``NormalizationError`` instead.
"""
from typing import Any, Dict, List, Tuple

from app.adapters.interfaces.normalizer import DataNormalizer
from app.core.exceptions import NormalizationError
from app.core.logging import get_logger
from app.domain.models.catalog import HTML_TAG_PATTERN

logger = get_logger(__name__)

Record = Dict[str, Any]

APOSTROPHE_ENTITY = "&#39;"

SUMMARY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("image", "background_image"),
    ("rating", "rating"),
    ("release_date", "released"),
)
SEARCH_RESULT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("image", "background_image"),
)
DETAIL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("image", "background_image"),
    ("rating", "rating"),
    ("total_reviews", "ratings_count"),
    ("release_date", "released"),
)


def sanitize_description(text: str) -> str:
    """Strip HTML tags, then the ``&#39;`` entity."""
    without_tags = HTML_TAG_PATTERN.sub("", text)
    return without_tags.replace(APOSTROPHE_ENTITY, "")


def _require_mapping(value: Any, path: str) -> Record:
    if not isinstance(value, dict):
        raise NormalizationError(path, detail=f"Upstream field '{path}' is not an object")
    return value


def _lookup(container: Any, key: str, path: str) -> Any:
    mapping = _require_mapping(container, path.rsplit(".", 1)[0] if "." in path else "record")
    if key not in mapping:
        raise NormalizationError(path)
    return mapping[key]


def _require_list(record: Record, key: str) -> List[Any]:
    value = _lookup(record, key, key)
    if not isinstance(value, list):
        raise NormalizationError(key, detail=f"Upstream field '{key}' is not a list")
    return value


def _pluck(record: Record, list_key: str, *inner_keys: str) -> List[Any]:
    """Collect ``element.<inner_keys...>`` for every element of ``record[list_key]``."""
    values = []
    for index, element in enumerate(_require_list(record, list_key)):
        value = element
        path = f"{list_key}[{index}]"
        for key in inner_keys:
            path = f"{path}.{key}"
            value = _lookup(value, key, path)
        values.append(value)
    return values


def _copy_fields(record: Record, fields: Tuple[Tuple[str, str], ...]) -> Record:
    return {target: record[source] for target, source in fields if source in record}


class RawgNormalizer(DataNormalizer[Record, Record]):
    """Normalizer for RAWG listing and detail payloads."""

    def normalize_game_summary(self, raw_data: Record) -> Record:
        record = _require_mapping(raw_data, "record")
        normalized = _copy_fields(record, SUMMARY_FIELDS)
        normalized["genres"] = _pluck(record, "genres", "name")
        normalized["platforms"] = _pluck(record, "platforms", "platform", "name")
        return normalized

    def normalize_game_search_result(self, raw_data: Record) -> Record:
        record = _require_mapping(raw_data, "record")
        normalized = _copy_fields(record, SEARCH_RESULT_FIELDS)
        normalized["genres"] = _pluck(record, "genres", "name")
        return normalized

    def normalize_game_detail(self, raw_data: Record) -> Record:
        record = _require_mapping(raw_data, "record")
        description = record.get("description")
        if not isinstance(description, str):
            raise NormalizationError(
                "description",
                detail="Upstream game detail has no description"
            )

        normalized = _copy_fields(record, DETAIL_FIELDS)
        normalized["description"] = sanitize_description(description)
        normalized["genres"] = _pluck(record, "genres", "name")
        normalized["platforms"] = _pluck(record, "platforms", "platform", "name")
        normalized["stores"] = _pluck(record, "stores", "store", "domain")
        return normalized

    def normalize_name(self, raw_data: Record) -> Any:
        return _lookup(raw_data, "name", "name")

    def extract_results(self, response: Any) -> List[Record]:
        results = _require_list(_require_mapping(response, "response"), "results")
        logger.debug(f"Extracted {len(results)} records from upstream response")
        return results
