"""
Response schemas for normalized upstream payloads.

Each schema describes the flat shape a normalizer produces for one endpoint.
Validation is strict and fails closed: a missing field, a wrong primitive
type or an unknown key raises ``SchemaValidationError`` and nothing is mapped.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from app.core.exceptions import SchemaValidationError

S = TypeVar("S", bound=BaseModel)


class NormalizedRecord(BaseModel):
    """Base for normalized record schemas."""
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)


class GameSummarySchema(NormalizedRecord):
    id: StrictInt
    name: StrictStr
    image: Optional[StrictStr]
    genres: List[StrictStr]
    rating: Union[StrictInt, StrictFloat]
    platforms: List[StrictStr]
    release_date: Optional[StrictStr]


class GameSearchResultSchema(NormalizedRecord):
    id: StrictInt
    name: StrictStr
    image: Optional[StrictStr]
    genres: List[StrictStr]


class GameDetailSchema(NormalizedRecord):
    name: StrictStr
    image: Optional[StrictStr]
    description: StrictStr
    genres: List[StrictStr]
    rating: Union[StrictInt, StrictFloat]
    total_reviews: StrictInt
    platforms: List[StrictStr]
    release_date: Optional[StrictStr]
    stores: List[StrictStr]


_NAME_LIST = TypeAdapter(List[StrictStr])


def _errors(exc: ValidationError, prefix: Optional[Any] = None) -> List[Dict[str, Any]]:
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    if prefix is None:
        return errors
    return [{**error, "loc": (prefix, *error["loc"])} for error in errors]


def validate_record(schema: Type[S], record: Any) -> S:
    """Validate a single normalized record against ``schema``."""
    try:
        return schema.model_validate(record)
    except ValidationError as e:
        raise SchemaValidationError(schema.__name__, _errors(e)) from e


def validate_records(schema: Type[S], records: Any) -> List[S]:
    """
    Validate a list of normalized records against ``schema``.

    Every record is checked before anything is returned, so the error carries
    all offending positions.
    """
    if not isinstance(records, list):
        raise SchemaValidationError(
            schema.__name__,
            [{"loc": (), "msg": "Input should be a valid list", "type": "list_type"}]
        )

    validated: List[S] = []
    errors: List[Dict[str, Any]] = []
    for index, record in enumerate(records):
        try:
            validated.append(schema.model_validate(record))
        except ValidationError as e:
            errors.extend(_errors(e, prefix=index))

    if errors:
        raise SchemaValidationError(schema.__name__, errors)
    return validated


def validate_names(names: Any, schema_name: str = "NameList") -> List[str]:
    """Validate a genre or platform name list."""
    try:
        return _NAME_LIST.validate_python(names, strict=True)
    except ValidationError as e:
        raise SchemaValidationError(schema_name, _errors(e)) from e
