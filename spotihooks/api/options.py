"""
Explicit option models for endpoints that accept optional query parameters.

Each model lists every recognised field; unknown keys are rejected so a typo
never silently reaches the service.
"""

from typing import Any, Dict, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..constants import MAX_PAGE_LIMIT
from ..errors import InvalidArgument

OptionsT = TypeVar("OptionsT", bound="QueryOptions")


class QueryOptions(BaseModel):
    """Base for option models: strict keys, immutable, None means omitted."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class HistoryOptions(QueryOptions):
    """Cursor options for recently played tracks."""

    limit: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_LIMIT)
    after: Optional[int] = Field(default=None, ge=0, description="Unix timestamp in ms")
    before: Optional[int] = Field(default=None, ge=0, description="Unix timestamp in ms")

    @model_validator(mode='after')
    def check_single_cursor(self) -> 'HistoryOptions':
        if self.after is not None and self.before is not None:
            raise ValueError("after and before are mutually exclusive")
        return self


class SearchOptions(QueryOptions):
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_LIMIT)
    offset: Optional[int] = Field(default=None, ge=0)
    market: Optional[str] = Field(default=None, min_length=2)
    include_external: Optional[Literal["audio"]] = None


class LibraryOptions(QueryOptions):
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_LIMIT)
    offset: Optional[int] = Field(default=None, ge=0)
    market: Optional[str] = Field(default=None, min_length=2)


def _field_from_error(error: ValidationError, fallback: str) -> str:
    for detail in error.errors():
        loc = detail.get("loc") or ()
        if loc:
            return str(loc[0])
    return fallback


def parse_options(
    model: Type[OptionsT],
    options: Union[OptionsT, Mapping[str, Any], None],
    field_name: str = "options",
) -> OptionsT:
    """Coerce a mapping (or None) into ``model``, raising InvalidArgument on failure."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    if not isinstance(options, Mapping):
        raise InvalidArgument(field_name, f"must be a mapping or {model.__name__}")
    try:
        return model.model_validate(dict(options))
    except ValidationError as e:
        first = e.errors()[0]
        raise InvalidArgument(_field_from_error(e, field_name), first.get("msg", str(e))) from e


__all__ = [
    "HistoryOptions",
    "LibraryOptions",
    "QueryOptions",
    "SearchOptions",
    "parse_options",
]
