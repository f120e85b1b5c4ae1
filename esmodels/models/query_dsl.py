"""Generated query DSL models."""

from collections.abc import Sequence
from typing import Any

from esmodels.runtime import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    JSON_DATA,
    STRING,
    ObjectModel,
    api_field,
    list_field,
    model_codec,
    variant,
)


class QueryBase(ObjectModel, abstract=True):
    """Properties shared by all queries."""

    boost: float | None = api_field(FLOAT)
    query_name: str | None = api_field(STRING, wire_key="_name")


class FieldAndFormat(ObjectModel):
    """A field and an optional format, as used by ``docvalue_fields``."""

    field: str = api_field(STRING, required=True)
    format: str | None = api_field(STRING)
    include_unmapped: bool | None = api_field(BOOLEAN)


class IntervalsAllOf(ObjectModel):
    intervals: "Sequence[Intervals]" = list_field(model_codec(lambda: Intervals), required=True)
    max_gaps: int | None = api_field(INTEGER)
    ordered: bool | None = api_field(BOOLEAN)
    filter: Any = api_field(JSON_DATA)


class IntervalsAnyOf(ObjectModel):
    intervals: "Sequence[Intervals]" = list_field(model_codec(lambda: Intervals), required=True)
    filter: Any = api_field(JSON_DATA)


class IntervalsMatch(ObjectModel):
    query: str = api_field(STRING, required=True)
    analyzer: str | None = api_field(STRING)
    max_gaps: int | None = api_field(INTEGER)
    ordered: bool | None = api_field(BOOLEAN)
    use_field: str | None = api_field(STRING)


class IntervalsPrefix(ObjectModel):
    prefix: str = api_field(STRING, required=True)
    analyzer: str | None = api_field(STRING)
    use_field: str | None = api_field(STRING)


class Intervals(ObjectModel):
    """One interval rule (union)."""

    all_of: IntervalsAllOf = variant(model_codec(IntervalsAllOf))
    any_of: IntervalsAnyOf = variant(model_codec(IntervalsAnyOf))
    match: IntervalsMatch = variant(model_codec(IntervalsMatch))
    prefix: IntervalsPrefix = variant(model_codec(IntervalsPrefix))


class IntervalsQuery(QueryBase, field_key="field"):
    """Returns documents based on the order and proximity of matching terms.

    Wire shape: ``{"<field>": {"boost": ..., "<rule>": {...}}}``.
    """

    field: str = api_field(STRING, required=True)
    all_of: IntervalsAllOf = variant(model_codec(IntervalsAllOf))
    any_of: IntervalsAnyOf = variant(model_codec(IntervalsAnyOf))
    match: IntervalsMatch = variant(model_codec(IntervalsMatch))
    prefix: IntervalsPrefix = variant(model_codec(IntervalsPrefix))


class MatchAllQuery(QueryBase):
    """Matches all documents."""


class TermQuery(QueryBase, field_key="field"):
    """Returns documents that contain an exact term in a provided field."""

    field: str = api_field(STRING, required=True)
    value: Any = api_field(JSON_DATA, required=True)
    case_insensitive: bool | None = api_field(BOOLEAN)


class Query(ObjectModel):
    """A query (union)."""

    intervals: IntervalsQuery = variant(model_codec(IntervalsQuery))
    match_all: MatchAllQuery = variant(model_codec(MatchAllQuery))
    term: TermQuery = variant(model_codec(TermQuery))
