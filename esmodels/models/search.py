"""Generated models for the search and get APIs."""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from esmodels.runtime import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    JSON_DATA,
    STRING,
    Location,
    ObjectModel,
    api_field,
    enum_codec,
    list_field,
    map_field,
    model_codec,
)

from .aggregations import Aggregation
from .query_dsl import FieldAndFormat, Query


class TotalHitsRelation(Enum):
    EQ = "eq"
    GTE = "gte"


class TotalHits(ObjectModel):
    value: int = api_field(INTEGER, required=True)
    relation: TotalHitsRelation = api_field(enum_codec(TotalHitsRelation), required=True)


class Hit(ObjectModel):
    index: str = api_field(STRING, wire_key="_index", required=True)
    id: str | None = api_field(STRING, wire_key="_id")
    score: float | None = api_field(FLOAT, wire_key="_score")
    source: Any = api_field(JSON_DATA, wire_key="_source")
    fields: Mapping[str, Any] = map_field(JSON_DATA)
    sort: Sequence[Any] = list_field(JSON_DATA)


class HitsMetadata(ObjectModel):
    total: TotalHits | None = api_field(model_codec(TotalHits))
    hits: Sequence[Hit] = list_field(model_codec(Hit), required=True)
    max_score: float | None = api_field(FLOAT)


class SearchRequest(ObjectModel):
    """Search request: path and query parameters plus the request body."""

    index: Sequence[str] = list_field(STRING, location=Location.PATH)
    routing: str | None = api_field(STRING, location=Location.QUERY)
    typed_keys: bool | None = api_field(BOOLEAN, location=Location.QUERY)

    aggregations: Mapping[str, Aggregation] = map_field(
        model_codec(Aggregation), aliases=("aggs",)
    )
    docvalue_fields: Sequence[FieldAndFormat] = list_field(model_codec(FieldAndFormat))
    explain: bool | None = api_field(BOOLEAN)
    from_: int | None = api_field(INTEGER)
    min_score: float | None = api_field(FLOAT)
    query: Query | None = api_field(model_codec(Query))
    size: int | None = api_field(INTEGER)
    stored_fields: Sequence[str] = list_field(STRING)
    timeout: str | None = api_field(STRING)
    track_total_hits: Any = api_field(JSON_DATA)


class SearchResponse(ObjectModel):
    took: int = api_field(INTEGER, required=True)
    timed_out: bool = api_field(BOOLEAN, required=True)
    hits: HitsMetadata = api_field(model_codec(HitsMetadata), required=True)
    scroll_id: str | None = api_field(STRING, wire_key="_scroll_id")


class GetRequest(ObjectModel):
    """Get a document by id. Has no body: every field is a parameter."""

    index: str = api_field(STRING, required=True, location=Location.PATH)
    id: str = api_field(STRING, required=True, location=Location.PATH)
    preference: str | None = api_field(STRING, location=Location.QUERY)
    realtime: bool | None = api_field(BOOLEAN, location=Location.QUERY)
    routing: str | None = api_field(STRING, location=Location.QUERY)
    stored_fields: Sequence[str] = list_field(STRING, location=Location.QUERY)
