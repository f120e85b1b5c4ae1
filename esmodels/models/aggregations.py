"""Generated aggregation models: requests (``*Aggregation``) and results (``*Aggregate``)."""

from collections.abc import Mapping, Sequence
from typing import Any

from esmodels.runtime import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    JSON_DATA,
    STRING,
    Cardinality,
    ObjectModel,
    api_field,
    list_field,
    map_field,
    model_codec,
    variant,
)

# Results


class AggregateBase(ObjectModel, abstract=True):
    meta: Mapping[str, Any] = map_field(JSON_DATA)


class CardinalityAggregate(AggregateBase):
    value: int = api_field(INTEGER, required=True)


class SingleMetricAggregateBase(AggregateBase, abstract=True):
    value: float | None = api_field(FLOAT)
    value_as_string: str | None = api_field(STRING)


class ValueCountAggregate(SingleMetricAggregateBase):
    pass


class MultiBucketBase(ObjectModel, abstract=True):
    doc_count: int = api_field(INTEGER, required=True)


class RangeBucket(MultiBucketBase):
    from_: float | None = api_field(FLOAT)
    to: float | None = api_field(FLOAT)
    from_as_string: str | None = api_field(STRING)
    to_as_string: str | None = api_field(STRING)
    key: str | None = api_field(STRING)


class Buckets(ObjectModel, untagged=True):
    """Range buckets, either keyed by name or as an array (untagged union)."""

    keyed: Mapping[str, RangeBucket] = variant(model_codec(RangeBucket), cardinality=Cardinality.MAP)
    array: Sequence[RangeBucket] = variant(model_codec(RangeBucket), cardinality=Cardinality.LIST)


class MultiBucketAggregateBase(AggregateBase, abstract=True):
    buckets: Buckets = api_field(model_codec(Buckets), required=True)


class RangeAggregate(MultiBucketAggregateBase):
    pass


class DateRangeAggregate(RangeAggregate):
    """Result of a ``date_range`` aggregation."""


class Aggregate(ObjectModel):
    """An aggregation result (union)."""

    cardinality: CardinalityAggregate = variant(model_codec(CardinalityAggregate))
    value_count: ValueCountAggregate = variant(model_codec(ValueCountAggregate))
    range: RangeAggregate = variant(model_codec(RangeAggregate))
    date_range: DateRangeAggregate = variant(model_codec(DateRangeAggregate))


# Requests


class MetricAggregationBase(ObjectModel, abstract=True):
    field: str | None = api_field(STRING)
    missing: Any = api_field(JSON_DATA)


class CardinalityAggregation(MetricAggregationBase):
    precision_threshold: int | None = api_field(INTEGER)


class ValueCountAggregation(MetricAggregationBase):
    format: str | None = api_field(STRING)


class DateRangeExpression(ObjectModel):
    from_: str | None = api_field(STRING)
    to: str | None = api_field(STRING)
    key: str | None = api_field(STRING)


class DateRangeAggregation(ObjectModel):
    field: str | None = api_field(STRING)
    format: str | None = api_field(STRING)
    ranges: Sequence[DateRangeExpression] = list_field(model_codec(DateRangeExpression))
    time_zone: str | None = api_field(STRING)
    keyed: bool | None = api_field(BOOLEAN)


class Aggregation(ObjectModel):
    """An aggregation request (union), with optional sub-aggregations."""

    aggregations: "Mapping[str, Aggregation]" = map_field(
        model_codec(lambda: Aggregation), aliases=("aggs",)
    )
    meta: Mapping[str, Any] = map_field(JSON_DATA)
    cardinality: CardinalityAggregation = variant(model_codec(CardinalityAggregation))
    value_count: ValueCountAggregation = variant(model_codec(ValueCountAggregation))
    date_range: DateRangeAggregation = variant(model_codec(DateRangeAggregation))
