"""Plain-data summaries of registered models, for tooling and docs."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin

from esmodels.runtime import FieldDescriptor, ObjectModel


@dataclass
class FieldSummary(DataClassJsonMixin):
    """Describes one field of a model."""

    name: str
    wire_key: str
    type: str
    cardinality: str
    required: bool
    variant: bool
    location: str
    declared_in: str
    aliases: list[str]


@dataclass
class ModelSummary(DataClassJsonMixin):
    """Describes a model: its kind, ancestry and full field table."""

    name: str
    module: str
    kind: str
    ancestors: list[str]
    field_key: str | None
    value_body: str | None
    untagged: bool
    fields: list[FieldSummary]


def describe_field(desc: FieldDescriptor) -> FieldSummary:
    return FieldSummary(
        name=desc.name,
        wire_key=desc.wire_key,
        type=desc.codec.name,
        cardinality=desc.cardinality.value,
        required=desc.required,
        variant=desc.variant,
        location=desc.location.value,
        declared_in=desc.owner,
        aliases=list(desc.aliases),
    )


def ancestor_chain(model: type[ObjectModel]) -> list[str]:
    """Names of the model's ancestors, nearest first, up to the root."""
    chain: list[str] = []
    base = model.__bases__[0]
    while base not in (ObjectModel, object):
        chain.append(base.__name__)
        base = base.__bases__[0]
    return chain


def describe_model(model: type[ObjectModel]) -> ModelSummary:
    """Summarize a model class."""
    info = model._info
    return ModelSummary(
        name=info.name,
        module=model.__module__,
        kind=info.kind,
        ancestors=ancestor_chain(model),
        field_key=info.field_key,
        value_body=info.value_body,
        untagged=info.untagged,
        fields=[describe_field(desc) for desc in info.fields],
    )
