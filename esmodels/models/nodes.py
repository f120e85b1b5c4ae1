"""Generated models for the nodes info API."""

from collections.abc import Mapping
from typing import Any

from esmodels.runtime import JSON_DATA, STRING, ObjectModel, api_field, map_field, model_codec


class NodeInfoSettingsTransportType(ObjectModel):
    default_: str = api_field(STRING, required=True)


class NodeInfoSettingsTransport(ObjectModel):
    type: NodeInfoSettingsTransportType = api_field(
        model_codec(NodeInfoSettingsTransportType), required=True
    )
    type_default: str | None = api_field(STRING, wire_key="type.default")
    features: Mapping[str, Any] = map_field(JSON_DATA)
