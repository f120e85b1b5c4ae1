"""Generated models for the cat APIs.

Cat responses are arrays of flat records whose keys contain dots and have
short aliases (``docs.count``, ``dc``, ``docsCount``).
"""

from collections.abc import Sequence

from esmodels.runtime import STRING, ObjectModel, api_field, list_field, model_codec


class IndicesRecord(ObjectModel):
    health: str | None = api_field(STRING, aliases=("h",))
    status: str | None = api_field(STRING, aliases=("s",))
    index: str | None = api_field(STRING, aliases=("i", "idx"))
    uuid: str | None = api_field(STRING, aliases=("id",))
    pri: str | None = api_field(STRING, aliases=("p", "shards.primary", "shardsPrimary"))
    rep: str | None = api_field(STRING, aliases=("r", "shards.replica", "shardsReplica"))
    docs_count: str | None = api_field(STRING, wire_key="docs.count", aliases=("dc", "docsCount"))
    docs_deleted: str | None = api_field(
        STRING, wire_key="docs.deleted", aliases=("dd", "docsDeleted")
    )
    store_size: str | None = api_field(STRING, wire_key="store.size", aliases=("ss", "storeSize"))
    pri_store_size: str | None = api_field(STRING, wire_key="pri.store.size")


class IndicesResponse(ObjectModel, value_body="value"):
    """Response of ``GET _cat/indices``: a bare JSON array."""

    value: Sequence[IndicesRecord] = list_field(model_codec(IndicesRecord), required=True)
