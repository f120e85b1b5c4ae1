"""Tests for model builders"""

# pylint: disable=redefined-outer-name,unused-variable,expression-not-assigned,singleton-comparison

from collections.abc import Mapping, Sequence

import pytest

from esmodels.runtime import (
    INTEGER,
    STRING,
    BuilderAlreadyUsed,
    MissingRequiredField,
    ModelDefinitionError,
    ObjectModel,
    api_field,
    disable_required_checks,
    get_model,
    is_defined,
    list_field,
    map_field,
    model_codec,
    required_checks_disabled,
    reset_list,
    reset_map,
)


class Counter(ObjectModel):
    count: int = api_field(INTEGER, required=True)
    label: str | None = api_field(STRING)


class Tagged(ObjectModel):
    tags: Sequence[str] = list_field(STRING)
    labels: Mapping[str, str] = map_field(STRING)


class Envelope(ObjectModel):
    counter: Counter = api_field(model_codec(Counter), required=True)
    counters: Sequence[Counter] = list_field(model_codec(Counter))
    named: Mapping[str, Counter] = map_field(model_codec(Counter))


def describe_required_fields():
    def zero_is_a_value(expect):
        counter = Counter.of(lambda b: b.count(0))

        expect(counter.count) == 0
        expect(counter.label) == None

    def missing_required_raises(expect):
        with pytest.raises(MissingRequiredField) as exinfo:
            Counter.of(lambda b: b.label("x"))

        expect(exinfo.value.model) == "Counter"
        expect(exinfo.value.path) == "count"
        expect(str(exinfo.value)) == "Missing required property 'Counter.count'"

    def setting_none_unsets(expect):
        builder = Counter.Builder().count(1).count(None)

        expect(builder.is_set("count")) == False
        with pytest.raises(MissingRequiredField):
            builder.build()

    def failed_build_leaves_builder_open(expect):
        builder = Counter.Builder()
        with pytest.raises(MissingRequiredField):
            builder.build()

        counter = builder.count(3).build()
        expect(counter.count) == 3

    def nested_path_is_qualified(expect):
        with pytest.raises(MissingRequiredField) as exinfo:
            Envelope.of(lambda b: b.counter(lambda c: c.label("x")))

        expect(exinfo.value.model) == "Envelope"
        expect(exinfo.value.path) == "counter.count"

    def nested_map_path_includes_key(expect):
        with pytest.raises(MissingRequiredField) as exinfo:
            Envelope.of(lambda b: b.counter(lambda c: c.count(1)).put_named("first", lambda c: c))

        expect(exinfo.value.path) == "named.first.count"

    def only_optional_fields(expect):
        tagged = Tagged.of(lambda b: b)

        expect(is_defined(tagged.tags)) == False
        expect(is_defined(tagged.labels)) == False


def describe_disable_required_checks():
    def scoped_to_block(expect):
        with disable_required_checks():
            expect(required_checks_disabled()) == True
            counter = Counter.of(lambda b: b.label("x"))
            expect(counter.count) == None

        expect(required_checks_disabled()) == False
        with pytest.raises(MissingRequiredField):
            Counter.of(lambda b: b.label("x"))

    def restored_after_error(expect):
        with pytest.raises(ValueError):
            with disable_required_checks():
                raise ValueError("boom")

        expect(required_checks_disabled()) == False

    def nested_scopes(expect):
        with disable_required_checks():
            with disable_required_checks(False):
                expect(required_checks_disabled()) == False
                with pytest.raises(MissingRequiredField):
                    Counter.of(lambda b: b)
            expect(required_checks_disabled()) == True


def describe_single_use():
    def second_build_fails(expect):
        builder = Counter.Builder().count(1)
        builder.build()

        for _ in range(2):
            with pytest.raises(BuilderAlreadyUsed) as exinfo:
                builder.build()
            expect(str(exinfo.value)) == "Object builders can only be used once"

    def setters_fail_after_build(expect):
        builder = Tagged.Builder().tags(["a"])
        builder.build()

        with pytest.raises(BuilderAlreadyUsed):
            builder.add_tags("b")
        with pytest.raises(BuilderAlreadyUsed):
            builder.set("labels", {})

    def keyword_construction(expect):
        counter = Counter(count=2, label="two")

        expect(counter) == Counter.of(lambda b: b.count(2).label("two"))
        expect(repr(counter)) == "Counter(count=2, label='two')"

    def instances_are_immutable(expect):
        counter = Counter(count=2)

        with pytest.raises(AttributeError):
            counter.count = 3
        with pytest.raises(AttributeError):
            del counter.count


def describe_collections():
    def append_does_not_mutate_caller_list(expect):
        seed = ["a", "b"]
        tagged = Tagged.of(lambda b: b.tags(seed).add_tags("c").add_tags("d", "e", "f"))

        expect(seed) == ["a", "b"]
        expect(tagged.tags) == ("a", "b", "c", "d", "e", "f")

    def same_list_appended_twice(expect):
        seed = ["a", "b"]
        tagged = Tagged.of(lambda b: b.tags(seed).add_tags(*seed))

        expect(tagged.tags) == ("a", "b", "a", "b")

    def built_list_is_not_shared(expect):
        first = Tagged.of(lambda b: b.tags(["a"]))
        second = Tagged.of(lambda b: b.tags(first.tags).add_tags("b"))

        expect(first.tags) == ("a",)
        expect(second.tags) == ("a", "b")

    def caller_mutation_after_build(expect):
        seed = ["a"]
        labels = {"k": "v"}
        tagged = Tagged.of(lambda b: b.tags(seed).labels(labels))
        seed.append("b")
        labels["x"] = "y"

        expect(tagged.tags) == ("a",)
        expect(dict(tagged.labels)) == {"k": "v"}

    def collections_are_read_only(expect):
        tagged = Tagged.of(lambda b: b.tags(["a"]).labels({"k": "v"}))

        with pytest.raises(TypeError):
            tagged.labels["x"] = "y"
        with pytest.raises(AttributeError):
            tagged.tags.append("b")

    def reset_list_unsets(expect):
        tagged = Tagged.of(lambda b: b.tags(["a"]).tags(reset_list()))
        expect(is_defined(tagged.tags)) == False

        tagged = Tagged.of(lambda b: b.tags(["a"]).tags(reset_list()).add_tags("d", "e"))
        expect(tagged.tags) == ("d", "e")

    def reset_map_unsets(expect):
        tagged = Tagged.of(lambda b: b.labels({"a": "1"}).labels(reset_map()))
        expect(is_defined(tagged.labels)) == False

        tagged = Tagged.of(lambda b: b.labels({"a": "1"}).labels(reset_map()).put_labels("b", "2"))
        expect(dict(tagged.labels)) == {"b": "2"}

    def map_entries_keep_insertion_order(expect):
        seed = {"a": "1", "b": "2"}
        tagged = Tagged.of(
            lambda b: b.labels(seed).put_labels("c", "3").append("labels", {"d": "4"})
        )

        expect(len(seed)) == 2
        expect(list(tagged.labels)) == ["a", "b", "c", "d"]
        expect(tagged.labels["d"]) == "4"

    def model_items_from_values_and_functions(expect):
        first = Counter.of(lambda c: c.count(1))
        envelope = Envelope.of(
            lambda b: b.counter(first)
            .add_counters(first)
            .add_counters(lambda c: c.count(2), lambda c: c.count(3))
            .put_named("x", first)
        )

        expect([c.count for c in envelope.counters]) == [1, 2, 3]
        expect(envelope.counters[0] is first) == True
        expect(envelope.named["x"].count) == 1

    def defined_states(expect):
        builder = Tagged.Builder()
        expect(builder.is_set("tags")) == False

        builder.tags([])
        expect(builder.is_set("tags")) == True

        builder.tags(reset_list())
        expect(builder.is_set("tags")) == False

        builder.add_tags("a")
        expect(builder.is_set("tags")) == True

    def empty_collections_are_defined(expect):
        tagged = Tagged.of(lambda b: b.tags([]).labels({}))

        expect(is_defined(tagged.tags)) == True
        expect(is_defined(tagged.labels)) == True
        expect(len(tagged.tags)) == 0


def describe_type_checks():
    def unknown_field(expect):
        with pytest.raises(AttributeError):
            Counter.Builder().set("nope", 1)

    def wrong_scalar_type(expect):
        with pytest.raises(TypeError):
            Counter.Builder().count("1")

    def bool_is_not_an_integer(expect):
        with pytest.raises(TypeError):
            Counter.Builder().count(True)

    def string_is_not_a_list(expect):
        with pytest.raises(TypeError):
            Tagged.Builder().tags("abc")

    def list_is_not_a_map(expect):
        with pytest.raises(TypeError):
            Tagged.Builder().labels(["a"])

    def append_to_scalar(expect):
        with pytest.raises(TypeError):
            Counter.Builder().append("count", 1)

    def wrong_nested_model(expect):
        with pytest.raises(TypeError):
            Envelope.Builder().counter(Tagged.of(lambda b: b))

    def map_keys_must_be_strings(expect):
        with pytest.raises(TypeError):
            Tagged.Builder().put_labels(1, "v")
        with pytest.raises(TypeError):
            Tagged.Builder().labels({1: "v"})
        with pytest.raises(TypeError):
            Tagged.Builder().append("labels", {1: "v"})


def describe_hashing():
    def equal_instances_hash_alike(expect):
        first = Counter(count=1)
        second = Counter(count=1)

        expect(hash(first)) == hash(second)
        expect(len({first, second})) == 1

    def map_order_is_ignored(expect):
        first = Tagged.of(lambda b: b.put_labels("a", "1").put_labels("b", "2"))
        second = Tagged.of(lambda b: b.put_labels("b", "2").put_labels("a", "1"))

        expect(first) == second
        expect(hash(first)) == hash(second)

    def nested_models(expect):
        envelope = Envelope.of(
            lambda b: b.counter(lambda c: c.count(1))
            .add_counters(Counter(count=2))
            .put_named("first", Counter(count=3))
        )

        expect(envelope in {envelope}) == True


def describe_model_definition():
    def redeclared_field(expect):
        with pytest.raises(ModelDefinitionError):

            class Redeclared(Counter):
                count: int = api_field(INTEGER)

    def duplicate_wire_key(expect):
        with pytest.raises(ModelDefinitionError):

            class Duplicate(ObjectModel):
                first: str | None = api_field(STRING, wire_key="name")
                second: str | None = api_field(STRING, aliases=("name",))

    def optional_field_key(expect):
        with pytest.raises(ModelDefinitionError):

            class Keyed(ObjectModel, field_key="name"):
                name: str | None = api_field(STRING)

    def model_names_are_unique(expect):
        with pytest.raises(ModelDefinitionError):

            class Counter(ObjectModel):
                total: int | None = api_field(INTEGER)

    def earlier_model_is_kept(expect):
        expect(get_model("Counter")) == Counter

    def abstract_models_cannot_be_built(expect):
        class Base(ObjectModel, abstract=True):
            name: str | None = api_field(STRING)

        with pytest.raises(TypeError):
            Base.of(lambda b: b.name("x"))
