"""BDD step definitions for entry serialization features."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from logwire.core.entry import Entry
from logwire.core.structs import CIRCULAR_MARKER


@dataclass
class EntryScenarioContext:
    """Shared state between steps in an entry scenario."""

    entry: Entry | None = None
    entries: list[Entry] = field(default_factory=list)
    api_record: dict[str, Any] = field(default_factory=dict)
    record: dict[str, Any] = field(default_factory=dict)


@pytest.fixture
def ctx() -> EntryScenarioContext:
    """Fresh scenario context for each test."""
    return EntryScenarioContext()


def _entry(ctx: EntryScenarioContext) -> Entry:
    assert ctx.entry is not None
    return ctx.entry


# === Given ===
@given(parsers.parse("an entry with data {data}"))
def step_entry_with_data(ctx: EntryScenarioContext, data: str) -> None:
    ctx.entry = Entry(None, json.loads(data))


@given(parsers.parse('an entry with timestamp "{timestamp}"'))
def step_entry_with_timestamp(ctx: EntryScenarioContext, timestamp: str) -> None:
    ctx.entry = Entry({"timestamp": timestamp})


@given("an entry whose data references itself")
def step_entry_circular(ctx: EntryScenarioContext) -> None:
    data: dict[str, Any] = {"message": "loop"}
    data["self"] = data
    ctx.entry = Entry(None, data)


@given("two entries created in sequence")
def step_two_entries(ctx: EntryScenarioContext) -> None:
    ctx.entries = [Entry(), Entry()]


@given(parsers.parse('an entry with insert id "{insert_id}"'))
def step_entry_with_insert_id(ctx: EntryScenarioContext, insert_id: str) -> None:
    ctx.entry = Entry({"insertId": insert_id})


@given(
    parsers.parse(
        "an API record with timestamp {seconds:d} seconds and {nanos:d} nanos"
    )
)
def step_api_record(ctx: EntryScenarioContext, seconds: int, nanos: int) -> None:
    ctx.api_record = {
        "payload": "textPayload",
        "textPayload": "from the API",
        "timestamp": {"seconds": str(seconds), "nanos": nanos},
    }


# === When ===
@when("the entry is serialized")
def step_serialize(ctx: EntryScenarioContext) -> None:
    ctx.record = _entry(ctx).to_json()


@when("the entry is serialized with circular references removed")
def step_serialize_remove_circular(ctx: EntryScenarioContext) -> None:
    ctx.record = _entry(ctx).to_json(remove_circular=True)


@when("the record is deserialized")
def step_deserialize(ctx: EntryScenarioContext) -> None:
    ctx.entry = Entry.from_api_response(ctx.api_record)


# === Then ===
@then(parsers.parse('the record has a "{name}" field'))
def step_has_field(ctx: EntryScenarioContext, name: str) -> None:
    assert name in ctx.record


@then(parsers.parse('the record has no "{name}" field'))
def step_has_no_field(ctx: EntryScenarioContext, name: str) -> None:
    assert name not in ctx.record


@then(parsers.parse("the timestamp is {seconds:d} seconds and {nanos:d} nanos"))
def step_timestamp_is(ctx: EntryScenarioContext, seconds: int, nanos: int) -> None:
    assert ctx.record["timestamp"] == {"seconds": seconds, "nanos": nanos}


@then(parsers.parse('the payload field "{name}" is the circular marker'))
def step_circular_marker(ctx: EntryScenarioContext, name: str) -> None:
    fields = ctx.record["jsonPayload"]["fields"]
    assert fields[name] == {"stringValue": CIRCULAR_MARKER}


@then("their insert ids are distinct and increasing")
def step_ids_ordered(ctx: EntryScenarioContext) -> None:
    first, second = (e.metadata.insert_id for e in ctx.entries)
    assert first != second
    assert second > first


@then(parsers.parse('the entry insert id is "{insert_id}"'))
def step_insert_id_is(ctx: EntryScenarioContext, insert_id: str) -> None:
    assert _entry(ctx).metadata.insert_id == insert_id
