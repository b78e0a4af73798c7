"""Shared fakes: an in-memory broker producer and schema registry."""
from types import SimpleNamespace

import pytest

from kafka_fixtures.config import FixtureConfig


class FakeFuture:
    def __init__(self, meta=None, error=None):
        self.meta = meta
        self.error = error

    def get(self, timeout=None):
        if self.error is not None:
            raise self.error
        return self.meta


class InMemoryProducer:
    """Collects (topic, key, value) instead of talking to a broker."""

    def __init__(self, fail_on=None):
        self.messages = []
        self.fail_on = fail_on or {}
        self.flushed = False
        self.closed = False

    def send(self, topic, key=None, value=None):
        if topic in self.fail_on:
            return FakeFuture(error=self.fail_on[topic])
        offset = sum(1 for t, _k, _v in self.messages if t == topic)
        self.messages.append((topic, key, value))
        return FakeFuture(SimpleNamespace(topic=topic, partition=0, offset=offset))

    def flush(self):
        self.flushed = True

    def close(self):
        self.closed = True


class FakeRegistry:
    def __init__(self, schema_id=7):
        self.schema_id = schema_id
        self.registered = []

    def register_schema(self, subject_name, schema):
        self.registered.append((subject_name, schema))
        return self.schema_id


@pytest.fixture
def config(tmp_path):
    return FixtureConfig(addr="localhost:9092", wire_output=tmp_path / "protobuf-wire-person")


@pytest.fixture
def producer():
    return InMemoryProducer()


@pytest.fixture
def registry():
    return FakeRegistry()
