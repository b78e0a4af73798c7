from pathlib import Path

from kafka_fixtures.config import (
    DEFAULT_ADDR,
    JSON_RECORD_COUNT,
    PROTO_SCHEMA_PATH,
    AVRO_SCHEMA_PATH,
    load_config,
    registry_address,
)


def test_registry_address_replaces_port():
    assert registry_address("redpanda:29092") == "redpanda:8081"
    assert registry_address("localhost:9092") == "localhost:8081"


def test_registry_address_without_port():
    assert registry_address("broker") == "broker:8081"


def test_defaults_when_env_empty():
    config = load_config({})
    assert config.addr == DEFAULT_ADDR == "redpanda:29092"
    assert config.registry_url == "http://redpanda:8081"
    assert config.json_count == JSON_RECORD_COUNT == 1100
    assert config.wire_output == Path("protobuf-wire-person")
    assert (config.proto_topic, config.avro_topic, config.json_topic) == (
        "proto-consumer", "avro-consumer", "json-consumer")


def test_env_overrides():
    config = load_config({"ADDR": "kafka:9092", "WIRE_OUTPUT": "/tmp/out", "LOG_LEVEL": "debug"})
    assert config.addr == "kafka:9092"
    assert config.registry_addr == "kafka:8081"
    assert config.wire_output == Path("/tmp/out")
    assert config.log_level == "DEBUG"


def test_schema_resources_ship_with_package():
    assert PROTO_SCHEMA_PATH.is_file()
    assert AVRO_SCHEMA_PATH.is_file()
