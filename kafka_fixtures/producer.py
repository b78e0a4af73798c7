"""
Kafka fixture publisher: sends the sample records the datalayer integration
tests consume, then exits.

Order:
  1. one Protobuf Person -> 'proto-consumer' (key 'proto1')
  2. register Pet.avsc, one Avro Pet -> 'avro-consumer' (key 'avro1')
  3. 1100 JSON City records -> 'json-consumer' (keys 'json/<i>')

Every send is waited on before the next. Nothing is retried: the first
failure propagates and the process exits non-zero.

Usage:
    ADDR=localhost:9092 kafka-fixtures-publish
"""

import logging
from typing import List, Optional

from confluent_kafka.schema_registry import SchemaRegistryClient
from kafka import KafkaProducer
from kafka.producer.future import RecordMetadata

from . import codecs
from .config import (
    AVRO_KEY,
    PERSON_TYPE,
    PROTO_KEY,
    SEND_TIMEOUT_S,
    FixtureConfig,
    load_config,
)
from .logs import setup_logging
from .records import city_records, sample_person, sample_pet

logger = logging.getLogger(__name__)


def create_producer(addr: str) -> KafkaProducer:
    return KafkaProducer(
        bootstrap_servers=[addr],
        key_serializer=lambda k: k.encode("utf-8"),
        acks="all",
    )


def create_registry(config: FixtureConfig) -> SchemaRegistryClient:
    return SchemaRegistryClient({"url": config.registry_url})


def _send(producer: KafkaProducer, topic: str, key: str, value: bytes) -> RecordMetadata:
    meta = producer.send(topic, key=key, value=value).get(timeout=SEND_TIMEOUT_S)
    logger.debug("  -> %s[%s]@%s key=%s", meta.topic, meta.partition, meta.offset, key)
    return meta


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
def publish_protobuf(producer: KafkaProducer, config: FixtureConfig) -> List[RecordMetadata]:
    person_cls = codecs.load_proto_message(config.proto_schema, PERSON_TYPE)
    person = sample_person()
    meta = _send(producer, config.proto_topic, PROTO_KEY, codecs.encode_protobuf(person_cls, person))
    logger.info("Sent protobuf %s to '%s' at offset %s", person["name"], meta.topic, meta.offset)
    return [meta]


def publish_avro(
    producer: KafkaProducer, registry: SchemaRegistryClient, config: FixtureConfig
) -> List[RecordMetadata]:
    schema = codecs.load_avro_schema(config.avro_schema)
    schema_id = codecs.register_avro_schema(registry, schema)
    pet = sample_pet()
    meta = _send(producer, config.avro_topic, AVRO_KEY, codecs.encode_avro(schema_id, schema, pet))
    logger.info("Sent avro %s to '%s' at offset %s", pet, meta.topic, meta.offset)
    return [meta]


def publish_json(producer: KafkaProducer, config: FixtureConfig) -> List[RecordMetadata]:
    logger.info("Sending %d json records to '%s'...", config.json_count, config.json_topic)
    sent = []
    for key, city in city_records(config.json_count):
        sent.append(_send(producer, config.json_topic, key, codecs.encode_json(city)))
    logger.info("Sent %d json records to '%s'", len(sent), config.json_topic)
    return sent


def publish_all(
    config: FixtureConfig,
    producer: Optional[KafkaProducer] = None,
    registry: Optional[SchemaRegistryClient] = None,
) -> List[RecordMetadata]:
    """Publish every fixture in order; the producer is closed even on failure."""
    if registry is None:
        registry = create_registry(config)
    if producer is None:
        producer = create_producer(config.addr)
    logger.info("Connected to %s (registry %s)", config.addr, config.registry_url)

    try:
        sent = publish_protobuf(producer, config)
        sent += publish_avro(producer, registry, config)
        sent += publish_json(producer, config)
        producer.flush()
    finally:
        producer.close()
    logger.info("Done: %d records published", len(sent))
    return sent


def main() -> None:
    config = load_config()
    setup_logging(config.log_level)
    publish_all(config)


if __name__ == "__main__":
    main()
