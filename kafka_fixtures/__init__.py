"""Sample Kafka records (Protobuf, Avro, JSON) for the datalayer integration tests."""

__version__ = "0.1.0"
