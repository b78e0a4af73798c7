"""
Runtime configuration for the fixture scripts.

Everything is fixed except the broker address, which comes from $ADDR.
The schema registry is assumed to live on the broker host, port 8081.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# ---------------------------------------------------------------------------
# Fixed literals (the consuming integration tests assert on these)
# ---------------------------------------------------------------------------
DEFAULT_ADDR = "redpanda:29092"
REGISTRY_PORT = 8081

PROTO_TOPIC = "proto-consumer"
AVRO_TOPIC = "avro-consumer"
JSON_TOPIC = "json-consumer"

PROTO_KEY = "proto1"
AVRO_KEY = "avro1"
JSON_KEY_PREFIX = "json/"
JSON_RECORD_COUNT = 1100

PERSON_TYPE = "testdata.Person"
WIRE_OUTPUT = "protobuf-wire-person"

SEND_TIMEOUT_S = 30

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
PROTO_SCHEMA_PATH = RESOURCES_DIR / "protoschema" / "person.proto"
AVRO_SCHEMA_PATH = RESOURCES_DIR / "avroschema" / "Pet.avsc"


def registry_address(addr: str) -> str:
    """Swap the broker port for the registry port: 'redpanda:29092' -> 'redpanda:8081'."""
    host = addr.split(":")[0]
    return f"{host}:{REGISTRY_PORT}"


@dataclass
class FixtureConfig:
    """Settings shared by the publisher and the wire writer."""
    addr: str = DEFAULT_ADDR
    proto_topic: str = PROTO_TOPIC
    avro_topic: str = AVRO_TOPIC
    json_topic: str = JSON_TOPIC
    json_count: int = JSON_RECORD_COUNT
    proto_schema: Path = PROTO_SCHEMA_PATH
    avro_schema: Path = AVRO_SCHEMA_PATH
    wire_output: Path = Path(WIRE_OUTPUT)
    log_level: str = "INFO"

    @property
    def registry_addr(self) -> str:
        return registry_address(self.addr)

    @property
    def registry_url(self) -> str:
        return f"http://{self.registry_addr}"


def load_config(environ: Optional[Mapping[str, str]] = None) -> FixtureConfig:
    """Build a FixtureConfig from the environment (ADDR, WIRE_OUTPUT, LOG_LEVEL)."""
    env = os.environ if environ is None else environ
    return FixtureConfig(
        addr=env.get("ADDR") or DEFAULT_ADDR,
        wire_output=Path(env.get("WIRE_OUTPUT") or WIRE_OUTPUT),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
