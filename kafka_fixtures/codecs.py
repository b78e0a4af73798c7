"""
Encoders for the three fixture formats.

Protobuf: the .proto file is compiled at runtime with grpc_tools.protoc into a
descriptor set, so no generated *_pb2 modules are checked in.

Avro: records are framed the way Confluent-compatible registries expect,
    0x00 | schema id (4 bytes, big endian) | schemaless Avro body

JSON: compact UTF-8, no whitespace between tokens.
"""

import functools
import io
import json
import logging
import struct
import tempfile
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Tuple, Type, Union

import fastavro
from confluent_kafka.schema_registry import Schema, SchemaRegistryClient
from google.protobuf import descriptor_pb2, descriptor_pool, json_format, message_factory
from google.protobuf.message import Message
from grpc_tools import protoc

logger = logging.getLogger(__name__)

MAGIC_BYTE = 0
_FRAME_HEADER = struct.Struct(">bI")


class SchemaError(ValueError):
    """A schema could not be compiled, or a payload does not match its framing."""


# ---------------------------------------------------------------------------
# Protobuf
# ---------------------------------------------------------------------------
def _compile_descriptor_set(proto_path: Path) -> descriptor_pb2.FileDescriptorSet:
    wkt_include = resources.files("grpc_tools") / "_proto"
    with tempfile.TemporaryDirectory() as tmp:
        out = Path(tmp) / "schema.desc"
        rc = protoc.main([
            "grpc_tools.protoc",
            f"-I{proto_path.parent}",
            f"-I{wkt_include}",
            "--include_imports",
            f"--descriptor_set_out={out}",
            proto_path.name,
        ])
        if rc != 0 or not out.exists():
            raise SchemaError(f"protoc failed on {proto_path} (exit {rc})")
        return descriptor_pb2.FileDescriptorSet.FromString(out.read_bytes())


@functools.lru_cache(maxsize=None)
def _load_proto_message(proto_path: str, full_name: str) -> Type[Message]:
    fds = _compile_descriptor_set(Path(proto_path))
    pool = descriptor_pool.DescriptorPool()
    # --include_imports orders dependencies before dependents
    for file_proto in fds.file:
        pool.AddSerializedFile(file_proto.SerializeToString())
    try:
        desc = pool.FindMessageTypeByName(full_name)
    except KeyError as exc:
        raise SchemaError(f"{full_name} not found in {proto_path}") from exc
    logger.debug("Loaded %s from %s", full_name, proto_path)
    return message_factory.GetMessageClass(desc)


def load_proto_message(proto_path: Union[str, Path], full_name: str) -> Type[Message]:
    """Return the message class for `full_name` (e.g. 'testdata.Person') in a .proto file."""
    path = Path(proto_path).resolve()
    if not path.is_file():
        raise FileNotFoundError(f"protobuf schema not found: {path}")
    return _load_proto_message(str(path), full_name)


def build_protobuf(message_cls: Type[Message], record: Dict[str, Any]) -> Message:
    """Create a message from a dict keyed by JSON (camelCase) or proto field names."""
    try:
        return json_format.ParseDict(record, message_cls())
    except json_format.ParseError as exc:
        raise SchemaError(f"{message_cls.DESCRIPTOR.full_name}: {exc}") from exc


def encode_protobuf(message_cls: Type[Message], record: Dict[str, Any]) -> bytes:
    return build_protobuf(message_cls, record).SerializeToString()


def decode_protobuf(message_cls: Type[Message], data: bytes) -> Dict[str, Any]:
    """Inverse of encode_protobuf.

    Enums stay integers and scalar fields at their zero value are kept, so a
    record built from explicit values comes back unchanged. Unset message
    fields (address, lastUpdated) are still omitted.
    """
    return json_format.MessageToDict(
        message_cls.FromString(data),
        use_integers_for_enums=True,
        always_print_fields_with_no_presence=True,
    )


# ---------------------------------------------------------------------------
# Avro
# ---------------------------------------------------------------------------
def load_avro_schema(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def avro_subject(schema: Dict[str, Any]) -> str:
    """Subject used when registering without an explicit one: '<namespace>.<name>'."""
    namespace = schema.get("namespace")
    return f"{namespace}.{schema['name']}" if namespace else schema["name"]


def register_avro_schema(registry: SchemaRegistryClient, schema: Dict[str, Any]) -> int:
    subject = avro_subject(schema)
    schema_id = registry.register_schema(subject, Schema(json.dumps(schema), schema_type="AVRO"))
    logger.info("Registered Avro schema subject=%s id=%s", subject, schema_id)
    return schema_id


def encode_avro(schema_id: int, schema: Dict[str, Any], record: Dict[str, Any]) -> bytes:
    buf = io.BytesIO()
    buf.write(_FRAME_HEADER.pack(MAGIC_BYTE, schema_id))
    fastavro.schemaless_writer(buf, fastavro.parse_schema(schema), record)
    return buf.getvalue()


def decode_avro(data: bytes, schema: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
    """Split a framed Avro payload into (schema id, record)."""
    if len(data) < _FRAME_HEADER.size:
        raise SchemaError(f"Avro frame too short: {len(data)} bytes")
    magic, schema_id = _FRAME_HEADER.unpack_from(data)
    if magic != MAGIC_BYTE:
        raise SchemaError(f"unexpected magic byte {magic}")
    buf = io.BytesIO(data[_FRAME_HEADER.size:])
    return schema_id, fastavro.schemaless_reader(buf, fastavro.parse_schema(schema))


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------
def encode_json(record: Dict[str, Any]) -> bytes:
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
