"""
Writes the Protobuf Person fixture to disk as raw wire bytes.

The file is what the datalayer's protobuf decoder test (internal/coder) reads
back from resources/test/protobuf-wire-person. An existing file is overwritten.
Without $WIRE_OUTPUT it lands in the current directory.

Usage (from the datalayer repo root):
    WIRE_OUTPUT=resources/test/protobuf-wire-person kafka-fixtures-write-wire
"""

import logging
from pathlib import Path
from typing import Optional, Union

from . import codecs
from .config import PERSON_TYPE, load_config
from .logs import setup_logging
from .records import sample_person

logger = logging.getLogger(__name__)


def encode_wire_person(proto_path: Union[str, Path]) -> bytes:
    person_cls = codecs.load_proto_message(proto_path, PERSON_TYPE)
    return codecs.encode_protobuf(person_cls, sample_person())


def write_wire_person(
    path: Optional[Union[str, Path]] = None,
    proto_path: Optional[Union[str, Path]] = None,
) -> Path:
    if path is None or proto_path is None:
        config = load_config()
        path = config.wire_output if path is None else path
        proto_path = config.proto_schema if proto_path is None else proto_path
    out = Path(path)
    data = encode_wire_person(proto_path)
    with open(out, "wb") as fh:
        fh.write(data)
    logger.info("Wrote %d bytes to %s", len(data), out)
    return out


def main() -> None:
    config = load_config()
    setup_logging(config.log_level)
    write_wire_person(config.wire_output)


if __name__ == "__main__":
    main()
