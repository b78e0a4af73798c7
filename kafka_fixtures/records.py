"""
Sample records published to the datalayer test topics.

The consuming integration tests assert on these exact values, so they are
literals rather than generated data:
- Person: one Protobuf record (proto-consumer, and the wire file)
- Pet:    one Avro record (avro-consumer)
- City:   a numbered run of JSON records (json-consumer)

Records are plain dicts keyed by the wire field names.
"""

from datetime import datetime, timezone
from typing import Dict, Iterator, Tuple

from .config import JSON_KEY_PREFIX

# 12:59:01 at UTC-1, i.e. 13:59:01Z
PERSON_LAST_UPDATED = "2022-04-27T12:59:01-01:00"

PHONE_HOME = 1
PHONE_WORK = 2


def epoch_seconds(iso_ts: str) -> int:
    return int(datetime.fromisoformat(iso_ts).timestamp())


def rfc3339(seconds: int) -> str:
    """Protobuf Timestamp JSON form, e.g. 1651067941 -> '2022-04-27T13:59:01Z'."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def sample_person() -> Dict:
    return {
        "name": "test",
        "age": 2,
        "phones": [
            {"number": "555-100-200", "type": PHONE_HOME},
            {"number": "555-100-300", "type": PHONE_WORK},
        ],
        "address": {
            "street": "Tøyengata",
            "houseNumber": 601,
        },
        "lastUpdated": rfc3339(epoch_seconds(PERSON_LAST_UPDATED)),
    }


def sample_pet() -> Dict:
    return {"name": "Bob", "kind": "Cat", "age": 3, "dead": True}


def city(index: int) -> Dict:
    return {"name": f"City-{index}", "population": index * 1000, "postCode": 3000 + index}


def city_records(count: int) -> Iterator[Tuple[str, Dict]]:
    """Yield (key, record) pairs for City-0 .. City-(count-1)."""
    for i in range(count):
        yield f"{JSON_KEY_PREFIX}{i}", city(i)
