from kafka_fixtures.records import city_records, epoch_seconds, rfc3339, sample_person, sample_pet


def test_person_timestamp_is_utc_seconds():
    # 2022-04-27T13:59:01Z
    assert epoch_seconds("2022-04-27T12:59:01-01:00") == 1651067941
    assert rfc3339(1651067941) == "2022-04-27T13:59:01Z"
    assert sample_person()["lastUpdated"] == "2022-04-27T13:59:01Z"


def test_person_sample_values():
    person = sample_person()
    assert person["name"] == "test"
    assert person["age"] == 2
    assert [p["number"] for p in person["phones"]] == ["555-100-200", "555-100-300"]
    assert [p["type"] for p in person["phones"]] == [1, 2]
    assert person["address"] == {"street": "Tøyengata", "houseNumber": 601}


def test_pet_sample():
    assert sample_pet() == {"name": "Bob", "kind": "Cat", "age": 3, "dead": True}


def test_city_sequence():
    records = list(city_records(1100))
    assert len(records) == 1100
    for i, (key, city) in enumerate(records):
        assert key == f"json/{i}"
        assert city == {"name": f"City-{i}", "population": i * 1000, "postCode": 3000 + i}
