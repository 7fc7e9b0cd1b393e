import datetime
import json

from ...roa import RouteEntry
from ..roa import bird_roa, bird_roa_table, roa_document, roa_json, roa_metadata

ENTRIES = [
    RouteEntry("172.20.0.0/24", 4242420625),
    RouteEntry("fd42:4242:625::/48", 4242420625, 64),
]


def test_roa_document():
    assert roa_document(ENTRIES) == {
        "roas": [
            {"prefix": "172.20.0.0/24", "maxLength": 24, "asn": "AS4242420625"},
            {"prefix": "fd42:4242:625::/48", "maxLength": 64, "asn": "AS4242420625"},
        ]
    }
    assert roa_document([]) == {"roas": []}


def test_roa_json_compact():
    assert roa_json(ENTRIES[:1]) == (
        '{"roas":[{"prefix":"172.20.0.0/24","maxLength":24,"asn":"AS4242420625"}]}'
    )


def test_roa_json_shape():
    document = json.loads(roa_json(ENTRIES, indent=2))
    assert list(document) == ["roas"]
    for roa in document["roas"]:
        assert set(roa) == {"prefix", "maxLength", "asn"}
        assert isinstance(roa["maxLength"], int)
        assert roa["asn"].startswith("AS")


def test_roa_metadata():
    generated = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    metadata = roa_metadata(2, generated)
    assert metadata == {"counts": 2, "generated": 1704067200, "valid": 1704067200 + 604800}
    assert roa_metadata(2, generated, expiry=60)["valid"] == 1704067260

    document = json.loads(roa_json(ENTRIES, metadata=metadata))
    assert list(document) == ["metadata", "roas"]
    assert document["metadata"]["counts"] == 2


def test_bird_roa():
    assert bird_roa(ENTRIES[0]) == "add roa 172.20.0.0/24 max 24 as 4242420625"
    assert bird_roa(ENTRIES[1], table="dn42_roa6") == (
        "add roa fd42:4242:625::/48 max 64 as 4242420625 table dn42_roa6"
    )


def test_bird_roa_table():
    assert bird_roa_table(ENTRIES, table="roa", flush=True) == (
        "flush roa table roa\n"
        "add roa 172.20.0.0/24 max 24 as 4242420625 table roa\n"
        "add roa fd42:4242:625::/48 max 64 as 4242420625 table roa\n"
    )
    assert bird_roa_table([], flush=True) == "flush roa\n"
    assert bird_roa_table([]) == ""
