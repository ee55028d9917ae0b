import pytest

from scrub_core.errors import InvalidInputError
from scrub_core.models import Action, hash_marker, literal_marker, parse_override
from scrub_core.utils.checks import is_marker, stable_hash


def test_stable_hash_is_md5_hex():
    assert stable_hash("foo") == "acbd18db4cc2f85cedef654fccc4a4d8"
    assert stable_hash("") == "d41d8cd98f00b204e9800998ecf8427e"


def test_marker_formats():
    assert literal_marker("email") == "[redacted:email]"
    assert hash_marker("foo") == "[redacted:md5:acbd18db4cc2f85cedef654fccc4a4d8]"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("[redacted]", True),
        ("[redacted:email]", True),
        ("[redacted:md5:acbd18db4cc2f85cedef654fccc4a4d8]", True),
        ("[redacted:md5:xyz]", False),
        ("prefix [redacted]", False),
        ("redacted", False),
    ],
)
def test_is_marker(value: str, expected: bool) -> None:
    assert is_marker(value) is expected


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        (None, None),
        ("hash", Action.HASH),
        ("Redact", Action.REDACT),
        (" ignore ", Action.IGNORE),
        (Action.HASH, Action.HASH),
    ],
)
def test_parse_override(tag, expected) -> None:
    assert parse_override(tag) is expected


@pytest.mark.parametrize("tag", ["unclassified", "drop", 3])
def test_parse_override_rejects_unknown(tag) -> None:
    with pytest.raises(InvalidInputError):
        parse_override(tag)
