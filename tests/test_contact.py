from scantoreturn.core.contact import (
    build_contact_uri,
    contact_link,
    default_found_message,
    normalize_contact,
)
from scantoreturn.models.tag import TagRecord, TagStatus, new_record


def test_normalize_contact_strips_formatting():
    assert normalize_contact("+1 (555) 123-4567") == "15551234567"


def test_normalize_contact_is_idempotent():
    once = normalize_contact("+44 20-7946 0958")
    assert normalize_contact(once) == once


def test_normalize_contact_handles_empty():
    assert normalize_contact(None) == ""
    assert normalize_contact("call me") == ""


def test_build_contact_uri_uses_digits_only():
    assert build_contact_uri("+1 555 000 1111") == "https://wa.me/15550001111"
    assert build_contact_uri("123", base="https://msg.example/") == "https://msg.example/123"


def test_contact_link_appends_encoded_message():
    record = TagRecord("ID_0001", TagStatus.ACTIVE, "Keys", "15550001111", "https://wa.me/15550001111")
    link = contact_link(record, "Hi, I found your Keys!")
    assert link == "https://wa.me/15550001111?text=Hi%2C%20I%20found%20your%20Keys%21"


def test_contact_link_keeps_existing_query_on_masked_uri():
    record = TagRecord("ID_0002", TagStatus.ACTIVE, "Bag", None, "https://relay.example/r?id=abc")
    assert contact_link(record, "hello") == "https://relay.example/r?id=abc&text=hello"


def test_contact_link_builds_from_raw_contact_when_uri_missing():
    record = TagRecord("ID_0003", TagStatus.ACTIVE, "Bag", "+1 555 222 3333", None)
    assert contact_link(record, "x").startswith("https://wa.me/15552223333?text=")


def test_contact_link_none_without_contact():
    assert contact_link(new_record("ID_0004"), "hello") is None


def test_default_found_message():
    assert default_found_message("Keys") == "Hi, I found your Keys. How can I return it?"
    assert default_found_message(None) == "Hi, I found your item. How can I return it?"
