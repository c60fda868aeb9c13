"""Unit tests for payload serialization."""

import json
import unittest
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from plainhttp.content import (
    JSON_MEDIA_TYPE,
    URL_ENCODED_MEDIA_TYPE,
    XML_MEDIA_TYPE,
    ContentType,
    serialize,
    to_data,
    to_key_value_pairs,
    to_xml,
)


@dataclass
class Person:
    name: str
    age: int
    nickname: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    active: bool = True


class Address(BaseModel):
    street: str
    city: Optional[str] = None


class Customer(BaseModel):
    name: str
    address: Address


class Priority(Enum):
    LOW = 1
    HIGH = 2


@dataclass
class Event:
    at: datetime
    id: UUID
    priority: Priority
    price: Decimal
    day: Optional[date] = None


class Booking(BaseModel):
    at: datetime
    id: UUID
    price: Decimal


EVENT = Event(
    at=datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc),
    id=UUID(int=1),
    priority=Priority.HIGH,
    price=Decimal("9.90"),
    day=date(2024, 1, 2),
)


class LegacyModel:
    def __init__(self):
        self.id = 7
        self.label = "seven"
        self._secret = "hidden"


class TestAlreadySerializedPayloads(unittest.TestCase):
    def test_json_string_is_verbatim(self):
        body, media_type = serialize('{"key": "value"}', ContentType.JSON)
        self.assertEqual(body, b'{"key": "value"}')
        self.assertEqual(media_type, JSON_MEDIA_TYPE)

    def test_xml_string_is_verbatim(self):
        body, media_type = serialize("<a>1</a>", ContentType.XML)
        self.assertEqual(body, b"<a>1</a>")
        self.assertEqual(media_type, XML_MEDIA_TYPE)

    def test_url_encoded_string_is_verbatim(self):
        body, media_type = serialize("a=1&b=two words", ContentType.URL_ENCODED)
        self.assertEqual(body, b"a=1&b=two words")
        self.assertEqual(media_type, URL_ENCODED_MEDIA_TYPE)

    def test_bodies_are_utf8(self):
        body, _ = serialize('{"name": "Åsa"}', ContentType.JSON)
        self.assertEqual(body, '{"name": "Åsa"}'.encode("utf-8"))


class TestJson(unittest.TestCase):
    def test_dict(self):
        body, media_type = serialize({"key": "value", "n": [1, 2]}, ContentType.JSON)
        self.assertEqual(json.loads(body), {"key": "value", "n": [1, 2]})
        self.assertEqual(media_type, JSON_MEDIA_TYPE)

    def test_pydantic_model(self):
        body, _ = serialize(Customer(name="Ann", address=Address(street="Main 1")), ContentType.JSON)
        self.assertEqual(json.loads(body), {"name": "Ann", "address": {"street": "Main 1", "city": None}})

    def test_dataclass(self):
        body, _ = serialize(Person(name="Ann", age=3), ContentType.JSON)
        self.assertEqual(
            json.loads(body), {"name": "Ann", "age": 3, "nickname": None, "tags": [], "active": True}
        )

    def test_dates_uuids_decimals_and_enums(self):
        body, _ = serialize(EVENT, ContentType.JSON)
        self.assertEqual(
            json.loads(body),
            {
                "at": "2024-01-01T12:30:00+00:00",
                "id": "00000000-0000-0000-0000-000000000001",
                "priority": 2,
                "price": "9.90",
                "day": "2024-01-02",
            },
        )

    def test_pydantic_model_with_datetime(self):
        booking = Booking(at=datetime(2024, 1, 1, 12, 30), id=UUID(int=1), price=Decimal("9.90"))
        body, _ = serialize(booking, ContentType.JSON)
        data = json.loads(body)
        self.assertEqual(data["at"], "2024-01-01T12:30:00")
        self.assertEqual(data["id"], "00000000-0000-0000-0000-000000000001")
        self.assertEqual(data["price"], "9.90")

    def test_to_dict_takes_effect_for_nested_objects(self):
        class Inner:
            def to_dict(self):
                return {"inner": "value"}

        self.assertEqual(to_data({"outer": Inner()}), {"outer": {"inner": "value"}})

    def test_bytes_raises(self):
        with self.assertRaises(ValueError):
            serialize(b"data", ContentType.JSON)

    def test_unsupported_type_raises(self):
        class UnsupportedType:
            pass

        with self.assertRaises(TypeError):
            serialize(UnsupportedType(), ContentType.JSON)


class TestXml(unittest.TestCase):
    def test_dataclass(self):
        xml = to_xml(Person(name="Ann", age=3, tags=["a", "b"]))
        self.assertEqual(
            xml,
            "<Person><name>Ann</name><age>3</age>"
            "<tags><string>a</string><string>b</string></tags>"
            "<active>true</active></Person>",
        )

    def test_nested_pydantic_model_omits_none(self):
        xml = to_xml(Customer(name="Ann", address=Address(street="Main 1")))
        self.assertEqual(xml, "<Customer><name>Ann</name><address><street>Main 1</street></address></Customer>")

    def test_dates_uuids_decimals_and_enums_are_text(self):
        self.assertEqual(
            to_xml(EVENT),
            "<Event><at>2024-01-01T12:30:00+00:00</at>"
            "<id>00000000-0000-0000-0000-000000000001</id>"
            "<priority>2</priority><price>9.90</price><day>2024-01-02</day></Event>",
        )

    def test_pydantic_model_with_datetime(self):
        booking = Booking(at=datetime(2024, 1, 1, 12, 30), id=UUID(int=1), price=Decimal("9.90"))
        self.assertIn("<at>2024-01-01T12:30:00</at>", to_xml(booking))

    def test_list_of_dates(self):
        xml = to_xml({"days": [date(2024, 1, 1), date(2024, 1, 2)]})
        self.assertEqual(xml, "<root><days><date>2024-01-01</date><date>2024-01-02</date></days></root>")

    def test_plain_object_skips_private_fields(self):
        self.assertEqual(to_xml(LegacyModel()), "<LegacyModel><id>7</id><label>seven</label></LegacyModel>")

    def test_text_is_escaped(self):
        xml = to_xml({"q": "a < b & c"})
        self.assertEqual(xml, "<root><q>a &lt; b &amp; c</q></root>")

    def test_attached_body_is_serialized_xml(self):
        body, media_type = serialize(Person(name="Ann", age=3), ContentType.XML)
        self.assertEqual(body.decode("utf-8"), to_xml(Person(name="Ann", age=3)))
        self.assertNotEqual(body.decode("utf-8"), str(Person(name="Ann", age=3)))
        self.assertEqual(media_type, XML_MEDIA_TYPE)


class TestUrlEncoded(unittest.TestCase):
    def test_none_values_are_dropped(self):
        body, media_type = serialize({"a": "1", "b": None, "c": "3"}, ContentType.URL_ENCODED)
        self.assertEqual(body, b"a=1&c=3")
        self.assertEqual(media_type, URL_ENCODED_MEDIA_TYPE)

    def test_values_are_percent_encoded(self):
        body, _ = serialize({"q": "x y", "sym": "a&b=c", "name": "Åsa"}, ContentType.URL_ENCODED)
        self.assertEqual(body, b"q=x+y&sym=a%26b%3Dc&name=%C3%85sa")

    def test_order_is_preserved(self):
        pairs = to_key_value_pairs({"z": 1, "a": 2, "m": 3})
        self.assertEqual(pairs, [("z", "1"), ("a", "2"), ("m", "3")])

    def test_sequences_expand_to_repeated_keys(self):
        body, _ = serialize({"id": [1, None, 2], "active": False}, ContentType.URL_ENCODED)
        self.assertEqual(body, b"id=1&id=2&active=False")

    def test_booleans_dates_and_enums(self):
        body, _ = serialize(
            {"flag": True, "day": date(2024, 1, 2), "priority": Priority.LOW, "price": Decimal("1.50")},
            ContentType.URL_ENCODED,
        )
        self.assertEqual(body, b"flag=True&day=2024-01-02&priority=1&price=1.50")

    def test_object_fields(self):
        body, _ = serialize(Person(name="Ann Bo", age=3), ContentType.URL_ENCODED)
        self.assertEqual(body, b"name=Ann+Bo&age=3&active=True")


class TestRaw(unittest.TestCase):
    def test_raw_uses_plain_text_and_no_media_type(self):
        body, media_type = serialize(12345, ContentType.RAW)
        self.assertEqual(body, b"12345")
        self.assertIsNone(media_type)

    def test_raw_string(self):
        body, media_type = serialize("just text", ContentType.RAW)
        self.assertEqual(body, b"just text")
        self.assertIsNone(media_type)


if __name__ == "__main__":
    unittest.main()
