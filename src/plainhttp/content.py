"""Serialization of request payloads into HTTP bodies.

Each ``ContentType`` maps to one strategy function taking the payload and
returning ``(body, media_type)``. Payloads that are already ``str`` are
treated as pre-serialized and sent verbatim.
"""

import dataclasses
import datetime
import json
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlencode
from uuid import UUID

ENCODING = "utf-8"

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "text/xml"
URL_ENCODED_MEDIA_TYPE = "application/x-www-form-urlencoded"

# Values written as text rather than traversed as objects
TEXT_SCALARS = (datetime.date, datetime.time, UUID, Decimal)

SerializedBody = Tuple[bytes, Optional[str]]


class ContentType(str, Enum):
    JSON = "json"
    XML = "xml"
    URL_ENCODED = "url_encoded"
    RAW = "raw"


def _scalar_text(value: Any) -> str:
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def to_data(value: Any) -> Any:
    """Recursively reduce a value to JSON-compatible data.

    Supports:
    - None, dict, list, tuple, primitives (passed through)
    - Pydantic v2 models, objects with to_json() or to_dict() (duck typing)
    - Dataclass instances
    - Enums (by value), dates and times (ISO 8601), UUID and Decimal (as text)

    Raises:
        ValueError: If value is bytes
        TypeError: If value type is not supported
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_data(value.value)
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, TEXT_SCALARS):
        return _scalar_text(value)
    if isinstance(value, bytes):
        raise ValueError("bytes data is not supported")
    if isinstance(value, Mapping):
        return {k: to_data(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_data(item) for item in value]
    if hasattr(value, "model_dump") and callable(value.model_dump):  # Pydantic v2
        return to_data(value.model_dump(mode="json"))
    if hasattr(value, "to_json") and callable(value.to_json):
        return to_data(value.to_json())
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return to_data(value.to_dict())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_data(getattr(value, f.name)) for f in dataclasses.fields(value)}
    raise TypeError(
        f"Cannot serialize value of type {type(value).__name__}. Expected dict, list, primitive, or Serializable."
    )


def _fields(value: Any) -> Dict[str, Any]:
    """Public fields of an object, in declaration order, without converting nested values."""
    if isinstance(value, Mapping):
        return dict(value)
    if hasattr(value, "model_dump") and callable(value.model_dump):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return dict(value.to_dict())
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    raise TypeError(f"Cannot read fields of value of type {type(value).__name__}")


def serialize_json(payload: Any) -> SerializedBody:
    if isinstance(payload, str):
        serialized = payload
    else:
        serialized = json.dumps(to_data(payload))
    return serialized.encode(ENCODING), JSON_MEDIA_TYPE


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return _scalar_text(value)


def _xml_item_tag(item: Any) -> str:
    if isinstance(item, str):
        return "string"
    if isinstance(item, bool):
        return "boolean"
    if isinstance(item, int):
        return "int"
    if isinstance(item, float):
        return "double"
    if isinstance(item, datetime.datetime):
        return "dateTime"
    if isinstance(item, datetime.date):
        return "date"
    if isinstance(item, Decimal):
        return "decimal"
    if isinstance(item, UUID):
        return "guid"
    if isinstance(item, Mapping):
        return "item"
    return type(item).__name__


def _to_element(tag: str, value: Any) -> ET.Element:
    """Recursively convert a tag + value pair into an XML Element.

    - None values are omitted by the caller
    - lists/tuples become a wrapper element with one child per item
    - mappings and objects become child elements per field
    - scalars become text content
    """
    element = ET.Element(tag)
    if isinstance(value, (str, int, float, bool, Enum) + TEXT_SCALARS):
        element.text = _xml_text(value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            if item is not None:
                element.append(_to_element(_xml_item_tag(item), item))
    else:
        for name, child in _fields(value).items():
            if child is not None:
                element.append(_to_element(str(name), child))
    return element


def to_xml(payload: Any) -> str:
    """Serialize an object structurally to XML, with the root element named after its class."""
    root_tag = "root" if isinstance(payload, Mapping) else type(payload).__name__
    return ET.tostring(_to_element(root_tag, payload), encoding="unicode")


def serialize_xml(payload: Any) -> SerializedBody:
    if isinstance(payload, str):
        serialized = payload
    else:
        serialized = to_xml(payload)
    return serialized.encode(ENCODING), XML_MEDIA_TYPE


def _form_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return _scalar_text(value)


def to_key_value_pairs(payload: Any) -> List[Tuple[str, str]]:
    """Flatten a mapping or object into ordered key/value pairs.

    Entries with a None value are dropped and sequence values are expanded
    into one pair per item.
    """
    pairs = []
    for key, value in _fields(payload).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _form_value(item)) for item in value if item is not None)
        else:
            pairs.append((str(key), _form_value(value)))
    return pairs


def serialize_url_encoded(payload: Any) -> SerializedBody:
    if isinstance(payload, str):
        serialized = payload
    else:
        serialized = urlencode(to_key_value_pairs(payload))
    return serialized.encode(ENCODING), URL_ENCODED_MEDIA_TYPE


def serialize_raw(payload: Any) -> SerializedBody:
    return str(payload).encode(ENCODING), None


_STRATEGIES: Dict[ContentType, Callable[[Any], SerializedBody]] = {
    ContentType.JSON: serialize_json,
    ContentType.XML: serialize_xml,
    ContentType.URL_ENCODED: serialize_url_encoded,
    ContentType.RAW: serialize_raw,
}


def serialize(payload: Any, content_type: ContentType) -> SerializedBody:
    """Serialize payload with the strategy for content_type.

    Returns:
        The UTF-8 encoded body and its media type (None for RAW)
    """
    return _STRATEGIES[ContentType(content_type)](payload)


def content_type_header(media_type: str) -> str:
    return f"{media_type}; charset={ENCODING}"
