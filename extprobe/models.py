"""
Catalog records: extensions and the sources they expose.

The wire format is the JSON emitted by the extension repository index. All
fields map by identical name except ``baseUrl`` which becomes ``base_url``.
Unknown fields are ignored.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import ParseError


def _require(data: Dict[str, Any], key: str, kind: type, location: str):
    if key not in data:
        raise ParseError(f"missing required field '{key}'", location)
    value = data[key]
    # bool is an int subclass but never a valid catalog integer
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ParseError(
            f"field '{key}' must be {kind.__name__}, got {type(value).__name__}",
            f"{location}.{key}" if location else key,
        )
    return value


def _require_object(data: Any, location: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"expected object, got {type(data).__name__}", location)
    return data


@dataclass(frozen=True)
class Source:
    """One network endpoint of an extension"""
    name: str
    lang: str
    id: str
    base_url: str

    @classmethod
    def from_dict(cls, data: Any, location: str = "") -> "Source":
        data = _require_object(data, location)
        return cls(
            name=_require(data, "name", str, location),
            lang=_require(data, "lang", str, location),
            id=_require(data, "id", str, location),
            base_url=_require(data, "baseUrl", str, location),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lang": self.lang,
            "id": self.id,
            "baseUrl": self.base_url,
        }


@dataclass(frozen=True)
class Extension:
    """A catalog entry and its sources, in listed order"""
    name: str
    pkg: str
    apk: str
    lang: str
    code: int
    version: str
    nsfw: int
    sources: Tuple[Source, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, location: str = "") -> "Extension":
        """
        Build an Extension from its decoded JSON object.

        Args:
            data: Decoded JSON value for one catalog entry
            location: Path of the entry inside the document, used in errors

        Returns:
            Extension with its sources in input order

        Raises:
            ParseError: If a required field is missing or has the wrong type
        """
        data = _require_object(data, location)
        return cls(
            name=_require(data, "name", str, location),
            pkg=_require(data, "pkg", str, location),
            apk=_require(data, "apk", str, location),
            lang=_require(data, "lang", str, location),
            code=_require(data, "code", int, location),
            version=_require(data, "version", str, location),
            nsfw=_require(data, "nsfw", int, location),
            sources=tuple(
                Source.from_dict(item, f"{location}.sources[{i}]")
                for i, item in enumerate(_require(data, "sources", list, location))
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pkg": self.pkg,
            "apk": self.apk,
            "lang": self.lang,
            "code": self.code,
            "version": self.version,
            "nsfw": self.nsfw,
            "sources": [source.to_dict() for source in self.sources],
        }
