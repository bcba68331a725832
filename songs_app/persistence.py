from __future__ import annotations

import json
import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import yaml

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class PersistenceError(Exception):
    """Raised when a collection cannot be read from or written to disk."""


class Serializer(Protocol):
    path: Path

    def read(self) -> Optional[List[Record]]: ...

    def write(self, records: List[Record]) -> None: ...


class _FileSerializer:
    suffix = ""

    def __init__(self, path: Path, *, collection: str = "items") -> None:
        self.path = Path(path)
        self.collection = collection

    def read(self) -> Optional[List[Record]]:
        if not self.path.exists():
            logger.warning("Collection file %s does not exist", self.path)
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc
        records = self._decode(text)
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise PersistenceError(f"{self.path} does not contain a list of records")
        return records

    def write(self, records: List[Record]) -> None:
        payload = self._encode(records)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc

    def _decode(self, text: str) -> Any:
        raise NotImplementedError

    def _encode(self, records: List[Record]) -> str:
        raise NotImplementedError


class JSONSerializer(_FileSerializer):
    suffix = ".json"

    def _decode(self, text: str) -> Any:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {self.path}: {exc}") from exc
        if isinstance(payload, dict):
            return payload.get(self.collection)
        return payload

    def _encode(self, records: List[Record]) -> str:
        return json.dumps({self.collection: records}, indent=2, ensure_ascii=False)


class YAMLSerializer(_FileSerializer):
    suffix = ".yaml"

    def _decode(self, text: str) -> Any:
        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise PersistenceError(f"Invalid YAML in {self.path}: {exc}") from exc
        if payload is None:
            return []
        if isinstance(payload, dict):
            return payload.get(self.collection)
        return payload

    def _encode(self, records: List[Record]) -> str:
        return yaml.safe_dump(
            {self.collection: records}, sort_keys=False, allow_unicode=True
        )


class XMLSerializer(_FileSerializer):
    suffix = ".xml"

    @property
    def item_tag(self) -> str:
        return self.collection[:-1] if self.collection.endswith("s") else "item"

    def _decode(self, text: str) -> Any:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise PersistenceError(f"Invalid XML in {self.path}: {exc}") from exc
        return [self._element_to_record(child) for child in root]

    def _encode(self, records: List[Record]) -> str:
        root = ET.Element(self.collection)
        for record in records:
            item = ET.SubElement(root, self.item_tag)
            for key, value in record.items():
                field_el = ET.SubElement(item, key)
                if isinstance(value, list):
                    field_el.set("type", "list")
                    for entry in value:
                        ET.SubElement(field_el, "value").text = str(entry)
                else:
                    field_el.text = "" if value is None else str(value)
        ET.indent(root)
        return ET.tostring(root, encoding="unicode", xml_declaration=True) + "\n"

    @staticmethod
    def _element_to_record(element: ET.Element) -> Record:
        record: Record = {}
        for field_el in element:
            if field_el.get("type") == "list":
                record[field_el.tag] = [value.text or "" for value in field_el]
            else:
                record[field_el.tag] = field_el.text or ""
        return record


SERIALIZERS = {
    "xml": XMLSerializer,
    "json": JSONSerializer,
    "yaml": YAMLSerializer,
}


def make_serializer(fmt: str, directory: Path, stem: str) -> _FileSerializer:
    try:
        cls = SERIALIZERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported storage format: {fmt}") from None
    return cls(Path(directory) / f"{stem}{cls.suffix}", collection=stem)
