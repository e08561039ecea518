"""Conversion of custom-object metadata into RAML type libraries."""

from __future__ import annotations

import enum
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import unquote

from xraml.fileio import PathLike, read_file

RAML_HEAD = "#%RAML 1.0 Library\n\ntypes:"
SFID_LEN = 18
OUTPUT_DIR = Path("data")

_UNSIGNED = re.compile(r"\+?[0-9]+")


class NotAFieldsNode(ValueError):
    """The element handed over is not a ``fields`` element."""


def _local_name(element: ET.Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def _text(element: ET.Element) -> str:
    return element.text or ""


class RamlKind(enum.Enum):
    """The kinds of RAML types the generator emits."""

    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"
    BOOLEAN = "boolean"
    DATE = "date"
    ANY = "any"


@dataclass
class RamlType:
    """A RAML type; enumerations carry their variants and a base type."""

    kind: RamlKind
    variants: List[str] = field(default_factory=list)
    base: Optional["RamlType"] = None

    def __post_init__(self) -> None:
        if self.kind is RamlKind.ENUM and self.base is None:
            self.base = RamlType(RamlKind.STRING)

    def __str__(self) -> str:
        if self.kind is RamlKind.ENUM:
            return str(self.base)
        return self.kind.value


def _type_from_name(type_name: str) -> Tuple[RamlType, Optional[str], Optional[int]]:
    """Return the RAML type, the example (if set) and a forced max length (if set)."""
    if type_name == "Lookup":
        return RamlType(RamlKind.STRING), f'"{"X" * SFID_LEN}"', SFID_LEN
    if type_name == "Picklist":
        return RamlType(RamlKind.ENUM), None, None
    if type_name == "Number":
        return RamlType(RamlKind.NUMBER), "0", None
    if type_name == "Checkbox":
        return RamlType(RamlKind.BOOLEAN), "true", None
    if type_name == "Date":
        return RamlType(RamlKind.DATE), None, None
    return RamlType(RamlKind.STRING), '"XXX"', None


@dataclass
class RamlTypesMetadata:
    """One field of a custom object as a RAML type declaration."""

    name: str
    type_on_raml: RamlType
    desc: str
    example: str = ""
    max_length: Optional[int] = None
    required: bool = False

    @classmethod
    def from_node(cls, fields: ET.Element) -> "RamlTypesMetadata":
        """Build the metadata from a ``fields`` element."""
        if _local_name(fields) != "fields":
            raise NotAFieldsNode("expect node with tagname `fields`")

        name: Optional[str] = None
        desc: Optional[str] = None
        type_on_raml: Optional[RamlType] = None
        example = ""
        max_length: Optional[int] = None
        required = False

        for child in fields:
            tag = _local_name(child)
            text = _text(child)
            if tag == "fullName":
                name = text
            elif tag == "label":
                desc = text
            elif tag == "length":
                if not _UNSIGNED.fullmatch(text):
                    raise ValueError(f"failed to get length: {text!r}")
                max_length = int(text)
            elif tag == "type":
                type_on_raml, new_example, forced_length = _type_from_name(text)
                if new_example is not None:
                    example = new_example
                if forced_length is not None:
                    max_length = forced_length
            elif tag == "required" and text == "true":
                required = True

        if name is None:
            raise ValueError("fields element without fullName")
        if type_on_raml is None:
            raise ValueError(f"field {name} has no type")
        if desc is None:
            raise ValueError(f"field {name} has no label")

        return cls(name, type_on_raml, desc, example, max_length, required)

    def format_as_raml(self) -> str:
        """Render the declaration as an indented RAML ``types`` entry."""
        lines = [
            f"  {self.name}:",
            f"type: {self.type_on_raml}",
            "description: |",
            f"  {self.desc}",
        ]
        if self.type_on_raml.kind is RamlKind.ENUM:
            lines.append("enum:")
            lines.extend(f'  - "{item}"' for item in self.type_on_raml.variants)
        lines.append("example:")
        lines.append(f"  {self.example}")
        return "\n    ".join(lines)

    def set_enum_variant(self, variant_list: Iterable[ET.Element]) -> None:
        """Fill the variants of an enumeration from ``picklistValues`` elements."""
        if self.type_on_raml.kind is not RamlKind.ENUM:
            raise TypeError(f"expect an enumeration type, found {self.type_on_raml!r}")
        variants = _enum_variants(variant_list, self.name)
        self.type_on_raml.variants = variants
        first = variants[0] if variants else ""
        self.example = f'"{first}"'


def _enum_variants(variant_list: Iterable[ET.Element], name: str) -> List[str]:
    target = next(
        (
            node
            for node in variant_list
            if any(
                _local_name(child) == "picklist" and _text(child) == name
                for child in node
            )
        ),
        None,
    )
    if target is None:
        return []

    variants = []
    for values in target:
        if _local_name(values) != "values":
            continue
        full_name = next(
            (child for child in values if _local_name(child) == "fullName"), None
        )
        if full_name is None:
            raise ValueError(f"picklist value of {name} without fullName")
        variants.append(unquote(_text(full_name), errors="strict"))
    return variants


def _enum_variant_list(custom_object: ET.Element) -> List[ET.Element]:
    record_types = next(
        (child for child in custom_object if _local_name(child) == "recordTypes"),
        None,
    )
    if record_types is None:
        return []
    return [
        child for child in record_types if _local_name(child) == "picklistValues"
    ]


@dataclass
class RamlMetadataStream:
    """The RAML type declarations of one custom object, in document order."""

    types: List[RamlTypesMetadata] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: ET.ElementTree) -> "RamlMetadataStream":
        """Collect every ``fields`` element of the custom object in ``doc``."""
        custom_object = get_custom_object(doc)
        if custom_object is None:
            raise ValueError("there is no CustomObject in the document")
        variant_list = _enum_variant_list(custom_object)

        types = []
        for child in custom_object:
            try:
                metadata = RamlTypesMetadata.from_node(child)
            except NotAFieldsNode:
                continue
            if metadata.type_on_raml.kind is RamlKind.ENUM:
                metadata.set_enum_variant(variant_list)
            types.append(metadata)
        return cls(types)

    def __iter__(self) -> Iterator[RamlTypesMetadata]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def filter(
        self, predicate: Callable[[RamlTypesMetadata], bool]
    ) -> "RamlMetadataStream":
        """Keep only the declarations for which ``predicate`` holds."""
        self.types = [metadata for metadata in self.types if predicate(metadata)]
        return self

    def filter_required_rows(self, row_names: Iterable[str]) -> "RamlMetadataStream":
        """Keep only the declarations whose name is among ``row_names``."""
        wanted = set(row_names)
        return self.filter(lambda metadata: metadata.name in wanted)

    def create_raml_file(self, filename: str) -> None:
        """Write the library to ``data/<filename>``."""
        create_raml_file(self, OUTPUT_DIR / filename)

    def create_raml_file_minimal(self, row_names: Iterable[str], filename: str) -> None:
        """Write only the named declarations to ``data/<filename>``."""
        filtered = self.filter_required_rows(row_names)
        print(f"types of {filename}: {len(filtered.types)}")
        filtered.create_raml_file(filename)


def parse_from_path(path: PathLike) -> ET.ElementTree:
    """Read and parse the XML document at ``path``."""
    return ET.ElementTree(ET.fromstring(read_file(path)))


def get_custom_object(doc: ET.ElementTree) -> Optional[ET.Element]:
    """Return the top element of the document."""
    return doc.getroot()


def get_all_column_metadata(doc: ET.ElementTree) -> List[ET.Element]:
    """Return every ``fields`` element directly under the custom object."""
    custom_object = get_custom_object(doc)
    if custom_object is None:
        raise ValueError("there is no CustomObject in the document")
    return [child for child in custom_object if _local_name(child) == "fields"]


def create_raml_file(data: RamlMetadataStream, filename: PathLike) -> None:
    """Write ``data`` as a RAML library to ``filename``."""
    contents = "\n".join([RAML_HEAD, *(metadata.format_as_raml() for metadata in data)])
    with open(filename, "w", encoding="utf-8", newline="") as handle:
        handle.write(contents)


def create_raml_metadata_stream(path: PathLike) -> RamlMetadataStream:
    """Parse the object file at ``path`` into a metadata stream."""
    return RamlMetadataStream.from_document(parse_from_path(path))