"""Reading of field-specification CSV exports and the property file."""

from __future__ import annotations

import io
import os
import re
from dataclasses import dataclass, field
from itertools import dropwhile
from pathlib import Path
from typing import IO, Callable, Iterator, List, Optional

from xraml.fileio import PathLike, read_file

PROPERTY_FILE_HEADER = "name,example"
PROPERTY_FILE_PATH = Path("data") / "property.csv"
REQUIRED_MARK = "〇"
ITEM_LIST_MARKER = "項目一覧"

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class CsvFormatError(ValueError):
    """The CSV export does not have the expected layout."""


def _lines(text: str) -> List[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line and a final empty line."""
    parts = text.split("\n")
    last = parts.pop()
    lines = [part[:-1] if part.endswith("\r") else part for part in parts]
    if last:
        lines.append(last)
    return lines


def _is_i32(text: str) -> bool:
    if not _INTEGER.fullmatch(text):
        return False
    return _I32_MIN <= int(text) <= _I32_MAX


@dataclass
class CsvRows:
    """Logical rows of the item list; the first entry of ``data`` is never a row."""

    data: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[List[str]]:
        for line in self.data[1:]:
            cells = line.split(",")
            if len(cells) < 2 or cells[0] != "" or not _is_i32(cells[1]):
                continue
            yield cells


@dataclass
class Csv:
    """An item list together with the columns of interest.

    ``target_columns[0]`` holds the API name; every column from
    ``target_columns[1]`` onwards marks whether the item is required.
    """

    rows: CsvRows
    target_columns: List[int]

    def filter_map(self, condition: Callable[[List[str]], Optional[str]]) -> List[str]:
        """Apply ``condition`` to each row and keep the results that are not ``None``."""
        results = (condition(row) for row in self.rows)
        return [result for result in results if result is not None]

    def acquire_required_rows_name(self) -> List[str]:
        """Return the API names of the rows marked as required."""
        name_column, first_flag_column = self.target_columns[0], self.target_columns[1]

        def condition(row: List[str]) -> Optional[str]:
            if any(REQUIRED_MARK in cell for cell in row[first_flag_column:]):
                return row[name_column]
            return None

        return self.filter_map(condition)

    def update_property_file(self) -> str:
        """Add required rows to the property file on disk and return its new content."""
        content = self.update_property_file_content(read_property_file())
        write_property_file(content)
        return content

    def update_property_file_content(self, content: str) -> str:
        """Return ``content`` with a line appended for required rows it lacks."""
        required = self.acquire_required_rows_name()
        lines = content.split("\n")
        original_count = len(lines)
        existing = lines[1:original_count]

        for name in required:
            if original_count == 1:
                lines.append(property_file_line_format(name))
            lines.extend(
                property_file_line_format(name) for line in existing if name not in line
            )

        return "\n".join(lines)


def _first_cell_is_filled(line: str) -> bool:
    first, separator, _ = line.partition(",")
    if not separator:
        raise CsvFormatError(f"line without a comma before the item rows: {line!r}")
    return first != ""


def read_as_csv(path: PathLike) -> Csv:
    """Read an item-list CSV export and locate its name and required columns."""
    contents = read_file(path)
    _, marker, post = contents.partition(ITEM_LIST_MARKER)
    if not marker:
        raise CsvFormatError("csv file has unexpected format")

    post_lines = _lines(post)

    header: List[str] = []
    for line in post_lines[1:]:
        header.append(line)
        if "CSV" in line:
            break

    target_columns = [
        index
        for index, name in enumerate("".join(header).split(","))
        if "CSV" in name or "API参照名" in name
    ]
    print(f"target_columns: {target_columns}")

    data: List[str] = []
    row = ""
    for line in dropwhile(_first_cell_is_filled, post_lines[len(header):]):
        if line.startswith(","):
            data.append(row)
            row = line
        else:
            row += line

    return Csv(rows=CsvRows(data), target_columns=target_columns)


def property_file_line_format(name: object, example: Optional[object] = None) -> str:
    """Format one ``name,example`` line of the property file."""
    if example is None:
        return f"{name},"
    return f"{name},{example}"


def open_property_file(read: bool, write: bool) -> IO[str]:
    """Open the property file; opening for writing creates it but does not truncate it."""
    if not read and not write:
        raise ValueError("invalid argument. both read/write are false")

    if read and write:
        flags, mode = os.O_RDWR | os.O_CREAT, "r+"
    elif write:
        flags, mode = os.O_WRONLY | os.O_CREAT, "w"
    else:
        flags, mode = os.O_RDONLY, "r"

    descriptor = os.open(PROPERTY_FILE_PATH, flags, 0o666)
    try:
        return io.open(descriptor, mode, encoding="utf-8", newline="")
    except BaseException:
        os.close(descriptor)
        raise


def read_property_file() -> str:
    """Return the content of the property file."""
    with open_property_file(True, False) as handle:
        return handle.read()


def write_property_file(content: str) -> None:
    """Write ``content`` at the start of the property file."""
    with open_property_file(False, True) as handle:
        handle.write(content)