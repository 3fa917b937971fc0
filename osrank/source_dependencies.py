"""Extract the dependency graph of one platform from a dependencies dump."""

from __future__ import annotations

import argparse
import csv
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import TextIO

_FIELD_COUNT = 12
_U32_RE = re.compile(r"\+?\d+")
_U32_LIMIT = 2**32


def _parse_u32(text: str, name: str) -> int:
    if _U32_RE.fullmatch(text) is None:
        raise ValueError(f"field {name!r}: invalid unsigned integer {text!r}")
    value = int(text)
    if value >= _U32_LIMIT:
        raise ValueError(f"field {name!r}: {text!r} does not fit in 32 bits")
    return value


def _parse_bool(text: str, name: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"field {name!r}: invalid boolean {text!r}")


@dataclass(frozen=True)
class Dependency:
    """One row of the dependencies dump, in the order of its columns."""

    id: int
    platform: str
    project_name: str
    project_id: int
    version_number: str
    version_id: int
    dependency_name: str
    dependency_platform: str
    dependency_kind: str
    optional_dependency: bool
    dependency_requirements: str | None
    dependency_project_id: int | None

    @classmethod
    def from_record(cls, record: Sequence[str]) -> Dependency:
        """Build a dependency from a CSV record, raising ValueError if malformed."""
        if len(record) < _FIELD_COUNT:
            raise ValueError(
                f"expected at least {_FIELD_COUNT} fields, got {len(record)}"
            )
        (
            dep_id,
            platform,
            project_name,
            project_id,
            version_number,
            version_id,
            dependency_name,
            dependency_platform,
            dependency_kind,
            optional_dependency,
            requirements,
            dependency_project_id,
        ) = record[:_FIELD_COUNT]
        return cls(
            id=_parse_u32(dep_id, "id"),
            platform=platform,
            project_name=project_name,
            project_id=_parse_u32(project_id, "project_id"),
            version_number=version_number,
            version_id=_parse_u32(version_id, "version_id"),
            dependency_name=dependency_name,
            dependency_platform=dependency_platform,
            dependency_kind=dependency_kind,
            optional_dependency=_parse_bool(optional_dependency, "optional_dependency"),
            dependency_requirements=requirements or None,
            dependency_project_id=(
                _parse_u32(dependency_project_id, "dependency_project_id")
                if dependency_project_id
                else None
            ),
        )


def _records(source: Iterable[str]) -> Iterator[list[str]]:
    """Yield the data records whose length matches the header's."""
    reader = csv.reader(source)
    header = next(reader, None)
    if header is None:
        return
    for row in reader:
        if len(row) == len(header):
            yield row


def _write_dependency(
    out: TextIO, dependency: Dependency, seen: set[tuple[int, int]]
) -> None:
    target = dependency.dependency_project_id
    if target is None:
        return
    edge = (dependency.project_id, target)
    if edge not in seen:
        seen.add(edge)
        out.write(f"{dependency.project_id},{target}\n")


def _write_metadata(
    out: TextIO, dependency: Dependency, platform: str, seen: set[int]
) -> None:
    if dependency.project_id not in seen:
        seen.add(dependency.project_id)
        out.write(f"{dependency.project_id},{dependency.project_name},{platform}\n")


def source_dependencies(
    path: str | PathLike, platform: str, output_dir: str | PathLike = "data"
) -> None:
    """Write ``<platform>_dependencies.csv`` and ``<platform>_dependencies_meta.csv``.

    Only records of ``platform`` are considered. Both output files must not
    exist yet.
    """
    out_dir = Path(output_dir)
    stem = platform.lower()
    with open(path, newline="", encoding="utf-8") as source, open(
        out_dir / f"{stem}_dependencies.csv", "x", encoding="utf-8"
    ) as dependencies, open(
        out_dir / f"{stem}_dependencies_meta.csv", "x", encoding="utf-8"
    ) as metadata:
        dependencies.write("FROM_ID,TO_ID\n")
        metadata.write("ID,NAME,PLATFORM\n")

        unique_projects: set[int] = set()
        unique_dependencies: set[tuple[int, int]] = set()
        for record in _records(source):
            if len(record) < 2 or record[1] != platform:
                continue
            dependency = Dependency.from_record(record)
            _write_dependency(dependencies, dependency, unique_dependencies)
            _write_metadata(metadata, dependency, platform, unique_projects)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="source_dependencies",
        description="Extract the dependencies of one platform from a CSV dump.",
    )
    parser.add_argument("path", help="path to the dependencies CSV file")
    parser.add_argument("platform", help="platform to extract, e.g. Cargo")
    parser.add_argument(
        "--output-dir", default="data", help="directory for the generated files"
    )
    args = parser.parse_args(argv)
    source_dependencies(args.path, args.platform, args.output_dir)
    return 0