from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    json_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def join_pointer(base: str, *tokens) -> str:
    path = base
    for token in tokens:
        path = f"{path}/{json_pointer_escape(str(token))}"
    return path


def lookup_source(
    source_map: Optional[SourceMap],
    json_path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    if not source_map or json_path is None:
        return SourceLocation(file_path=file_path, json_path=json_path)

    entry = source_map.get(json_path)
    if not entry:
        return SourceLocation(file_path=file_path, json_path=json_path)

    return SourceLocation(
        file_path=file_path,
        json_path=json_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.line is not None and loc.column is not None:
            parts.append(f"{loc.file_path}:{loc.line}:{loc.column}")
        elif loc.line is not None:
            parts.append(f"{loc.file_path}:{loc.line}")
        else:
            parts.append(str(loc.file_path))
    elif loc.line is not None:
        parts.append(f"line {loc.line}")

    if loc.json_path:
        parts.append(f"json_path={loc.json_path}")

    if not parts:
        return ""

    return " (" + ", ".join(parts) + ")"
