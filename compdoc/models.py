"""Core data models shared across compdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class CommentKind(str, Enum):
    """Comment flavours reported by the parser."""

    BLOCK = "Block"
    LINE = "Line"


@dataclass(frozen=True)
class Comment:
    """Comment body (without delimiters) and its 1-based line span."""

    kind: CommentKind
    text: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class PropertyRecord:
    """Documentation for a single component property."""

    name: str
    type: str
    description: str
    values: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if (self.type == "enum") != (self.values is not None):
            raise ValueError(f"Property '{self.name}': values must be set exactly when type is enum")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.values is not None:
            payload["values"] = list(self.values)
        payload["description"] = self.description
        return payload


@dataclass
class ComponentDocument:
    """Documentation assembled for one component source file."""

    name: str
    props: List[PropertyRecord]
    code_example: str
    import_path: str
    documentation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "props": [prop.to_dict() for prop in self.props],
            "codeExample": self.code_example,
            "importPath": self.import_path,
            "documentation": self.documentation,
        }


@dataclass
class ExtractionResult:
    """Outcome of documenting one file: a document, nothing, or an error."""

    file: str
    document: Optional[ComponentDocument] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DocumentOutcome:
    """Result of a documentation run written to disk."""

    path: Path
    components: List[ComponentDocument] = field(default_factory=list)
