"""Pipeline orchestration for component documentation runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from .analyzers.props import PropertyExtractor
from .analyzers.tree_sitter import SourceParser
from .config import CompDocConfig, load_config
from .examples import synthesize_example
from .logging import get_logger
from .models import ComponentDocument, DocumentOutcome, ExtractionResult, PropertyRecord
from .scanner import ComponentScanner

WARNING_TEMPLATE = "Warning: Could not fully parse %s: %s"


class Orchestrator:
    """Documents every component of a project, one file at a time."""

    def __init__(
        self,
        scanner: ComponentScanner | None = None,
        parser: SourceParser | None = None,
        extractor: PropertyExtractor | None = None,
        synthesizer: Callable[[str, Sequence[PropertyRecord]], str] = synthesize_example,
    ) -> None:
        self._scanner = scanner
        self.parser = parser or SourceParser()
        self.extractor = extractor or PropertyExtractor()
        self.synthesizer = synthesizer
        self.logger = get_logger("orchestrator")

    def run_document(self, path: str, output: str | None = None) -> DocumentOutcome:
        """Document the components of the project at ``path`` and write the JSON file."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        self.logger.info("Documenting components in %s", config.components_path)

        files = self.list_components(config)
        self.logger.debug("Found %d component files", len(files))
        components = self.document(files, config=config)

        output_path = Path(output).expanduser().resolve() if output else config.output_path
        write_collection(output_path, components)
        self.logger.info("Wrote %d components to %s", len(components), output_path)
        return DocumentOutcome(path=output_path, components=components)

    def list_components(self, config: CompDocConfig) -> List[Path]:
        scanner = self._scanner or ComponentScanner(config.exclude_paths)
        return scanner.list_components(config.components_path)

    def document(
        self, files: Iterable[Path], *, config: CompDocConfig | None = None
    ) -> List[ComponentDocument]:
        """Return the sorted collection; a failing file is logged and skipped."""
        config = config or CompDocConfig(root=Path.cwd())
        documents: List[ComponentDocument] = []
        for file_path in files:
            result = self.document_file(Path(file_path), config=config)
            if not result.ok:
                self.logger.warning(WARNING_TEMPLATE, result.file, result.error)
                continue
            if result.document is None:
                self.logger.debug("No props declaration found in %s", result.file)
                continue
            documents.append(result.document)
        return sort_collection(documents)

    def document_file(self, file_path: Path, *, config: CompDocConfig) -> ExtractionResult:
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return ExtractionResult(file=file_path.name, error=str(exc))
        return self.document_source(file_path.name, text, config=config)

    def document_source(
        self, filename: str, text: str, *, config: CompDocConfig | None = None
    ) -> ExtractionResult:
        """Parse and document one in-memory source."""
        config = config or CompDocConfig(root=Path.cwd())
        try:
            parsed = self.parser.parse(text, filename)
            extraction = self.extractor.extract(filename, parsed)
            if not extraction.props:
                return ExtractionResult(file=filename)

            name = extraction.component_name
            document = ComponentDocument(
                name=name,
                props=list(extraction.props),
                code_example=self.synthesizer(name, extraction.props),
                import_path=config.import_path(name),
                documentation=extraction.documentation or f"{name} component",
            )
        except Exception as exc:  # isolate per-file failures
            return ExtractionResult(file=filename, error=str(exc) or exc.__class__.__name__)
        return ExtractionResult(file=filename, document=document)


def sort_collection(documents: Iterable[ComponentDocument]) -> List[ComponentDocument]:
    """Order documents by name (case-sensitive)."""
    return sorted(documents, key=lambda document: document.name)


def serialize_collection(documents: Sequence[ComponentDocument]) -> str:
    return json.dumps([document.to_dict() for document in documents], indent=2, ensure_ascii=False) + "\n"


def write_collection(path: Path, documents: Sequence[ComponentDocument]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_collection(documents), encoding="utf-8")
    return path


__all__ = [
    "Orchestrator",
    "WARNING_TEMPLATE",
    "serialize_collection",
    "sort_collection",
    "write_collection",
]
