"""Tests for compdoc.orchestrator."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from compdoc.config import CompDocConfig
from compdoc.orchestrator import Orchestrator, serialize_collection
from tests._fixtures.component_builder import ComponentDirBuilder
from tests._fixtures.sources import (
    BROKEN_SOURCE,
    BUTTON_EXAMPLE,
    BUTTON_SOURCE,
    ICON_SOURCE,
    UTILS_SOURCE,
)


def test_document_builds_sorted_collection(component_builder: ComponentDirBuilder) -> None:
    files = component_builder.write({"Icon.tsx": ICON_SOURCE, "Button.tsx": BUTTON_SOURCE})

    components = Orchestrator().document(files, config=CompDocConfig(root=component_builder.path()))

    assert [component.name for component in components] == ["Button", "Icon"]
    button, icon = components
    assert button.code_example == BUTTON_EXAMPLE
    assert button.import_path == "./src/components/Button"
    assert button.documentation == "A customizable button component.\n@component"

    assert icon.documentation == "Icon component"
    assert icon.code_example == '<Icon name="example" size={42} />'
    assert [prop.to_dict() for prop in icon.props] == [
        {"name": "name", "type": "string", "description": "name property"},
        {"name": "size", "type": "number", "description": "size property"},
    ]


def test_document_sorts_case_sensitively(component_builder: ComponentDirBuilder) -> None:
    files = component_builder.write(
        {
            "alpha.tsx": "export interface AlphaProps { on: boolean }\n",
            "Beta.tsx": "export interface BetaProps { on: boolean }\n",
        }
    )

    components = Orchestrator().document(files)

    assert [component.name for component in components] == ["Beta", "alpha"]


def test_parse_failure_warns_once_and_continues(
    component_builder: ComponentDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    files = component_builder.write({"Broken.tsx": BROKEN_SOURCE, "Button.tsx": BUTTON_SOURCE})

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        components = Orchestrator().document(files)

    assert [component.name for component in components] == ["Button"]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].getMessage().startswith("Warning: Could not fully parse Broken.tsx: ")


def test_extraction_exception_is_isolated(
    component_builder: ComponentDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    files = component_builder.write({"Button.tsx": BUTTON_SOURCE})

    class _FailingExtractor:
        def extract(self, filename, parsed):  # type: ignore[no-untyped-def]
            raise RuntimeError("extractor exploded")

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        components = Orchestrator(extractor=_FailingExtractor()).document(files)  # type: ignore[arg-type]

    assert components == []
    assert caplog.records[-1].getMessage() == (
        "Warning: Could not fully parse Button.tsx: extractor exploded"
    )


def test_synthesizer_exception_is_isolated(
    component_builder: ComponentDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    files = component_builder.write({"Button.tsx": BUTTON_SOURCE, "Icon.tsx": ICON_SOURCE})

    def synthesizer(name, props):  # type: ignore[no-untyped-def]
        if name == "Button":
            raise ValueError("cannot render Button")
        return f"<{name} />"

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        components = Orchestrator(synthesizer=synthesizer).document(files)

    assert [component.name for component in components] == ["Icon"]
    assert components[0].code_example == "<Icon />"
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert [record.getMessage() for record in warnings] == [
        "Warning: Could not fully parse Button.tsx: cannot render Button"
    ]


def test_prop_typed_with_enum_named_alias_is_documented(caplog: pytest.LogCaptureFixture) -> None:
    source = "type Enum = string;\nexport interface XProps {\n  kind: Enum;\n  label: string;\n}\n"

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        result = Orchestrator().document_source("X.tsx", source)

    assert result.ok and result.document is not None
    assert [prop.to_dict() for prop in result.document.props] == [
        {"name": "kind", "type": "Enum", "description": "kind property"},
        {"name": "label", "type": "string", "description": "label property"},
    ]
    assert not caplog.records


def test_files_without_props_are_skipped_silently(
    component_builder: ComponentDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    files = component_builder.write({"utils.ts": UTILS_SOURCE})

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        components = Orchestrator().document(files)

    assert components == []
    assert not caplog.records


def test_run_document_writes_json_idempotently(component_builder: ComponentDirBuilder) -> None:
    component_builder.write(
        {
            "Button.tsx": BUTTON_SOURCE,
            "Button.test.tsx": BROKEN_SOURCE,
            "Icon.tsx": ICON_SOURCE,
            "utils.ts": UTILS_SOURCE,
        }
    )
    root = component_builder.path()

    first = Orchestrator().run_document(str(root))
    content = first.path.read_bytes()
    second = Orchestrator().run_document(str(root))

    assert first.path == (root / "docs" / "components.json").resolve()
    assert second.path.read_bytes() == content
    payload = json.loads(content)
    assert [entry["name"] for entry in payload] == ["Button", "Icon"]
    assert payload[0]["props"][0] == {
        "name": "variant",
        "type": "enum",
        "values": ["primary", "secondary"],
        "description": "The variant of the button",
    }
    assert payload[0]["codeExample"] == BUTTON_EXAMPLE
    assert payload[0]["importPath"] == "./src/components/Button"


def test_run_document_honours_config_and_output(tmp_path: Path) -> None:
    builder = ComponentDirBuilder(tmp_path, components_dir="lib/ui")
    builder.write({"Button.tsx": BUTTON_SOURCE, "Icon.tsx": ICON_SOURCE})
    builder.write_config(
        """
        components_dir: lib/ui
        exclude_paths:
          - "Icon.*"
        """
    )
    output = tmp_path / "out" / "docs.json"

    outcome = Orchestrator().run_document(str(builder.path()), str(output))

    assert outcome.path == output.resolve()
    assert [component.name for component in outcome.components] == ["Button"]
    assert outcome.components[0].import_path == "./lib/ui/Button"
    assert output.read_text(encoding="utf-8") == serialize_collection(outcome.components)


def test_run_document_requires_components_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Components directory not found"):
        Orchestrator().run_document(str(tmp_path))


def test_document_source_reports_outcomes() -> None:
    orchestrator = Orchestrator()

    ok = orchestrator.document_source("Button.tsx", BUTTON_SOURCE)
    assert ok.ok and ok.document is not None
    assert ok.document.name == "Button"

    empty = orchestrator.document_source("utils.ts", UTILS_SOURCE)
    assert empty.ok and empty.document is None

    failed = orchestrator.document_source("Broken.tsx", BROKEN_SOURCE)
    assert not failed.ok
    assert failed.error
