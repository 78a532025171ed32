"""Behavioural properties of the composed extraction pipeline."""

from __future__ import annotations

import pytest

from workflow_ui_generator.pipeline.extraction import (
    ExtractionMode,
    ExtractionOptions,
    ExtractionPass,
    build_passes,
    normalize,
)
from workflow_ui_generator.pipeline.extraction.pipeline import run_passes

COUNTER_RESPONSE = (
    "Here you go:\n"
    "```jsx\n"
    "import React, { useState } from 'react';\n"
    "\n"
    "const Counter = () => {\n"
    "  const [n, setN] = useState(0);\n"
    "  return <button onClick={() => setN(n + 1)}>{n}</button>;\n"
    "};\n"
    "\n"
    "export default Counter;\n"
    "```\n"
    "Enjoy!"
)

STRING_BRACE_RESPONSE = (
    "function App() {\n"
    "  const close = '}';\n"
    '  return <div className="p-4">Hi</div>;\n'
    "}\n"
)

UNBALANCED_RESPONSE = (
    "function First() {\n"
    "  if (ready) {\n"
    "  return 1;\n"
    "}\n"
    "\n"
    "Here is another version:\n"
    "\n"
    "function Second() {\n"
    "  return 2;\n"
    "}\n"
)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   \n\t",
        "```",
        "``````",
        "}}}{{{",
        "function (",
        "function Broken(a, b {",
        "const Lonely = () =>",
        "export default",
        "ünïcødé prose without any code at all",
        "\x00\x01 binary junk \x7f",
        42,
    ],
)
def test_normalize_never_raises(raw: object) -> None:
    for mode in ExtractionMode:
        result = normalize(raw, mode)  # type: ignore[arg-type]
        assert isinstance(result, str)


def test_fenced_function_is_unwrapped() -> None:
    result = normalize("```jsx\nfunction A(){return 1;}\n```")

    assert "`" not in result
    assert "function A" in result


def test_inner_fences_are_removed() -> None:
    raw = (
        "```jsx\nfunction A() {\n  return 1;\n}\n```\n"
        "Some words\n```js\nconst b = 2;\n```"
    )

    result = normalize(raw)

    assert "`" not in result
    assert "const b" not in result


def test_single_definition_is_extracted() -> None:
    raw = (
        "First attempt:\n"
        "function One() {\n  return 1;\n}\n"
        "Actually, a better version follows below, please use it instead of the first one.\n"
        "function Two() {\n  return 2;\n}\n"
    )

    result = normalize(raw)

    assert result.count("function ") == 1
    assert "function One" in result


def test_completion_adds_import_and_export() -> None:
    result = normalize("function Bare() { return 1; }")

    assert "import React from 'react';" in result
    assert "export default Bare;" in result


def test_non_code_input_normalizes_to_empty() -> None:
    assert normalize("I'm sorry, I can't help with that request.") == ""


@pytest.mark.parametrize(
    "raw",
    [
        COUNTER_RESPONSE,
        "function Plain() {\n  return <p>hi</p>;\n}",
        "```jsx\nfunction A(){return 1;}\n```",
        "I cannot do that.",
        STRING_BRACE_RESPONSE,
        UNBALANCED_RESPONSE,
    ],
)
def test_packaging_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw, ExtractionMode.PACKAGING)
    assert normalize(once, ExtractionMode.PACKAGING) == once


def test_packaging_keeps_module_frame() -> None:
    result = normalize(COUNTER_RESPONSE, ExtractionMode.PACKAGING)

    assert result.startswith("import React, { useState } from 'react';")
    assert result.endswith("export default Counter;")
    assert result.count("export default") == 1
    assert "Enjoy" not in result


def test_preview_mode_renames_and_mounts() -> None:
    raw = (
        "```jsx\nimport React from 'react';\n"
        "function App() {\n  return <div className=\"p-4\">Hi</div>;\n}\n"
        "export default App;\n```"
    )

    result = normalize(raw, ExtractionMode.PREVIEW)

    assert "import" not in result
    assert "export" not in result
    assert result.startswith("function WorkflowApp() {")
    assert result.endswith("render(<WorkflowApp />);")


def test_packaging_mode_does_not_rename() -> None:
    result = normalize("function App() {\n  return null;\n}", ExtractionMode.PACKAGING)

    assert "function App()" in result
    assert "WorkflowApp" not in result


def test_pass_tags_per_mode() -> None:
    preview = [p.tag for p in build_passes(ExtractionMode.PREVIEW)]
    packaging = [p.tag for p in build_passes(ExtractionMode.PACKAGING)]

    assert preview == [
        "fence-strip",
        "boilerplate-strip",
        "definition-isolate",
        "rename",
        "mount-ensure",
    ]
    assert packaging == ["fence-strip", "definition-isolate", "prose-filter", "wrap-complete"]


def test_options_are_threaded_into_passes() -> None:
    options = ExtractionOptions(reserved_names={"Widget": "HostWidget"}, fallback_name="Fallback")

    preview = normalize("function Widget() {}", ExtractionMode.PREVIEW, options)
    packaged = normalize("function Widget() {}", ExtractionMode.PACKAGING, options)

    assert "function HostWidget()" in preview
    assert "export default Widget;" in packaged


def test_failing_pass_is_skipped() -> None:
    def explode(_text: str) -> str:
        raise RuntimeError("boom")

    pipeline = [
        ExtractionPass("explode", explode),
        ExtractionPass("upper", str.upper),
    ]

    assert run_passes(" abc ", pipeline) == "ABC"


def test_brace_inside_string_keeps_whole_body() -> None:
    result = normalize(STRING_BRACE_RESPONSE, ExtractionMode.PACKAGING)

    assert "return <div className=\"p-4\">Hi</div>;\n}" in result
    assert result.endswith("export default App;")


def test_unbalanced_definition_does_not_swallow_the_next_one() -> None:
    result = normalize(UNBALANCED_RESPONSE, ExtractionMode.PACKAGING)

    assert result.count("function ") == 1
    assert "function First" in result
    assert "another version" not in result
    assert result.count("export default") == 1
    assert result.endswith("export default First;")
