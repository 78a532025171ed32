"""Text-transform passes used to recover a component from generated text.

Every pass is a pure ``str -> str`` function and is idempotent on its own
output, so each one can be exercised in isolation. Composition and the choice
of passes per mode live in :mod:`workflow_ui_generator.pipeline.extraction.pipeline`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

FENCE = "```"
FALLBACK_COMPONENT_NAME = "App"
PROSE_LINE_THRESHOLD = 100
MOUNT_CALL_TEMPLATE = "render(<{name} />);"

KNOWN_HOOKS: tuple[str, ...] = (
    "useCallback",
    "useContext",
    "useEffect",
    "useMemo",
    "useReducer",
    "useRef",
    "useState",
)

_FENCE_LINE_RE = re.compile(r"^\s*```[\w+#.-]*\s*$")

# Single or multi-line ES import statements, including side-effect imports.
_IMPORT_STATEMENT_RE = re.compile(
    r"""^[ \t]*import[ \t]+(?:[\w*{}\s,$]+?\s+from\s+)?['"][^'"\n]+['"][ \t]*;?""",
    re.M,
)
_EXPORT_DEFAULT_IDENT_RE = re.compile(
    r"^[ \t]*export[ \t]+default[ \t]+[A-Za-z_$][\w$]*[ \t]*;?[ \t]*$\n?", re.M
)
_EXPORT_LIST_RE = re.compile(r"^[ \t]*export[ \t]*\{[^}]*\}[ \t]*;?[ \t]*$\n?", re.M)
_EXPORT_PREFIX_RE = re.compile(
    r"^([ \t]*)export[ \t]+(?:default[ \t]+)?(?=(?:async[ \t]+)?function\b|const\b|let\b|var\b|class\b)",
    re.M,
)

_DEFINITION_RE = re.compile(
    r"^[ \t]*(?:export[ \t]+(?:default[ \t]+)?)?(?:"
    r"(?:async[ \t]+)?function[ \t]*\*?[ \t]*(?P<fn>[A-Za-z_$][\w$]*)[ \t]*\("
    r"|(?:const|let|var)[ \t]+(?P<arrow>[A-Z][\w$]*)[ \t]*=[ \t]*(?:async[ \t]*)?"
    r"(?:\([^)]*\)|[A-Za-z_$][\w$]*)[ \t]*=>"
    r")",
    re.M,
)

_WHITESPACE_RE = re.compile(r"\s*")
_IMPORT_PRESENT_RE = re.compile(r"^[ \t]*import\b", re.M)
_EXPORT_DEFAULT_PRESENT_RE = re.compile(r"^[ \t]*export[ \t]+default\b", re.M)

_CODE_KEYWORD_RE = re.compile(r"\b(?:import|export|function|const|let|var|return)\b")
_TAG_OPEN_RE = re.compile(r"</?[A-Za-z>]")
_CODE_PUNCTUATION = ("=", "{", "}", ";")
_COMMENT_PREFIXES = ("//", "/*", "*/", "{/*")
_CODE_MARKERS = KNOWN_HOOKS + ("className",)


def is_fence_line(line: str) -> bool:
    return bool(_FENCE_LINE_RE.match(line))


def strip_fences(text: str) -> str:
    """fence-strip: drop one leading fence line and a bare trailing fence line."""

    cleaned = text.strip()
    if not cleaned.startswith(FENCE):
        return cleaned

    lines = cleaned.split("\n")
    lines.pop(0)
    if lines and lines[-1].strip() == FENCE:
        lines.pop()
    return "\n".join(lines).strip()


def strip_boilerplate(text: str) -> str:
    """boilerplate-strip: remove imports and default exports the sandbox supplies itself."""

    cleaned = _IMPORT_STATEMENT_RE.sub("", text)
    cleaned = _EXPORT_DEFAULT_IDENT_RE.sub("", cleaned)
    cleaned = _EXPORT_LIST_RE.sub("", cleaned)
    cleaned = _EXPORT_PREFIX_RE.sub(r"\1", cleaned)
    return cleaned.strip()


def detect_component_name(text: str) -> str | None:
    """Identifier of the first component/function definition header, if any."""

    match = _DEFINITION_RE.search(text)
    if match is None:
        return None
    return match.group("fn") or match.group("arrow")


def _match_delimiter(text: str, open_index: int) -> int | None:
    open_ch = text[open_index]
    close_ch = "}" if open_ch == "{" else ")"
    depth = 0
    for index in range(open_index, len(text)):
        ch = text[index]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return index
    return None


def _indent_of(text: str, index: int) -> int | None:
    """Indentation of the line holding ``index``, or None when code precedes it."""

    line_start = text.rfind("\n", 0, index) + 1
    prefix = text[line_start:index]
    if prefix.strip():
        return None
    return len(prefix)


def _closing_delimiter(text: str, open_index: int, limit: int, indent: int) -> int | None:
    """Close for ``text[open_index]`` before ``limit``, trusting line position over depth.

    Braces inside strings, regexes and JSX text skew the depth count. The first
    close that opens a line at the header's indentation wins, then a
    line-anchored close at matching depth, then any line-anchored close, then a
    close at matching depth (one-line bodies).
    """

    open_ch = text[open_index]
    close_ch = "}" if open_ch == "{" else ")"
    depth = 0
    anchored_balanced: int | None = None
    anchored: int | None = None
    balanced: int | None = None
    for index in range(open_index, limit):
        ch = text[index]
        if ch == open_ch:
            depth += 1
            continue
        if ch != close_ch:
            continue
        depth -= 1
        line_indent = _indent_of(text, index)
        if line_indent is not None:
            if line_indent <= indent:
                return index
            if depth == 0 and anchored_balanced is None:
                anchored_balanced = index
            if anchored is None:
                anchored = index
        if depth == 0 and balanced is None:
            balanced = index

    for candidate in (anchored_balanced, anchored, balanced):
        if candidate is not None:
            return candidate
    return None


def _header_indent(match: re.Match[str]) -> int:
    header = match.group(0)
    return len(header) - len(header.lstrip(" \t"))


def _next_definition_start(text: str, start: int, indent: int) -> int:
    # Nested (deeper indented) components belong to the current body.
    for following in _DEFINITION_RE.finditer(text, start):
        if _header_indent(following) <= indent:
            return following.start()
    return len(text)


def _definition_end(text: str, match: re.Match[str]) -> int:
    """Index of the last character belonging to the definition starting at ``match``.

    The definition never runs into the next header at the same indentation.
    """

    if match.group("fn") is not None:
        params_close = _match_delimiter(text, match.end() - 1)
        search_from = params_close + 1 if params_close is not None else match.end()
        open_index = text.find("{", search_from)
        if open_index == -1:
            return len(text) - 1
    else:
        open_index = _WHITESPACE_RE.match(text, match.end()).end()
        if open_index >= len(text) or text[open_index] not in "{(":
            line_end = text.find("\n", match.end())
            return len(text) - 1 if line_end == -1 else line_end - 1

    indent = _header_indent(match)
    limit = _next_definition_start(text, open_index + 1, indent)
    close_index = _closing_delimiter(text, open_index, limit, indent)
    if close_index is None:
        return limit - 1

    # Swallow a statement terminator directly after the body ("};" / ");").
    if close_index + 1 < len(text) and text[close_index + 1] == ";":
        close_index += 1
    return close_index


def isolate_definition(text: str, *, keep_module_frame: bool = False) -> str:
    """definition-isolate: keep exactly one definition, discarding surrounding text.

    With ``keep_module_frame`` the import statements preceding the definition and
    a trailing ``export default <name>`` are kept so the result stays a loadable
    module. Returns an empty string when no definition is found.
    """

    match = _DEFINITION_RE.search(text)
    if match is None:
        return ""

    name = match.group("fn") or match.group("arrow")
    end = _definition_end(text, match)
    definition = text[match.start() : end + 1].strip("\n").rstrip()

    if not keep_module_frame:
        return definition

    parts: list[str] = []
    imports: list[str] = []
    for statement in _IMPORT_STATEMENT_RE.finditer(text[: match.start()]):
        cleaned = statement.group(0).strip()
        if cleaned not in imports:
            imports.append(cleaned)
    if imports:
        parts.append("\n".join(imports))

    parts.append(definition)

    if not _EXPORT_DEFAULT_PRESENT_RE.search(definition):
        trailing = text[end + 1 :]
        if re.search(rf"^[ \t]*export[ \t]+default[ \t]+{re.escape(name)}\b", trailing, re.M):
            parts.append(f"export default {name};")

    return "\n\n".join(parts)


def rename_reserved(text: str, reserved: Mapping[str, str]) -> str:
    """rename: move a definition off a name the host reserves for its rendering root.

    Only the definition header and a ``render(<Name .../>)`` mount call are touched.
    """

    match = _DEFINITION_RE.search(text)
    if match is None:
        return text
    group = "fn" if match.group("fn") is not None else "arrow"
    name = match.group(group)
    replacement = reserved.get(name)
    if not replacement or replacement == name:
        return text

    start, end = match.span(group)
    renamed = text[:start] + replacement + text[end:]
    return re.sub(
        rf"(render\(\s*<){re.escape(name)}(?=[\s/>])",
        rf"\g<1>{replacement}",
        renamed,
    )


def ensure_mount(text: str, fallback_name: str = FALLBACK_COMPONENT_NAME) -> str:
    """mount-ensure: append a render call when the component is never mounted."""

    if not text.strip():
        return ""
    name = detect_component_name(text) or fallback_name
    if re.search(rf"render\(\s*<{re.escape(name)}(?=[\s/>])", text):
        return text
    return text.rstrip() + "\n\n" + MOUNT_CALL_TEMPLATE.format(name=name)


def is_code_line(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return True
    if is_fence_line(stripped):
        return False
    if stripped.startswith(_COMMENT_PREFIXES):
        return True
    if any(token in stripped for token in _CODE_PUNCTUATION):
        return True
    if _CODE_KEYWORD_RE.search(stripped) or _TAG_OPEN_RE.search(stripped):
        return True
    return any(marker in stripped for marker in _CODE_MARKERS)


def filter_prose(text: str, threshold: int = PROSE_LINE_THRESHOLD) -> str:
    """prose-filter: drop explanation lines while tolerating short asides inside code."""

    kept: list[str] = []
    seen_code = False
    for line in text.split("\n"):
        stripped = line.strip()
        if is_fence_line(stripped):
            continue
        if is_code_line(line):
            seen_code = seen_code or bool(stripped)
            kept.append(line)
        elif seen_code and len(stripped) < threshold:
            kept.append(line)
    return "\n".join(kept).strip()


def framework_import_line(text: str) -> str:
    hooks = [hook for hook in KNOWN_HOOKS if re.search(rf"\b{hook}\b", text)]
    if not hooks:
        return "import React from 'react';"
    return f"import React, {{ {', '.join(hooks)} }} from 'react';"


def complete_module(text: str, fallback_name: str = FALLBACK_COMPONENT_NAME) -> str:
    """wrap-complete: add a framework import and default export when they are missing."""

    if not text.strip():
        return ""

    completed = text.strip()
    if not _IMPORT_PRESENT_RE.search(completed):
        completed = framework_import_line(completed) + "\n\n" + completed
    if not _EXPORT_DEFAULT_PRESENT_RE.search(completed):
        name = detect_component_name(completed) or fallback_name
        completed = completed + "\n\n" + f"export default {name};"
    return completed
