"""Test script extraction and code generation.

extract_test_script() keeps the user-facing page actions of a recorded
context; script_to_code() renders them as a Playwright test file.
"""

from __future__ import annotations

import json
import re
from typing import Any

from traceproject.trace.models import ActionEntry, ContextEntry, ScriptAction, TestScript

RECORDED_METHODS = frozenset(
    {
        "goto",
        "click",
        "dblclick",
        "fill",
        "type",
        "press",
        "check",
        "uncheck",
        "hover",
        "selectOption",
        "setInputFiles",
    }
)

# Context options carried into test.use(), in emission order
USE_OPTIONS = (
    "viewport",
    "deviceScaleFactor",
    "isMobile",
    "hasTouch",
    "colorScheme",
    "locale",
    "timezoneId",
)

_INTERNAL_SELECTOR = re.compile(r"^internal:(?P<engine>[a-z-]+)=(?P<body>.*)$", re.DOTALL)
_QUOTED_WITH_FLAG = re.compile(r'^"(?P<text>(?:[^"\\]|\\.)*)"(?P<flag>[is]?)$', re.DOTALL)
_ROLE = re.compile(
    r'^(?P<role>[a-z]+)(?:\[name="(?P<name>(?:[^"\\]|\\.)*)"(?P<flag>[is]?)\])?$', re.DOTALL
)
_TESTID = re.compile(r'^\[(?P<attr>[\w-]+)="(?P<value>(?:[^"\\]|\\.)*)"[is]?\]$', re.DOTALL)


def _option_values(params: dict[str, Any]) -> list[str]:
    values: list[str] = []
    for option in params.get("options") or []:
        if isinstance(option, dict):
            for key in ("valueOrLabel", "value", "label"):
                if key in option:
                    values.append(str(option[key]))
                    break
        else:
            values.append(str(option))
    return values


def _file_names(params: dict[str, Any]) -> list[str]:
    if params.get("localPaths"):
        return [str(p).replace("\\", "/").rsplit("/", 1)[-1] for p in params["localPaths"]]
    return [str(p.get("name", "")) for p in params.get("payloads") or [] if isinstance(p, dict)]


def _action_args(action: ActionEntry) -> list[Any]:
    params = action.params
    if action.method == "goto":
        return [params.get("url", "")]
    if action.method == "fill":
        return [params.get("value", "")]
    if action.method == "type":
        return [params.get("text", "")]
    if action.method == "press":
        return [params.get("key", "")]
    if action.method == "selectOption":
        values = _option_values(params)
        return [values[0] if len(values) == 1 else values]
    if action.method == "setInputFiles":
        names = _file_names(params)
        return [names[0] if len(names) == 1 else names]
    return []


def extract_test_script(context_entry: ContextEntry, title: str) -> TestScript:
    """Describe the recorded context as a single test named ``title``."""
    aliases: dict[str, str] = {}
    actions: list[ScriptAction] = []

    for action in context_entry.actions:
        if action.class_name not in ("Frame", "Page") or action.method not in RECORDED_METHODS:
            continue
        page_id = action.page_id or ""
        if page_id not in aliases:
            aliases[page_id] = "page" if not aliases else f"page{len(aliases)}"
        selector = action.params.get("selector")
        actions.append(
            ScriptAction(
                page_alias=aliases[page_id],
                method=action.method,
                selector=str(selector) if selector is not None else None,
                args=_action_args(action),
            )
        )

    options = {k: context_entry.options[k] for k in USE_OPTIONS if k in context_entry.options}
    return TestScript(
        title=title,
        browser_name=context_entry.browser_name,
        options=options,
        actions=actions,
    )


def quote(text: str) -> str:
    """Render text as a single-quoted JavaScript string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f"'{escaped}'"


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, list):
        return "[" + ", ".join(_literal(v) for v in value) + "]"
    return json.dumps(value)


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text)


def _exact_suffix(flag: str) -> str:
    return ", { exact: true }" if flag == "s" else ""


def selector_to_locator(selector: str, test_id_attribute: str = "data-testid") -> str:
    """Convert a recorded selector into a locator expression (without the page prefix)."""
    match = _INTERNAL_SELECTOR.match(selector) if ">>" not in selector else None
    if match is None:
        return f"locator({quote(selector)})"

    engine, body = match.group("engine"), match.group("body")
    if engine == "testid":
        testid = _TESTID.match(body)
        if testid and testid.group("attr") == test_id_attribute:
            return f"getByTestId({quote(_unescape(testid.group('value')))})"
    elif engine == "role":
        role = _ROLE.match(body)
        if role:
            if role.group("name") is None:
                return f"getByRole({quote(role.group('role'))})"
            name = quote(_unescape(role.group("name")))
            exact = ", exact: true" if role.group("flag") == "s" else ""
            return f"getByRole({quote(role.group('role'))}, {{ name: {name}{exact} }})"
    elif engine in ("text", "label", "placeholder"):
        text = _QUOTED_WITH_FLAG.match(body)
        if text:
            method = {"text": "getByText", "label": "getByLabel", "placeholder": "getByPlaceholder"}[
                engine
            ]
            return f"{method}({quote(_unescape(text.group('text')))}{_exact_suffix(text.group('flag'))})"
    return f"locator({quote(selector)})"


def _action_line(action: ScriptAction, test_id_attribute: str) -> str:
    args = ", ".join(_literal(a) for a in action.args)
    if action.method == "goto" or action.selector is None:
        return f"await {action.page_alias}.{action.method}({args});"
    locator = selector_to_locator(action.selector, test_id_attribute)
    return f"await {action.page_alias}.{locator}.{action.method}({args});"


def script_to_code(script: TestScript, test_id_attribute: str = "data-testid") -> str:
    """Render a TestScript as a Playwright test source file."""
    lines = ["import { test, expect } from '@playwright/test';", ""]

    if script.options:
        lines.append("test.use({")
        lines.extend(f"  {key}: {json.dumps(value)}," for key, value in script.options.items())
        lines.extend(["});", ""])

    extra_pages = [alias for alias in script.page_aliases if alias != "page"]
    fixtures = "{ page, context }" if extra_pages else "{ page }"
    lines.append(f"test({quote(script.title)}, async ({fixtures}) => {{")

    opened: set[str] = {"page"}
    for action in script.actions:
        if action.page_alias not in opened:
            opened.add(action.page_alias)
            lines.append(f"  const {action.page_alias} = await context.newPage();")
        lines.append(f"  {_action_line(action, test_id_attribute)}")

    lines.extend(["});", ""])
    return "\n".join(lines)
