"""Embedded-script templates: ``<% code %>`` blocks, ``<%= expr %>`` output and ``$var`` substitution.

:func:`parse` turns a template into script code that an interpreter runs.
Literal text becomes ``print(eql.Subst(`...`))`` calls, ``<% ... %>``
blocks are copied as code, and ``<%= expr %>`` prints an expression.
"""

from __future__ import annotations

import json
import os
import re
import shutil
import sys
from collections.abc import Mapping
from contextlib import redirect_stdout
from typing import Any, Optional, Protocol

_EQL_SUFFIX = ".eql"
_CODE_SPECIALS = re.compile(r'[%"`]')


class EqlError(ValueError):
    """A template could not be parsed."""


class EndRequiredError(EqlError):
    """A code block was not closed by ``%>``."""

    def __init__(self) -> None:
        super().__init__("eql script requires `%>` to end")


class EndOfStringError(EqlError):
    """A string literal inside a code block was not closed."""

    def __init__(self) -> None:
        super().__init__("string doesn't end")


class Interpreter(Protocol):
    """The script interpreter an :class:`EqlEngine` drives."""

    def get_var(self, name: str) -> Any:
        """Return a variable's value; raise ``KeyError`` if it is not set."""

    def set_var(self, name: str, value: Any) -> None:
        """Set a variable."""

    def reset_vars(self, variables: Mapping[str, Any]) -> None:
        """Replace every variable of the executing context."""

    def safe_exec(self, code: str, fname: str) -> None:
        """Compile and run ``code``; raise if it fails."""


# ---------------------------------------------------------------------------
# Parsing


def parse(source: str) -> str:
    """Translate template ``source`` into script code."""
    out: list[str] = []
    while True:
        pos = source.find("<%")
        if pos < 0:
            _parse_text(out, source)
            break
        if pos > 0:
            _parse_text(out, source[:pos])
        source = _parse_eql(out, source[pos + 2 :])
    return "".join(out)


def _parse_text(out: list[str], source: str) -> None:
    out.append("print(eql.Subst(`")
    while True:
        pos = source.find("`")
        if pos < 0:
            out.append(source)
            break
        out.append(source[:pos])
        end = pos + 1
        while end < len(source) and source[end] == "`":
            end += 1
        out.append('` + "')
        out.append(source[pos:end])
        out.append('" + `')
        source = source[end:]
    out.append("`)); ")


def _find_end(line: str, quote: str) -> int:
    """Index of the closing ``quote`` in ``line``, skipping backslash escapes; -1 if none."""
    pattern = re.compile(r"(?:\\.|[^\\" + re.escape(quote) + r"])*" + re.escape(quote), re.DOTALL)
    match = pattern.match(line)
    return match.end() - 1 if match else -1


def _parse_eql(out: list[str], source: str) -> str:
    is_expr = source.startswith("=")
    if is_expr:
        out.append("print(")
        source = source[1:]
    while True:
        match = _CODE_SPECIALS.search(source)
        if match is None:
            raise EndRequiredError()
        pos = match.start()
        char = source[pos]
        if char == "%":
            if source[pos + 1 :].startswith(">"):
                rest = source[pos + 2 :]
                out.append(source[:pos])
                if is_expr:
                    out.append("); ")
                elif rest.startswith("\n"):
                    rest = rest[1:]
                    out.append("\n")
                else:
                    out.append("; ")
                return rest
            out.append(source[: pos + 1])
            source = source[pos + 1 :]
        else:
            end = _find_end(source[pos + 1 :], char)
            if end < 0:
                raise EndOfStringError()
            end += pos + 2
            out.append(source[:end])
            source = source[end:]


# ---------------------------------------------------------------------------
# Variable substitution


def _format(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _lookup(variables: Any, name: str) -> Any:
    try:
        if isinstance(variables, Mapping):
            return variables[name]
        return variables.get_var(name)
    except KeyError:
        raise KeyError(f"variable not found: {name}") from None


def subst(text: str, variables: Any) -> str:
    """Replace ``$name`` with the variable's value and ``$$`` with ``$``.

    ``variables`` is a mapping or an object with ``get_var``.  A missing
    variable raises ``KeyError``.
    """
    if not isinstance(variables, Mapping) and not hasattr(variables, "get_var"):
        raise TypeError(f"eql.Subst: unsupported lang type `{type(variables).__name__}`")
    out: list[str] = []
    while True:
        pos = text.find("$")
        if pos < 0 or pos + 1 >= len(text):
            out.append(text)
            break
        char = text[pos + 1]
        if char == "$":
            out.append(text[: pos + 1])
            text = text[pos + 2 :]
        elif ("a" <= char <= "z") or ("A" <= char <= "Z"):
            out.append(text[:pos])
            end = pos + 2
            while end < len(text) and (text[end].isalpha() or text[end].isdecimal()):
                end += 1
            key = text[pos + 1 : end]
            out.append(_format(_lookup(variables, key)))
            text = text[end:]
        else:
            out.append(text[: pos + 1])
            text = text[pos + 1 :]
    return "".join(out)


# ---------------------------------------------------------------------------
# Template input


def parse_input(text: str) -> dict[str, Any]:
    """Decode the first JSON object in ``text``; numbers become floats."""
    decoder = json.JSONDecoder(parse_int=float)
    value, _ = decoder.raw_decode(text.lstrip())
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"json: cannot decode {type(value).__name__} into an object")
    return value


def input_file(path: str) -> dict[str, Any]:
    """Decode a JSON object from a file, or from standard input when ``path`` is ``-``."""
    if path == "-":
        return parse_input(sys.stdin.read())
    with open(path, encoding="utf-8") as handle:
        return parse_input(handle.read())


# ---------------------------------------------------------------------------
# Execution


class EqlEngine:
    """Runs templates through an interpreter."""

    def __init__(self, impl: Interpreter) -> None:
        self.impl = impl

    def var(self, name: str, default: Any) -> Any:
        """Return a variable's value, or ``default`` if it is not set."""
        try:
            return self.impl.get_var(name)
        except KeyError:
            return default

    def imports(self) -> str:
        """Return the comma-separated ``imports`` variable as quoted, tab-indented lines."""
        imports = self.var("imports", "")
        if not isinstance(imports, str):
            raise TypeError("variable `imports` must be a string")
        if not imports:
            return ""
        return '"' + '"\n\t"'.join(imports.split(",")) + '"'

    def subst(self, text: str) -> str:
        """Substitute the interpreter's variables into ``text``."""
        return subst(text, self.impl)

    def execute_dir(self, global_vars: Mapping[str, Any], source: str, output: str) -> None:
        """Render every ``.eql`` file under ``source`` into ``output`` and copy the rest.

        When ``output`` is empty it is ``source`` with its variables substituted.
        """
        if not output:
            output = self.subst(source)
            if output == source:
                raise ValueError(f"source `{source}` doesn't have $var")
        os.makedirs(output, mode=0o755, exist_ok=True)
        with os.scandir(source) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
        for entry in entries:
            src = os.path.join(source, entry.name)
            dst = os.path.join(output, entry.name)
            if entry.is_dir():
                self.execute_dir(global_vars, src, dst)
            elif entry.name.endswith(_EQL_SUFFIX):
                self.impl.reset_vars(global_vars)
                self.execute_file(src, dst[: -len(_EQL_SUFFIX)])
            else:
                shutil.copy(src, dst)

    def execute_file(self, source: str, output: str) -> None:
        """Render the template file ``source`` into ``output``."""
        with open(source, encoding="utf-8") as handle:
            text = handle.read()
        self.execute(text, source, output)

    def execute(self, source: str, fname: str, output: Optional[str]) -> None:
        """Render template text; printed output goes to ``output`` if given, else stdout.

        On failure a partly written ``output`` file is removed.
        """
        self.impl.set_var("eql", self)
        code = parse(source)
        if not output:
            self.impl.safe_exec(code, fname)
            return
        try:
            with open(output, "w", encoding="utf-8") as handle, redirect_stdout(handle):
                self.impl.safe_exec(code, fname)
        except BaseException:
            if os.path.exists(output):
                os.remove(output)
            raise