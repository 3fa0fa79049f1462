"""Rendering of node forms into page markup."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

_VIEWPORT = "width=device-width,minimum-scale=1.0,maximum-scale=1.0,user-scalable=no"
_INDENT = "  "


class Renderer(ABC):
    """Turns a node form into a document."""

    @abstractmethod
    def render(self, form: Any) -> bytes:
        """Return the rendered document for ``form``."""


@dataclass
class _Element:
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    text: str = ""
    children: list["_Element"] = field(default_factory=list)

    def child(self, tag: str, **attrs: str) -> "_Element":
        element = _Element(tag, list(attrs.items()))
        self.children.append(element)
        return element

    def set(self, key: str, value: str) -> None:
        self.attrs.append((key, value))


def _escape_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\r", "&#xD;")
    )


def _escape_attr(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("'", "&apos;")
        .replace('"', "&quot;")
    )


def _serialize(element: _Element, depth: int, out: list[str]) -> None:
    pad = _INDENT * depth
    attrs = "".join(f' {key}="{_escape_attr(value)}"' for key, value in element.attrs)
    if element.children:
        out.append(f"{pad}<{element.tag}{attrs}>\n")
        for child in element.children:
            _serialize(child, depth + 1, out)
        out.append(f"{pad}</{element.tag}>\n")
    elif element.text:
        out.append(f"{pad}<{element.tag}{attrs}>{_escape_text(element.text)}</{element.tag}>\n")
    else:
        out.append(f"{pad}<{element.tag}{attrs}/>\n")


def _options(field_: Any) -> Iterable[Any]:
    return getattr(field_, "values", None) or ()


@dataclass
class IonicRenderer(Renderer):
    """Renders a form as an Ionic page, one list item per supported field.

    Fields of types ``string``, ``long``, ``date``, ``enum`` and ``boolean``
    are rendered; fields of any other type are left out.
    """

    script_url: str = "ionic.js"

    def render(self, form: Any) -> bytes:
        body, item_list = self._page()
        for field_ in getattr(form, "fields", None) or ():
            builder = self._builder_for(getattr(field_, "type", ""))
            if builder is not None:
                builder(item_list, field_)
        out: list[str] = []
        _serialize(body, 0, out)
        return "".join(out).encode("utf-8")

    def _page(self) -> tuple[_Element, _Element]:
        body = _Element("body")
        body.child("meta", name="viewport", content=_VIEWPORT)
        body.child("script", src=self.script_url)
        content = body.child("ion-app").child("ion-page").child("ion-content")
        return body, content.child("ion-list")

    def _builder_for(self, type_code: str) -> Optional[Callable[[_Element, Any], None]]:
        return {
            "string": self._input("ion-input"),
            "long": self._input("ion-input"),
            "date": self._input("ion-datetime"),
            "enum": self._select,
            "boolean": self._input("ion-radio"),
        }.get(type_code)

    @staticmethod
    def _item(item_list: _Element, field_: Any) -> _Element:
        item = item_list.child("ion-item")
        item.child("ion-label").text = getattr(field_, "label", "") or ""
        return item

    def _input(self, tag: str) -> Callable[[_Element, Any], None]:
        def build(item_list: _Element, field_: Any) -> None:
            self._item(item_list, field_).child(tag, id=getattr(field_, "id", "") or "")

        return build

    def _select(self, item_list: _Element, field_: Any) -> None:
        select = self._item(item_list, field_).child("ion-select", id=getattr(field_, "id", "") or "")
        for option in _options(field_):
            element = select.child("ion-select-option")
            element.text = getattr(option, "name", "") or ""
            element.set("id", getattr(option, "id", "") or "")