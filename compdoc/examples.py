"""Usage snippet synthesis from documented properties."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from .models import PropertyRecord

CHILD_CONTENT = "Content"
_RENDER_OPTION_SHAPE = "(option:dropdownoption)=>reactnode"


def _string(name: str) -> str:
    return f'{name}="example"'


def _number(name: str) -> str:
    return f"{name}={{42}}"


def _bool(name: str) -> str:
    return f"{name}={{false}}"


def _empty_list(name: str) -> str:
    return f"{name}={{[]}}"


def _callback(name: str) -> str:
    arg = "event" if name.startswith("on") else "value"
    return f"{name}={{({arg}) => console.log('{name}:', {arg})}}"


_UNION_PREFERENCE: Sequence[tuple[str, Callable[[str], str]]] = (
    ("string", _string),
    ("number", _number),
    ("bool", _bool),
)

_BY_TAG: Dict[str, Callable[[str], str]] = {
    "string": _string,
    "number": _number,
    "bool": _bool,
    "boolean": _bool,
    "function": _callback,
    "array": _empty_list,
}


def example_attribute(prop: PropertyRecord) -> Optional[str]:
    """Return the JSX attribute illustrating ``prop``; None when it is left out."""
    name = prop.name

    if "|" in prop.type:
        members = [member.strip() for member in prop.type.split("|")]
        for member_type, render in _UNION_PREFERENCE:
            if member_type in members:
                return render(name)
        return f"{name}={{{members[0].lower()}}}"

    tag = prop.type.lower()
    if tag in _BY_TAG:
        return _BY_TAG[tag](name)
    if tag == "enum":
        return f'{name}="{prop.values[0]}"' if prop.values else None
    if tag == "reactnode":
        return None
    if "".join(tag.split()) == _RENDER_OPTION_SHAPE:
        return f"{name}={{option => <span>{{option.label}}</span>}}"
    if prop.type.endswith("[]"):
        return _empty_list(name)
    if "=>" in prop.type:
        return f"{name}={{() => {{}}}}"
    return f"{name}={{/* example for {prop.type} */}}"


def synthesize_example(component_name: str, props: Sequence[PropertyRecord]) -> str:
    """Render a single JSX usage of ``component_name``."""
    attributes: List[str] = []
    for prop in props:
        attribute = example_attribute(prop)
        if attribute:
            attributes.append(attribute)
    opening = component_name + ("".join(f" {attribute}" for attribute in attributes))

    if any(prop.type == "reactnode" for prop in props):
        return f"<{opening}>\n  {CHILD_CONTENT}\n</{component_name}>"
    return f"<{opening} />"


__all__ = ["example_attribute", "synthesize_example"]
