"""Atom feed to dict conversion for the domain settings API.

The settings feed answers with a single Atom entry such as::

    <entry xmlns='http://www.w3.org/2005/Atom'
           xmlns:apps='http://schemas.google.com/apps/2006'>
      <id>https://apps-apis.google.com/a/feeds/domain/2.0/example.com/general/defaultLanguage</id>
      <apps:property name='defaultLanguage' value='en'/>
    </entry>

which converts to ``{"xmlns": ..., "xmlns:apps": ..., "id": "...",
"apps:property": {"name": "defaultLanguage", "value": "en"}}``: attributes
and child elements become keys (with their document prefix), repeated
children become lists, text-only elements become strings.
"""
from __future__ import annotations
import io
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Tuple, Union

Node = Union[Dict[str, Any], str]


def parse_atom(content: Union[bytes, str]) -> Dict[str, Any]:
    """Parse an Atom document into a plain dict.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well formed
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    declared: List[Tuple[str, str]] = []
    root = None
    for event, item in ET.iterparse(io.BytesIO(content), events=("start-ns", "start")):
        if event == "start-ns":
            declared.append(item)
        elif root is None:
            root = item

    prefixes: Dict[str, str] = {}
    for prefix, uri in declared:
        prefixes.setdefault(uri, prefix)

    node = _convert(root, prefixes)
    if not isinstance(node, dict):
        node = {"content": node}
    for prefix, uri in declared:
        node.setdefault(f"xmlns:{prefix}" if prefix else "xmlns", uri)
    return node


def _qualify(tag: str, prefixes: Dict[str, str]) -> str:
    if not tag.startswith("{"):
        return tag
    uri, local = tag[1:].split("}", 1)
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _convert(elem: ET.Element, prefixes: Dict[str, str]) -> Node:
    node: Dict[str, Any] = {_qualify(k, prefixes): v for k, v in elem.attrib.items()}

    for child in elem:
        key = _qualify(child.tag, prefixes)
        value = _convert(child, prefixes)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    text = (elem.text or "").strip()
    if text:
        if not node:
            return text
        node["content"] = text
    return node
