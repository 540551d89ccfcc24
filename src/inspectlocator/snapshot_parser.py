from __future__ import annotations

import logging

from lxml import etree

from .models import UiNode

logger = logging.getLogger("inspectlocator")


def _build_parser() -> etree.XMLParser:
    # Snapshots come from the device under test; never fetch or expand anything external.
    return etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        dtd_validation=False,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )


def parse_snapshot(markup: str | bytes | None) -> UiNode | None:
    payload = _to_bytes(markup)
    if payload is None:
        return None

    try:
        root = etree.fromstring(payload, parser=_build_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.debug("Snapshot could not be parsed: %s", exc)
        return None

    if root is None or not isinstance(root.tag, str):
        return None
    return _convert_tree(root)


def _to_bytes(markup: str | bytes | None) -> bytes | None:
    if markup is None:
        return None
    if isinstance(markup, str):
        if not markup.strip():
            return None
        return markup.encode("utf-8")
    if isinstance(markup, (bytes, bytearray)):
        if not bytes(markup).strip():
            return None
        return bytes(markup)
    return None


def _convert_tree(root: etree._Element) -> UiNode:
    ui_root = _convert_element(root)
    stack: list[tuple[etree._Element, UiNode]] = [(root, ui_root)]
    while stack:
        element, node = stack.pop()
        for child in element:
            if not isinstance(child.tag, str):
                continue
            child_node = node.append(_convert_element(child))
            stack.append((child, child_node))
    return ui_root


def _convert_element(element: etree._Element) -> UiNode:
    attributes = {_local_name(key): str(value) for key, value in element.attrib.items()}
    return UiNode(tag=_local_name(element.tag), attributes=attributes)


def _local_name(name: str) -> str:
    if name.startswith("{"):
        return etree.QName(name).localname
    return name
