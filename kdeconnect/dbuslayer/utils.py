"""
D-Bus helper functions that do not need a live bus.
"""

from __future__ import annotations

from typing import List, Optional

import xmltodict

__all__ = [
    "parse_child_nodes",
    "join_object_path",
]


def parse_child_nodes(introspect_xml: str) -> List[str]:
    """Return the names of the direct child ``<node>`` elements of an introspection document.

    Parameters
    ----------
    introspect_xml
        XML returned by ``org.freedesktop.DBus.Introspectable.Introspect``.

    Returns
    -------
    List[str]
        Child node names in document order.  Anonymous nodes are skipped.
    """
    if not introspect_xml or not introspect_xml.strip():
        return []
    dict_data = xmltodict.parse(introspect_xml, force_list=("node",))
    roots = dict_data.get("node") or []
    root = roots[0] if roots else None
    if not isinstance(root, dict):
        return []

    names = []
    for child in root.get("node") or []:
        if isinstance(child, dict) and child.get("@name"):
            names.append(child["@name"])
    return names


def join_object_path(base: str, *parts: Optional[str]) -> str:
    """Join object-path segments, skipping empty ones.

    ``join_object_path("/modules/kdeconnect", "devices", "abc", "")`` gives
    ``/modules/kdeconnect/devices/abc``.
    """
    path = base.rstrip("/")
    for part in parts:
        if part:
            path += "/" + str(part).strip("/")
    return path or "/"
