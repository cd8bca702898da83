"""Render hints describing how a ToolResult should be displayed.

A hint is a tagged dict `{"type", "uiData", "children"?}` where `uiData` is a
JSON string. Nothing in the toolkit interprets these; they are passed
through to whatever renders results.
"""
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

CARD = "card"
TABLE = "table"
ALERT = "alert"
IMAGE_CARD = "imageCard"

Column = Tuple[str, str, str]  # (key, header, type)


def render(kind: str, ui_data: Dict[str, Any], children: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    hint: Dict[str, Any] = {"type": kind, "uiData": json.dumps(ui_data, default=str)}
    if children:
        hint["children"] = children
    return hint


def card(title: str, content: str = "", children: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return render(CARD, {"title": title, "content": content}, children)


def table(
    columns: Sequence[Column],
    rows: Sequence[Dict[str, Any]],
    children: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    ui_data = {
        "columns": [{"key": key, "header": header, "type": kind} for key, header, kind in columns],
        "rows": list(rows),
    }
    return render(TABLE, ui_data, children)


def alert(message: str, title: str = "Something went wrong", variant: str = "error") -> Dict[str, Any]:
    return render(ALERT, {"type": variant, "title": title, "message": message})


def image_card(
    title: str,
    image_url: Optional[str],
    description: str = "",
    children: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return render(IMAGE_CARD, {"title": title, "imageUrl": image_url, "description": description}, children)
