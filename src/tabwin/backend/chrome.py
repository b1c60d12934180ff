from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from loguru import logger

from tabwin.backend.protocol import BackendError, BookmarkNode, BrowserTab, BrowserWindow
from tabwin.config import SUSPENDER_URL_MARKERS
from tabwin.domain.diagnostics import DEFAULT_SINK, DiagnosticsSink
from tabwin.domain.models import OpenTabState, SavedTabState, TabItem, TabWindow


def open_tab_state(tab: BrowserTab) -> OpenTabState:
    tab_id = _int_id(tab.get("id"))
    if tab_id is None:
        raise BackendError(f"Browser tab has no id: {_describe(tab)}")
    url = _to_text(tab.get("url")) or _to_text(tab.get("pendingUrl"))
    return OpenTabState(
        open_tab_id=tab_id,
        open_tab_index=_to_int(tab.get("index")),
        url=url,
        title=_to_text(tab.get("title")),
        fav_icon_url=_to_text(tab.get("favIconUrl")),
        active=bool(tab.get("active", False)),
        audible=bool(tab.get("audible", False)),
        pinned=bool(tab.get("pinned", False)),
        is_suspended=bool(tab.get("discarded", False)) or _is_suspender_url(url),
    )


def saved_tab_state(node: BookmarkNode) -> SavedTabState:
    bookmark_id = _to_text(node.get("id"))
    if not bookmark_id:
        raise BackendError(f"Bookmark has no id: {_describe(node)}")
    return SavedTabState(
        bookmark_id=bookmark_id,
        bookmark_index=_to_int(node.get("index")),
        title=_to_text(node.get("title")),
        url=_to_text(node.get("url")),
    )


def open_window(
    window: BrowserWindow, *, diagnostics: DiagnosticsSink = DEFAULT_SINK
) -> TabWindow:
    window_id = _int_id(window.get("id"))
    if window_id is None:
        raise BackendError(f"Browser window has no id: {_describe(window)}")
    tabs: Iterable[BrowserTab] = window.get("tabs") or []
    items = [TabItem.open_only(open_tab_state(tab)) for tab in tabs]
    logger.debug("Built open window {} with {} tabs", window_id, len(items))
    return TabWindow(
        open=True,
        open_window_id=window_id,
        window_type=_to_text(window.get("type")),
        width=_to_int(window.get("width")),
        height=_to_int(window.get("height")),
        tab_items=tuple(items),
        chrome_session_id=window.get("sessionId") or None,
        diagnostics=diagnostics,
    )


def saved_window(
    folder: BookmarkNode, *, diagnostics: DiagnosticsSink = DEFAULT_SINK
) -> TabWindow:
    folder_id = _to_text(folder.get("id"))
    if not folder_id:
        raise BackendError(f"Bookmark folder has no id: {_describe(folder)}")
    children: Iterable[BookmarkNode] = folder.get("children") or []
    # nested folders have no url and are not tabs
    states = [saved_tab_state(child) for child in children if child.get("url")]
    states.sort(key=lambda s: s.bookmark_index)
    logger.debug("Built saved window {} with {} tabs", folder_id, len(states))
    return TabWindow(
        saved=True,
        saved_title=_to_text(folder.get("title")),
        saved_folder_id=folder_id,
        tab_items=tuple(TabItem.saved_only(s) for s in states),
        diagnostics=diagnostics,
    )


def _is_suspender_url(url: str) -> bool:
    if not url.startswith("chrome-extension://"):
        return False
    return any(marker in url for marker in SUSPENDER_URL_MARKERS)


def _int_id(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _to_int(value: Any) -> int:
    parsed = _int_id(value)
    return parsed if parsed is not None else 0


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _describe(payload: Mapping[str, Any]) -> str:
    keys = ", ".join(sorted(payload.keys()))
    return f"{{{keys}}}"
