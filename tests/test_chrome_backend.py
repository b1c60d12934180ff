from __future__ import annotations

import pytest

from tabwin.backend.chrome import open_tab_state, open_window, saved_tab_state, saved_window
from tabwin.backend.protocol import BackendError, BookmarkNode, BrowserWindow
from tabwin.domain.models import WindowState


def test_open_tab_state_maps_browser_fields() -> None:
    state = open_tab_state(
        {
            "id": 17,
            "index": 2,
            "url": "https://example.org",
            "title": "Example",
            "favIconUrl": "https://example.org/favicon.ico",
            "active": True,
            "audible": True,
            "pinned": True,
        }
    )
    assert state.open_tab_id == 17
    assert state.open_tab_index == 2
    assert state.title == "Example"
    assert state.fav_icon_url == "https://example.org/favicon.ico"
    assert (state.active, state.audible, state.pinned) == (True, True, True)
    assert state.is_suspended is False


def test_open_tab_state_uses_pending_url_and_detects_suspension() -> None:
    state = open_tab_state({"id": 1, "pendingUrl": "https://loading.test", "discarded": True})
    assert state.url == "https://loading.test"
    assert state.is_suspended is True

    parked = open_tab_state(
        {"id": 2, "url": "chrome-extension://abc/suspended.html#uri=https://a.test"}
    )
    assert parked.is_suspended is True


def test_open_tab_state_requires_id() -> None:
    with pytest.raises(BackendError):
        open_tab_state({"title": "no id"})


def test_saved_tab_state_maps_bookmark_fields() -> None:
    state = saved_tab_state({"id": "b7", "index": 3, "title": "Docs", "url": "https://docs"})
    assert state.bookmark_id == "b7"
    assert state.bookmark_index == 3
    assert state.url == "https://docs"

    with pytest.raises(BackendError):
        saved_tab_state({"title": "no id"})


def test_open_window_builds_open_only_window() -> None:
    payload: BrowserWindow = {
        "id": 7,
        "type": "normal",
        "width": 800,
        "height": 600,
        "tabs": [
            {"id": 1, "index": 0, "title": "a", "url": "http://a"},
            {"id": 2, "index": 1, "title": "b", "url": "http://b", "active": True},
        ],
    }
    w = open_window(payload)
    assert w.state is WindowState.OPEN_UNSAVED
    assert w.id == "_open7"
    assert (w.window_type, w.width, w.height) == ("normal", 800, 600)
    assert w.title == "b"
    assert w.get_active_tab_id() == 2
    assert w.chrome_session_id is None


def test_saved_window_orders_by_bookmark_index_and_skips_folders() -> None:
    folder: BookmarkNode = {
        "id": "42",
        "title": "Work",
        "children": [
            {"id": "b2", "index": 1, "title": "second", "url": "http://2"},
            {"id": "sub", "index": 2, "title": "nested", "children": []},
            {"id": "b1", "index": 0, "title": "first", "url": "http://1"},
        ],
    }
    w = saved_window(folder)
    assert w.state is WindowState.SAVED
    assert w.id == "_saved42"
    assert w.title == "Work"
    assert [t.title for t in w.tab_items] == ["first", "second"]
    assert all(t.saved and not t.open for t in w.tab_items)


def test_window_payloads_require_ids() -> None:
    with pytest.raises(BackendError):
        open_window({"tabs": []})
    with pytest.raises(BackendError):
        saved_window({"title": "untitled"})
