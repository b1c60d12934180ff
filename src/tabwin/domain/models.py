from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Optional

from tabwin.config import EXPORT_TABLE_HEADER, OPEN_ID_PREFIX, SAVED_ID_PREFIX
from tabwin.domain.diagnostics import DEFAULT_SINK, Diagnostic, DiagnosticKind, DiagnosticsSink
from tabwin.domain.errors import InvalidTabItem, InvalidTabWindow, PreconditionViolation
from tabwin.domain.text import escape_table_cell


@dataclass(frozen=True)
class SavedTabState:
    """Tab state persisted as a bookmark."""

    bookmark_id: str = ""
    bookmark_index: int = 0  # position in bookmark folder
    title: str = ""
    url: str = ""


@dataclass(frozen=True)
class OpenTabState:
    """Tab state of a live browser tab."""

    open_tab_id: int = -1
    open_tab_index: int = 0  # index of open tab in its window
    url: str = ""
    title: str = ""
    fav_icon_url: str = ""
    active: bool = False
    audible: bool = False
    pinned: bool = False
    is_suspended: bool = False


@dataclass(frozen=True)
class TabItem:
    """An item in a tabbed window: an open tab, a bookmark, or both.

    ``saved`` and ``open`` are derived from which states are present, so an item
    can never claim a state it does not carry. An item with neither state is
    rejected at construction.
    """

    saved_state: Optional[SavedTabState] = None
    # Saved tabs may be closed even when the containing window is open.
    open_state: Optional[OpenTabState] = None

    def __post_init__(self) -> None:
        if self.saved_state is None and self.open_state is None:
            raise InvalidTabItem("TabItem must carry an open state, a saved state, or both")

    @classmethod
    def open_only(cls, open_state: OpenTabState) -> TabItem:
        return cls(open_state=open_state)

    @classmethod
    def saved_only(cls, saved_state: SavedTabState) -> TabItem:
        return cls(saved_state=saved_state)

    @classmethod
    def both(cls, open_state: OpenTabState, saved_state: SavedTabState) -> TabItem:
        return cls(saved_state=saved_state, open_state=open_state)

    @property
    def saved(self) -> bool:
        return self.saved_state is not None

    @property
    def open(self) -> bool:
        return self.open_state is not None

    @property
    def title(self) -> str:
        if self.open_state is not None:
            return self.open_state.title
        return self.saved_state.title if self.saved_state is not None else ""

    @property
    def url(self) -> str:
        if self.open_state is not None:
            return self.open_state.url
        return self.saved_state.url if self.saved_state is not None else ""

    @property
    def fav_icon_url(self) -> str:
        return self.open_state.fav_icon_url if self.open_state is not None else ""

    @property
    def pinned(self) -> bool:
        return self.open_state.pinned if self.open_state is not None else False

    @property
    def active(self) -> bool:
        return self.open_state.active if self.open_state is not None else False

    @property
    def safe_saved_state(self) -> SavedTabState:
        if self.saved_state is None:
            raise PreconditionViolation("Unexpected access of saved_state on unsaved tab")
        return self.saved_state

    @property
    def safe_open_state(self) -> OpenTabState:
        if self.open_state is None:
            raise PreconditionViolation("Unexpected access of open_state on non-open tab")
        return self.open_state

    def with_open_state(self, open_state: Optional[OpenTabState]) -> TabItem:
        return replace(self, open_state=open_state)

    def with_saved_state(self, saved_state: Optional[SavedTabState]) -> TabItem:
        return replace(self, saved_state=saved_state)


class WindowState(str, Enum):
    OPEN_UNSAVED = "open"
    OPEN_SAVED = "open_saved"
    SAVED = "saved"
    SAVED_SNAPSHOT = "saved_snapshot"


@dataclass(frozen=True)
class ViewOptions:
    expand_all: bool = False


@dataclass(frozen=True)
class TabWindow:
    """A browser window, open, saved as a bookmark folder, or both.

    Legal states:
      (open, not saved)   an open window whose tabs have not been saved
      (open, saved)       an open window also saved as bookmarks
      (not open, saved, not snapshot)
                          a saved window that is closed; tab_items are exactly
                          the bookmarks in its folder
      (not open, saved, snapshot)
                          a saved window that is closed, where tab_items hold
                          the tab state from the last time it was open

    ``title`` and ``id`` are cached per instance. Every update goes through
    ``dataclasses.replace`` so new instances start without a cache and old
    instances keep their values.
    """

    saved: bool = False
    saved_title: str = ""
    saved_folder_id: str = ""

    open: bool = False
    open_window_id: int = -1
    window_type: str = ""
    width: int = 0
    height: int = 0

    tab_items: tuple[TabItem, ...] = ()

    snapshot: bool = False  # tab_items hold the last open state
    chrome_session_id: Optional[str] = None  # session id for restore, if found

    # View state: tri-state None, True or False. Kept here so a keyboard handler
    # far above the window view can toggle it.
    expanded: Optional[bool] = None

    diagnostics: DiagnosticsSink = field(default=DEFAULT_SINK, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.open and not self.saved:
            raise InvalidTabWindow("TabWindow must be open, saved, or both")
        if not isinstance(self.tab_items, tuple):
            object.__setattr__(self, "tab_items", tuple(self.tab_items))

    @property
    def state(self) -> WindowState:
        if self.open:
            return WindowState.OPEN_SAVED if self.saved else WindowState.OPEN_UNSAVED
        return WindowState.SAVED_SNAPSHOT if self.snapshot else WindowState.SAVED

    @cached_property
    def title(self) -> str:
        return self.compute_title()

    def compute_title(self) -> str:
        if self.saved:
            return self.saved_title

        active_tab = self._find_active_tab()
        if active_tab is not None:
            return active_tab.title

        # shouldn't happen for an open window
        self.diagnostics.report(
            Diagnostic(
                kind=DiagnosticKind.INVARIANT_ANOMALY,
                message="No active tab found",
                context={"window_id": self.id, "tab_count": len(self.tab_items)},
            )
        )
        for item in self.tab_items:
            if item.open:
                return item.title
        return ""

    @cached_property
    def id(self) -> str:
        if self.saved:
            return f"{SAVED_ID_PREFIX}{self.saved_folder_id}"
        return f"{OPEN_ID_PREFIX}{self.open_window_id}"

    @property
    def open_tab_count(self) -> int:
        return sum(1 for item in self.tab_items if item.open)

    def find_by_open_tab_id(self, tab_id: int) -> Optional[tuple[int, TabItem]]:
        for i, item in enumerate(self.tab_items):
            if item.open_state is not None and item.open_state.open_tab_id == tab_id:
                return i, item
        return None

    def find_by_bookmark_id(self, bookmark_id: str) -> Optional[tuple[int, TabItem]]:
        for i, item in enumerate(self.tab_items):
            if item.saved_state is not None and item.saved_state.bookmark_id == bookmark_id:
                return i, item
        return None

    def get_active_tab_id(self) -> Optional[int]:
        active_tab = self._find_active_tab()
        if active_tab is None:
            return None
        return active_tab.safe_open_state.open_tab_id

    def index_of(self, target: TabItem) -> Optional[int]:
        for i, item in enumerate(self.tab_items):
            if item == target:
                return i
        return None

    def set_tab_items(self, items: Optional[Iterable[TabItem]]) -> TabWindow:
        # Order is kept as given: open_tab_index is not maintained by tab
        # updates, so it can't be used to re-sort here.
        if items is None:
            self.diagnostics.report(
                Diagnostic(
                    kind=DiagnosticKind.INPUT_REJECTION,
                    message="set_tab_items called without a tab sequence",
                    context={"window_id": self.id},
                )
            )
            return self
        return replace(self, tab_items=tuple(items))

    def update_saved_title(self, title: str) -> TabWindow:
        return replace(self, saved_title=title)

    def set_expanded(self, expanded: Optional[bool]) -> TabWindow:
        return replace(self, expanded=expanded)

    def export_str(self, escape: Callable[[str], str] = escape_table_cell) -> str:
        lines = [f"### {self.title}\n", "\n", EXPORT_TABLE_HEADER]
        for item in self.tab_items:
            lines.append(f"{escape(item.title)} | {item.url}\n")
        return "".join(lines)

    def is_expanded(self, view: ViewOptions) -> bool:
        if self.expanded is None:
            return view.expand_all and self.open
        return self.expanded

    def _find_active_tab(self) -> Optional[TabItem]:
        for item in self.tab_items:
            if item.open and item.active:
                return item
        return None
