from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, TypedDict


@dataclass(frozen=True)
class BackendError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# Payload shapes as delivered by the browser extension APIs. Keys follow the
# browser's camelCase names; every key is optional on the wire.


class BrowserTab(TypedDict, total=False):
    id: int
    index: int
    windowId: int
    url: str
    pendingUrl: str
    title: str
    favIconUrl: str
    active: bool
    audible: bool
    pinned: bool
    discarded: bool


class BrowserWindow(TypedDict, total=False):
    id: int
    type: str
    width: int
    height: int
    focused: bool
    tabs: Sequence[BrowserTab]
    sessionId: Optional[str]


class BookmarkNode(TypedDict, total=False):
    id: str
    parentId: str
    index: int
    title: str
    url: str
    children: Sequence["BookmarkNode"]
