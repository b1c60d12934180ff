from __future__ import annotations

import re

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def escape_table_cell(text: str) -> str:
    if not text:
        return ""
    return _LINE_BREAKS.sub(" ", text).replace("|", "\\|")
