from __future__ import annotations


class PreconditionViolation(Exception):
    pass


class InvalidTabItem(ValueError):
    pass


class InvalidTabWindow(ValueError):
    pass
