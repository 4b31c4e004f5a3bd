"""Unique identifiers for experience/education records and chat messages."""

import uuid
from typing import Iterable, Set


class IdGenerator:
    """
    Issues random UUID4 hex identifiers.

    An instance never hands out the same id twice, and callers can pass the ids
    already present in a list so a new id can never collide with an existing
    (or externally assigned) one.
    """

    def __init__(self):
        self._issued: Set[str] = set()

    def new_id(self, taken: Iterable[str] = ()) -> str:
        """
        Return a fresh id.

        Args:
            taken: Ids already in use by the target list
        """
        taken = set(taken)
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in taken and candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def __contains__(self, item: str) -> bool:
        return item in self._issued
