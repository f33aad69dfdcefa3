"""A fixed-depth stack of matrices bound to a shader uniform."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .matrix import Matrix

MTXSTACK_SIZE = 8

Uploader = Callable[[Any, int, Matrix, int], Any]


class MtxStack:
    """A stack of matrices whose top is uploaded to a uniform when changed.

    The stack starts with a single identity matrix and holds at most
    :data:`MTXSTACK_SIZE` matrices.
    """

    def __init__(self) -> None:
        self._stack: list[Matrix] = [Matrix.identity()]
        self.unif_type: Any = None
        self.unif_pos: int | None = None
        self.unif_len = 0
        self.dirty = True

    @property
    def depth(self) -> int:
        """Number of matrices pushed above the base one."""
        return len(self._stack) - 1

    def current(self) -> Matrix:
        """The top matrix; it is marked dirty since the caller may change it."""
        self.dirty = True
        return self._stack[-1]

    def bind(self, unif_type: Any, unif_pos: int | None, unif_len: int) -> None:
        """Bind the stack to a uniform location; ``unif_pos`` of None unbinds it."""
        self.unif_type = unif_type
        self.unif_pos = unif_pos
        self.unif_len = unif_len
        self.dirty = True

    def push(self) -> Matrix:
        """Push a copy of the top matrix and return it."""
        if len(self._stack) >= MTXSTACK_SIZE:
            raise IndexError("matrix stack is full")
        self._stack.append(self._stack[-1].copy())
        return self.current()

    def pop(self) -> Matrix:
        """Discard the top matrix and return the one below it."""
        if len(self._stack) == 1:
            raise IndexError("matrix stack is empty")
        self._stack.pop()
        return self.current()

    def update(self, upload: Uploader) -> bool:
        """Upload the top matrix if it changed and the stack is bound.

        ``upload`` is called as ``upload(unif_type, unif_pos, matrix, unif_len)``.
        Returns whether an upload happened.
        """
        if not self.dirty:
            return False
        uploaded = False
        if self.unif_pos is not None:
            upload(self.unif_type, self.unif_pos, self._stack[-1], self.unif_len)
            uploaded = True
        self.dirty = False
        return uploaded