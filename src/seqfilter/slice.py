"""Resizable view over fixed storage.

A ``Slice`` pairs a backing buffer (a ``list`` or a 1-D numpy array) with a
visible length.  The buffer's own length is the capacity; shrinking the
visible length leaves the trailing slots in place with whatever values they
last held.  In-place selection uses this to report its result length without
reallocating.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

import numpy as np

T = TypeVar("T")


class Slice(Generic[T]):
    """A mutable handle: storage, visible length and element type."""

    __slots__ = ("_buffer", "_length", "_elem_type")

    def __init__(
        self,
        buffer: list[T] | np.ndarray,
        length: int | None = None,
        elem_type: Any = None,
    ) -> None:
        if isinstance(buffer, np.ndarray):
            if buffer.ndim != 1:
                raise ValueError(f"Slice buffer must be 1-D, got {buffer.ndim} dimensions")
            if elem_type is not None and np.dtype(elem_type) != buffer.dtype:
                raise ValueError(
                    f"elem_type {elem_type!r} disagrees with buffer dtype {buffer.dtype}"
                )
            elem_type = buffer.dtype
        elif isinstance(buffer, list):
            elem_type = object if elem_type is None else elem_type
        else:
            raise TypeError(
                f"Slice buffer must be a list or numpy array, got {type(buffer).__name__}"
            )
        self._buffer = buffer
        self._elem_type = elem_type
        self._length = len(buffer)
        if length is not None:
            self.set_len(length)

    @classmethod
    def of(cls, values: Iterable[T], *, dtype: Any = None, elem_type: Any = None) -> Slice[T]:
        """Build a slice from *values*; *dtype* selects a numpy buffer."""
        if dtype is not None:
            return cls(np.array(list(values), dtype=dtype))
        return cls(list(values), elem_type=elem_type)

    # -- header -------------------------------------------------------------

    @property
    def buffer(self) -> list[T] | np.ndarray:
        """The whole backing storage, including slots past the visible length."""
        return self._buffer

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    @property
    def elem_type(self) -> Any:
        """numpy dtype for array buffers, declared Python type for lists."""
        return self._elem_type

    @property
    def is_array(self) -> bool:
        return isinstance(self._buffer, np.ndarray)

    def set_len(self, length: int) -> None:
        if not 0 <= length <= self.capacity:
            raise ValueError(f"length {length} out of range [0, {self.capacity}]")
        self._length = length

    def view(self) -> list[T] | np.ndarray:
        """The visible elements.

        For array buffers this is a numpy view sharing storage; for list
        buffers it is a shallow copy.
        """
        return self._buffer[: self._length]

    def tolist(self) -> list[T]:
        if self.is_array:
            return self.view().tolist()
        return list(self.view())

    # -- sequence protocol --------------------------------------------------

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[T]:
        for i in range(self._length):
            yield self._buffer[i]

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self.view()[index]
        return self._buffer[self._position(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._buffer[self._position(index)] = value

    def _position(self, index: int) -> int:
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("Slice index out of range")
        return index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Slice):
            return self.tolist() == other.tolist()
        if isinstance(other, np.ndarray):
            return self.tolist() == other.tolist()
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self.tolist() == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Slice({self.tolist()!r}, len={self._length}, cap={self.capacity})"
