"""Element-wise mapping and predicate selection over sequences.

Every operation is strict: it walks the whole input once and materialises the
full result.  The copying variants (``apply``, ``choose``, ``drop``) return
fresh storage of the same kind as the input and never modify it:

* ``list`` and other sequences  -> ``list``
* ``tuple``                     -> ``tuple``
* 1-D ``numpy.ndarray``         -> ``numpy.ndarray``
* ``Slice``                     -> ``Slice`` over a new buffer

The in-place variants reuse the caller's storage.  ``apply_in_place`` only
does so when the results fit the element type;
``choose_in_place``/``drop_in_place`` compact kept elements to the front in a
single forward pass and shrink the visible length.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence
from typing import Any, Callable, TypeVar

import numpy as np

from seqfilter.config.settings import get_settings
from seqfilter.errors import NotAReferenceError, TypeMismatchError
from seqfilter.slice import Slice

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Predicate = Callable[[Any], bool]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_vector(sequence: Any) -> None:
    array = sequence.buffer if isinstance(sequence, Slice) else sequence
    if isinstance(array, np.ndarray) and array.ndim != 1:
        raise ValueError(f"expected a 1-D array, got {array.ndim} dimensions")


def element_type_of(sequence: Any) -> Any:
    """Element type used for in-place compatibility checks.

    Arrays report their dtype, slices their declared type; anything else
    holds arbitrary objects.
    """
    if isinstance(sequence, Slice):
        return sequence.elem_type
    if isinstance(sequence, np.ndarray):
        return sequence.dtype
    return object


def _holds_objects(element_type: Any) -> bool:
    if isinstance(element_type, np.dtype):
        return element_type.kind == "O"
    return element_type is object


def _is_compatible(element_type: Any, result_type: Any) -> bool:
    if _holds_objects(element_type):
        return True
    if isinstance(element_type, np.dtype):
        try:
            return np.dtype(result_type) == element_type
        except TypeError:
            return False
    try:
        return issubclass(result_type, element_type)
    except TypeError:
        return False


def _fits(element_type: Any, value: Any) -> bool:
    """Whether *value* can be stored in *element_type* storage unchanged in kind."""
    if _holds_objects(element_type):
        return True
    if isinstance(element_type, np.dtype):
        try:
            return np.can_cast(np.asarray(value).dtype, element_type, casting="same_kind")
        except TypeError:
            return False
    return isinstance(value, element_type)


def _is_writable_storage(sequence: Any) -> bool:
    storage = sequence.buffer if isinstance(sequence, Slice) else sequence
    if isinstance(storage, np.ndarray):
        return bool(storage.flags.writeable)
    return isinstance(storage, MutableSequence)


def _allocate_like(sequence: Any, items: list[Any], dtype: Any = None) -> Any:
    """Wrap *items* in new storage of the same kind as *sequence*."""
    if isinstance(sequence, Slice):
        if sequence.is_array:
            return Slice(_allocate_array(items, dtype, sequence.elem_type))
        return Slice(items, elem_type=dtype if dtype is not None else sequence.elem_type)
    if isinstance(sequence, np.ndarray):
        return _allocate_array(items, dtype, sequence.dtype)
    if isinstance(sequence, tuple):
        return tuple(items)
    return items


def _allocate_array(items: list[Any], dtype: Any, fallback: np.dtype) -> np.ndarray:
    if dtype is None and not items:
        dtype = fallback
    return np.array(items, dtype=dtype)


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def apply(sequence: Sequence[T], function: Callable[[T], R], *, dtype: Any = None) -> Any:
    """Return new storage holding ``function(x)`` for each element, in order.

    *dtype* fixes the element type of the result: the numpy dtype for array
    inputs, the declared type of a list-backed ``Slice``.  It is ignored for
    plain lists and tuples.  Exceptions from *function* propagate.
    """
    _check_vector(sequence)
    return _allocate_like(sequence, [function(item) for item in sequence], dtype)


def apply_in_place(
    sequence: MutableSequence[T],
    function: Callable[[T], T],
    *,
    result_type: Any = None,
    strict: bool | None = None,
) -> Any:
    """Overwrite each element with ``function`` of its original value.

    *result_type* optionally declares what *function* returns.  Typed
    storage (arrays, and slices with a declared element type) also has every
    result checked: arrays accept same-kind casts only, slices require an
    instance of the declared type.  A declared or observed mismatch is a type
    mismatch: with *strict* (default from settings) a ``TypeMismatchError`` is
    raised before any slot is written; otherwise the results go into newly
    allocated storage and the input is left untouched.

    Returns the storage that holds the results.
    """
    _check_vector(sequence)
    if not _is_writable_storage(sequence):
        raise NotAReferenceError(sequence, "not mutable sequence storage")

    if strict is None:
        strict = get_settings().strict_in_place

    element_type = element_type_of(sequence)
    if result_type is not None and not _is_compatible(element_type, result_type):
        if strict:
            raise TypeMismatchError(element_type, result_type)
        logger.debug(
            "apply_in_place: %s results do not fit %s storage, allocating.",
            result_type, element_type,
        )
        return apply(sequence, function, dtype=result_type)

    # Results are checked against the storage type before the first write.
    results = [function(sequence[i]) for i in range(len(sequence))]
    for value in results:
        if not _fits(element_type, value):
            if strict:
                raise TypeMismatchError(element_type, result_type or type(value))
            logger.debug(
                "apply_in_place: %s result does not fit %s storage, allocating.",
                type(value).__name__, element_type,
            )
            fallback = result_type
            if fallback is None and isinstance(sequence, Slice) and not sequence.is_array:
                fallback = object
            return _allocate_like(sequence, results, fallback)

    for i, value in enumerate(results):
        sequence[i] = value
    return sequence


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def select(sequence: Sequence[T], predicate: Predicate, keep: bool) -> Any:
    """Return new storage with the elements whose predicate result equals *keep*."""
    _check_vector(sequence)
    if isinstance(sequence, np.ndarray):
        mask = np.fromiter(
            (bool(predicate(item)) == keep for item in sequence),
            dtype=bool,
            count=len(sequence),
        )
        return sequence[mask]
    kept = [item for item in sequence if bool(predicate(item)) == keep]
    return _allocate_like(sequence, kept, element_type_of(sequence))


def choose(sequence: Sequence[T], predicate: Predicate) -> Any:
    """Keep only the elements that satisfy *predicate*."""
    return select(sequence, predicate, True)


def drop(sequence: Sequence[T], predicate: Predicate) -> Any:
    """Remove the elements that satisfy *predicate*."""
    return select(sequence, predicate, False)


def select_in_place(ref: MutableSequence[T] | Slice[T], predicate: Predicate, keep: bool) -> int:
    """Compact matching elements to the front of *ref* and shrink it.

    *ref* must be resizable: a ``Slice`` (its visible length is reduced and
    the capacity kept) or a mutable sequence such as ``list`` (its tail is
    deleted).  Arrays, tuples and other fixed or immutable containers raise
    ``NotAReferenceError``.  Returns the new length.

    The write cursor never passes the read position, so every element is
    read before its slot can be reused.
    """
    if isinstance(ref, Slice):
        if not _is_writable_storage(ref):
            raise NotAReferenceError(ref, "not mutable sequence storage")
    elif not isinstance(ref, MutableSequence):
        raise NotAReferenceError(ref)

    total = len(ref)
    cursor = 0
    for i in range(total):
        item = ref[i]
        if bool(predicate(item)) == keep:
            if cursor != i:
                ref[cursor] = item
            cursor += 1

    if isinstance(ref, Slice):
        ref.set_len(cursor)
    elif isinstance(ref, list):
        del ref[cursor:]
    else:
        while len(ref) > cursor:
            ref.pop()

    logger.debug("select_in_place: kept %d of %d elements.", cursor, total)
    return cursor


def choose_in_place(ref: MutableSequence[T] | Slice[T], predicate: Predicate) -> int:
    """In-place ``choose``; returns the new length."""
    return select_in_place(ref, predicate, True)


def drop_in_place(ref: MutableSequence[T] | Slice[T], predicate: Predicate) -> int:
    """In-place ``drop``; returns the new length."""
    return select_in_place(ref, predicate, False)
