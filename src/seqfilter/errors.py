"""Contract violations raised by the in-place operations.

These signal programmer errors (calling an operation in a way that can never
succeed), not conditions a caller is expected to recover from.  Both are
raised before any element of the target sequence is touched.
"""

from __future__ import annotations

from typing import Any


class ContractViolation(Exception):
    """Base class for misuse of a ``seqfilter`` operation."""


class TypeMismatchError(ContractViolation, TypeError):
    """In-place mapping asked to store results of an incompatible type."""

    def __init__(self, element_type: Any, result_type: Any) -> None:
        self.element_type = element_type
        self.result_type = result_type
        super().__init__(
            f"apply in place: result type {_type_name(result_type)} does not "
            f"match element type {_type_name(element_type)}"
        )


class NotAReferenceError(ContractViolation, TypeError):
    """In-place operation given something that is not mutable sequence storage."""

    def __init__(self, received: Any, reason: str = "not a reference to a sequence") -> None:
        self.received = type(received)
        super().__init__(f"{reason}: got {self.received.__name__}")


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)
