"""seqfilter: map, choose and drop over sequences.

Copying and in-place variants of three strict loops: element-wise mapping,
predicate selection and predicate exclusion, over lists, tuples, 1-D numpy
arrays and resizable ``Slice`` handles.
"""

from __future__ import annotations

from seqfilter.errors import ContractViolation, NotAReferenceError, TypeMismatchError
from seqfilter.slice import Slice
from seqfilter.transforms import (
    apply,
    apply_in_place,
    choose,
    choose_in_place,
    drop,
    drop_in_place,
    select,
    select_in_place,
)

__version__ = "0.1.0"

__all__ = [
    "ContractViolation",
    "NotAReferenceError",
    "Slice",
    "TypeMismatchError",
    "__version__",
    "apply",
    "apply_in_place",
    "choose",
    "choose_in_place",
    "drop",
    "drop_in_place",
    "select",
    "select_in_place",
]
