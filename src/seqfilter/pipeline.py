"""Chaining transforms into programs.

Steps are ``sequence -> sequence`` callables built from the copying
operations, so a pipeline never modifies its input.  Programs are plain
lists of step dicts that name an operation and a function from a lookup
table, which keeps them serialisable::

    [{"op": "choose", "fn": "is_even"}, {"op": "apply", "fn": "double"}]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from seqfilter.transforms import apply, choose, drop

logger = logging.getLogger(__name__)

Step = Callable[[Any], Any]

OPERATIONS: dict[str, Callable[..., Any]] = {
    "apply": apply,
    "choose": choose,
    "drop": drop,
}


def step(op: str, function: Callable[[Any], Any], **kwargs: Any) -> Step:
    """Bind a registered operation to *function*."""
    operation = OPERATIONS[op]

    def run(sequence: Any) -> Any:
        return operation(sequence, function, **kwargs)

    run.__name__ = f"{op}_{getattr(function, '__name__', 'fn')}"
    return run


def compose(*steps: Step) -> Step:
    """Compose steps left to right: f, g, h → h(g(f(seq)))."""
    def composed(sequence: Any) -> Any:
        result = sequence
        for fn in steps:
            result = fn(result)
        return result
    return composed


def run_program(
    program: list[dict[str, Any]],
    sequence: Any,
    functions: Mapping[str, Callable[[Any], Any]],
) -> Any:
    """Execute a serialised program on *sequence*.

    Each step: ``{"op": "drop", "fn": "is_odd"}`` or
    ``{"op": "apply", "fn": "halve", "args": {"dtype": "float64"}}``.
    Unknown ops are skipped with a warning; an unknown ``fn`` raises
    ``KeyError``.  An empty program returns *sequence* itself.
    """
    result = sequence
    for entry in program:
        op_name = entry.get("op")
        operation = OPERATIONS.get(op_name)  # type: ignore[arg-type]
        if operation is None:
            logger.warning("Unknown pipeline op: %s, skipping.", op_name)
            continue
        function = functions[entry["fn"]]
        result = operation(result, function, **entry.get("args", {}))
        logger.debug("Ran %s(%s): %d elements.", op_name, entry["fn"], len(result))
    return result
