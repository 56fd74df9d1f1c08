"""Tests for step composition and serialised programs."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from seqfilter.pipeline import OPERATIONS, compose, run_program, step


class TestStep:
    def test_binds_operation(self, numbers, is_even) -> None:
        keep_even = step("choose", is_even)
        assert keep_even(numbers) == [2, 4]

    def test_passes_kwargs(self) -> None:
        halve = step("apply", lambda x: x / 2, dtype=np.float32)
        assert halve(np.array([2, 4])).dtype == np.float32

    def test_unknown_op(self, is_even) -> None:
        with pytest.raises(KeyError):
            step("shuffle", is_even)


class TestCompose:
    def test_left_to_right(self, numbers, is_even, double) -> None:
        pipeline = compose(step("drop", is_even), step("apply", double))
        assert pipeline(numbers) == [2, 6, 10]
        assert numbers == [1, 2, 3, 4, 5]

    def test_empty_is_identity(self, numbers) -> None:
        assert compose()(numbers) is numbers


class TestRunProgram:
    def test_program(self, numbers, is_even, double) -> None:
        program = [{"op": "choose", "fn": "is_even"}, {"op": "apply", "fn": "double"}]
        functions = {"is_even": is_even, "double": double}
        assert run_program(program, numbers, functions) == [4, 8]

    def test_step_with_args(self) -> None:
        program = [{"op": "apply", "fn": "halve", "args": {"dtype": "float64"}}]
        result = run_program(program, np.array([1, 3]), {"halve": lambda x: x / 2})
        assert result.dtype == np.float64
        assert np.allclose(result, [0.5, 1.5])

    def test_unknown_op_skipped(self, numbers, is_even, caplog) -> None:
        program = [{"op": "nonexistent_op", "fn": "is_even"}, {"op": "drop", "fn": "is_even"}]
        with caplog.at_level(logging.WARNING, logger="seqfilter.pipeline"):
            result = run_program(program, numbers, {"is_even": is_even})
        assert result == [1, 3, 5]
        assert "nonexistent_op" in caplog.text

    def test_unknown_function(self, numbers) -> None:
        with pytest.raises(KeyError):
            run_program([{"op": "choose", "fn": "missing"}], numbers, {})

    def test_empty_program(self, numbers) -> None:
        assert run_program([], numbers, {}) is numbers


class TestOperationsRegistry:
    def test_all_registered(self) -> None:
        assert set(OPERATIONS) == {"apply", "choose", "drop"}
