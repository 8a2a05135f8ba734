"""Unit tests for the calculator state machine."""

import logging

import pytest

from calcengine import (
    AllClear,
    CalculatorEngine,
    CalculatorState,
    Digit,
    Equals,
    ErrorKind,
    LastOperation,
    Operator,
    OperatorKind,
    apply,
    render,
)


class TestDigitEntry:
    """Tests for typing an operand."""

    def test_digits_append(self, press):
        assert press("1 2 3").current_operand == "123"

    def test_no_leading_zeros(self, press):
        assert press("0 0 7").current_operand == "7"
        assert press("0 0").current_operand == "0"

    def test_decimal_point(self, press):
        assert press("1 . 2 5").current_operand == "1.25"

    def test_second_decimal_point_ignored(self, press):
        assert press("1 . . 2 .").current_operand == "1.2"

    def test_leading_decimal_point(self, press):
        assert press(". 5").current_operand == "0.5"

    def test_digit_cap_drops_extra_digits(self, press):
        state = press(" ".join("9" * 16))
        assert state.current_operand == "9" * 15

    def test_digit_cap_counts_digits_not_point(self, press):
        state = press("1 . " + " ".join("2" * 15))
        assert state.current_operand == "1." + "2" * 14

    def test_custom_digit_cap(self):
        engine = CalculatorEngine(max_input_digits=3)
        state = engine.run([Digit(1), Digit(2), Digit(3), Digit(4)])
        assert state.current_operand == "123"

    @pytest.mark.parametrize("cap", [0, 16])
    def test_invalid_digit_cap(self, cap):
        with pytest.raises(ValueError):
            CalculatorEngine(max_input_digits=cap)


class TestArithmetic:
    """Tests for operators and equals."""

    def test_simple_addition(self, press):
        assert render(press("2 + 3 =")).text == "5"

    def test_left_to_right_without_precedence(self, press):
        assert render(press("2 + 3 * 4 =")).text == "20"

    def test_long_chain(self, press):
        assert render(press("1 + 2 * 3 - 4 / 2 =")).text == "2.5"

    def test_intermediate_result_shown_on_operator(self, press):
        state = press("2 + 3 *")
        assert render(state).text == "5"
        assert state.accumulator == 5
        assert state.pending_operator is OperatorKind.MUL
        assert state.awaiting_operand

    def test_chained_operator_overrides(self, press):
        assert render(press("5 + - 3 =")).text == "2"

    def test_chained_operator_does_not_compute(self, press):
        state = press("5 + -")
        assert state.accumulator == 5
        assert state.pending_operator is OperatorKind.SUB

    def test_negative_result(self, press):
        state = press("3 - 5 =")
        assert state.current_operand == "2"
        assert state.is_negative
        assert render(state).text == "-2"

    def test_equals_without_second_operand_reuses_display(self, press):
        assert render(press("5 + =")).text == "10"

    def test_result_feeds_next_operator(self, press):
        assert render(press("2 + 3 = * 4 =")).text == "20"

    def test_digit_after_result_starts_new_operand(self, press):
        state = press("2 + 3 = 7")
        assert state.current_operand == "7"
        assert not state.awaiting_operand
        assert state.last_operation == LastOperation(OperatorKind.ADD, 3)

    def test_decimal_after_result_starts_new_operand(self, press):
        assert press("2 + 3 = .").current_operand == "0."

    def test_repeating_division(self, press):
        assert render(press("1 / 3 =")).text == "0.333333333333333"

    def test_large_result_uses_exponent(self, press):
        state = press("1 0 0 0 0 0 0 0 * 1 0 0 0 0 0 0 0 0 =")
        assert render(state).text == "1e+15"

    def test_equals_clears_pending_operation(self, press):
        state = press("6 + 2 =")
        assert state.accumulator is None
        assert state.pending_operator is None
        assert state.awaiting_operand

    def test_equals_on_initial_state_is_noop(self, engine):
        state = CalculatorState()
        assert engine.apply(state, Equals()) == state


class TestRepeatEquals:
    """Tests for pressing equals again."""

    def test_repeat_addition(self, press):
        assert render(press("6 + 2 =")).text == "8"
        assert render(press("6 + 2 = =")).text == "10"
        assert render(press("6 + 2 = = =")).text == "12"

    def test_repeat_applies_right_operand(self, press):
        assert render(press("1 0 - 3 = =")).text == "4"
        assert render(press("2 / 4 = =")).text == "0.125"

    def test_repeat_on_new_operand(self, press):
        assert render(press("6 + 2 = 5 =")).text == "7"


class TestClear:
    """Tests for clear entry and all clear."""

    def test_clear_entry_keeps_pending_operation(self, press):
        state = press("5 + 3 C")
        assert state.current_operand == "0"
        assert state.accumulator == 5
        assert state.pending_operator is OperatorKind.ADD
        assert render(press("5 + 3 C 4 =")).text == "9"

    def test_clear_entry_then_operator_replaces_operator(self, press):
        assert render(press("5 + C * 2 =")).text == "10"

    def test_clear_entry_keeps_last_operation(self, press):
        before = press("6 + 2 =")
        after = press("6 + 2 = C")
        assert after.last_operation == before.last_operation == LastOperation(OperatorKind.ADD, 2)
        assert render(press("6 + 2 = C =")).text == "2"

    def test_clear_entry_resets_sign(self, press):
        assert not press("7 ± C").is_negative

    def test_all_clear_returns_initial_state(self, press):
        assert press("6 + 2 = = 4 * AC") == CalculatorState()


class TestSignAndPercent:
    """Tests for toggle sign and percent."""

    def test_toggle_sign_on_zero_is_noop(self, press):
        assert press("±") == CalculatorState()

    def test_toggle_sign_twice_restores(self, press):
        assert render(press("7 ±")).text == "-7"
        assert render(press("7 ± ±")).text == "7"

    def test_negative_operand_in_calculation(self, press):
        assert render(press("7 ± + 2 =")).text == "-5"

    def test_toggle_result_sign(self, press):
        assert render(press("2 - 5 = ± + 1 =")).text == "4"

    def test_new_operand_is_positive(self, press):
        assert not press("7 ± + 3").is_negative

    def test_percent_of_zero(self, press):
        assert render(press("0 %")).text == "0"

    def test_percent_of_operand(self, press):
        assert render(press("5 0 %")).text == "0.5"

    def test_percent_ignores_accumulator(self, press):
        state = press("2 0 0 + 5 0 %")
        assert render(state).text == "0.5"
        assert render(press("2 0 0 + 5 0 % =")).text == "200.5"

    def test_percent_keeps_sign(self, press):
        assert render(press("5 0 ± %")).text == "-0.5"


class TestErrors:
    """Tests for sticky error states."""

    def test_division_by_zero(self, press):
        state = press("1 0 / 0 =")
        assert state.error is ErrorKind.DIVISION_BY_ZERO
        assert state.accumulator is None
        assert state.pending_operator is None
        display = render(state)
        assert display.has_error
        assert display.text == "Error"

    def test_error_blocks_input(self, press, engine):
        state = press("1 0 / 0 =")
        assert engine.apply(state, Digit(5)) is state
        assert press("1 0 / 0 = 5 + 3 = ± % C") == state

    def test_division_by_zero_on_chained_operator(self, press):
        assert press("8 / 0 +").error is ErrorKind.DIVISION_BY_ZERO

    def test_zero_divided_by_zero(self, press):
        assert press("0 / 0 =").error is ErrorKind.DIVISION_BY_ZERO

    def test_overflow(self, press):
        start = CalculatorState(current_operand="1e+99", awaiting_operand=True)
        state = press("* 2 0 =", start)
        assert state.error is ErrorKind.OVERFLOW
        assert render(state).error_message == "Overflow"

    def test_error_is_logged(self, press, caplog):
        with caplog.at_level(logging.INFO, logger="calcengine.engine"):
            press("1 2 / 0 =")
        assert "Division by zero, numerator 12" in caplog.text

    def test_overflow_is_logged(self, press, caplog):
        start = CalculatorState(current_operand="1e+99", awaiting_operand=True)
        with caplog.at_level(logging.INFO, logger="calcengine.engine"):
            press("* 2 0 =", start)
        assert "Overflow in multiplication of 1e+99 and 20.0" in caplog.text

    def test_all_clear_leaves_error(self, press, engine):
        state = press("1 0 / 0 =")
        assert engine.apply(state, AllClear()) == CalculatorState()


class TestEngineApi:
    """Tests for the engine's public surface."""

    def test_apply_rejects_unknown_action(self, engine):
        with pytest.raises(TypeError):
            engine.apply(CalculatorState(), "7")

    def test_apply_returns_new_state(self, engine):
        state = CalculatorState()
        new_state = engine.apply(state, Digit(4))
        assert state.current_operand == "0"
        assert new_state.current_operand == "4"

    def test_module_level_apply(self):
        state = apply(CalculatorState(), Operator(OperatorKind.ADD))
        assert state.accumulator == 0
        assert state.pending_operator is OperatorKind.ADD

    def test_value_of_is_signed(self, press):
        assert CalculatorEngine.value_of(press("4 . 5 ±")) == -4.5

    def test_run_from_given_state(self, engine):
        start = engine.run([Digit(6), Operator(OperatorKind.ADD), Digit(2)])
        assert render(engine.run([Equals()], start)).text == "8"
