"""Window state tests; run against Qt's offscreen platform."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PySide6 import QtWidgets
    from Calculator import UI
except Exception as e:  # no Qt or no keyboard backend on this machine
    pytest.skip(f"GUI stack unavailable: {e}", allow_module_level=True)


@pytest.fixture
def window():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    calculator = UI.CalculatorWindow()
    yield calculator
    calculator.close()
    app.processEvents()


def type_symbols(window, symbols):
    for symbol in symbols:
        window.handle_button_press(symbol)


def test_buffer_is_frozen_while_calculating(window):
    type_symbols(window, ["2", "+", "3"])
    window.worker = UI.Worker(window.cur_eqn, False)
    window.thread_active = True

    type_symbols(window, ["9", "<", "C"])

    assert window.cur_eqn == ["2", "+", "3"]


def test_history_keeps_the_submitted_expression(window):
    type_symbols(window, ["2", "+", "3"])
    window.worker = UI.Worker(window.cur_eqn, False)
    window.thread_active = True
    # Simulates an edit that slipped into the buffer before the result arrived
    window.cur_eqn.append("9")

    window.calc_result(5.0, "2+3")

    symbols, line = window.history[-1]
    assert symbols == ["2", "+", "3"]
    assert line == "2+3 = 5"
    assert window.cur_eqn == []
    assert window.showing_res
