# UI.py
""""PySide6 user interface for the calculator.

Structure
---------
- Calculator UI: main window with display, history list and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Keep the pending expression as a buffer of button symbols
- Route button clicks and key presses into that buffer
- Dispatch the buffer to MathEngine in a worker thread
- Render results, remember them in the history, show MathEngine errors as dialogs
- Clipboard integration and optional auto-evaluate after paste


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (e.g. minimum decimal places)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject).
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

import sys
import threading
from pathlib import Path

import pyperclip
from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal
from pynput.keyboard import Controller

from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager
from . import MathEngine as MathEngine
from . import Tokenizer as Tokenizer

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

COPY_SIGN = "📋"
SETTINGS_SIGN = "⚙"

# Keyboard characters that differ from the symbol shown on the button
KEY_TO_SYMBOL = {"*": "×", "/": "÷"}

INPUT_SYMBOLS = set(Tokenizer.DIGITS) | {Tokenizer.DECIMAL_POINT} | set(Tokenizer.SYMBOLS)


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" behaviour of the clipboard button.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs one calculation in a separate thread and emits a Signal when the calculation is
    done / failed back to the Calculator UI for processing.

    """""

    job_finished = Signal(object, str)

    def __init__(self, symbols, postfix):
        super().__init__()
        self.symbols = list(symbols)
        self.equation = "".join(self.symbols)
        self.postfix = postfix

    def run_calc(self):

        try:
            if self.postfix:
                result = MathEngine.calculate(self.equation, postfix=True)
            else:
                # In-process path: the symbol buffer is tokenized directly
                result = MathEngine.evaluate_tokens(Tokenizer.tokenize_symbols(self.symbols))
            self.job_finished.emit(result, self.equation)

        except E.MathError as e:
            e.equation = self.equation
            self.job_finished.emit(e, self.equation)

        except Exception as e:
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.equation
            )
            self.job_finished.emit(critical_error, self.equation)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting is either
    1. a Checkbox   (booleans)
    2. an Input Field (integers)

    """""

    settings_saved = Signal()

    # Smallest accepted value per integer setting
    MINIMUM = {"decimal_places": 2, "history_size": 1}

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)

        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = self.MINIMUM.get(key_value, 0)
                label = QtWidgets.QLabel(f"{description} (min. {minimum}):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():

            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # Blank keeps the old value
                if new_value_str == "":
                    continue

                try:
                    new_value_int = int(new_value_str)
                    minimum = self.MINIMUM.get(key_value, 0)
                    if new_value_int < minimum:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is {minimum}.")
                    new_settings[key_value] = new_value_int

                except ValueError as e:
                    print(f"Invalid Input: {e}")
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!

        saved_settings = config_manager.save_setting(new_settings)

        if saved_settings != {}:
            self.setting_value_list = saved_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}{config_manager.config_json}")

    def update_darkmode(self):
        if self.setting_value_list.get("darkmode") == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    MAX_FONT_SIZE = 46
    MIN_FONT_SIZE = 10

    def __init__(self):
        super().__init__()

        self.setting_value_list = config_manager.load_setting_value("all")

        # --- State ---
        self.cur_eqn = []  # Pending expression, one button symbol per entry
        self.showing_res = True  # Display shows a result, the next input starts a new expression
        self.history = []  # (symbols, rendered result)
        self.thread_active = False
        self.shift_is_held = False
        self.worker = None

        # --- Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.setWindowTitle("Calculator")
        self.resize(320, 520)
        self.button_objects = {}
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- Display ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(self.MAX_FONT_SIZE)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- History ---
        self.history_list = QtWidgets.QListWidget()
        self.history_list.itemActivated.connect(self.restore_history_entry)
        main_v_layout.addWidget(self.history_list, 1)

        # --- Button Grid ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column, column span)
        self.buttons = [
            (SETTINGS_SIGN, 0, 0, 1), (COPY_SIGN, 0, 1, 1), ('C', 0, 2, 1), ('<', 0, 3, 1), ('÷', 0, 4, 1),
            ('(', 1, 0, 1), ('7', 1, 1, 1), ('8', 1, 2, 1), ('9', 1, 3, 1), ('×', 1, 4, 1),
            (')', 2, 0, 1), ('4', 2, 1, 1), ('5', 2, 2, 1), ('6', 2, 3, 1), ('-', 2, 4, 1),
            ('^', 3, 0, 1), ('1', 3, 1, 1), ('2', 3, 2, 1), ('3', 3, 3, 1), ('+', 3, 4, 1),
            ('.', 4, 0, 1), ('0', 4, 1, 1), ('=', 4, 2, 3)
        ]

        for text, row, col, span in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)  # Keys go to the window, not the button

            if text == SETTINGS_SIGN:
                button.clicked.connect(self.open_settings)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, span)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Key Event Handlers ---
    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key.Key_Shift:
            self.shift_is_held = True
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press('=')
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press('<')
        elif key in (Qt.Key.Key_Delete, Qt.Key.Key_Escape):
            self.handle_button_press('C')
        elif event.text():
            value = KEY_TO_SYMBOL.get(event.text(), event.text())
            if value == '=' or value in INPUT_SYMBOLS:
                self.handle_button_press(value)
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
        super().keyReleaseEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.update_font_size_display()

    # --- Input handling ---
    def handle_button_press(self, value):
        if value == COPY_SIGN:
            self.handle_clipboard()
            return

        if value == '=':
            self.start_calculation()
            return

        # The buffer is frozen until the running calculation reports back
        if self.thread_active:
            return

        if self.showing_res:
            self.showing_res = False
            self.cur_eqn = []

        if value == 'C':
            self.cur_eqn = []
            self.showing_res = True
        elif value == '<':
            if self.cur_eqn:
                self.cur_eqn.pop()
        else:
            self.cur_eqn.append(value)

        self.refresh_display()

    def handle_clipboard(self):
        # Shift + click copies the display, a plain click pastes
        if self.shift_is_held or is_shift_pressed():
            pyperclip.copy(self.display.text())
            return

        if self.thread_active:
            return

        clipboard_text = QtWidgets.QApplication.clipboard().text()
        if not clipboard_text:
            return

        if self.showing_res:
            self.showing_res = False
            self.cur_eqn = []

        for char in clipboard_text.strip():
            symbol = KEY_TO_SYMBOL.get(char, char)
            if symbol in INPUT_SYMBOLS:
                self.cur_eqn.append(symbol)
        self.refresh_display()

        if self.setting_value_list.get("after_paste_enter") == True:
            self.start_calculation()

    def refresh_display(self):
        self.display.setText("".join(self.cur_eqn) or "0")
        self.update_font_size_display()

    # --- Calculation ---
    def start_calculation(self):
        # Empty input is a no-op
        if not self.cur_eqn or self.showing_res:
            return

        if self.thread_active:
            print(f"ERROR 4002: {E.ERROR_MESSAGES['4002']}")
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")

        self.worker = Worker(self.cur_eqn, self.setting_value_list.get("postfix_evaluator") == True)
        self.worker.job_finished.connect(self.calc_result)
        threading.Thread(target=self.worker.run_calc, daemon=True).start()

    def calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            error_box = QtWidgets.QMessageBox(self)
            error_box.setIcon(QtWidgets.QMessageBox.Critical)
            error_box.setWindowTitle("Calculation error")
            error_box.setText(f"Error {result.code}: {E.ERROR_MESSAGES.get(result.code, 'Unknown error')}")
            error_box.setInformativeText(f"Details: {result.message}\nEquation: {result.equation}")
            error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
            error_box.setStyleSheet(self.get_message_box_stylesheet())
            error_box.exec()
            self.refresh_display()
            return

        rendered, rounding = MathEngine.render(result, self.setting_value_list.get("decimal_places", 10))
        sign = "≈" if rounding else "="

        if self.setting_value_list.get("show_equation") == True:
            final_display_text = f"{equation} {sign} {rendered}"
        else:
            final_display_text = f"{sign} {rendered}"

        self.add_history(self.worker.symbols, f"{equation} {sign} {rendered}")
        self.cur_eqn = []
        self.showing_res = True

        self.display.setText(final_display_text)
        self.update_font_size_display()

    def add_history(self, symbols, line):
        self.history.append((list(symbols), line))
        limit = max(int(self.setting_value_list.get("history_size", 20)), 1)
        while len(self.history) > limit:
            self.history.pop(0)

        self.history_list.clear()
        for _, entry in reversed(self.history):
            self.history_list.addItem(entry)

    def restore_history_entry(self, item):
        # Newest entry is shown first
        index = len(self.history) - 1 - self.history_list.row(item)
        if 0 <= index < len(self.history):
            self.cur_eqn = list(self.history[index][0])
            self.showing_res = False
            self.refresh_display()

    # --- Looks ---
    def update_font_size_display(self):
        current_text = self.display.text()
        font = self.display.font()
        available_width = self.display.width() - 10

        size = self.MAX_FONT_SIZE
        font.setPointSize(size)
        while size > self.MIN_FONT_SIZE and QtGui.QFontMetrics(font).horizontalAdvance(current_text) > available_width:
            size -= 1
            font.setPointSize(size)
        self.display.setFont(font)

    def update_return_button(self):
        return_button = self.button_objects.get('=')
        if not return_button:
            return

        # Red while a calculation is running
        if self.thread_active == True:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
        return_button.update()

    def update_darkmode(self):
        darkmode = self.setting_value_list.get("darkmode") == True
        for text, button in self.button_objects.items():
            if text == '=':
                self.update_return_button()
            elif darkmode:
                button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            else:
                button.setStyleSheet("font-weight: normal;")

        if darkmode:
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.history_list.setStyleSheet("background-color: #121212; color: #bbbbbb;")
        else:
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.history_list.setStyleSheet("")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # Modal

        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list.get("darkmode") == True:
            return """
                QMessageBox { background-color: #121212; color: white; }
                QLabel { color: white; }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
                QPushButton:hover { background-color: #444444; }
            """
        return ""


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
