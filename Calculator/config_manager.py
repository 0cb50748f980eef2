# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "darkmode": False,
    "show_equation": True,
    "after_paste_enter": False,
    "postfix_evaluator": False,
    "debug": False,
    "decimal_places": 10,
    "history_size": 20
}

DEFAULT_DESCRIPTIONS = {
    "darkmode": "Dark mode",
    "show_equation": "Show the equation next to the result",
    "after_paste_enter": "Calculate right after pasting",
    "postfix_evaluator": "Use the postfix (shunting-yard) evaluator",
    "debug": "Print debug output",
    "decimal_places": "Decimal places",
    "history_size": "History entries"
}


def _read_json(path, defaults):
    try:
        with open(path, 'r', encoding= 'utf-8') as f:
            loaded = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return dict(defaults)

    if not isinstance(loaded, dict):
        return dict(defaults)

    merged = dict(defaults)
    merged.update(loaded)
    return merged


def load_setting_value(key_value):
    settings_dict = _read_json(config_json, DEFAULT_SETTINGS)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    settings_dict = _read_json(ui_strings, DEFAULT_DESCRIPTIONS)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return{}


if __name__ == "__main__":
    print(load_setting_value("all"))
    print(load_setting_description("all"))
