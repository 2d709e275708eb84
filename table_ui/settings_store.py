import configparser
from pathlib import Path

from table_ui.ui_config import HIDDEN_MARKER, PROMPT

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "console"

DEFAULT_SETTINGS = {
    "prompt": PROMPT,
    "hidden_marker": HIDDEN_MARKER,
    "show_help_on_start": "0",
    "snapshot_path": "",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    prompt = str(data["prompt"])
    # configparser strips values, quoting keeps the trailing space of a prompt
    if len(prompt) >= 2 and prompt[0] == prompt[-1] and prompt[0] in "\"'":
        prompt = prompt[1:-1]
    if prompt.strip() == "":
        prompt = DEFAULT_SETTINGS["prompt"]
    data["prompt"] = prompt

    marker = str(data["hidden_marker"]).strip()
    if len(marker) == 0 or len(marker) > 3:
        marker = DEFAULT_SETTINGS["hidden_marker"]
    data["hidden_marker"] = marker

    flag = str(data["show_help_on_start"]).strip().lower()
    data["show_help_on_start"] = "1" if flag in ("1", "yes", "true", "on") else "0"

    data["snapshot_path"] = str(data["snapshot_path"]).strip()
    return data


def load_settings(path=None):
    path = Path(path) if path is not None else SETTINGS_PATH
    parser = configparser.ConfigParser(interpolation=None)
    if not path.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError, OSError):
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {k: parser[SECTION].get(k, DEFAULT_SETTINGS[k]) for k in DEFAULT_SETTINGS}
    return _sanitize(raw)


def show_help_on_start(settings) -> bool:
    return settings.get("show_help_on_start") == "1"
