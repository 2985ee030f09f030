import configparser
from pathlib import Path

from nestor.ui_config import CARD_STYLE_ORDER, LOG_LEVEL_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "nestor"

DEFAULT_SETTINGS = {
    "card_style": "Symbols",
    "log_path": "nestor.log",
    "log_level": "INFO",
    "snapshot_path": "",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS and v is not None})

    if data["card_style"] not in CARD_STYLE_ORDER:
        data["card_style"] = DEFAULT_SETTINGS["card_style"]

    level = str(data["log_level"]).strip().upper()
    if level not in LOG_LEVEL_ORDER:
        level = DEFAULT_SETTINGS["log_level"]
    data["log_level"] = level

    log_path = str(data["log_path"]).strip()
    if not log_path:
        log_path = DEFAULT_SETTINGS["log_path"]
    data["log_path"] = log_path

    data["snapshot_path"] = str(data["snapshot_path"]).strip()
    return data


def _settings_path(path=None) -> Path:
    return SETTINGS_PATH if path is None else Path(path)


def load_settings(path=None):
    settings_path = _settings_path(path)
    if not settings_path.exists():
        return dict(DEFAULT_SETTINGS)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(settings_path, encoding="utf-8")
    except configparser.Error:
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser[SECTION].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings, path=None):
    data = _sanitize(settings)
    settings_path = _settings_path(path)
    parser = configparser.ConfigParser(interpolation=None)
    parser[SECTION] = data
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    with settings_path.open("w", encoding="utf-8") as f:
        parser.write(f)
    return data
