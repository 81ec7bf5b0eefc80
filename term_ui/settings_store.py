import configparser
import logging
from pathlib import Path

from spider_core.config import SUIT_COUNTS, GameConfig

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "columns": "10",
    "num_suits": "1",
    "num_decks": "2",
}


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    num_suits = _as_int(data["num_suits"], DEFAULT_SETTINGS["num_suits"])
    if num_suits not in SUIT_COUNTS:
        num_suits = int(DEFAULT_SETTINGS["num_suits"])
    data["num_suits"] = str(num_suits)

    num_decks = _as_int(data["num_decks"], DEFAULT_SETTINGS["num_decks"])
    if num_decks < 1:
        num_decks = int(DEFAULT_SETTINGS["num_decks"])
    data["num_decks"] = str(num_decks)

    columns = _as_int(data["columns"], DEFAULT_SETTINGS["columns"])
    if columns < 1:
        columns = int(DEFAULT_SETTINGS["columns"])
    data["columns"] = str(columns)

    try:
        to_config(data).validate()
    except ValueError as e:
        logger.warning("ignoring stored settings: %s", e)
        return dict(DEFAULT_SETTINGS)
    return data


def to_config(settings) -> GameConfig:
    return GameConfig(
        columns=int(settings["columns"]),
        num_suits=int(settings["num_suits"]),
        num_decks=int(settings["num_decks"]),
    )


def load_settings():
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    parser = configparser.ConfigParser()
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except configparser.Error as e:
        logger.warning("cannot read %s: %s", SETTINGS_PATH, e)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    return _sanitize(dict(parser[SECTION]))


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
