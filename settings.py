import json
import logging
import os

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"

DEFAULT_SETTINGS = {
    "default_color": "#00d66f",
    "color_managed": True,
    "image_sample_limit": 10000,
    "image_top_colors": 8,
    "image_rounding_step": 10,
    "history_size": 15,
}


def load_settings(path=SETTINGS_FILE):
    """
    Defaults overlaid with whatever the settings file holds.
    A missing or unreadable file leaves the defaults in place.
    """
    settings = dict(DEFAULT_SETTINGS)
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read settings from %s: %s", path, e)
            return settings
        if isinstance(data, dict):
            settings.update(data)
        else:
            logger.warning("Ignoring settings file %s: expected a JSON object", path)
    return settings

def save_settings(settings, path=SETTINGS_FILE):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
    except (OSError, TypeError) as e:
        logger.warning("Could not write settings to %s: %s", path, e)
        return False
    return True
