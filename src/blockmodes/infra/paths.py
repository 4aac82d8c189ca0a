"""
Locations searched for blockmodes settings.
"""

from importlib.resources import files

from platformdirs import user_config_path

# Per-user directory, e.g. ~/.config/blockmodes/
USER_CONFIG_DIR = user_config_path("blockmodes", appauthor=False)

# File names tried in the working directory and then in USER_CONFIG_DIR
SETTINGS_NAMES = ("settings.toml", "settings.json")

# Shipped settings, used when nothing else is found
SAMPLE_SETTINGS = files("blockmodes.resources").joinpath(
    "config", "settings.sample.toml"
)
