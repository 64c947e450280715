"""
Calendar Configuration Manager
Loads display, animation and data settings for the cosmic calendar.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'COSMIC_CALENDAR_CONFIG'


class CalendarConfig:
    """
    Settings for the cosmic calendar window.

    Values come from DEFAULT_CONFIG, overridden section by section by an
    optional JSON file. The file path is taken from the constructor argument
    or, failing that, from the COSMIC_CALENDAR_CONFIG environment variable.
    """

    DEFAULT_CONFIG = {
        'canvas': {
            'width': 1000,
            'height': 300,
            'margin_top': 40,
            'margin_right': 60,
            'margin_bottom': 60,
            'margin_left': 60
        },
        'animation': {
            'enter_ms': 750,
            'update_ms': 750,
            'exit_ms': 500,
            'hover_ms': 200
        },
        'zoom': {
            'min_scale': 0.1,
            'max_scale': 50.0,
            'wheel_sensitivity': 0.002
        },
        'data': {
            'data_file': None
        },
        'logging': {
            'log_level': 'INFO'
        }
    }

    def __init__(self, config_file=None):
        """
        Args:
            config_file: Path to a JSON configuration file (optional)
        """
        self.config_file = config_file or os.environ.get(CONFIG_ENV_VAR)
        # Copy each section so instances never share the defaults
        self.config = {}
        for key, value in self.DEFAULT_CONFIG.items():
            self.config[key] = value.copy()

        if self.config_file and os.path.exists(self.config_file):
            self.load()
        elif self.config_file:
            logger.warning(f"Configuration file not found, using defaults: {self.config_file}")

    def load(self):
        """Merge settings from the configuration file into the defaults."""
        if not self.config_file or not os.path.exists(self.config_file):
            return

        if os.path.getsize(self.config_file) == 0:
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration from {self.config_file}: {e}")
            return

        if not isinstance(data, dict):
            logger.error(f"Configuration file must contain a JSON object: {self.config_file}")
            return

        for section, values in data.items():
            if section not in self.config:
                logger.warning(f"Ignoring unknown configuration section '{section}'")
                continue
            if isinstance(values, dict):
                self.config[section].update(values)

        logger.debug(f"Loaded configuration from {self.config_file}")

    def get(self, section, key, default=None):
        return self.config.get(section, {}).get(key, default)

    @property
    def plot_width(self):
        canvas = self.config['canvas']
        return canvas['width'] - canvas['margin_left'] - canvas['margin_right']

    @property
    def plot_height(self):
        canvas = self.config['canvas']
        return canvas['height'] - canvas['margin_top'] - canvas['margin_bottom']

    @property
    def scale_extent(self):
        return (float(self.get('zoom', 'min_scale')), float(self.get('zoom', 'max_scale')))

    @property
    def animation_durations(self):
        """Durations in the form MarkerLifecycleManager expects."""
        animation = self.config['animation']
        return {
            'enter': animation['enter_ms'],
            'update': animation['update_ms'],
            'exit': animation['exit_ms'],
            'hover': animation['hover_ms']
        }

    @property
    def data_file(self):
        return self.get('data', 'data_file')

    @property
    def log_level(self):
        return str(self.get('logging', 'log_level', 'INFO')).upper()
