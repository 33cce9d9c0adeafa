from PySide6.QtCore import QSettings, Signal

from galleria.utils.options import (LIGHTBOX_KEYS, MASONRY_KEYS,
                                    load_lightbox_options,
                                    load_masonry_options)

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    'lightbox_overlay_background_color': '#dd000000',  # black87
    'lightbox_thumbnail_placement': 'hidden',  # hidden, above or below
    'lightbox_thumbnail_size': 60,
    'lightbox_thumbnail_border_width': 4.0,
    'lightbox_thumbnail_border_color': '#ff5252',  # redAccent
    'masonry_bucket_count': 3,
    'masonry_orientation': 'columns',  # columns or rows
    'masonry_item_padding': 4,
    'masonry_column_main_axis_alignment': 'start',
    'masonry_column_cross_axis_alignment': 'start',
    'masonry_row_main_axis_alignment': 'start',
    'masonry_row_cross_axis_alignment': 'start',
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('galleria', 'galleria')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def is_lightbox_setting(key: str) -> bool:
    return key in LIGHTBOX_KEYS


def is_masonry_setting(key: str) -> bool:
    return key in MASONRY_KEYS


def get_lightbox_options():
    return load_lightbox_options(settings)


def get_masonry_options():
    return load_masonry_options(settings)
