"""Validated option bundles for the lightbox and masonry widgets."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace

from galleria.widgets.errors import InvalidArgument
from galleria.widgets.lightbox_navigator import ThumbnailPlacement
from galleria.widgets.masonry_distribution import MasonryOrientation

# #RGB, #RRGGBB or #AARRGGBB, the forms QColor accepts from a string.
_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')

ALIGNMENTS = ('start', 'center', 'end')


def is_color(value) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


def parse_orientation(value) -> MasonryOrientation:
    if isinstance(value, MasonryOrientation):
        return value
    try:
        return MasonryOrientation(str(value).strip().lower())
    except ValueError:
        raise InvalidArgument(f'Unknown masonry orientation: {value!r}') from None


@dataclass
class LightboxOptions:
    overlay_background_color: str = '#dd000000'  # black, 87% opacity
    thumbnail_placement: ThumbnailPlacement = ThumbnailPlacement.HIDDEN
    thumbnail_size: int = 60
    thumbnail_border_width: float = 4.0
    thumbnail_border_color: str = '#ff5252'

    def validate(self) -> 'LightboxOptions':
        """Return a normalized copy; the instance itself is left untouched."""
        if not is_color(self.overlay_background_color):
            raise InvalidArgument(
                f'Invalid overlay color: {self.overlay_background_color!r}')
        if not is_color(self.thumbnail_border_color):
            raise InvalidArgument(
                f'Invalid border color: {self.thumbnail_border_color!r}')
        placement = ThumbnailPlacement.parse(self.thumbnail_placement)
        if self.thumbnail_size <= 0:
            raise InvalidArgument(
                f'thumbnail_size must be positive, got {self.thumbnail_size}')
        if self.thumbnail_border_width < 0:
            raise InvalidArgument('thumbnail_border_width must be >= 0, '
                                  f'got {self.thumbnail_border_width}')
        return replace(self, thumbnail_placement=placement)


@dataclass
class MasonryOptions:
    bucket_count: int = 3
    orientation: MasonryOrientation = MasonryOrientation.COLUMNS
    item_padding: int = 4
    column_main_axis_alignment: str = 'start'
    column_cross_axis_alignment: str = 'start'
    row_main_axis_alignment: str = 'start'
    row_cross_axis_alignment: str = 'start'

    def validate(self) -> 'MasonryOptions':
        """Return a normalized copy; the instance itself is left untouched."""
        if isinstance(self.bucket_count, bool) or not isinstance(self.bucket_count, int):
            raise InvalidArgument(f'bucket_count must be an int, got {self.bucket_count!r}')
        if self.bucket_count <= 0:
            raise InvalidArgument(
                f'bucket_count must be positive, got {self.bucket_count}')
        orientation = parse_orientation(self.orientation)
        if self.item_padding < 0:
            raise InvalidArgument(
                f'item_padding must be >= 0, got {self.item_padding}')
        for name in ('column_main_axis_alignment', 'column_cross_axis_alignment',
                     'row_main_axis_alignment', 'row_cross_axis_alignment'):
            if getattr(self, name) not in ALIGNMENTS:
                raise InvalidArgument(f'{name} must be one of {ALIGNMENTS}')
        return replace(self, orientation=orientation)


# Settings key -> (field name, stored type)
LIGHTBOX_KEYS = {
    'lightbox_overlay_background_color': ('overlay_background_color', str),
    'lightbox_thumbnail_placement': ('thumbnail_placement', str),
    'lightbox_thumbnail_size': ('thumbnail_size', int),
    'lightbox_thumbnail_border_width': ('thumbnail_border_width', float),
    'lightbox_thumbnail_border_color': ('thumbnail_border_color', str),
}

MASONRY_KEYS = {
    'masonry_bucket_count': ('bucket_count', int),
    'masonry_orientation': ('orientation', str),
    'masonry_item_padding': ('item_padding', int),
    'masonry_column_main_axis_alignment': ('column_main_axis_alignment', str),
    'masonry_column_cross_axis_alignment': ('column_cross_axis_alignment', str),
    'masonry_row_main_axis_alignment': ('row_main_axis_alignment', str),
    'masonry_row_cross_axis_alignment': ('row_cross_axis_alignment', str),
}


def _load(options_type, keys: dict, store):
    defaults = options_type()
    values = {}
    for key, (name, value_type) in keys.items():
        default = getattr(defaults, name)
        if hasattr(default, 'value'):  # enum members are stored by value
            default = default.value
        try:
            values[name] = store.value(key, defaultValue=default, type=value_type)
        except (TypeError, ValueError) as e:
            print(f"[SETTINGS] Could not read {key}: {e}")
            values[name] = default

    # Check each value against otherwise-default options so one bad value
    # does not reset the rest.
    options = options_type()
    for field in fields(options_type):
        candidate = options_type(**{field.name: values[field.name]})
        try:
            candidate = candidate.validate()
        except (InvalidArgument, TypeError) as e:
            print(f"[SETTINGS] {e}; using default")
            continue
        setattr(options, field.name, getattr(candidate, field.name))
    return options.validate()


def load_lightbox_options(store) -> LightboxOptions:
    """Read lightbox options from a QSettings-like `store`."""
    return _load(LightboxOptions, LIGHTBOX_KEYS, store)


def load_masonry_options(store) -> MasonryOptions:
    """Read masonry options from a QSettings-like `store`."""
    return _load(MasonryOptions, MASONRY_KEYS, store)
