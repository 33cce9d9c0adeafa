import pytest

pytest.importorskip("PySide6")

from galleria.utils import settings as settings_module
from galleria.utils.options import (LIGHTBOX_KEYS, MASONRY_KEYS,
                                    LightboxOptions, MasonryOptions,
                                    load_lightbox_options,
                                    load_masonry_options)


class DefaultsOnly:
    def value(self, key, defaultValue=None, type=None):
        value = settings_module.DEFAULT_SETTINGS[key]
        return type(value) if type is not None else value


def test_defaults_cover_every_option_key():
    assert set(settings_module.DEFAULT_SETTINGS) == set(LIGHTBOX_KEYS) | set(MASONRY_KEYS)


def test_defaults_match_option_defaults():
    assert load_lightbox_options(DefaultsOnly()) == LightboxOptions().validate()
    assert load_masonry_options(DefaultsOnly()) == MasonryOptions().validate()


def test_setting_key_classification():
    assert settings_module.is_lightbox_setting("lightbox_thumbnail_size")
    assert not settings_module.is_lightbox_setting("masonry_bucket_count")
    assert settings_module.is_masonry_setting("masonry_orientation")
