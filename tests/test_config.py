import logging

from physics.config import DemoConfig


def test_defaults():
    config = DemoConfig()
    assert config.start_style == 'new'
    assert config.graphics_style == 'new'
    assert config.background_text == 'pemmyz'
    assert config.noise_animated is False


def test_styles_are_case_insensitive():
    config = DemoConfig(start_style=' OLD ', graphics_style='Spin')
    assert config.start_style == 'old'
    assert config.graphics_style == 'spin'


def test_unknown_styles_fall_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        config = DemoConfig(start_style='sideways', graphics_style=None)
    assert config.start_style == 'new'
    assert config.graphics_style == 'new'
    assert 'sideways' in caplog.text


def test_none_text_becomes_empty():
    assert DemoConfig(background_text=None).background_text == ''


def test_with_changes_normalizes():
    config = DemoConfig().with_changes(start_style='OLD', noise_animated=1)
    assert config.start_style == 'old'
    assert config.noise_animated is True
