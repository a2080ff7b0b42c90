"""
Demo configuration — the small surface the front end drives the core with.

The struct is built by the UI at "apply" time and handed explicitly to
`SimulationSession.rebuild` and the background components. Unknown values
never raise: they fall back to the documented default and log a warning,
since a cosmetic glitch beats a frozen frame loop.
"""
import logging
from dataclasses import dataclass, replace

START_STYLES = ('new', 'old')
GRAPHICS_STYLES = ('new', 'old', 'spin')

DEFAULT_START_STYLE = 'new'
DEFAULT_GRAPHICS_STYLE = 'new'
DEFAULT_BACKGROUND_TEXT = 'pemmyz'


def _choose(value, allowed, default, what):
    key = str(value).strip().lower() if value is not None else ''
    if key in allowed:
        return key
    logging.warning(f"Unknown {what} {value!r}, falling back to {default!r}")
    return default


def normalize_start_style(value) -> str:
    return _choose(value, START_STYLES, DEFAULT_START_STYLE, 'start style')


def normalize_graphics_style(value) -> str:
    return _choose(value, GRAPHICS_STYLES, DEFAULT_GRAPHICS_STYLE, 'graphics style')


@dataclass(frozen=True)
class DemoConfig:
    start_style: str = DEFAULT_START_STYLE
    graphics_style: str = DEFAULT_GRAPHICS_STYLE
    background_text: str = DEFAULT_BACKGROUND_TEXT
    noise_animated: bool = False

    def __post_init__(self):
        # frozen: go through object.__setattr__ to store the cleaned values
        object.__setattr__(self, 'start_style', normalize_start_style(self.start_style))
        object.__setattr__(self, 'graphics_style',
                           normalize_graphics_style(self.graphics_style))
        text = self.background_text if self.background_text is not None else ''
        object.__setattr__(self, 'background_text', str(text))
        object.__setattr__(self, 'noise_animated', bool(self.noise_animated))

    def with_changes(self, **changes) -> 'DemoConfig':
        return replace(self, **changes)
