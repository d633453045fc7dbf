"""Shared game context: options, theme, sound and music."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .music import MusicManager, Sound


@dataclass(frozen=True)
class Color:
    """An RGBA color with components in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, text: str) -> Color:
        digits = text[1:] if text.startswith("#") else text
        if len(digits) not in (6, 8):
            raise ValueError(f"invalid color: {text!r}")
        try:
            parts = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        except ValueError as err:
            raise ValueError(f"invalid color: {text!r}") from err
        return cls(*parts)

    def to_hex(self) -> str:
        parts = [self.r, self.g, self.b] + ([self.a] if self.a != 1.0 else [])
        return "#" + "".join(f"{round(c * 255):02x}" for c in parts)


class ThemeColor(Enum):
    DARK = "dark"
    LIGHT = "light"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class Theme:
    dark: Color = Color.from_hex("#000000")
    light: Color = Color.from_hex("#ffffff")
    highlight: Color = Color.from_hex("#00ffff")

    def get_color(self, color: ThemeColor) -> Color:
        return getattr(self, color.value)


@dataclass(frozen=True)
class Options:
    theme: Theme = field(default_factory=Theme)
    master_volume: float = 0.5
    music_volume: float = 1.0
    sfx_volume: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": {c.value: self.theme.get_color(c).to_hex() for c in ThemeColor},
            "master_volume": self.master_volume,
            "music_volume": self.music_volume,
            "sfx_volume": self.sfx_volume,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Options:
        try:
            theme = data["theme"]
            return cls(
                theme=Theme(**{c.value: Color.from_hex(theme[c.value]) for c in ThemeColor}),
                master_volume=float(data["master_volume"]),
                music_volume=float(data["music_volume"]),
                sfx_volume=float(data["sfx_volume"]),
            )
        except (KeyError, TypeError, AttributeError) as err:
            raise ValueError(f"invalid options: {err}") from err


class OptionsStore:
    """Persists options as JSON; without a path they are kept in memory."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._memory: Options | None = None

    def load(self) -> Options:
        """Stored options, or the defaults if none can be read."""
        if self.path is None:
            return self._memory or Options()
        try:
            return Options.from_dict(json.loads(self.path.read_text(encoding="utf-8")))
        except (OSError, ValueError):
            return Options()

    def save(self, options: Options) -> None:
        if self.path is None:
            self._memory = options
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(options.to_dict(), indent=2), encoding="utf-8")


_SOUNDS = {
    "choochoo": False,
    "click": False,
    "clop": False,
    "clop2": False,
    "puff": False,
    "tootuh": True,
}


class Context:
    """State shared between game screens."""

    def __init__(
        self,
        sounds: dict[str, Sound] | None = None,
        music: MusicManager | None = None,
        store: OptionsStore | None = None,
    ) -> None:
        self.sounds = (
            sounds
            if sounds is not None
            else {name: Sound(name, looped) for name, looped in _SOUNDS.items()}
        )
        self.music = music if music is not None else MusicManager()
        self.store = store if store is not None else OptionsStore()
        self._options = Options()
        self._force_set_options(self.store.load())

    def get_options(self) -> Options:
        return self._options

    def set_options(self, options: Options) -> None:
        if options != self._options:
            self._force_set_options(options)

    def _force_set_options(self, options: Options) -> None:
        self.music.set_master_volume(options.master_volume * options.music_volume)
        self.store.save(options)
        self._options = options

    def play_sfx(self, name: str) -> None:
        """Play the named sound effect at the configured volume."""
        options = self._options
        effect = self.sounds[name].effect()
        effect.volume = options.master_volume * options.sfx_volume
        effect.play()