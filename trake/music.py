"""Background music and sound effect playback state."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class SoundEffect:
    """One playing instance of a sound."""

    volume: float = 1.0
    speed: float = 1.0
    position: float = 0.0
    playing: bool = False
    looped: bool = False

    def play(self) -> None:
        self.play_from(0.0)

    def play_from(self, time: float) -> None:
        self.position = time
        self.playing = True

    def stop(self) -> None:
        self.playing = False


@dataclass(eq=False)
class Sound:
    """A loaded sound that can spawn effects; keeps track of the effects it made."""

    name: str
    looped: bool = False
    effects: list[SoundEffect] = field(default_factory=list)

    def effect(self) -> SoundEffect:
        effect = SoundEffect(looped=self.looped)
        self.effects.append(effect)
        return effect


class Music:
    """A music track with an optional active effect."""

    def __init__(self, local: Sound) -> None:
        self.local = local
        self.effect: SoundEffect | None = None
        self.volume = 0.5

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(1.0, volume))
        if self.effect is not None:
            self.effect.volume = self.volume

    def stop(self) -> None:
        effect, self.effect = self.effect, None
        if effect is not None:
            effect.stop()

    def play_from(self, time: float) -> None:
        self.stop()
        effect = self.local.effect()
        effect.volume = self.volume
        effect.play_from(time)
        self.effect = effect

    def copy(self) -> Music:
        """A fresh, not yet playing, track with the same sound and volume."""
        music = Music(self.local)
        music.set_volume(self.volume)
        return music


class MusicManager:
    """Keeps at most one music track playing."""

    def __init__(self) -> None:
        self.master_volume = 0.5
        self.volume = 1.0
        self.playing: Music | None = None

    def current(self) -> Sound | None:
        return self.playing.local if self.playing is not None else None

    def _apply_volume(self) -> None:
        if self.playing is not None:
            self.playing.set_volume(self.volume * self.master_volume)

    def set_master_volume(self, volume: float) -> None:
        self.master_volume = volume
        self._apply_volume()

    def set_volume(self, volume: float) -> None:
        self.volume = volume
        self._apply_volume()

    def set_speed(self, speed: float) -> None:
        if self.playing is not None and self.playing.effect is not None:
            self.playing.effect.speed = speed

    def stop(self) -> None:
        if self.playing is not None:
            self.playing.stop()

    def is_playing(self) -> Sound | None:
        """The sound being played, if there is an active effect."""
        if self.playing is not None and self.playing.effect is not None:
            return self.playing.local
        return None

    def switch(self, music: Sound) -> None:
        playing = self.playing
        if playing is None or playing.effect is None or playing.local is music:
            self.play(music)

    def play(self, music: Sound) -> None:
        self.play_from(music, 0.0)

    def play_from(self, music: Sound, time: float) -> None:
        track = Music(music)
        track.set_volume(self.volume)
        track.play_from(time)
        if self.playing is not None:
            self.playing.stop()
        self.playing = track