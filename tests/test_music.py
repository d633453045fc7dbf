import pytest

from trake.music import Music, MusicManager, Sound


def test_sound_effect_tracks_created_effects():
    sound = Sound("tootuh", looped=True)
    effect = sound.effect()
    assert sound.effects == [effect]
    assert effect.looped is True
    assert effect.playing is False


def test_music_volume_is_clamped():
    music = Music(Sound("a"))
    music.set_volume(2.0)
    assert music.volume == 1.0
    music.set_volume(-1.0)
    assert music.volume == 0.0


def test_music_play_from_and_stop():
    sound = Sound("a")
    music = Music(sound)
    music.set_volume(0.7)
    music.play_from(3.0)
    effect = music.effect
    assert effect is sound.effects[-1]
    assert effect.playing and effect.position == 3.0
    assert effect.volume == pytest.approx(0.7)
    music.stop()
    assert music.effect is None
    assert effect.playing is False


def test_music_play_again_stops_previous_effect():
    sound = Sound("a")
    music = Music(sound)
    music.play_from(0.0)
    first = music.effect
    music.play_from(1.0)
    assert first.playing is False
    assert music.effect.playing is True


def test_music_copy_keeps_sound_and_volume_without_effect():
    sound = Sound("a")
    music = Music(sound)
    music.set_volume(0.3)
    music.play_from(0.0)
    clone = music.copy()
    assert clone.local is sound
    assert clone.volume == pytest.approx(0.3)
    assert clone.effect is None


def test_manager_play_sets_current():
    manager = MusicManager()
    sound = Sound("a")
    assert manager.current() is None
    manager.play(sound)
    assert manager.current() is sound
    assert manager.is_playing() is sound


def test_manager_play_other_stops_previous():
    manager = MusicManager()
    a, b = Sound("a"), Sound("b")
    manager.play(a)
    manager.play(b)
    assert a.effects[-1].playing is False
    assert manager.current() is b


def test_manager_volume_combines_master():
    manager = MusicManager()
    sound = Sound("a")
    manager.play(sound)
    manager.set_volume(0.8)
    assert sound.effects[-1].volume == pytest.approx(0.8 * manager.master_volume)
    manager.set_master_volume(1.0)
    assert sound.effects[-1].volume == pytest.approx(0.8)


def test_manager_stop_keeps_current_but_not_playing():
    manager = MusicManager()
    sound = Sound("a")
    manager.play(sound)
    manager.stop()
    assert manager.current() is sound
    assert manager.is_playing() is None


def test_manager_switch_does_not_interrupt_other_track():
    manager = MusicManager()
    a, b = Sound("a"), Sound("b")
    manager.play(a)
    manager.switch(b)
    assert manager.current() is a
    manager.stop()
    manager.switch(b)
    assert manager.is_playing() is b


def test_manager_set_speed():
    manager = MusicManager()
    sound = Sound("a")
    manager.play(sound)
    manager.set_speed(1.5)
    assert sound.effects[-1].speed == 1.5