import pytest

from trake.context import Color, Context, Options, OptionsStore, Theme, ThemeColor
from trake.music import Sound


def test_color_from_hex():
    assert Color.from_hex("#00ffff") == Color(0.0, 1.0, 1.0, 1.0)


@pytest.mark.parametrize("text", ["#fff", "#gggggg", "", "#1234567"])
def test_color_from_hex_invalid(text):
    with pytest.raises(ValueError):
        Color.from_hex(text)


def test_color_hex_round_trip():
    for text in ["#10273d", "#ff4f69", "#fff7f8", "#00ffff80"]:
        assert Color.from_hex(text).to_hex() == text


def test_theme_defaults():
    theme = Theme()
    assert theme.get_color(ThemeColor.DARK) == Color.from_hex("#000000")
    assert theme.get_color(ThemeColor.LIGHT) == Color.from_hex("#ffffff")
    assert theme.get_color(ThemeColor.HIGHLIGHT) == Color.from_hex("#00ffff")


def test_options_defaults():
    options = Options()
    assert (options.master_volume, options.music_volume, options.sfx_volume) == (0.5, 1.0, 1.0)


def test_options_dict_round_trip():
    options = Options(
        theme=Theme(highlight=Color.from_hex("#ff4f69")),
        master_volume=0.25,
        music_volume=0.75,
        sfx_volume=0.5,
    )
    assert Options.from_dict(options.to_dict()) == options


def test_options_from_dict_invalid():
    with pytest.raises(ValueError):
        Options.from_dict({"master_volume": 1.0})


def test_store_missing_file_gives_defaults(tmp_path):
    assert OptionsStore(tmp_path / "options.json").load() == Options()


def test_store_round_trip(tmp_path):
    store = OptionsStore(tmp_path / "sub" / "options.json")
    options = Options(master_volume=0.1)
    store.save(options)
    assert OptionsStore(tmp_path / "sub" / "options.json").load() == options


def test_store_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "options.json"
    path.write_text("{not json")
    assert OptionsStore(path).load() == Options()


def test_memory_store_round_trip():
    store = OptionsStore()
    options = Options(sfx_volume=0.3)
    store.save(options)
    assert store.load() == options


def test_context_applies_stored_options_to_music():
    store = OptionsStore()
    store.save(Options(master_volume=0.2, music_volume=0.5))
    context = Context(store=store)
    assert context.get_options().master_volume == 0.2
    assert context.music.master_volume == pytest.approx(0.2 * 0.5)


def test_context_set_options_persists():
    store = OptionsStore()
    context = Context(store=store)
    options = Options(master_volume=0.9)
    context.set_options(options)
    assert context.get_options() == options
    assert store.load() == options
    assert context.music.master_volume == pytest.approx(0.9)


def test_play_sfx_uses_volume():
    click = Sound("click")
    context = Context(sounds={"click": click})
    context.set_options(Options(master_volume=0.5, sfx_volume=0.4))
    context.play_sfx("click")
    effect = click.effects[-1]
    assert effect.playing
    assert effect.volume == pytest.approx(0.5 * 0.4)


def test_play_sfx_unknown_name():
    with pytest.raises(KeyError):
        Context(sounds={}).play_sfx("missing")


def test_default_sounds_include_looped_music():
    context = Context()
    assert context.sounds["tootuh"].looped is True
    assert context.sounds["choochoo"].looped is False