from abyss.audio import audio_player_html


def test_no_player_without_source():
    assert audio_player_html(None) == ""
    assert audio_player_html("") == ""
    assert audio_player_html("   ") == ""


def test_player_markup():
    html = audio_player_html(" media/tide.mp3 ")
    assert html.startswith('<div class="audio-player">')
    assert '<audio preload="metadata" src="media/tide.mp3"></audio>' in html
    for class_name in ("audio-btn", "icon-play", "icon-pause", "audio-track", "audio-time"):
        assert f'class="{class_name}"' in html
    assert 'class="waves waves-progress"' in html
    assert ">0:00</span>" in html


def test_pause_icon_hidden_by_inline_style():
    # The player script toggles icons through style.display, which cannot
    # override the hidden attribute
    html = audio_player_html("a.mp3")
    pause_line = next(line for line in html.splitlines() if "icon-pause" in line)
    assert " hidden" not in pause_line
    assert 'style="display:none"' in pause_line


def test_player_source_is_escaped():
    html = audio_player_html('a.mp3" onload="x')
    assert 'src="a.mp3&quot; onload=&quot;x"' in html
