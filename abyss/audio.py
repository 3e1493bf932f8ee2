"""Audio player markup for Abyss.

Entries with an ``audio`` front matter key get an inline player. The markup
carries the class names the site's player script looks up: ``.audio-player``,
``.audio-btn``, ``.icon-play``, ``.icon-pause``, ``.audio-track``,
``.waves-progress`` and ``.audio-time``.
"""

from __future__ import annotations

from .html_utils import escape_html

WAVE_PATH = (
    "M0 12 Q 10 2 20 12 T 40 12 T 60 12 T 80 12 T 100 12 T 120 12 T 140 12 "
    "T 160 12 T 180 12 T 200 12"
)

PLAYER_TEMPLATE = """<div class="audio-player">
  <audio preload="metadata" src="{src}"></audio>
  <button class="audio-btn" type="button" aria-label="{label}">
    <svg class="icon-play" viewBox="0 0 24 24" aria-hidden="true"><path d="M8 5v14l11-7z"/></svg>
    <svg class="icon-pause" viewBox="0 0 24 24" aria-hidden="true" style="display:none"><path d="M6 5h4v14H6zM14 5h4v14h-4z"/></svg>
  </button>
  <div class="audio-track">
    <svg class="waves" viewBox="0 0 200 24" preserveAspectRatio="none" aria-hidden="true"><path d="{wave}"/></svg>
    <svg class="waves waves-progress" viewBox="0 0 200 24" preserveAspectRatio="none" aria-hidden="true"><path d="{wave}"/></svg>
  </div>
  <span class="audio-time">0:00</span>
</div>"""


def audio_player_html(src: str | None, label: str = "Play") -> str:
    """Return player markup for an audio URL.

    Args:
        src: Audio file URL from metadata. Blank or missing gives no player.
        label: Accessible label for the play button.

    Returns:
        HTML fragment, or an empty string when there is no audio.
    """
    if not src or not src.strip():
        return ""
    return PLAYER_TEMPLATE.format(
        src=escape_html(src.strip(), quote=True),
        label=escape_html(label, quote=True),
        wave=WAVE_PATH,
    )
