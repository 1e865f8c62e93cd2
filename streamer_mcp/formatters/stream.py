"""Text rendering for streamer tool results"""

from typing import List, Sequence

from ..models.stream import StreamLookup, StreamStatus


def format_streamer_list(streamers: Sequence[str]) -> str:
    if not streamers:
        return "No streamers available."
    return ", ".join(streamers)


def format_live_status(status: StreamStatus) -> str:
    """Multi-line summary for a live channel, one-liner when offline"""
    if not status.is_live:
        return f'"{status.name}" is offline.'

    viewers = status.viewer_count if status.viewer_count is not None else "?"
    lines = [
        f'✅ "{status.user_name or status.name}" is live on Twitch.',
        "",
        f"🎮 {status.game_name or 'No category'}",
        f"📺 {status.title or 'Untitled stream'}",
        f"👥 {viewers} viewers",
        f"🔗 {status.url}",
    ]
    thumbnail = status.thumbnail()
    if thumbnail:
        lines.append(f"🖼️ {thumbnail}")
    return "\n".join(lines)


def format_live_list(lookups: Sequence[StreamLookup]) -> str:
    """Summary of a bulk check; names keep their registry casing"""
    live: List[str] = [r.name for r in lookups if r.is_live]
    failed: List[str] = [r.name for r in lookups if not r.ok]

    if live:
        text = f"📺 Streamers currently live: {', '.join(live)}"
    else:
        text = "No one is live right now."

    if failed:
        text += f"\n⚠️ Could not check: {', '.join(failed)}"
    return text
