"""yt-dlp backed media resolution."""

from discord_playlist.infrastructure.audio.ytdlp_resolver import YtDlpResolver, YtDlpStream

__all__ = ["YtDlpResolver", "YtDlpStream"]
