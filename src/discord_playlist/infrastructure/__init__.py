"""Infrastructure adapters: yt-dlp media resolution and Discord voice/text I/O."""
