"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Resolution
    INVALID_LINK = "Invalid youtube link: {reason}"
    NO_INFO_FOR_URL = "No media info found for {url}"
    NO_STREAM_URL_FOR_SONG = "No stream URL found for {title}"

    # Playback preconditions
    VOICE_NOT_CONNECTED = "not connected to a voice channel"
    STREAM_NOT_RESOLVABLE = "Stream for {url} has no resolvable media URL"

    # Commands
    ADD_REQUIRES_URL = 'Enter a url after the "add" command'
    JOIN_REQUIRES_VOICE = (
        "Unable to connect to voice channel! Ensure that you have joined a voice channel"
    )
    LEAVE_REQUIRES_VOICE = "Not currently in a voice channel!"
    VOICE_CONNECT_FAILED = "Could not connect to voice channel {name}"

    # Settings
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for %-style logger calls.

    Pass the values as logger arguments rather than pre-formatting the string.
    """

    # Playlist engine
    SONG_ENQUEUED = "Enqueued '%s' for %s in guild %s (queue length %d)"
    SONG_RESOLVE_FAILED = "Failed to resolve %s in guild %s: %s"
    SONG_STARTED = "Started playing '%s' in guild %s"
    SONG_START_FAILED = "Could not start '%s' in guild %s: %s"
    SONG_ENDED = "Stream for '%s' ended in guild %s"
    SONG_ERRORED = "Playback error for '%s' in guild %s: %r"
    QUEUE_EMPTY = "Queue empty in guild %s"
    STALE_DISPATCHER_EVENT = "Ignoring %s event from stale dispatcher in guild %s"
    AUTO_ADVANCE_FAILED = "Automatic advance failed in guild %s: %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s (%d queued songs dropped)"
    PAUSE_IGNORED = "Ignoring pause in guild %s while %s"
    RESUME_IGNORED = "Ignoring resume in guild %s while %s"
    NO_OUTPUT_CHANNEL = "No output channel bound in guild %s, dropping notice: %s"
    OUTPUT_CHANNEL_BOUND = "Bound output channel %s in guild %s"

    # Registry
    ENGINE_CREATED = "Created playlist engine for guild %s"

    # Voice / transport
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_NOT_CONNECTED = "Not connected to voice in guild %s"
    GUILD_NOT_FOUND = "Guild %s not found"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"
    DISPATCHER_STARTED = "Dispatcher started stream in guild %s"
    DISPATCHER_OPEN_FAILED = "Dispatcher failed to open stream in guild %s: %r"
    DISPATCHER_FINISHED = "Dispatcher finished in guild %s (error: %r)"
    DISPATCHER_DISPOSED = "Dispatcher disposed in guild %s"
    DISPATCHER_LISTENER_ERROR = "Error in dispatcher %s listener for guild %s"

    # Output channel
    OUTPUT_SEND_FAILED = "Failed to post message to channel %s"

    # yt-dlp
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_INVALID_INFO = "Unusable info returned for %s: %s"
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"

    # Commands
    COMMAND_RECEIVED = "Command %s from %s in guild %s"
    COMMAND_REJECTED = "Command %s rejected in guild %s: %s"

    # Bot lifecycle
    BOT_STARTING = "Starting Discord Playlist Bot in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    BOT_VOICE_DISCONNECT_FAILED = "Failed to disconnect voice client during shutdown"


class DiscordUIMessages:
    """Text posted to Discord channels."""

    # Playlist notifications
    NOW_PLAYING = "Playing: **{title}** as requested by: **{requester}**"
    QUEUE_EXHAUSTED = "No more songs left in the queue!"
    PLAYBACK_PAUSED = "Playback Paused!"
    PLAYBACK_RESUMED = "Playback Resumed!"
    PLAYBACK_ERROR_SKIPPING = "Playback error on **{title}**, skipping."

    # Queue listing
    QUEUE_HEADER = "__**Music Queue:**__ Currently **{count}** songs queued"
    QUEUE_TRUNCATED = " *[Only next {limit} shown]*"
    QUEUE_EMPTY_HINT = '\nAdd some songs to the queue with the "add" command!'
    QUEUE_ENTRY = "{position}. {title} - Requested by: {requester}"

    # Command replies
    SONG_ADDED = "Added **{title}** to the queue"
    VOICE_JOINED = "Connected to channel {name}"
    VOICE_LEFT = "Left channel {name}"
    NOT_CONNECTED = 'Not connected to a voice channel! Use the "join" command first.'
    COMMAND_FAILED = "❌ {error}"
    GUILD_ONLY = "This command can only be used in a server."
