"""Centralized message constants for error messages, logging, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"

    # Controller argument errors
    VOLUME_OUT_OF_RANGE = "Please provide a volume between 0 and 100."
    VOLUME_NOT_A_NUMBER = "Volume must be a whole number between 0 and 100."
    MISSING_PLAY_QUERY = "Please provide a song name or YouTube URL."
    MISSING_SEARCH_QUERY = "Provide a search query."
    NOT_ENOUGH_TO_SHUFFLE = "Not enough upcoming tracks to shuffle"
    QUEUE_FULL = "Queue is full (max {max_size} tracks)"
    UNKNOWN_COMMAND = "Unknown command: {name}"
    UNKNOWN_BUTTON = "Unknown control: {custom_id}"

    # Voice Errors
    MISSING_VOICE_PERMISSIONS = "I need permission to join and speak in your voice channel!"
    COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."

    # Audio/Stream Errors
    NO_STREAM_URL_FOR_TRACK = "No stream URL found for {title}"
    VOICE_PLAY_FAILED = "Could not start playback of {title}"

    # Settings / bootstrap
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Voice/Audio Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_MOVE_TIMEOUT = "Timeout moving to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_STALE_CLEANUP = "Found stale voice client in guild %s, cleaning up"
    VOICE_NOT_CONNECTED = "Not connected to voice in guild %s"
    VOICE_DISCONNECT_FAILED = "Failed to disconnect from voice in guild %s: %s"
    GUILD_NOT_FOUND = "Guild %s not found"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"

    # Playback Operations
    PLAYBACK_STARTED = "Started playing '%s' in guild %s (playback_id=%s)"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_TOGGLE_UNAPPLIED = "Voice engine had nothing to %s in guild %s; paused flag kept"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_FAILED_START = "Failed to start playback: %s"
    PLAYBACK_START_RETRY = "Could not start '%s' in guild %s (attempt %d/%d): %s"
    PLAYBACK_RETRIES_EXHAUSTED = "Gave up starting playback after %d attempts in guild %s"
    PLAYBACK_NO_CALLBACK = "No track end callback set for guild %s"
    PLAYBACK_CALLBACK_ERROR = "Error in track end callback for guild %s: %s"
    PLAYBACK_STALE_CALLBACK = "Ignoring stale track-end callback for guild %s (got %s, current %s)"
    TRACK_ENDED = "Track ended in guild %s (playback_id=%s, error=%s)"
    TRACK_REPLAYED = "Replaying '%s' in guild %s (loop=track)"

    # Queue Operations
    QUEUE_CREATED = "Created queue for guild %s"
    QUEUE_DESTROYED = "Destroyed queue for guild %s (%s)"
    QUEUE_ENQUEUED = "Enqueued track '%s' at position %s in guild %s"
    QUEUE_PLAYLIST_ENQUEUED = "Enqueued playlist '%s' (%d tracks) in guild %s"
    QUEUE_PLAYLIST_TRUNCATED = "Playlist '%s' truncated at %d tracks in guild %s (queue full)"
    QUEUE_SKIPPED = "Skipped '%s' in guild %s"
    QUEUE_REWOUND = "Rewound to '%s' in guild %s"
    QUEUE_SHUFFLED = "Shuffled %d upcoming tracks in guild %s"
    VOLUME_CHANGED = "Volume set to %d%% in guild %s"
    LOOP_MODE_CHANGED = "Loop mode changed to %s in guild %s"

    # Search Cache
    SEARCH_RECORDED = "Recorded %d search results for user %s"
    SEARCH_CHOICE_RESOLVED = "Resolved search choice %d for user %s to %s"

    # Dispatch
    DISPATCH_RECEIVED = "Dispatching %s in guild %s from %s (user=%s)"
    DISPATCH_REJECTED = "Rejected %s in guild %s: %s"
    DISPATCH_UNEXPECTED = "Unexpected failure while handling %s in guild %s"
    PLAY_TARGET_CANONICALIZED = "Canonicalized play target %r to %r"

    # Events / notifications
    EVENT_HANDLER_ERROR = "Error in handler for %s: %s"
    NOTIFICATION_NO_CHANNEL = "No text channel to deliver %s for guild %s"
    NOTIFICATION_SEND_FAILED = "Failed to deliver %s to channel %s: %s"
    REPLY_SEND_FAILED = "Failed to send %s reply: %s"
    VIEW_CALLBACK_ERROR = "Error in button %s: %s"

    # Resolution/Search
    YTDLP_NO_URL_IN_INFO_DICT = "No URL found in info dict"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    YTDLP_CONFIGURED = "yt-dlp configured (format=%s, player_client=%s)"
    YTDLP_PLAYLIST_EXTRACTED = "Extracted playlist '%s' with %d entries"
    CACHE_HIT_URL = "Cache hit for URL: %s"

    # Application Lifecycle
    BOT_STARTING = "Starting Discord Jukebox in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Bot Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"

    # Voice state events
    VOICE_CHANNEL_EMPTY = "Voice channel empty in guild %s"
    VOICE_BOT_REMOVED = "Bot was disconnected from voice in guild %s"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Notifications (rendered identically for every input surface)
    TRACK_ADDED = "✅ Added **{title}** to the queue! Position: #{position}"
    PLAYLIST_ADDED = "✅ Added playlist **{name}** ({count} songs) to the queue!"
    QUEUE_FINISHED = "✅ Queue finished! Use `{prefix}play` to add more songs."
    ERROR_OCCURRED = "❌ An error occurred: {message}"
    DISCONNECTED = "👋 Disconnected from voice channel."
    CHANNEL_EMPTY = "🔇 Voice channel is empty, leaving..."

    # Acknowledgements
    ACTION_SKIPPED = "⏭ Skipped!"
    ACTION_STOPPED = "⏹ Stopped and cleared the queue!"
    ACTION_PAUSED = "⏸ Paused!"
    ACTION_RESUMED = "▶️ Resumed!"
    ACTION_PREVIOUS = "⏮ Playing previous song!"
    ACTION_SHUFFLED = "🔀 Queue shuffled!"
    ACTION_VOLUME_SET = "🔊 Volume set to **{volume}%**"
    ACTION_LOOP_MODE_CHANGED = "🔁 Loop mode: **{mode}**"
    ACTION_SEARCHING = "🔍 Searching..."
    ACTION_LOADING = "🔍 Loading **{query}**..."

    # Errors
    ERROR_PREFIX = "❌ {message}"
    ERROR_NO_RECENT_SEARCH = "No recent search found. Use `{prefix}search <query>` first."
    ERROR_NO_SEARCH_RESULTS = "❌ No results found."

    # State Messages
    STATE_QUEUE_EMPTY = "📋 The queue is empty!"
    STATE_QUEUE_EMPTY_SHORT = "📋 Queue is empty."
    STATE_NO_UPCOMING = "No upcoming songs."
    STATE_SERVER_ONLY = "❌ This command can only be used in a server."

    # Embed Titles / fields
    EMBED_NOW_PLAYING = "🎵 Now Playing"
    EMBED_QUEUE = "📋 Music Queue"
    EMBED_QUEUE_UP_NEXT = "Up Next ({count} tracks)"
    EMBED_QUEUE_MORE = "...and {count} more"
    EMBED_QUEUE_TOTAL = "Total length: {duration}"
    EMBED_SEARCH_RESULTS = "🔍 Search Results for: {query}"
    EMBED_SEARCH_FOOTER = "Type {prefix}play 1-{count} to play a result"
    EMBED_REMAINING_FOOTER = "{count} track(s) remaining in queue"
    EMBED_HELP = "🎵 Music Bot Commands"
    EMBED_HELP_DESCRIPTION = "Works with both `/slash` commands and `{prefix}prefix` commands"
    FIELD_DURATION = "Duration"
    FIELD_REQUESTED_BY = "Requested by"
    FIELD_LOOP = "🔁 Loop"
    FIELD_VOLUME = "🔊 Volume"

    # Buttons
    BUTTON_PREVIOUS = "⏮ Prev"
    BUTTON_TOGGLE_PAUSE = "⏸ Pause"
    BUTTON_STOP = "⏹ Stop"
    BUTTON_SKIP = "⏭ Skip"
    BUTTON_QUEUE = "📋 Queue"

    UNKNOWN = "Unknown"
