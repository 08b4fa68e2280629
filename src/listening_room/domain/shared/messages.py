"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    PAUSED_BEFORE_PLAYED = "paused_at cannot precede played_at"
    PAUSED_WITHOUT_TIMESTAMPS = "A paused track needs both played_at and paused_at"
    PLAYING_WITHOUT_PLAYED_AT = "A playing track needs played_at"

    # Playback Errors
    MULTIPLE_ACTIVE_TRACKS = "User {user_id} has {count} active tracks"
    STORE_BUSY = "Track store is busy, transition for track {track_id} was not applied"
    INCONSISTENT_TRANSITION = "Track {track_id} transition left inconsistent playback times"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"
    TIMEZONE_REQUIRED = "datetime must be timezone-aware (UTC)"

    # Settings Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Application Lifecycle
    APP_STARTING = "Starting listening room core (environment=%s)"
    APP_READY = "Listening room ready, database at %s"
    APP_FATAL_ERROR = "Fatal error during startup: %s"

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    TABLE_MIGRATED = "Migrated table %s: added column %s"

    # Track Store
    TRACK_CREATED = "Created track %s for user %s"
    TRACK_DELETED = "Deleted track %s"
    TRACKS_DEMOTED = "Demoted %s active track(s) of user %s to stopped"
    TRANSITION_APPLIED = "Track %s is now %s (played_at=%s, paused_at=%s)"
    TRANSITION_CONFLICT = "Transition for track %s hit a store conflict: %s"
    TRANSITION_REJECTED = "Rolled back transition for track %s: %s"

    # Playback
    PLAY_REQUESTED = "Play requested for track %s"
    PAUSE_REQUESTED = "Pause requested for track %s (user %s)"
    ACTIVE_TRACKS_CORRUPT = "User %s has %s active tracks: %s"

    # Notifications
    PUBLISH_FAILED = "Failed to publish playback update for track %s to %s"
    SUBSCRIBED = "Subscribed handler to topic %s"
    UNSUBSCRIBED = "Unsubscribed handler from topic %s"
    NO_SUBSCRIBERS = "No subscribers for %s on %s"
    PUBLISHING = "Publishing %s to %d handlers on %s"
    HANDLER_FAILED = "Error in handler for %s on %s: %s"
    SUBSCRIPTIONS_CLEARED = "Cleared all topic subscriptions"
