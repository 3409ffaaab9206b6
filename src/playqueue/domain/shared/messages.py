"""Centralized message constants for error messages, log lines, and HTTP responses."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Queue Errors
    INDEX_OUT_OF_RANGE = "Index out of range: {index} (queue length {length})"
    MISSING_FIELD = "Action requires {field} property"

    # Persistence Errors
    STARTUP_LOAD_FAILED = "Error while loading {path} into play queue: {reason}"
    SNAPSHOT_WRITE_FAILED = "Error writing queue to file {path}: {reason}"
    NOT_A_URL_LIST = "expected a JSON array of URL strings"
    PERSISTENCE_HINT = "Set PLAYQUEUE__PERSIST=false or edit conf.toml if you wish to disable this feature"

    # Settings Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    EMPTY_QUEUE_PATH = "Play queue path cannot be empty"


class ResponseMessages:
    """Plain-text bodies returned by the HTTP resource."""

    SUCCESS = "Success"
    ACCEPTED_PROCESSING = "Accepted -- Processing"


class LogTemplates:
    """Log message templates.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters.
    """

    # Startup / Shutdown
    SERVICE_STARTING = "Starting play queue service (environment: %s)"
    SERVICE_LISTENING = "Serving play queue on %s:%s%s"
    SERVICE_STOPPED = "Play queue service stopped"
    SERVICE_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down"
    SERVICE_FATAL_ERROR = "Fatal error while running service: %s"

    # Persistence
    QUEUE_LOADED = "Loaded %d tracks into play queue from %s"
    QUEUE_FILE_MISSING = "No play queue file at %s, starting with an empty queue"
    QUEUE_PERSISTENCE_DISABLED = "Play queue persistence disabled, starting with an empty queue"
    SNAPSHOT_WRITTEN = "Wrote %d tracks to %s (version %d)"
    SNAPSHOT_SUPERSEDED = "Skipping snapshot version %d, version %d is newer"
    SNAPSHOT_WRITE_FAILED = "Error writing queue to file %s: %r"
    SNAPSHOT_WRITE_UNEXPECTED = "Unexpected error writing queue to file %s"
    SNAPSHOTS_FLUSHED = "Flushed %d pending queue snapshot writes"

    # Queue Operations
    QUEUE_REPLACED = "Replaced play queue with %d tracks"
    QUEUE_ENTRY_REPLACED = "Replaced queue entry at index %d"
    QUEUE_APPENDED = "Appended %s to play queue at position %d"
    QUEUE_APPEND_PENDING = "URL %s claimed by a preprocessor, append pending"
    QUEUE_RESOLVED_APPENDED = "Appended %d resolved tracks to play queue"
    QUEUE_ROTATED = "Rotated play queue head %s to tail"

    # Preprocessors
    PREPROCESSOR_REGISTERED = "Registered preprocessor %s"
    PREPROCESSOR_CLAIMED = "Preprocessor %s claimed %s"
    PREPROCESSOR_ATTEMPT_FAILED = "Preprocessor %s failed while evaluating %s"
    PREPROCESSOR_EXPANDED = "Preprocessor %s expanded %s into %d tracks"
    PREPROCESSOR_EXPAND_FAILED = "Preprocessor %s failed to expand %s"
    PREPROCESSOR_UNBOUND = "Preprocessor %s has no queue bound, dropping %d resolved tracks"
