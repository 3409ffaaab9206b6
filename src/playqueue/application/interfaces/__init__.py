"""Port interfaces for the application layer."""

from playqueue.application.interfaces.preprocessor import Preprocessor, ResolvedQueueSink

__all__ = ["Preprocessor", "ResolvedQueueSink"]
