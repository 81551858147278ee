"""Concrete implementations of the codec's collaborator ports."""

from plain_codec.adapters.diagnostics import LoggingSink, NullSink
from plain_codec.adapters.events import Event, EventFactory

__all__ = ["Event", "EventFactory", "LoggingSink", "NullSink"]
