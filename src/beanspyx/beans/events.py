"""
Marker types recognized by the introspector.
"""
from __future__ import annotations

from typing import Any

class EventListener:
    """
    Marker base for listener types. Registration methods only count if their argument extends it.
    """
    pass

class EventObject:
    """
    Base for event objects. Listener methods taking exactly one EventObject are callbacks.
    """
    def __init__(self, source: Any):
        self.source = source

    def get_source(self) -> Any:
        return self.source

class PropertyChangeEvent(EventObject):
    def __init__(self, source: Any, property_name: str, old_value: Any = None, new_value: Any = None):
        super().__init__(source)

        self.property_name = property_name
        self.old_value = old_value
        self.new_value = new_value

class PropertyChangeListener(EventListener):
    """
    A class offering registration for this listener is a property change source:
    the properties found on it are bound.
    """
    def propertyChange(self, event: PropertyChangeEvent) -> None:
        pass

class PropertyVetoException(Exception):
    """
    Failure kind declared by setters of constrained properties.
    """
    def __init__(self, message: str, event: PropertyChangeEvent = None):
        super().__init__(message)

        self.event = event

class TooManyListenersException(Exception):
    """
    Failure kind declared by registration methods of unicast event sources.
    """
    pass
