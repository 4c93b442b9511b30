"""
Exceptions raised by the introspector.
"""

class IntrospectionException(Exception):
    """
    Raised when a descriptor cannot be built from the supplied members, e.g. a getter and setter
    whose types disagree. Raised while collecting a single level, it only discards the offending candidate.
    """
    pass

class IntrospectionConfigurationException(IntrospectionException):
    """
    Raised for invalid arguments to the public query api, before any reflection work is done.
    """
    pass
