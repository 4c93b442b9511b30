class StringBuilder:
    """
    Accumulates string fragments, used to render descriptors and qualified method keys.
    """
    def __init__(self, initial: str = ""):
        self._parts = [initial] if initial else []

    def append(self, s) -> "StringBuilder":
        self._parts.append(str(s))

        return self

    def append_if(self, condition: bool, s) -> "StringBuilder":
        if condition:
            self._parts.append(str(s))

        return self

    def extend(self, iterable, separator: str = "") -> "StringBuilder":
        for i, s in enumerate(iterable):
            if separator and i > 0:
                self._parts.append(separator)
            self._parts.append(str(s))

        return self

    def __str__(self):
        return ''.join(self._parts)

    def clear(self):
        self._parts.clear()
