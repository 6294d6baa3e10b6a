"""Error raised when no source of truth exists for a type name."""


class UnsupportedTypeError(RuntimeError):
    """Raised for a name that is neither a class nor an accepted opaque kind."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"Type information for {type_name} cannot be retrieved "
            "(unsupported type)."
        )
