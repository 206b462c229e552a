class CollectionError(Exception):
    """base class for contract violations raised by kollect."""
    pass


class InvalidOperatorError(CollectionError, ValueError):
    """raised when a comparison operator is not in the operator table."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"invalid operator '{operator}'")


class UnchainedSortError(CollectionError, TypeError):
    """raised when then_by is used on a collection that was never sorted with sort_by."""

    def __init__(self, method: str = "then_by"):
        self.method = method
        super().__init__(f"{method} requires a preceding sort_by or sort_by_desc call.")


class ItemNotFoundError(CollectionError, LookupError):
    """raised by first_or_fail when no element satisfies the condition."""

    def __init__(self, message: str = "no element satisfies the condition"):
        super().__init__(message)


class InvalidSourceError(CollectionError, TypeError):
    """raised when a lazy collection is given a source it cannot restart."""

    def __init__(self, source, reason: str = None):
        self.source = source
        super().__init__(reason or (
            f"cannot build a lazy collection from a single-shot {type(source).__name__}; "
            "pass a zero-argument function that returns a fresh iterable instead."
        ))
