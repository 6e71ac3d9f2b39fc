"""Domain errors raised by the services; app.main maps them to HTTP responses."""


class RecordNotFoundError(Exception):
    """Raised when a referenced record does not exist in local state."""
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record '{record_id}' not found")


class InvalidTransitionError(Exception):
    """Raised when an order status change is not allowed from its current status."""
    def __init__(self, order_id: str, current: str, requested: str = ""):
        self.order_id = order_id
        self.current = current
        self.requested = requested
        if requested:
            message = f"Order '{order_id}' cannot move from {current} to {requested}"
        else:
            message = f"Order '{order_id}' cannot be advanced from {current}"
        super().__init__(message)


class EmptyCartError(Exception):
    """Raised when checkout is attempted with no items."""
    def __init__(self):
        super().__init__("Cart is empty")


class DatabaseUnavailableError(Exception):
    """Raised at login when the staff collection is empty (store unreachable or unseeded)."""
    def __init__(self):
        super().__init__("Database connection issue: no staff records found")


class InvalidUpdateError(Exception):
    """Raised when edits would leave a record invalid (e.g. a required field set to null)."""
    def __init__(self, collection: str, record_id: str, errors: list):
        self.collection = collection
        self.record_id = record_id
        self.errors = errors
        fields = ", ".join(sorted({".".join(str(p) for p in e["loc"]) for e in errors}))
        super().__init__(f"Invalid update for {collection} record '{record_id}': {fields}")
