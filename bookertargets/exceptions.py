"""Domain-specific exceptions for monthly targets."""


class TargetError(Exception):
    """Base exception for target errors."""

    pass


class TargetNotFoundError(TargetError):
    """Raised when a monthly target does not exist."""

    def __init__(self, target_id: str):
        self.target_id = target_id
        super().__init__(f"Monthly target not found: {target_id}")


class DuplicatePeriodError(TargetError):
    """Raised when an owner already has a target for the period."""

    def __init__(self, owner_id: str, year: int, month: int):
        self.owner_id = owner_id
        self.year = year
        self.month = month
        super().__init__(f"Monthly target already exists for {owner_id} in {year}-{month:02d}")


class InvalidAmountError(TargetError):
    """Raised when an amount is not a finite number, or a target amount is not positive."""

    def __init__(self, amount, reason: str = "Target amount must be greater than 0"):
        self.amount = amount
        super().__init__(f"{reason}, got {amount}")


class InvalidPeriodError(TargetError):
    """Raised when a year/month pair is not a calendar month."""

    def __init__(self, year: int, month: int):
        self.year = year
        self.month = month
        super().__init__(f"Invalid period: {year}-{month}")


class EmptyUpdateError(TargetError):
    """Raised when an update carries no fields."""

    def __init__(self):
        super().__init__("No fields to update")


class DivisionByZeroError(TargetError, ZeroDivisionError):
    """Raised when a period has no working days to spread a target over."""

    def __init__(self, message: str = "Working days must be greater than 0"):
        super().__init__(message)
