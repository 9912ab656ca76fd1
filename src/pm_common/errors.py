"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Market lifecycle (registry, resolution)
  4xxx: Trade / request input
  9xxx: System
"""

from src.pm_common.amounts import MAX_AMOUNT


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3001, f"Market not found: {event_id}", 404)


class DuplicateEventError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3002, f"Market already exists for event: {event_id}", 409)


class InvalidLiquidityError(AppError):
    def __init__(self, liquidity: object) -> None:
        super().__init__(
            3003, f"Initial liquidity must be in (0, {MAX_AMOUNT}], got {liquidity}", 422
        )


class MarketResolvedError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3004, f"Market is resolved, trading closed: {event_id}", 422)


class AlreadyResolvedError(AppError):
    def __init__(self, event_id: str, winning_outcome: str) -> None:
        super().__init__(
            3005, f"Market {event_id} already resolved as {winning_outcome}", 409
        )


class MarketNotResolvedError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3006, f"Market is not resolved yet: {event_id}", 422)


# --- 4xxx: Trade input ---

class InvalidAmountError(AppError):
    def __init__(self, amount: object) -> None:
        super().__init__(
            4001, f"Amount must be positive and at most {MAX_AMOUNT}, got {amount}", 422
        )


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: object) -> None:
        super().__init__(4002, f"Unknown outcome: {outcome}", 422)


class InvalidParticipantError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "participant_id must be a non-empty string", 422)


class InvalidOrderBookParamsError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4004, f"Invalid order book parameters: {detail}", 422)


class InvalidEventIdError(AppError):
    def __init__(self) -> None:
        super().__init__(4005, "event_id must be a non-empty string", 422)


# --- 9xxx: System ---

class InvariantViolationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Invariant violated: {detail}", 500)
