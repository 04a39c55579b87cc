"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Ledger
  3xxx: Pool
  4xxx: Alert
  9xxx: System

Every concrete error also belongs to one kind (NotFoundError,
InvalidStateError, InputValidationError, ...) so callers can catch by kind.
"""


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


# --- Kinds ---

class NotFoundError(AppError):
    """An entity id does not resolve."""


class InvalidStateError(AppError):
    """Operation attempted against a pool/transaction in the wrong state."""


class InputValidationError(AppError):
    """Malformed or rejected input."""


class AuthError(AppError):
    """Authentication or authorization failure."""


# --- 1xxx: Auth/User ---

class EmailExistsError(InputValidationError):
    def __init__(self) -> None:
        super().__init__(1001, "Email already registered", 409)


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid email or password", 401)


class InvalidTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__(1003, "Token is invalid or expired", 401)


class ForbiddenError(AuthError):
    def __init__(self, detail: str = "Operation not allowed") -> None:
        super().__init__(1004, detail, 403)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1005, f"User not found: {user_id}", 404)


class ProfileIncompleteError(InputValidationError):
    def __init__(self) -> None:
        super().__init__(
            1006, "Register a valid WhatsApp number to enable bets and payments", 422
        )


# --- 2xxx: Ledger ---

class InsufficientFundsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: required {required} cents, available {available} cents",
            422,
        )


class TransactionNotFoundError(NotFoundError):
    def __init__(self, tx_id: str) -> None:
        super().__init__(2002, f"Transaction not found: {tx_id}", 404)


class InvalidAmountError(InputValidationError):
    def __init__(self, amount: int) -> None:
        super().__init__(2003, f"Invalid amount: {amount}", 422)


# --- 3xxx: Pool ---

class PoolNotFoundError(NotFoundError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(3001, f"Pool not found: {pool_id}", 404)


class PoolClosedError(InvalidStateError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(3002, f"Betting is closed for pool {pool_id}", 422)


class DuplicateBetError(AppError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(3003, f"Only one bet per user is allowed in pool {pool_id}", 409)


class InvalidOptionError(InputValidationError):
    def __init__(self, option: str) -> None:
        super().__init__(3004, f"Option is not part of this pool: {option}", 422)


class PoolNotSettleableError(InvalidStateError):
    def __init__(self, pool_id: str, status: str) -> None:
        super().__init__(
            3005, f"Pool {pool_id} in status {status} cannot be settled yet", 422
        )


# --- 4xxx: Alert ---

class AlertNotFoundError(NotFoundError):
    def __init__(self, alert_id: str) -> None:
        super().__init__(4001, f"Alert not found: {alert_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class InvalidInputError(InputValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, detail, 422)
