"""Global enums: values are the at-rest strings stored in every collection."""

from enum import Enum


class Collection(str, Enum):
    USERS = "users"
    POOLS = "pools"
    BETS = "bets"
    TRANSACTIONS = "transactions"
    CONFIG = "config"
    ALERTS = "alerts"
    SESSIONS = "sessions"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class PoolStatus(str, Enum):
    OPEN = "OPEN"
    AWAITING_RESULT = "AWAITING_RESULT"
    FINISHED = "FINISHED"


class TransactionType(str, Enum):
    # Manual, reviewed by an admin
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    # Derived, created APPROVED
    BET = "BET"
    PRIZE = "PRIZE"
    ADJUSTMENT = "ADJUSTMENT"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AlertType(str, Enum):
    INFO = "INFO"
    INCONSISTENCY = "INCONSISTENCY"
    CRITICAL = "CRITICAL"
