"""Bonding curve error classes.

Every error aborts the whole operation; the runtime rolls back any state
the call touched before the error surfaced.
"""


class BondingCurveError(Exception):
    """Base error for market operations."""

    pass


# Input validation


class ValidationError(BondingCurveError):
    """Input rejected before any state is read."""

    pass


class AmountZero(ValidationError):
    """Amount must be greater than zero."""

    pass


class ZeroAddress(ValidationError):
    """The null address is not a valid recipient, treasury or owner."""

    pass


class SupplyUnderflow(ValidationError):
    """Amount exceeds the circulating supply."""

    pass


class FeeTooHigh(ValidationError):
    """Fee rate exceeds MAX_FEE_BPS."""

    pass


class InvalidCurveParameters(ValidationError):
    """Curve coefficients must be positive and a must be a multiple of 3."""

    pass


# Funds sufficiency


class FundsError(BondingCurveError):
    """A party cannot cover the amount the operation needs."""

    pass


class InsufficientFunds(FundsError):
    """Attached value is below the total cost of the buy."""

    pass


class InsufficientBalance(FundsError):
    """Token balance is below the amount to burn or transfer."""

    pass


class InsufficientAllowance(FundsError):
    """Spender allowance is below the amount to transfer."""

    pass


class InsufficientNativeBalance(FundsError):
    """Sender's native balance cannot cover the value it attaches or sends."""

    pass


class PoolBalanceTooLow(FundsError):
    """Reserve cannot cover the curve refund of a sell."""

    pass


# Authorization


class AuthorizationError(BondingCurveError):
    """Caller lacks the capability the operation requires."""

    pass


class NotOwner(AuthorizationError):
    """Owner-only operation invoked by another caller."""

    pass


# Reserve invariant


class InvariantError(BondingCurveError):
    """Operation would leave the reserve below its requirement."""

    pass


class NoExcess(InvariantError):
    """Reserve does not exceed the required reserve."""

    pass


class WithdrawAmountTooHigh(InvariantError):
    """Withdrawal is larger than the reserve surplus."""

    pass


# External interaction


class TransferFailed(BondingCurveError):
    """A payee rejected an outgoing value transfer."""

    pass


class ReentrantCall(BondingCurveError):
    """Mutating operation entered while another one is in flight."""

    pass
