"""Credit accounting for metered chat and resume questions.

Bearer tokens are opaque keys into an in-memory ledger. Callers without a
token are not metered.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

DEFAULT_STARTING_CREDITS = 100
INSUFFICIENT_CREDITS_MESSAGE = (
    "Insufficient credits. Please purchase more credits to continue."
)

router = APIRouter(prefix="/api/credits", tags=["credits"])

_bearer = HTTPBearer(auto_error=False)


class InsufficientCreditsError(Exception):
    """Raised when a deduction exceeds the token's balance."""

    def __init__(self, balance: int) -> None:
        super().__init__(INSUFFICIENT_CREDITS_MESSAGE)
        self.balance = balance


class CreditLedger:
    """In-memory credit balances keyed by bearer token."""

    def __init__(self, starting_credits: int = DEFAULT_STARTING_CREDITS) -> None:
        self.starting_credits = starting_credits
        self._balances: dict[str, int] = {}

    def balance(self, token: str) -> int:
        return self._balances.setdefault(token, self.starting_credits)

    def has_credits(self, token: str, amount: int = 1) -> bool:
        return self.balance(token) >= amount

    def deduct(self, token: str, amount: int = 1) -> int:
        """Take credits from a token.

        Returns:
            The remaining balance.

        Raises:
            InsufficientCreditsError: If the balance is too low.
        """
        balance = self.balance(token)
        if balance < amount:
            raise InsufficientCreditsError(balance)
        self._balances[token] = balance - amount
        logger.info(f"Deducted {amount} credit(s), remaining: {balance - amount}")
        return balance - amount

    def add(self, token: str, amount: int) -> int:
        self._balances[token] = self.balance(token) + amount
        return self._balances[token]

    def refund(self, token: str, amount: int = 1) -> int:
        """Return credits taken for a request that produced no answer."""
        logger.info(f"Refunding {amount} credit(s)")
        return self.add(token, amount)


def get_credit_ledger(request: Request) -> CreditLedger:
    return request.app.state.credit_ledger


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    """Bearer token from the Authorization header, if any."""
    if credentials is None or not credentials.credentials.strip():
        return None
    return credentials.credentials.strip()


@router.get("")
async def get_credits(
    token: str | None = Depends(get_bearer_token),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> dict[str, int]:
    """Return the credit balance of the calling token.

    Raises:
        401: No bearer token supplied.
    """
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token required",
        )
    return {"credits": ledger.balance(token)}
