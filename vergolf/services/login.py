"""Code exchange and account linking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.errors import InvalidInput
from ..models import Account, TemporaryAuthData, dashboard_path
from .accounts import AccountStore, account_to_dict
from .provider import ProviderClient

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """Outcome of a code exchange: a known account or onboarding data."""

    account: Optional[Account] = None
    temp_data: Optional[TemporaryAuthData] = None

    @property
    def is_new_user(self) -> bool:
        return self.account is None

    @property
    def redirect_to(self) -> str:
        if self.account is None:
            return "/onboarding"
        return dashboard_path(self.account.role)

    def to_dict(self) -> Dict[str, Any]:
        if self.account is None:
            assert self.temp_data is not None
            return {"isNewUser": True, "aiverIdData": self.temp_data.model_dump()}
        return {
            "user": account_to_dict(self.account),
            "isNewUser": False,
            "redirectTo": self.redirect_to,
        }


async def exchange_and_link(
    code: Optional[str], client: ProviderClient, store: AccountStore
) -> LoginResult:
    """Run the code exchange and look the provider subject up locally.

    Configuration is checked first, then the code, so a missing code never
    reaches the provider.
    """

    client.settings.require()
    if not isinstance(code, str) or not code.strip():
        raise InvalidInput("Authorization code is required")

    token = await client.exchange_code(code.strip())
    profile = await client.fetch_profile(token["access_token"])

    existing = store.get_by_aiverid(str(profile.aiverid))
    if existing:
        logger.info("Existing account %s signed in", existing.id)
        return LoginResult(account=existing)

    logger.info("New provider subject; onboarding required")
    return LoginResult(temp_data=TemporaryAuthData.from_profile(profile))


__all__ = ["LoginResult", "exchange_and_link"]
