"""Service layer helpers."""

from .accounts import AccountStore, SQLAccountStore, account_from_form, account_to_dict
from .identities import IdentityAdmin, LocalIdentityAdmin, signed_out_since
from .login import LoginResult, exchange_and_link
from .onboarding import complete_onboarding
from .provider import ProviderClient, ProviderSettings, provider_settings_from_env
from .tokens import (
    MOCK_SESSION_PURPOSE,
    SESSION_PURPOSE,
    TEMP_SESSION_PURPOSE,
    TokenCodec,
)

__all__ = [
    "AccountStore",
    "IdentityAdmin",
    "LocalIdentityAdmin",
    "LoginResult",
    "MOCK_SESSION_PURPOSE",
    "ProviderClient",
    "ProviderSettings",
    "SESSION_PURPOSE",
    "SQLAccountStore",
    "TEMP_SESSION_PURPOSE",
    "TokenCodec",
    "account_from_form",
    "account_to_dict",
    "complete_onboarding",
    "exchange_and_link",
    "provider_settings_from_env",
    "signed_out_since",
]
