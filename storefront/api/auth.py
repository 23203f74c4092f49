# storefront/api/auth.py
from typing import Dict, Optional

from fastapi import Depends, Header, HTTPException

from storefront.utils.settings import API_TOKENS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def parse_token_table(raw: str) -> Dict[str, int]:
    """'token-a:1,token-b:2' -> {'token-a': 1, 'token-b': 2}"""
    table = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        token, _, user_id = entry.rpartition(":")
        if not token or not user_id.isdigit():
            logger.warning("Skipping malformed API_TOKENS entry")
            continue
        table[token] = int(user_id)
    return table


class TokenVerifier:
    """
    Zamienia token bearer na id uzytkownika. Tokeny wydaje inny serwis,
    tu sprawdzamy je tylko z tabela z konfiguracji.
    """

    def __init__(self, tokens: Dict[str, int]):
        self.tokens = tokens

    def resolve(self, token: str) -> Optional[int]:
        return self.tokens.get(token)


_verifier = TokenVerifier(parse_token_table(API_TOKENS))


def get_token_verifier() -> TokenVerifier:
    return _verifier


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> int:
    if authorization is None:
        logger.warning("Authentication failed: missing authorization header")
        raise HTTPException(status_code=401, detail="authorization header required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Authentication failed: invalid authorization header format")
        raise HTTPException(status_code=401, detail="invalid authorization header format")

    user_id = verifier.resolve(parts[1])
    if user_id is None:
        logger.warning("Authentication failed: invalid token")
        raise HTTPException(status_code=401, detail="invalid token")

    return user_id
