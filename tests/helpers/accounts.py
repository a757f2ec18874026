"""
Helpers that drive the HTTP API to set up accounts and wallets.
"""

from httpx import AsyncClient

from tests.helpers.sign_message import get_wallet_address, sign_message

DEFAULT_PASSWORD = "Sup3r$ecret"
BIND_MESSAGE = "Connect wallet"


async def sign_up(
    client: AsyncClient,
    username: str = "alice",
    phone_number: str = "5551234567",
    email: str = None,
    password: str = DEFAULT_PASSWORD,
) -> dict:
    response = await client.post(
        "/api/auth/signup",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "phone_number": phone_number,
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def login(
    client: AsyncClient,
    email: str = "alice@example.com",
    password: str = DEFAULT_PASSWORD,
) -> dict:
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(tokens: dict) -> dict:
    return {"Authorization": f"Bearer {tokens['access_token']}"}


async def register(client: AsyncClient, username: str = "alice", **kwargs) -> dict:
    """Sign up and log in; returns auth headers."""
    await sign_up(client, username=username, **kwargs)
    tokens = await login(client, email=kwargs.get("email") or f"{username}@example.com")
    return bearer(tokens)


async def bind_wallet(client: AsyncClient, headers: dict, private_key: str) -> str:
    """Bind the wallet of private_key to the caller; returns its address."""
    response = await client.post(
        "/api/wallet/bind",
        json={
            "message": BIND_MESSAGE,
            "signature": sign_message(BIND_MESSAGE, private_key),
        },
        headers=headers,
    )
    assert response.status_code in (200, 201), response.text
    assert response.json()["address"] == get_wallet_address(private_key)
    return response.json()["address"]
