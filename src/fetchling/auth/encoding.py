import base64
from typing import Any, Dict

AUTH_TYPES = ("basic", "bearer", "x-api-key", "custom")


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def encode_auth(auth_type: str, **kwargs: Any) -> Dict[str, str]:
    """
    Encode static credentials into HTTP headers based on the auth type.

    Args:
        auth_type: One of 'basic', 'bearer', 'x-api-key', 'custom'.
        **kwargs: username, password, email, token, header_name.

    Returns:
        A dictionary of headers, ready for an overlay's ``headers``.
    """
    auth_type = auth_type.lower()

    username = kwargs.get("username")
    password = kwargs.get("password")
    email = kwargs.get("email")
    token = kwargs.get("token")

    if auth_type == "basic":
        # RFC 7617: user-id:password
        user_part = username or email
        secret_part = password or token
        if not user_part or secret_part is None:
            raise ValueError("Basic auth requires username/email and password/token")
        return {"Authorization": f"Basic {_base64_encode(f'{user_part}:{secret_part}')}"}

    if auth_type == "bearer":
        if not token:
            raise ValueError("bearer requires token")
        return {"Authorization": f"Bearer {token}"}

    if auth_type == "x-api-key":
        if not token:
            raise ValueError("x-api-key requires token")
        return {"X-API-Key": token}

    if auth_type == "custom":
        header_name = kwargs.get("header_name")
        if not header_name or not token:
            raise ValueError("custom requires header_name and token")
        return {header_name: token}

    raise ValueError(f"Invalid auth type: {auth_type}. Must be one of: {list(AUTH_TYPES)}")


def basic_auth_headers(username: str, password: str) -> Dict[str, str]:
    return encode_auth("basic", username=username, password=password)


def bearer_auth_headers(token: str) -> Dict[str, str]:
    return encode_auth("bearer", token=token)
