"""
Rich console trace of requests and responses.

Enabled with FETCHLING_TRACE=1. Credentials are masked before printing.
"""
import json
from typing import Any, Dict, Mapping, Optional

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "x-api-key", "cookie"})

console = Console(stderr=True)


def mask_auth_header(value: Optional[str], visible_chars: int = 15) -> str:
    """Mask a credential, keeping the first characters for recognition."""
    if not value:
        return "<empty>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy headers with sensitive values masked."""
    masked = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_auth_header(value)
        else:
            masked[key] = value
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def trace_request(request: httpx.Request, target: Optional[Console] = None) -> None:
    out = target or console
    out.print(
        Panel(
            f"[bold cyan]{request.method}[/bold cyan] {request.url}",
            title="[bold blue]Request[/bold blue]",
        )
    )
    out.print("[bold]Headers:[/bold]", mask_headers(request.headers))
    if request.content:
        out.print(
            Panel(
                Syntax(format_body(request.content), "json", theme="monokai"),
                title="[bold]Request Body[/bold]",
            )
        )


def trace_response(
    response: httpx.Response,
    data: Any = None,
    target: Optional[Console] = None,
) -> None:
    out = target or console
    status_color = "green" if 200 <= response.status_code < 300 else "red"
    out.print(
        Panel(
            f"[bold {status_color}]{response.status_code}[/bold {status_color}] "
            f"{response.reason_phrase or ''}",
            title=f"[bold blue]Response[/bold blue] ({response.request.url})",
        )
    )
    out.print("[bold]Headers:[/bold]", dict(response.headers))
    if data:
        lexer = "json" if isinstance(data, (dict, list)) else "text"
        out.print(
            Panel(
                Syntax(format_body(data), lexer, theme="monokai"),
                title="[bold]Response Body[/bold]",
            )
        )
