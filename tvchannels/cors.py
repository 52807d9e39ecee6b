from __future__ import annotations

from fastapi import Request, Response

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


async def cors_middleware(request: Request, call_next):
    """Answer pre-flight directly and stamp the CORS header set on everything else."""
    headers = cors_headers(request.app.state.settings.cors_allow_origin)
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=headers)

    response = await call_next(request)
    for key, value in headers.items():
        response.headers[key] = value
    return response
