from fastapi import Request

from .backend_client import BackendClient


async def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend
