"""Admin API routes for health, stats, and config."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from pulse_fetch.admin.service import get_current_config, get_stats


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


async def api_stats(request: Request) -> JSONResponse:
    """Get server statistics and metrics as JSON.

    Returns:
        JSONResponse with request and per-strategy metrics
    """
    return JSONResponse(get_stats())


async def api_config_get(request: Request) -> JSONResponse:
    """Get current configuration.

    Returns:
        JSONResponse with current config values, API key masked
    """
    return JSONResponse(get_current_config())
