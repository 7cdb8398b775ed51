"""
HTTP API for the sky color service.

Run with ONE worker: the updater threads and state are per process.
"""

import asyncio
import math
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException, Query

from skycolor.color import rgb_to_hex
from skycolor.config import UPDATER_ENABLED, get_settings
from skycolor.keyframes import build_keyframes
from skycolor.logger import logger
from skycolor.models import Weather
from skycolor.sky import InvalidSkyInput, compute_sky_color
from skycolor.state import sky_state
from skycolor.updater import SkyColorUpdater


updater = SkyColorUpdater(state=sky_state)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Startup: fetch location/weather for the configured settings and start
    the periodic loops. Shutdown: stop the loops.
    """
    if UPDATER_ENABLED:
        settings = get_settings()
        if settings is None:
            logger.warning("OPENWEATHER_API_KEY not set, sky colors will not update")
        else:
            try:
                await asyncio.to_thread(updater.on_settings_changed, settings)
            except Exception:
                logger.error("Initial sky color update failed", exc_info=True)
        updater.start()
    else:
        logger.info("Sky color updater disabled (UPDATER_ENABLED=false)")

    yield

    logger.info("Starting graceful shutdown...")
    if UPDATER_ENABLED:
        await asyncio.to_thread(updater.stop)
    logger.info("Shutdown complete")


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Sky Color API",
    lifespan=lifespan,
    redoc_url=None,
    docs_url="/docs"
)

sky_router = APIRouter(
    prefix="/sky",
    tags=["Sky Color"]
)


# ------------------------------------------------------------------
# State
# ------------------------------------------------------------------

@sky_router.get("/state")
async def get_state():
    """
    Get the last fetched weather and rendered colors.
    """
    try:
        return sky_state.get_snapshot()
    except Exception as e:
        logger.error("Failed to get state", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# ------------------------------------------------------------------
# Pure computation
# ------------------------------------------------------------------

@sky_router.get("/preview")
async def preview(
    time: float = Query(..., ge=0, description="Seconds since local midnight"),
    sunrise: float = Query(21600, description="Sunrise, seconds since local midnight"),
    sunset: float = Query(64800, description="Sunset, seconds since local midnight"),
    cloud: float = Query(0, ge=0, le=100, description="Cloud cover percentage (0-100)"),
):
    """
    Compute colors for an arbitrary moment and weather, without persisting.

    Returns:
        {"background": "#rrggbb", "foreground": "#rrggbb"}
    """
    try:
        # Skip model validation so compute_sky_color rejects bad input as a 400
        weather = Weather.model_construct(sunrise=sunrise, sunset=sunset, cloud=cloud)
        return compute_sky_color(time, weather).to_hex()
    except InvalidSkyInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to compute sky color preview", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@sky_router.get("/keyframes")
async def keyframes(
    sunrise: float = Query(21600, description="Sunrise, seconds since local midnight"),
    sunset: float = Query(64800, description="Sunset, seconds since local midnight"),
):
    """
    List the keyframe table for the given sun times.

    Returns:
        [{"offset": seconds, "color": "#rrggbb"}, ...] in table order
    """
    if not (math.isfinite(sunrise) and math.isfinite(sunset)):
        raise HTTPException(status_code=400, detail="sunrise/sunset must be finite")

    return [
        {"offset": keyframe.offset, "color": rgb_to_hex(keyframe.color)}
        for keyframe in build_keyframes(sunrise, sunset)
    ]


# ------------------------------------------------------------------
# Refresh
# ------------------------------------------------------------------

@sky_router.post("/refresh")
async def refresh():
    """
    Re-read settings and refresh location, weather and colors now.
    """
    settings = get_settings()
    if settings is None:
        raise HTTPException(status_code=503, detail="OPENWEATHER_API_KEY not configured")

    try:
        changed = await asyncio.to_thread(updater.on_settings_changed, settings)
        if not changed:
            await asyncio.to_thread(updater.refresh)
        return sky_state.get_snapshot()
    except Exception as e:
        logger.error("Failed to refresh sky colors", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# ============================================================================
# Register Routers
# ============================================================================

app.include_router(sky_router)
