import asyncio
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse, JSONResponse
from threadly.config import LOG_LEVEL
from threadly.database import init_db
from threadly.errors import ActionError, NoContent, RedirectRequired
from threadly.routes import page_routes, thread_routes, user_routes

# 🔒 Rate limiting setup
from threadly.limiter import limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("threadly")

app = FastAPI(title="Threadly API")

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


# gated pages: not onboarded -> /onboarding, missing account -> /
@app.exception_handler(RedirectRequired)
async def redirect_handler(request: Request, exc: RedirectRequired):
    return RedirectResponse(exc.target, status_code=307)


# gated pages with no signed-in identity render nothing
@app.exception_handler(NoContent)
async def no_content_handler(request: Request, exc: NoContent):
    return Response(status_code=204)


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong while loading data."}
    )


# ✅ Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Include routers
app.include_router(page_routes.router)
app.include_router(thread_routes.router)
app.include_router(user_routes.router)


# ✅ Run DB init on startup
@app.on_event("startup")
async def on_startup():
    # Tiny retry so a momentary DB disconnect doesn't crash the app.
    for attempt in range(2):
        try:
            await init_db()
            break
        except Exception as e:
            if attempt == 0:
                logger.warning("DB init failed, retrying once: %r", e)
                await asyncio.sleep(0.5)
            else:
                # Tables should already exist from previous runs.
                logger.error("Skipping DB init due to error: %r", e)
