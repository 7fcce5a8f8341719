#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Study Tracker Web Dashboard - FastAPI Application
Daily tasks, study hours and sleep hours from static JSON data.
"""

import argparse
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from shared.models import HealthCheck
from studytracker.api import charts, data, stats, tasks
from studytracker.config import DashboardSettings, METRICS, get_settings
from studytracker.core.data_manager import DataManager
from studytracker.core.entries import build_daily_view
from studytracker.core.navigation import neighbours, resolve_date, resolve_month
from studytracker.dependencies import get_data_manager

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the data snapshot on startup"""
    settings: DashboardSettings = app.state.settings

    logger.info(f"Starting {settings.APP_NAME} dashboard...")
    app.state.start_time = time.time()

    data_manager = DataManager.from_settings(settings)
    await data_manager.initialize()
    app.state.data_manager = data_manager

    if data_manager.error:
        logger.error(f"Dashboard started without data: {data_manager.error}")
    else:
        logger.info("Dashboard ready")

    yield

    logger.info("Stopping dashboard...")
    await data_manager.cleanup()


def create_app(settings: Optional[DashboardSettings] = None) -> FastAPI:
    """Application factory"""
    settings = settings or get_settings()

    app = FastAPI(
        title=f"{settings.APP_NAME} Dashboard",
        description="Daily tasks, study and sleep statistics",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.start_time = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request with its processing time"""
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.exception(f"Error handling {request.method} {request.url.path}: {e} ({process_time:.3f}s)")
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # ===== STATIC FILES AND ROUTERS =====

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    app.include_router(tasks.router)
    app.include_router(charts.router)
    app.include_router(stats.router)
    app.include_router(data.router)

    # ===== PAGES =====

    @app.get("/", response_class=HTMLResponse)
    async def dashboard_home(
        request: Request,
        date: Optional[str] = None,
        study_month: Optional[str] = None,
        sleep_month: Optional[str] = None,
        expand: Optional[str] = None,
        dm: DataManager = Depends(get_data_manager)
    ):
        """Main dashboard page"""
        if dm.snapshot is None:
            return templates.TemplateResponse(
                request,
                "error.html",
                {"title": settings.APP_NAME, "settings": settings, "error": dm.error},
                status_code=503
            )

        snapshot = dm.snapshot
        selected = resolve_date(date, settings)
        previous_date, next_date = neighbours(selected)
        months = {"study": study_month, "sleep": sleep_month}
        # stepping the date resets both charts to the new date's month
        day_url = request.url.remove_query_params([f"{metric}_month" for metric in METRICS])

        chart_views = [
            charts.build_chart(snapshot, metric, resolve_month(months[metric], selected))
            for metric in METRICS
        ]

        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "title": settings.APP_NAME,
                "settings": settings,
                "selected_date": selected,
                "previous_date": previous_date,
                "next_date": next_date,
                "previous_url": str(day_url.include_query_params(date=previous_date)),
                "next_url": str(day_url.include_query_params(date=next_date)),
                "daily": build_daily_view(snapshot.tasks, selected),
                "charts": chart_views,
                "chart_data": {chart.metric: chart.model_dump() for chart in chart_views},
                "expanded": expand if expand in METRICS else None,
            }
        )

    @app.post("/reload")
    async def reload_page(dm: DataManager = Depends(get_data_manager)):
        """Retry action of the error page"""
        await dm.reload()
        return RedirectResponse(url="/", status_code=303)

    # ===== SERVICE ROUTES =====

    @app.get("/health", response_model=HealthCheck)
    async def health_check(request: Request, dm: DataManager = Depends(get_data_manager)):
        """Health check for monitoring"""
        uptime = time.time() - request.app.state.start_time

        if dm.snapshot is None:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "service": "dashboard",
                    "error": dm.error,
                    "timestamp": time.time()
                }
            )

        return HealthCheck(
            status="healthy",
            service="dashboard",
            version=settings.VERSION,
            timestamp=time.time(),
            data={
                "task_days": len(dm.snapshot.tasks),
                "study_days": len(dm.snapshot.study),
                "sleep_days": len(dm.snapshot.sleep),
                "loaded_at": dm.snapshot.loaded_at.isoformat(),
                "uptime_seconds": uptime
            }
        )

    @app.get("/ping")
    async def ping():
        return {"message": "pong", "timestamp": time.time(), "service": "dashboard"}

    # ===== ERROR HANDLERS =====

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "status_code": exc.status_code
            }
        )

    return app


app = create_app()


# ===== LAUNCHER =====

def run_dashboard(
    host: Optional[str] = None,
    port: Optional[int] = None,
    dev: Optional[bool] = None,
    reload: Optional[bool] = None
):
    """Run the dashboard with uvicorn"""
    settings = get_settings()
    settings.setup_logging()

    host = host or settings.DASHBOARD_HOST
    port = port or settings.DASHBOARD_PORT
    dev = dev if dev is not None else settings.DEBUG
    reload = reload if reload is not None else dev

    logger.info(f"Dashboard on http://{host}:{port}")
    logger.info(f"Data sources: {settings.get_data_sources()}")

    try:
        uvicorn.run(
            "studytracker.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if dev else "info",
            access_log=dev,
            server_header=False
        )
    except KeyboardInterrupt:
        logger.info("Dashboard stopped")


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(description='Run the Study Tracker dashboard')
    parser.add_argument('--host', default=settings.DASHBOARD_HOST, help='Host to bind')
    parser.add_argument('--port', type=int, default=settings.DASHBOARD_PORT, help='Port to bind')
    parser.add_argument('--dev', action='store_true', help='Development mode')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes')
    args = parser.parse_args(argv)

    run_dashboard(
        host=args.host,
        port=args.port,
        dev=args.dev or None,
        reload=args.reload or None
    )


if __name__ == "__main__":
    main()
