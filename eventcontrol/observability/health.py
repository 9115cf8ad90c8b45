"""
HTTP endpoints for EventControl observability.

Liveness, readiness, Prometheus exposition and read-only views of
the loaded rules and regions. Nothing here mutates the engine;
editing stays with the host's command surface.
"""

import time
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.orchestrators.engine import EventControlEngine
from eventcontrol.settings import Settings

log = get_logger("eventcontrol.http")

ENDPOINTS = {
    "health": "/health",
    "ready": "/ready",
    "metrics": "/metrics",
    "info": "/info",
    "rules": "/rules",
    "regions": "/regions",
}

def create_app(settings: Settings, engine: EventControlEngine) -> FastAPI:
    """
    엔진 상태를 노출하는 FastAPI 애플리케이션을 생성합니다.

    Args:
        settings: 애플리케이션 설정
        engine: 상태를 노출할 엔진

    Returns:
        FastAPI 애플리케이션
    """
    obs = settings.observability
    app = FastAPI(title=obs.service_name, version=obs.build_version,
                  description="EventControl rule resolution engine")
    started = time.time()

    def status(value: str, code: int = 200) -> JSONResponse:
        return JSONResponse({"status": value, "service": obs.service_name,
                             "timestamp": time.time()}, status_code=code)

    @app.get("/health")
    async def health():
        return status("ok")

    @app.get("/ready")
    async def ready():
        """설정이 한 번이라도 로드되어야 레디"""
        return status("ready") if engine.loaded else status("not_ready", 503)

    @app.get("/metrics")
    async def metrics():
        if not obs.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        try:
            payload = generate_latest()
        except Exception as e:
            log.error(f"메트릭 생성 오류: {e}")
            raise HTTPException(status_code=500, detail="Metrics generation failed")
        return Response(payload, media_type=CONTENT_TYPE_LATEST)

    @app.get("/info")
    async def info():
        return {
            "service": obs.service_name,
            "version": obs.build_version,
            "build_date": obs.build_date,
            "uptime_seconds": int(time.time() - started),
            "metrics_enabled": obs.metrics_enabled,
            "log_level": obs.log_level,
            "engine": engine.stats(),
        }

    @app.get("/rules")
    async def rules() -> Dict[str, Any]:
        """스코프별 규칙 목록 (저장 문서와 같은 필드 이름)"""
        return {
            scope: [rule.model_dump(mode="json", by_alias=True) for rule in group]
            for scope, group in engine.rules.rules_by_scope().items()
        }

    @app.get("/regions")
    async def regions() -> Dict[str, Any]:
        listed = engine.list_regions()
        return {
            "count": len(listed),
            "regions": [
                {**region.model_dump(mode="json", by_alias=True), "volume": region.volume()}
                for region in listed
            ],
        }

    @app.get("/")
    async def root():
        return {"service": obs.service_name, "version": obs.build_version, "endpoints": ENDPOINTS}

    return app
