"""
uvicorn server wiring for the EventControl HTTP endpoints.

The server object is built here and served from the main event
loop; uvicorn's own log handling is turned off so its records go
through the loguru intercept.
"""

from typing import Optional

import uvicorn

from eventcontrol.observability.health import create_app
from eventcontrol.observability.logging_setup import get_logger
from eventcontrol.orchestrators.engine import EventControlEngine
from eventcontrol.settings import Settings

log = get_logger("eventcontrol.http")

def build_server(settings: Settings, engine: EventControlEngine,
                 host: str = "0.0.0.0", port: Optional[int] = None) -> uvicorn.Server:
    """
    HTTP 서버 객체를 만듭니다 (실행하지 않음).

    Args:
        settings: 애플리케이션 설정
        engine: 상태를 노출할 엔진
        host: 바인딩 주소
        port: 바인딩 포트, None이면 observability.http_port
    """
    bind_port = settings.observability.http_port if port is None else port
    config = uvicorn.Config(
        create_app(settings, engine),
        host=host,
        port=bind_port,
        log_config=None,
        log_level=settings.observability.log_level.lower(),
        access_log=False,
    )
    log.info(f"HTTP 서버 준비: {host}:{bind_port}")
    return uvicorn.Server(config)
