# eventcontrol/main.py
import os, asyncio, signal
from typing import Optional
from eventcontrol.settings import Settings
from eventcontrol.orchestrators.engine import EventControlEngine
from eventcontrol.observability.logging_setup import setup_logging, get_logger
from eventcontrol.observability.server import build_server

log = get_logger("eventcontrol.main")

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    """환경 변수로부터 설정을 구성합니다."""
    settings = Settings()
    storage, obs = settings.storage, settings.observability

    # 저장소
    storage.data_dir = os.getenv("EVENTCONTROL_DATA_DIR", storage.data_dir)
    storage.config_file = os.getenv("EVENTCONTROL_CONFIG_FILE", storage.config_file)
    storage.catalog_file = os.getenv("EVENTCONTROL_CATALOG_FILE", storage.catalog_file)
    storage.prune_orphan_rules = _b("PRUNE_ORPHAN_RULES", storage.prune_orphan_rules)

    # 로깅/메트릭
    obs.log_level = os.getenv("LOG_LEVEL", obs.log_level)
    obs.log_file = os.getenv("LOG_FILE") or obs.log_file
    obs.metrics_enabled = _b("METRICS_ENABLED", obs.metrics_enabled)
    obs.http_port = int(os.getenv("METRICS_PORT", obs.http_port))

    return settings

def build_engine(settings: Settings) -> EventControlEngine:
    """엔진을 만들고 저장된 설정을 로드합니다."""
    engine = EventControlEngine.from_settings(settings)
    if not engine.load():
        # 로드 실패 시에도 빈 상태로 계속 동작 (다음 저장 때 파일을 덮어씀)
        log.warning("설정 로드 실패, 빈 설정으로 계속 진행")
    stats = engine.stats()
    log.info(f"엔진 준비 완료: 규칙 {stats['rules']}개, 영역 {stats['regions']}개, debug={stats['debug']}")
    return engine

def start_http(settings: Settings, engine: EventControlEngine) -> Optional[asyncio.Task]:
    if not settings.observability.metrics_enabled:
        return None
    task = asyncio.create_task(build_server(settings, engine).serve())
    log.info(f"HTTP 서버 시작: port {settings.observability.http_port}")
    return task

def _stop_on_signals(stop: asyncio.Future) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, lambda: stop.done() or stop.set_result(True))
        except NotImplementedError:
            pass  # Windows

async def main():
    settings = build_settings()
    setup_logging(settings.observability.log_level, settings.observability.log_file)
    log.info(f"데이터 디렉터리: {settings.storage.data_dir}")

    engine = build_engine(settings)
    http_task = start_http(settings, engine)

    stop = asyncio.get_running_loop().create_future()
    _stop_on_signals(stop)
    await stop

    if http_task is not None:
        http_task.cancel()
    engine.save()
    log.info("종료")

if __name__ == "__main__":
    asyncio.run(main())
