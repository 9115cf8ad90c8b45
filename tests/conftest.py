"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
from loguru import logger

from eventcontrol.adapters.storage.json_store import JsonConfigStore
from eventcontrol.adapters.storage.memory_store import MemoryConfigStore
from eventcontrol.core.models import Location, Point3D, Region
from eventcontrol.orchestrators.engine import EventControlEngine
from eventcontrol.settings import Settings


@pytest.fixture
def memory_store():
    """빈 메모리 설정 저장소"""
    return MemoryConfigStore()


@pytest.fixture
def engine(memory_store):
    """로드까지 마친 메모리 저장소 기반 엔진"""
    eng = EventControlEngine(memory_store)
    assert eng.load()
    return eng


@pytest.fixture
def json_store(tmp_path):
    """임시 디렉터리의 JSON 설정 저장소"""
    return JsonConfigStore(tmp_path / "config.json", tmp_path / "discovered_events.json")


@pytest.fixture
def spawn_region():
    """(100,64,100)-(200,128,200) 범위의 spawn 영역"""
    return Region(
        name="spawn",
        world_name="world",
        pos1=Point3D(x=100, y=64, z=100),
        pos2=Point3D(x=200, y=128, z=200),
        description="Spawn area",
    )


@pytest.fixture
def inside_spawn():
    return Location(world_name="world", x=150, y=70, z=150)


@pytest.fixture
def sample_settings(tmp_path):
    """테스트용 설정"""
    settings = Settings()
    settings.storage.data_dir = str(tmp_path)
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.metrics_enabled = True
    return settings


@pytest.fixture
def log_messages():
    """loguru로 기록된 메시지 수집"""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
