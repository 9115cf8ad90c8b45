# eventcontrol/settings.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field

class Storage(BaseModel):
    data_dir: str = "./data"
    config_file: str = "config.json"
    catalog_file: str = "discovered_events.json"
    prune_orphan_rules: bool = False           # 없는 영역을 참조하는 규칙을 로드 시 제거

    @property
    def config_path(self) -> Path:
        return Path(self.data_dir) / self.config_file

    @property
    def catalog_path(self) -> Path:
        return Path(self.data_dir) / self.catalog_file

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = False
    service_name: str = "EventControl"
    build_version: str = "1.0.0"
    build_date: str = "2025-01-01"
    log_level: str = "INFO"
    log_file: Optional[str] = None              # 지정하면 회전 로그 파일에도 기록

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    storage: Storage = Field(default_factory=Storage)
    observability: Observability = Field(default_factory=Observability)
