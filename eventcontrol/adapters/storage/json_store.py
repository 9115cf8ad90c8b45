"""
JSON file configuration store for EventControl.

This module implements the configuration store port on top of
plain JSON files in a data directory. Writes go through a
temporary file that is fsynced and renamed over the target, so a
reader never observes a partially written document.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from eventcontrol.core.errors import ConfigLoadError, ConfigSaveError
from eventcontrol.observability.logging_setup import get_logger

log = get_logger("eventcontrol.storage")

class JsonConfigStore:
    """JSON 파일 기반 설정 저장소"""

    def __init__(self, config_path: Union[str, Path], catalog_path: Union[str, Path, None] = None):
        """
        초기화합니다.

        Args:
            config_path: 설정 문서 파일 경로
            catalog_path: 카탈로그 덤프 파일 경로 (None이면 설정 파일 옆 discovered_events.json)
        """
        self.path = Path(config_path)
        self.catalog_path = Path(catalog_path) if catalog_path else self.path.with_name("discovered_events.json")
        log.debug(f"JsonConfigStore 초기화: {self.path}")

    def read(self) -> Optional[Dict[str, Any]]:
        """설정 문서를 읽습니다. 파일이 없으면 None을 반환합니다."""
        if not self.path.exists():
            return None

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(f"설정 파일 읽기 실패: {e}", str(self.path)) from e

        try:
            document = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as e:
            # RecursionError: 중첩이 너무 깊은 문서
            raise ConfigLoadError(f"설정 파일 JSON 파싱 실패: {e!r}", str(self.path)) from e

        if not isinstance(document, dict):
            raise ConfigLoadError(
                f"설정 문서 최상위는 객체여야 함: {type(document).__name__}", str(self.path)
            )
        return document

    def write(self, document: Dict[str, Any]) -> None:
        """설정 문서를 원자적으로 씁니다."""
        self._write_atomic(self.path, document)

    def write_catalog(self, document: Dict[str, Any]) -> None:
        """카탈로그 덤프를 원자적으로 씁니다."""
        self._write_atomic(self.catalog_path, document)

    def _write_atomic(self, target: Path, document: Dict[str, Any]) -> None:
        tmp_path: Optional[Path] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=target.name, suffix=".tmp", dir=str(target.parent))
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(str(tmp_path), str(target))
            self._fsync_dir(target.parent)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigSaveError(f"파일 쓰기 실패: {e}", str(target)) from e
        finally:
            if tmp_path is not None and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError as e:
                    log.warning(f"임시 파일 정리 실패: {tmp_path} ({e})")

    @staticmethod
    def _fsync_dir(directory: Path) -> None:
        # 디렉터리 fsync를 지원하지 않는 플랫폼은 건너뜀
        try:
            dir_fd = os.open(str(directory), os.O_DIRECTORY)
        except (OSError, AttributeError):
            return
        try:
            os.fsync(dir_fd)
        except OSError:
            pass
        finally:
            os.close(dir_fd)
