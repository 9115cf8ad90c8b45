"""
In-memory configuration store for EventControl.

Keeps deep copies of the last written documents. Used by embedded
hosts that persist elsewhere and by tests.
"""

import copy
from typing import Any, Dict, Optional

from eventcontrol.core.errors import ConfigSaveError

class MemoryConfigStore:
    """메모리 기반 설정 저장소"""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self.document = copy.deepcopy(document)
        self.catalog: Optional[Dict[str, Any]] = None
        self.writes = 0
        self.fail_writes = False

    def read(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.document)

    def write(self, document: Dict[str, Any]) -> None:
        if self.fail_writes:
            raise ConfigSaveError("쓰기 비활성화 상태")
        self.document = copy.deepcopy(document)
        self.writes += 1

    def write_catalog(self, document: Dict[str, Any]) -> None:
        if self.fail_writes:
            raise ConfigSaveError("쓰기 비활성화 상태")
        self.catalog = copy.deepcopy(document)
