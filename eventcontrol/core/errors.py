"""
Error types for EventControl.

Only the persistence round trip surfaces hard failures; lookups
report absence through False/None/empty results instead.
"""

from typing import Optional

class ConfigError(Exception):
    """설정 저장소 오류의 공통 베이스"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (path={self.path})" if self.path else base

class ConfigLoadError(ConfigError):
    """설정 문서를 읽거나 해석하지 못함"""

class ConfigSaveError(ConfigError):
    """설정 문서를 쓰지 못함"""
