"""
Configuration store port interface.

This module defines the protocol for durable storage of the
configuration document and the diagnostic catalog dump.
"""

from typing import Any, Dict, Optional, Protocol

class ConfigStorePort(Protocol):
    """설정 저장소 포트 인터페이스"""

    def read(self) -> Optional[Dict[str, Any]]:
        """
        저장된 설정 문서를 읽습니다.

        Returns:
            디코딩된 문서, 저장된 문서가 없으면 None

        Raises:
            ConfigLoadError: 문서를 읽거나 해석할 수 없을 때
        """
        ...

    def write(self, document: Dict[str, Any]) -> None:
        """
        설정 문서 전체를 원자적으로 교체합니다.

        Args:
            document: 저장할 문서

        Raises:
            ConfigSaveError: 문서를 쓸 수 없을 때
        """
        ...

    def write_catalog(self, document: Dict[str, Any]) -> None:
        """
        진단용 카탈로그 덤프를 씁니다 (다시 읽지 않음).

        Args:
            document: 이벤트 이름 -> 메타데이터

        Raises:
            ConfigSaveError: 문서를 쓸 수 없을 때
        """
        ...
