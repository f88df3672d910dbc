"""
Record store port interface.

This module defines the protocol for the dedup record store.
"""

from typing import Dict, Mapping, Protocol

class RecordStorePort(Protocol):
    """발송 기록 저장소 포트 인터페이스"""
    
    def load(self) -> Dict[str, str]:
        """
        전체 기록을 읽습니다.
        
        Returns:
            키 -> 마지막 발송 제목
            
        Raises:
            StoreUnavailable: 저장소를 열 수 없는 경우
            CorruptStore: 내용을 해석할 수 없는 경우
        """
        ...
    
    def save(self, mapping: Mapping[str, str]) -> None:
        """
        전체 기록을 덮어씁니다.
        
        Args:
            mapping: 저장할 전체 기록
            
        Raises:
            StoreUnavailable: 저장소를 쓸 수 없는 경우
        """
        ...
