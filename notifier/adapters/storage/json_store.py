"""
JSON file based record store for the notifier.

This module implements the dedup record store as a single JSON
object mapping dedup keys to the last subject sent under that key.
The whole file is rewritten on every save by writing a sibling
temporary file and replacing the store with it; no locking is done,
so concurrent writers against the same file lose updates.
"""

import json
from pathlib import Path
from typing import Dict, Mapping, Union
from notifier.core.errors import CorruptStore, StoreUnavailable
from notifier.observability.logging_setup import get_logger

log = get_logger("notifier.store")

EMPTY_STORE = "{}"
TMP_SUFFIX = ".tmp"

class JsonRecordStore:
    """JSON 파일 기반 발송 기록 저장소"""
    
    def __init__(self, path: Union[str, Path]):
        """
        초기화합니다.
        
        Args:
            path: 기록 파일 경로
        """
        self.path = Path(path)
    
    def load(self) -> Dict[str, str]:
        """
        기록 파일 전체를 읽습니다. 파일이 없으면 빈 객체로 생성합니다.
        
        Returns:
            키 -> 마지막 발송 제목
            
        Raises:
            StoreUnavailable: 파일을 열거나 생성할 수 없는 경우
            CorruptStore: JSON 객체로 해석할 수 없는 경우
        """
        if not self.path.exists():
            self._create()
        
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptStore(f"Notifier failed to load database {self.path}: {e}") from e
        except OSError as e:
            raise StoreUnavailable(f"Notifier failed to load database {self.path}: {e}") from e
        
        if not isinstance(data, dict):
            raise CorruptStore(
                f"Notifier failed to load database {self.path}: expected object, got {type(data).__name__}"
            )
        for key, value in data.items():
            if not isinstance(value, str):
                raise CorruptStore(
                    f"Notifier failed to load database {self.path}: value for {key!r} is not a string"
                )
        
        return data
    
    def save(self, mapping: Mapping[str, str]) -> None:
        """
        기록 파일 전체를 덮어씁니다.

        임시 파일에 먼저 쓴 뒤 교체하므로, 저장에 실패해도 기존 파일은 그대로 남습니다.

        Args:
            mapping: 저장할 전체 기록 (load() 결과에 추가한 값이어야 함)

        Raises:
            StoreUnavailable: 직렬화할 수 없거나 파일을 쓸 수 없는 경우
        """
        try:
            text = json.dumps(dict(mapping), ensure_ascii=False)
            data = text.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise StoreUnavailable(f"Notifier failed to encode database {self.path}: {e}") from e

        tmp_path = self.path.with_name(self.path.name + TMP_SUFFIX)
        try:
            with tmp_path.open("wb") as f:
                f.write(data)
            tmp_path.replace(self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreUnavailable(f"Notifier failed to save database {self.path}: {e}") from e
    
    def _create(self) -> None:
        """빈 기록 파일을 생성합니다."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                f.write(EMPTY_STORE)
        except OSError as e:
            raise StoreUnavailable(f"Notifier failed to create database file {self.path}: {e}") from e
        log.info(f"기록 파일 생성됨: {self.path}")
