"""
データモデル定義

Photo Archive Auditorで使用するデータクラスと列挙型を定義します。
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import (
    InvalidFileNameFormatError, MissingEditMarkerError, MissingHDRSuffixError,
    MissingPanoSuffixError, NamingViolationError, UnexpectedFileTypeError
)


class RawExtension(Enum):
    """元RAWファイルの拡張子"""
    ARW = 'ARW'  # Sony
    CR2 = 'CR2'  # Canon


class ProcessedExtension(Enum):
    """現像済みファイルの拡張子"""
    DNG = 'dng'
    TIF = 'tif'


class FileType(Enum):
    """ExifToolが報告するFileType"""
    DNG = 'DNG'
    TIFF = 'TIFF'
    JPEG = 'JPEG'


class ViolationKind(Enum):
    """命名規則違反の種類"""
    UNEXPECTED_FILE_TYPE = 'UnexpectedFileType'
    INVALID_FILE_NAME_FORMAT = 'InvalidFileNameFormat'
    MISSING_HDR_SUFFIX = 'MissingHDRSuffix'
    MISSING_PANO_SUFFIX = 'MissingPanoSuffix'
    MISSING_EDIT_MARKER = 'MissingEditMarker'


_VIOLATION_ERRORS = {
    ViolationKind.UNEXPECTED_FILE_TYPE: UnexpectedFileTypeError,
    ViolationKind.INVALID_FILE_NAME_FORMAT: InvalidFileNameFormatError,
    ViolationKind.MISSING_HDR_SUFFIX: MissingHDRSuffixError,
    ViolationKind.MISSING_PANO_SUFFIX: MissingPanoSuffixError,
    ViolationKind.MISSING_EDIT_MARKER: MissingEditMarkerError,
}


@dataclass(frozen=True)
class ParsedFilename:
    """書式に適合したファイル名の解析結果"""
    original_base_name: str  # 元RAWファイルのベース名（例: DSC04521）
    raw_extension: RawExtension
    is_merged_hdr: bool
    is_merged_panorama: bool
    is_edit: bool
    extension: ProcessedExtension

    @property
    def expected_preserved_file_name(self) -> str:
        """PreservedFileName に記録されているべき元RAWファイル名"""
        return f"{self.original_base_name}.{self.raw_extension.value}"

    @property
    def tail(self) -> str:
        """日付・時刻部分を除いたファイル名（例: DSC04521-HDR.dng）"""
        parts = [self.original_base_name]
        if self.is_merged_hdr:
            parts.append('-HDR')
        if self.is_merged_panorama:
            parts.append('-Pano')
        if self.is_edit:
            parts.append('-Edit')
        return ''.join(parts) + '.' + self.extension.value


def _as_bool(value: Any) -> bool:
    """ExifToolのJSON値を真偽値に変換（true / "True" / 1 に対応）"""
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


@dataclass(frozen=True)
class MetadataRecord:
    """1ファイル分のメタデータ（ExifToolの出力1件に相当）"""
    source_file_path: str
    file_name: str
    file_type: str
    is_merged_hdr: bool = False
    is_merged_panorama: bool = False
    preserved_file_name: Optional[str] = None

    @classmethod
    def from_exiftool(cls, data: Dict[str, Any]) -> 'MetadataRecord':
        """
        ExifToolのJSONオブジェクトからMetadataRecordを作成

        Args:
            data: `exiftool -j` が出力する1ファイル分の辞書

        Returns:
            MetadataRecordオブジェクト
        """
        preserved = data.get('PreservedFileName')
        return cls(
            source_file_path=str(data.get('SourceFile', '')),
            file_name=str(data.get('FileName', '')),
            file_type=str(data.get('FileType', '')),
            is_merged_hdr=_as_bool(data.get('IsMergedHDR', False)),
            is_merged_panorama=_as_bool(data.get('IsMergedPanorama', False)),
            preserved_file_name=str(preserved) if preserved is not None else None,
        )


@dataclass(frozen=True)
class Pass:
    """検証成功"""
    pass


@dataclass(frozen=True)
class CorrectionNeeded:
    """PreservedFileName の修正が必要（非致命的）"""
    source_file_path: str
    expected_preserved_file_name: str
    current_preserved_file_name: Optional[str] = None


@dataclass(frozen=True)
class Violation:
    """
    命名規則違反（致命的）

    違反より前の規則で PreservedFileName の不一致が見つかっていた場合、
    その修正内容を correction に保持する。
    """
    kind: ViolationKind
    file_name: str
    detail: str
    correction: Optional[CorrectionNeeded] = None

    def to_error(self) -> NamingViolationError:
        """対応する例外オブジェクトを作成"""
        return _VIOLATION_ERRORS[self.kind](self.file_name, self.detail)


ValidationOutcome = Union[Pass, Violation, CorrectionNeeded]


@dataclass
class BatchReport:
    """バッチ（アーカイブのサブディレクトリ）単位の検証結果"""
    batch: str
    directory: Path
    records_read: int = 0
    records_passed: int = 0
    jpeg_skipped: int = 0
    corrections: List[CorrectionNeeded] = field(default_factory=list)
    corrections_applied: int = 0
    cleanup_done: bool = False
    failure: Optional[str] = None  # 中断理由（成功時はNone）

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class AuditSummary:
    """監査処理全体の統計情報"""
    reports: List[BatchReport] = field(default_factory=list)

    @property
    def batches_succeeded(self) -> int:
        return sum(1 for r in self.reports if r.succeeded)

    @property
    def batches_failed(self) -> int:
        return sum(1 for r in self.reports if not r.succeeded)

    @property
    def records_read(self) -> int:
        return sum(r.records_read for r in self.reports)

    @property
    def corrections_requested(self) -> int:
        return sum(len(r.corrections) for r in self.reports)

    @property
    def succeeded(self) -> bool:
        return self.batches_failed == 0
