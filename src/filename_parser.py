"""
ファイル名解析モジュール

現像済みファイル名を構成要素に分解します。書式は以下の通りです。

    YYYYMMDD_HHMMSS_<元ファイル名>[-HDR][-Pano][-Edit].<dng|tif>

元ファイル名は英数字またはアンダースコア4文字＋数字4桁（例: DSC04521, IMG_1234）。
構文上正しくても、元ファイル名がパターンレジストリのどのパターンにも
一致しない場合は書式不適合として扱います。
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .models import ParsedFilename, ProcessedExtension
from .pattern_registry import ASCII_DIGITS, PatternRegistry, create_default_registry

WORD_CHARS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_')

# 省略可能なサフィックス（この順序でのみ出現可能）
HDR_SUFFIX = '-HDR'
PANO_SUFFIX = '-Pano'
EDIT_SUFFIX = '-Edit'


@dataclass(frozen=True)
class FilenameStructure:
    """構文解析のみの結果（元ファイル名の妥当性は未確認）"""
    date: str
    time: str
    origin_code: str
    has_hdr: bool
    has_pano: bool
    has_edit: bool
    extension: ProcessedExtension


class _Scanner:
    """ファイル名を先頭から1文字ずつ読み進める簡易スキャナー"""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def take(self, count: int, allowed: frozenset) -> Optional[str]:
        """許可された文字をちょうどcount文字読み取る（失敗時は位置を進めずNone）"""
        chunk = self.text[self.pos:self.pos + count]
        if len(chunk) != count or not all(c in allowed for c in chunk):
            return None
        self.pos += count
        return chunk

    def expect(self, literal: str) -> bool:
        """リテラルが続く場合は読み進めてTrue"""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def rest(self) -> str:
        return self.text[self.pos:]


class FilenameParser:
    """現像済みファイル名を解析するクラス"""

    def __init__(self, registry: Optional[PatternRegistry] = None):
        """
        FilenameParserを初期化

        Args:
            registry: 元ファイル名の照合に使うパターンレジストリ（省略時は既定のもの）
        """
        self.registry = registry if registry is not None else create_default_registry()
        self.logger = logging.getLogger(__name__)

    def scan(self, file_name: str) -> Optional[FilenameStructure]:
        """
        ファイル名の構文のみを解析

        Args:
            file_name: 解析対象のファイル名（ディレクトリを含まない）

        Returns:
            構文解析結果（書式に適合しない場合はNone）
        """
        scanner = _Scanner(file_name)

        date = scanner.take(8, ASCII_DIGITS)
        if date is None or not scanner.expect('_'):
            return None

        time = scanner.take(6, ASCII_DIGITS)
        if time is None or not scanner.expect('_'):
            return None

        prefix = scanner.take(4, WORD_CHARS)
        sequence = scanner.take(4, ASCII_DIGITS) if prefix is not None else None
        if sequence is None:
            return None

        has_hdr = scanner.expect(HDR_SUFFIX)
        has_pano = scanner.expect(PANO_SUFFIX)
        has_edit = scanner.expect(EDIT_SUFFIX)

        if not scanner.expect('.'):
            return None

        try:
            extension = ProcessedExtension(scanner.rest())
        except ValueError:
            return None

        return FilenameStructure(
            date=date,
            time=time,
            origin_code=prefix + sequence,
            has_hdr=has_hdr,
            has_pano=has_pano,
            has_edit=has_edit,
            extension=extension,
        )

    def parse(self, file_name: str) -> Optional[ParsedFilename]:
        """
        ファイル名を解析し、元RAWファイルの情報を含めた結果を返す

        Args:
            file_name: 解析対象のファイル名

        Returns:
            解析結果（書式不適合、または元ファイル名が未知のパターンの場合はNone）
        """
        structure = self.scan(file_name)
        if structure is None:
            self.logger.debug(f"ファイル名の構文が不正: {file_name}")
            return None

        raw_extension = self.registry.match_origin(structure.origin_code)
        if raw_extension is None:
            self.logger.debug(f"未知の元ファイル名パターン: {structure.origin_code} ({file_name})")
            return None

        return ParsedFilename(
            original_base_name=structure.origin_code,
            raw_extension=raw_extension,
            is_merged_hdr=structure.has_hdr,
            is_merged_panorama=structure.has_pano,
            is_edit=structure.has_edit,
            extension=structure.extension,
        )
