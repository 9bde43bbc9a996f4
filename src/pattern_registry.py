"""
RAWファイル名パターン登録モジュール

カメラメーカーごとのファイル名パターン（固定プレフィックス＋連番）と
元RAWファイルの拡張子の対応を、登録順に保持します。
照合は登録順に行われ、最初にマッチしたパターンが採用されます。
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from .models import RawExtension

ASCII_DIGITS = frozenset('0123456789')


class OriginPattern(ABC):
    """元RAWファイル名パターンの基底クラス"""

    def __init__(self, raw_extension: RawExtension, brand: str = ''):
        self.raw_extension = raw_extension
        self.brand = brand

    @abstractmethod
    def matches(self, candidate: str) -> bool:
        """候補文字列がこのパターンに一致する場合True"""

    @abstractmethod
    def describe(self) -> str:
        """パターンの表示用文字列"""


class SequencePattern(OriginPattern):
    """固定プレフィックスの直後にN桁の連番が続くパターン（例: DSC0 + 4桁）"""

    def __init__(self, prefix: str, raw_extension: RawExtension,
                 digits: int = 4, brand: str = ''):
        super().__init__(raw_extension, brand)
        if not prefix:
            raise ValueError("プレフィックスが空です")
        if digits < 1:
            raise ValueError(f"連番の桁数が不正です: {digits}")
        self.prefix = prefix
        self.digits = digits

    def matches(self, candidate: str) -> bool:
        # 候補文字列のどの位置から始まっていてもよい
        width = len(self.prefix) + self.digits
        for start in range(len(candidate) - width + 1):
            if not candidate.startswith(self.prefix, start):
                continue
            sequence = candidate[start + len(self.prefix):start + width]
            if all(c in ASCII_DIGITS for c in sequence):
                return True
        return False

    def describe(self) -> str:
        return f"{self.prefix}{'#' * self.digits}"

    def __repr__(self) -> str:
        return f"SequencePattern({self.prefix!r}, {self.raw_extension.name}, digits={self.digits})"


class PatternRegistry:
    """
    元RAWファイル名パターンの順序付きレジストリ

    パターンは登録順に評価され、最初に一致したパターンの拡張子が返されます。
    新しいカメラへの対応は末尾への登録で行い、既存パターンの順序は変更しません。
    """

    def __init__(self, patterns: Optional[List[OriginPattern]] = None):
        self._patterns: List[OriginPattern] = []
        for pattern in patterns or []:
            self.register(pattern)

    def register(self, pattern: OriginPattern) -> 'PatternRegistry':
        """パターンを末尾に登録"""
        self._patterns.append(pattern)
        return self

    def match_origin(self, candidate: str) -> Optional[RawExtension]:
        """
        候補文字列に一致する元RAWファイルの拡張子を取得

        Args:
            candidate: ファイル名から抽出した元ファイルのベース名

        Returns:
            最初に一致したパターンのRAW拡張子（一致しない場合はNone）
        """
        pattern = self.find_pattern(candidate)
        return pattern.raw_extension if pattern else None

    def find_pattern(self, candidate: str) -> Optional[OriginPattern]:
        """候補文字列に最初に一致したパターンを取得"""
        for pattern in self._patterns:
            if pattern.matches(candidate):
                return pattern
        return None

    def describe(self) -> List[Tuple[int, str, str, str]]:
        """(順位, メーカー, パターン, RAW拡張子) のリストを取得"""
        return [
            (i, p.brand, p.describe(), p.raw_extension.value)
            for i, p in enumerate(self._patterns, 1)
        ]

    def __iter__(self) -> Iterator[OriginPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)


def sony_patterns() -> List[OriginPattern]:
    """Sonyのファイル名パターン"""
    return [
        SequencePattern('_DSC', RawExtension.ARW, brand='Sony'),
        SequencePattern('_7R3', RawExtension.ARW, brand='Sony'),  # α7R III
        SequencePattern('_7R4', RawExtension.ARW, brand='Sony'),  # α7R IV
        SequencePattern('DSC0', RawExtension.ARW, brand='Sony'),
    ]


def canon_patterns() -> List[OriginPattern]:
    """Canonのファイル名パターン"""
    return [
        SequencePattern('IMG_', RawExtension.CR2, brand='Canon'),
        SequencePattern('1D9A', RawExtension.CR2, brand='Canon'),
    ]


def create_default_registry() -> PatternRegistry:
    """Sony → Canon の順で既定パターンを登録したレジストリを作成"""
    return PatternRegistry(sony_patterns() + canon_patterns())
