"""
アーカイブスキャナー

カタログディレクトリ直下のサブディレクトリ（検証バッチ）を検索する機能を提供します。
"""

from pathlib import Path
from typing import List

from .path_validator import PathValidator


class ArchiveScanner:
    """カタログディレクトリから検証対象のサブディレクトリを検索するクラス"""

    def list_batches(self, catalog_dir: Path) -> List[str]:
        """
        カタログディレクトリ直下のサブディレクトリ名を取得

        隠しディレクトリ（'.' で始まるもの）は対象外です。

        Args:
            catalog_dir: カタログディレクトリ

        Returns:
            サブディレクトリ名のリスト（名前順）

        Raises:
            ValidationError: ディレクトリが無効な場合
        """
        PathValidator.validate_directory(catalog_dir)

        return sorted(
            entry.name for entry in catalog_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith('.')
        )

    def resolve_batches(self, catalog_dir: Path, batches: List[str]) -> List[Path]:
        """
        サブディレクトリ名をパスに変換し、存在を検証

        Raises:
            ValidationError: いずれかのサブディレクトリが無効な場合
        """
        paths = []
        for batch in batches:
            path = catalog_dir / batch
            PathValidator.validate_directory(path)
            paths.append(path)
        return paths
