"""
外部メタデータツールとのインターフェース定義

検証ロジックは以下の抽象インターフェースにのみ依存し、
ExifToolなどの具体的な外部プロセスには直接依存しません。
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from .models import MetadataRecord


class MetadataProvider(ABC):
    """ディレクトリ単位でメタデータを一括取得するインターフェース"""

    @abstractmethod
    def read_batch(self, directory: Path) -> List[MetadataRecord]:
        """
        ディレクトリ配下（再帰）の全ファイルのメタデータを取得

        Args:
            directory: アーカイブのサブディレクトリ

        Returns:
            メタデータのリスト（外部ツールが出力した順序）

        Raises:
            ExifReadError: メタデータの取得に失敗した場合
        """


class MetadataWriter(ABC):
    """メタデータの修正と後処理を行うインターフェース"""

    @abstractmethod
    def write_preserved_file_name(self, source_file_path: str, preserved_file_name: str) -> None:
        """
        PreservedFileName を書き換える

        Raises:
            ExifWriteError: 書き込みに失敗した場合
        """

    @abstractmethod
    def delete_originals(self, directory: Path) -> None:
        """
        書き込み時に作成されたバックアップファイル（*_original）を削除

        Raises:
            ExifWriteError: 削除に失敗した場合
        """
