"""
パス検証ユーティリティ

カタログディレクトリやスナップショット保存先の検証と、パスの正規化を提供します。
"""

import os
from pathlib import Path

from .exceptions import ValidationError


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def validate_directory(path: Path) -> None:
        """
        ディレクトリの存在と読み取り権限を検証

        Raises:
            ValidationError: ディレクトリが存在しない、ディレクトリではない、
                           または読み取り権限がない場合
        """
        if not path.exists():
            raise ValidationError(f"ディレクトリが存在しません: {path}")

        if not path.is_dir():
            raise ValidationError(f"指定されたパスはディレクトリではありません: {path}")

        if not os.access(path, os.R_OK):
            raise ValidationError(f"ディレクトリに読み取り権限がありません: {path}")

    @staticmethod
    def validate_catalog(path: Path, writable: bool) -> None:
        """
        カタログディレクトリを検証

        PreservedFileNameを書き換える場合（ドライランでない場合）は書き込み権限も必要です。

        Args:
            path: カタログディレクトリ
            writable: 書き込み権限も検証する場合True

        Raises:
            ValidationError: カタログディレクトリが使用できない場合
        """
        PathValidator.validate_directory(path)

        if writable and not os.access(path, os.W_OK):
            raise ValidationError(f"カタログディレクトリに書き込み権限がありません: {path}")

    @staticmethod
    def prepare_snapshot_dir(path: Path) -> Path:
        """
        スナップショットの保存先を用意（存在しない場合は作成）

        Returns:
            保存先ディレクトリ

        Raises:
            ValidationError: 作成できない、または書き込めない場合
        """
        if path.exists() and not path.is_dir():
            raise ValidationError(f"スナップショットの保存先がディレクトリではありません: {path}")

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"スナップショットの保存先を作成できません: {path} ({e})") from e

        if not os.access(path, os.W_OK):
            raise ValidationError(f"スナップショットの保存先に書き込み権限がありません: {path}")

        return path

    @staticmethod
    def normalize_path(path_str: str) -> Path:
        """
        パス文字列を正規化してPathオブジェクトに変換
        macOSとWindowsの両方のパス形式をサポート
        """
        return Path(path_str).expanduser().resolve()
