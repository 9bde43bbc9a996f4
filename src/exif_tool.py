"""
ExifTool連携モジュール

ExifToolを外部コマンドとして実行し、アーカイブのサブディレクトリ単位で
FileName / FileType / PreservedFileName / IsMergedHDR / IsMergedPanorama を取得します。
PreservedFileName の修正と、修正時に作成されるバックアップファイルの削除も担当します。
"""

import json
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ExifReadError, ExifWriteError
from .metadata_provider import MetadataProvider, MetadataWriter
from .models import MetadataRecord

# 一括取得するタグ（ExifTool形式）
METADATA_TAGS = [
    'FileName',
    'FileType',
    'PreservedFileName',
    'IsMergedHDR',
    'IsMergedPanorama',
]


# PATHに見つからない場合に確認するインストール先
KNOWN_LOCATIONS = {
    'win32': [
        Path('C:/Windows/exiftool.exe'),
        Path('C:/Program Files/exiftool/exiftool.exe'),
    ],
    'default': [
        Path('/usr/local/bin/exiftool'),
        Path('/usr/bin/exiftool'),
        Path('/opt/homebrew/bin/exiftool'),
    ],
}

INSTALL_HINT = (
    "ExifTool が見つかりません。https://exiftool.org/ からインストールするか、"
    "brew install exiftool / apt-get install libimage-exiftool-perl を実行してください"
)


def find_exiftool() -> Optional[Path]:
    """PATH、既知のインストール先の順にExifToolを検索（見つからなければNone）"""
    on_path = shutil.which('exiftool.exe' if sys.platform == 'win32' else 'exiftool')
    if on_path:
        return Path(on_path)

    candidates = KNOWN_LOCATIONS.get(sys.platform, KNOWN_LOCATIONS['default'])
    return next((path for path in candidates if path.is_file()), None)


class ExifToolClient(MetadataProvider, MetadataWriter):
    """ExifToolを使用したメタデータの取得・修正クラス"""

    def __init__(self, exiftool_path: Optional[Path] = None, snapshot_dir: Optional[Path] = None):
        """
        ExifToolClientを初期化

        Args:
            exiftool_path: ExifToolの実行ファイル（省略時はPATH等から検索）
            snapshot_dir: 取得したJSONを <サブディレクトリ名>.json として保存するディレクトリ
        """
        self.logger = logging.getLogger(__name__)
        self.snapshot_dir = snapshot_dir
        self.exiftool_path: Optional[Path] = exiftool_path

        if self.exiftool_path is None:
            self._check_exiftool_availability()

    def _check_exiftool_availability(self) -> None:
        """ExifToolを検索し、バージョンを確認してパスを設定"""
        found = find_exiftool()
        if found is None:
            self.logger.error(INSTALL_HINT)
            raise ExifReadError(INSTALL_HINT)

        self.exiftool_path = found
        result = self._run([str(found), '-ver'], ExifReadError)
        if result.returncode != 0:
            raise ExifReadError(f"ExifTool の実行に失敗しました: {found} - {result.stderr.strip()}")
        self.logger.info(f"ExifTool が見つかりました: {found} (バージョン: {result.stdout.strip()})")

    def read_batch(self, directory: Path) -> List[MetadataRecord]:
        """
        ディレクトリ配下（再帰）の全ファイルのメタデータを取得

        Args:
            directory: アーカイブのサブディレクトリ

        Returns:
            メタデータのリスト（ExifToolの出力順）

        Raises:
            ExifReadError: ExifTool実行またはJSON解析でエラーが発生した場合
        """
        cmd = [str(self.exiftool_path)]
        cmd.extend('-' + tag for tag in METADATA_TAGS)
        cmd.extend(['-r', '-j', str(directory)])

        result = self._run(cmd, ExifReadError)

        if result.returncode != 0:
            raise ExifReadError(
                f"ExifTool実行エラー (終了コード: {result.returncode}): {result.stderr.strip()}"
            )

        if self.snapshot_dir is not None:
            self._write_snapshot(directory, result.stdout)

        entries = self._parse_json(result.stdout, directory)
        self.logger.debug(f"メタデータ取得: {directory} ({len(entries)}件)")
        return [MetadataRecord.from_exiftool(entry) for entry in entries]

    def write_preserved_file_name(self, source_file_path: str, preserved_file_name: str) -> None:
        """PreservedFileName を書き換える"""
        cmd = [
            str(self.exiftool_path),
            f'-PreservedFileName={preserved_file_name}',
            source_file_path,
        ]
        result = self._run(cmd, ExifWriteError)

        if result.returncode != 0:
            raise ExifWriteError(
                f"PreservedFileNameの書き込みに失敗しました: {source_file_path} - {result.stderr.strip()}"
            )
        self.logger.debug(f"PreservedFileName更新: {source_file_path} -> {preserved_file_name}")

    def delete_originals(self, directory: Path) -> None:
        """ExifToolが作成したバックアップファイル（*_original）を削除"""
        cmd = [str(self.exiftool_path), '-delete_original!', '-r', str(directory)]
        result = self._run(cmd, ExifWriteError)

        if result.returncode != 0:
            raise ExifWriteError(
                f"バックアップファイルの削除に失敗しました: {directory} - {result.stderr.strip()}"
            )
        self.logger.debug(f"バックアップファイル削除: {directory}")

    def _run(self, cmd: List[str], error_class: type) -> subprocess.CompletedProcess:
        """ExifToolを実行（起動できない場合はerror_classを送出）"""
        if not self.exiftool_path:
            raise error_class("ExifTool が初期化されていません")

        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding='utf-8'
            )
        except OSError as e:
            raise error_class(f"ExifToolを起動できません: {e}") from e

    def _parse_json(self, output: str, directory: Path) -> List[Dict[str, Any]]:
        """ExifToolのJSON出力を解析"""
        # 対象ファイルが1件もない場合、ExifToolは何も出力しない
        if not output.strip():
            return []

        try:
            json_data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ExifReadError(f"ExifTool JSON出力の解析エラー: {directory} - {str(e)}") from e

        if not isinstance(json_data, list):
            raise ExifReadError(f"ExifTool JSON出力の形式が不正です: {directory}")
        return json_data

    def _write_snapshot(self, directory: Path, output: str) -> Path:
        """取得したJSONをそのまま保存"""
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)
        snapshot_path = self.snapshot_dir / f"{directory.name}.json"
        snapshot_path.write_text(output, encoding='utf-8')
        self.logger.debug(f"メタデータのスナップショットを保存: {snapshot_path}")
        return snapshot_path
