#!/usr/bin/env python3
"""
Photo Archive Auditor - 基本的な使用例

プログラムから直接ツールの機能を呼び出す例を提供します。
パッケージをインストールした状態（pip install -e .）で実行してください。
"""

from pathlib import Path

from src.archive_validator import ArchiveValidator, AuditConfig
from src.checker import ConsistencyChecker
from src.exceptions import ProcessingError
from src.exif_tool import ExifToolClient
from src.filename_parser import FilenameParser
from src.models import MetadataRecord, RawExtension
from src.pattern_registry import SequencePattern, create_default_registry


def example_parse_file_names():
    """ファイル名解析の例（ExifTool不要）"""
    print("=" * 60)
    print("ファイル名解析の例")
    print("=" * 60)

    parser = FilenameParser()
    for name in [
        '20210615_143200_DSC04521.dng',
        '20210615_143200_IMG_1234-HDR-Pano.dng',
        '20210615_143200_DSC04521-Edit.tif',
        'badname.dng',
    ]:
        parsed = parser.parse(name)
        if parsed is None:
            print(f"  {name}: 書式不適合")
        else:
            print(f"  {name}: 元ファイル名={parsed.expected_preserved_file_name}")
    print()


def example_check_record():
    """メタデータ1件の整合性チェックの例（ExifTool不要）"""
    print("=" * 60)
    print("整合性チェックの例")
    print("=" * 60)

    # 新しいカメラのパターンを末尾に追加
    registry = create_default_registry()
    registry.register(SequencePattern('_A7C', RawExtension.ARW, brand='Sony'))
    checker = ConsistencyChecker(FilenameParser(registry))

    record = MetadataRecord(
        source_file_path='/Volumes/LaCie/Pictures/2021/20210615_143200_A7C0001.dng',
        file_name='20210615_143200__A7C0001.dng',
        file_type='DNG',
        preserved_file_name='_A7C0001.ARW',
    )
    print(f"  {record.file_name}: {checker.check(record)}")
    print()


def example_validate_catalog():
    """カタログ全体の検証の例（ExifToolが必要）"""
    print("=" * 60)
    print("カタログ検証の例")
    print("=" * 60)

    # 例用のディレクトリパス（実際の使用時は適切なパスに変更してください）
    catalog_dir = Path("/Volumes/LaCie/Pictures")
    if not catalog_dir.exists():
        print(f"⚠️  カタログディレクトリが存在しません: {catalog_dir}")
        return

    config = AuditConfig(
        catalog_dir=catalog_dir,
        subdirectories=['2016', '2017', '2018', '2019', '2020'],
        dry_run=True,  # PreservedFileNameを書き換えない
    )

    try:
        client = ExifToolClient()
        validator = ArchiveValidator(config, provider=client, writer=client)
        summary = validator.validate_archive()
        print(f"成功: {summary.batches_succeeded}, 失敗: {summary.batches_failed}")
    except ProcessingError as e:
        print(f"❌ エラー: {e}")


if __name__ == '__main__':
    example_parse_file_names()
    example_check_record()
    example_validate_catalog()
