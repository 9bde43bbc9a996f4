"""
コマンドラインインターフェース

Photo Archive Auditorのメインエントリーポイントです。
argparseのサブコマンド機能を使用して、validate、check-name、list-patternsコマンドを提供します。
"""

import argparse
import sys
from pathlib import Path

from .archive_validator import ArchiveValidator, AuditConfig
from .checker import ConsistencyChecker
from .exceptions import ProcessingError, ValidationError
from .exif_tool import ExifToolClient
from .filename_parser import FilenameParser
from .logger import create_default_logger, get_default_log_file
from .path_validator import PathValidator
from .pattern_registry import create_default_registry


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='archive-auditor',
        description='現像済み画像（DNG/TIFF）のファイル名とメタデータの整合性を検証するツール',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # カタログ直下の全サブディレクトリを検証
  archive-auditor validate /Volumes/LaCie/Pictures

  # ファイル名の書式だけを確認
  archive-auditor check-name 20210615_143200_DSC04521-HDR.dng

  # 登録されている元ファイル名パターンを表示
  archive-auditor list-patterns

詳細については各サブコマンドのヘルプを参照してください:
  archive-auditor <command> --help
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='利用可能なコマンド',
        metavar='<command>'
    )

    # validateコマンド（エイリアス: v）
    validate_parser = subparsers.add_parser(
        'validate',
        aliases=['v'],
        help='カタログのファイル名とメタデータを検証',
        description='カタログディレクトリのサブディレクトリごとにExifToolでメタデータを取得し、命名規則を検証します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 基本的な使用方法
  archive-auditor validate /Volumes/LaCie/Pictures

  # 特定の年のみ検証
  archive-auditor validate /Volumes/LaCie/Pictures --subdir 2019 --subdir 2020

  # PreservedFileNameを書き換えずに確認のみ
  archive-auditor validate /Volumes/LaCie/Pictures --dry-run

  # ExifToolの出力をJSONとして保存
  archive-auditor validate /Volumes/LaCie/Pictures --snapshot-dir ./snapshots
        """
    )
    validate_parser.add_argument(
        'catalog',
        type=str,
        help='カタログディレクトリパス'
    )
    validate_parser.add_argument(
        '--subdir', '-d',
        action='append',
        default=[],
        metavar='NAME',
        help='検証するサブディレクトリ名（複数指定可、省略時は直下の全サブディレクトリ）'
    )
    validate_parser.add_argument(
        '--snapshot-dir', '-s',
        type=str,
        help='ExifToolの出力JSONを保存するディレクトリ'
    )
    validate_parser.add_argument(
        '--no-cleanup',
        action='store_true',
        help='検証成功後にバックアップファイル（*_original）を削除しない'
    )
    validate_parser.add_argument(
        '--dry-run', '-n',
        action='store_true',
        help='PreservedFileNameを書き換えず、修正内容の表示のみ行う'
    )
    validate_parser.add_argument(
        '--fail-fast', '-x',
        action='store_true',
        help='最初に失敗したサブディレクトリで処理を終了する'
    )
    validate_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを表示'
    )

    # check-nameコマンド（エイリアス: n）
    check_parser = subparsers.add_parser(
        'check-name',
        aliases=['n'],
        help='ファイル名の書式を確認',
        description='ExifToolを使わずに、ファイル名の書式と元ファイル名のパターンを確認します。',
    )
    check_parser.add_argument(
        'names',
        nargs='+',
        help='確認するファイル名'
    )

    # list-patternsコマンド（エイリアス: l）
    subparsers.add_parser(
        'list-patterns',
        aliases=['l'],
        help='元ファイル名パターンの一覧を表示',
        description='登録されている元ファイル名パターンを照合順に表示します。',
    )

    return parser


def handle_validate_command(args) -> int:
    """
    validateコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        catalog_dir = PathValidator.normalize_path(args.catalog)
        PathValidator.validate_catalog(catalog_dir, writable=not args.dry_run)

        snapshot_dir = None
        if args.snapshot_dir:
            snapshot_dir = PathValidator.prepare_snapshot_dir(
                PathValidator.normalize_path(args.snapshot_dir)
            )

        config = AuditConfig(
            catalog_dir=catalog_dir,
            subdirectories=args.subdir,
            snapshot_dir=snapshot_dir,
            cleanup=not args.no_cleanup,
            dry_run=args.dry_run,
            fail_fast=args.fail_fast,
            verbose=args.verbose,
        )

        log_file = get_default_log_file() if args.verbose else None
        progress_logger = create_default_logger(verbose=args.verbose, log_file=log_file)
        client = ExifToolClient(snapshot_dir=config.snapshot_dir)

        validator = ArchiveValidator(
            config, provider=client, writer=client,
            checker=ConsistencyChecker(), progress_logger=progress_logger
        )
        summary = validator.validate_archive()

        return 0 if summary.succeeded else 1

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def handle_check_name_command(args) -> int:
    """
    check-nameコマンドを処理

    Returns:
        終了コード（0: すべて適合、1: 不適合あり）
    """
    parser = FilenameParser()
    exit_code = 0

    for name in args.names:
        parsed = parser.parse(Path(name).name)
        if parsed is None:
            print(f"❌ {name}: 書式不適合")
            exit_code = 1
            continue

        flags = [
            label for label, present in (
                ('HDR', parsed.is_merged_hdr),
                ('Pano', parsed.is_merged_panorama),
                ('Edit', parsed.is_edit),
            ) if present
        ]
        print(f"✅ {name}")
        print(f"   元ファイル名: {parsed.expected_preserved_file_name}")
        print(f"   サフィックス: {', '.join(flags) if flags else 'なし'}")
        print(f"   拡張子: {parsed.extension.value}")

    return exit_code


def handle_list_patterns_command(args) -> int:
    """list-patternsコマンドを処理"""
    registry = create_default_registry()

    print(f"元ファイル名パターン（照合順、{len(registry)}件）:")
    for order, brand, pattern, raw_ext in registry.describe():
        print(f"  {order}. {brand:<6} {pattern:<10} -> .{raw_ext}")

    return 0


def main() -> int:
    """
    メインエントリーポイント

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()

    if len(sys.argv) == 1:
        parser.print_help()
        return 0

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    if args.command in ['validate', 'v']:
        return handle_validate_command(args)
    elif args.command in ['check-name', 'n']:
        return handle_check_name_command(args)
    elif args.command in ['list-patterns', 'l']:
        return handle_list_patterns_command(args)
    else:
        print(f"❌ 不明なコマンド: {args.command}", file=sys.stderr)
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
