"""
ロギングシステム

Photo Archive Auditorのロギング機能を提供します。
標準出力とファイル出力の両方をサポートし、進捗表示とエラーログを管理します。
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass

from .models import AuditSummary, BatchReport, CorrectionNeeded


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger('raw_name_auditor')
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーをクリア
        logger.handlers.clear()

        console_formatter = logging.Formatter('%(message)s')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, catalog_dir: Path, batches: List[str]):
        """処理開始時のサマリー表示"""
        self._start_time = datetime.now()

        self.logger.info("=" * 60)
        self.logger.info("Photo Archive Auditor - 検証開始")
        self.logger.info("=" * 60)
        self.logger.info(f"開始時刻: {self._start_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"カタログディレクトリ: {catalog_dir}")

        if batches:
            self.logger.info("対象サブディレクトリ:")
            for batch in batches:
                self.logger.info(f"  - {batch}")

        self.logger.info("")

    def log_batch_start(self, batch: str):
        """バッチ処理開始のログ"""
        self.logger.info(f"メタデータ読み取り中: {batch}...")

    def log_batch_read(self, batch: str, record_count: int):
        """メタデータ読み取り完了のログ"""
        self.logger.info(f"読み取り完了: {record_count}件、検証中...")

    def log_record_progress(self, total: int, processed: int, file_name: Optional[str] = None):
        """レコード検証時の進捗表示（verbose時のみ）"""
        if not self.config.verbose:
            return

        if file_name:
            self.logger.info(f"検証中: {file_name}")

        if total > 0:
            progress = (processed / total) * 100
            self.logger.debug(f"検証進捗: {processed}/{total} ({progress:.1f}%)")

    def log_correction(self, correction: CorrectionNeeded, file_name: str, dry_run: bool = False):
        """PreservedFileName修正のログ"""
        self.logger.info("想定外のPreservedFileNameを発見:")
        self.logger.info(f"  {correction.current_preserved_file_name}")
        self.logger.info(f"  {file_name}")
        if dry_run:
            self.logger.info(
                f"  ドライラン: {correction.expected_preserved_file_name} への更新をスキップ"
            )
        else:
            self.logger.info(
                f"PreservedFileNameを更新: {correction.source_file_path} "
                f"-> {correction.expected_preserved_file_name}"
            )

    def log_violation(self, batch: str, kind: str, file_name: str, detail: str):
        """命名規則違反のログ"""
        self.logger.error(f"命名規則違反 [{kind}] {batch}: {detail}: {file_name}")

    def log_batch_complete(self, report: BatchReport, processing_time: float):
        """バッチ処理完了のログ"""
        if report.succeeded:
            self.logger.info(f"{report.batch} の検証が完了しました: 成功")
        else:
            self.logger.info(f"{report.batch} の検証を中断しました")
        self.logger.info(f"  - メタデータ件数: {report.records_read}")
        self.logger.info(f"  - 成功: {report.records_passed}")
        self.logger.info(f"  - JPEG（対象外）: {report.jpeg_skipped}")
        self.logger.info(f"  - PreservedFileName修正: {len(report.corrections)}")
        self.logger.info(f"処理時間: {processing_time:.2f}秒")
        self.logger.info("")

    def log_processing_complete(self, summary: AuditSummary):
        """処理完了時のサマリー表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("=" * 60)
        self.logger.info("処理完了サマリー")
        self.logger.info("=" * 60)
        self.logger.info(f"終了時刻: {end_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"総処理時間: {total_time:.2f}秒")
        self.logger.info("")
        self.logger.info("処理結果:")
        self.logger.info(f"  - 検証したサブディレクトリ: {len(summary.reports)}")
        self.logger.info(f"  - 成功: {summary.batches_succeeded}")
        self.logger.info(f"  - 失敗: {summary.batches_failed}")
        self.logger.info(f"  - メタデータ件数: {summary.records_read}")
        self.logger.info(f"  - PreservedFileName修正: {summary.corrections_requested}")

        failed = [r for r in summary.reports if not r.succeeded]
        if failed:
            self.logger.info("")
            self.logger.info(f"エラー詳細 ({len(failed)}件):")
            for report in failed:
                self.logger.error(f"  - {report.batch}: {report.failure}")
        else:
            self.logger.info("")
            self.logger.info("すべての検証が完了しました!")

        self.logger.info("=" * 60)

    def log_error(self, file_path: Path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"エラー - {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__}: {str(exception)})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("スタックトレース:", exc_info=exception)

    def log_warning(self, message: str):
        """警告メッセージのログ"""
        self.logger.warning(f"警告: {message}")

    def log_info(self, message: str):
        """情報メッセージのログ"""
        self.logger.info(message)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.raw_name_auditor' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'raw_name_auditor_{timestamp}.log'
