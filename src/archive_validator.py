"""
アーカイブ検証管理モジュール

カタログディレクトリのサブディレクトリ（バッチ）単位で、メタデータの一括取得、
レコードごとの整合性チェック、PreservedFileNameの修正、バックアップファイルの削除を行います。

命名規則違反が1件でも見つかった時点でそのバッチの検証は中断され、
バックアップファイルの削除も行われません。
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .checker import ConsistencyChecker
from .exceptions import BatchAbortedError, ProcessingError
from .file_scanner import ArchiveScanner
from .logger import ProgressLogger, create_default_logger
from .metadata_provider import MetadataProvider, MetadataWriter
from .models import AuditSummary, BatchReport, CorrectionNeeded, FileType, Violation


@dataclass
class AuditConfig:
    """監査処理の設定"""
    catalog_dir: Path
    subdirectories: List[str] = field(default_factory=list)  # 空の場合は直下の全サブディレクトリ
    snapshot_dir: Optional[Path] = None
    cleanup: bool = True
    dry_run: bool = False
    fail_fast: bool = False
    verbose: bool = False


class ArchiveValidator:
    """アーカイブ全体の検証を担当するクラス"""

    def __init__(self, config: AuditConfig, provider: MetadataProvider, writer: MetadataWriter,
                 checker: Optional[ConsistencyChecker] = None,
                 progress_logger: Optional[ProgressLogger] = None):
        """
        ArchiveValidatorを初期化

        Args:
            config: 監査処理の設定
            provider: メタデータの一括取得を行うオブジェクト
            writer: PreservedFileNameの修正とバックアップ削除を行うオブジェクト
            checker: 整合性チェッカー（省略時は既定のもの）
            progress_logger: 進捗ロガー（省略時は既定のもの）
        """
        self.config = config
        self.provider = provider
        self.writer = writer
        self.checker = checker if checker is not None else ConsistencyChecker()
        self.progress_logger = progress_logger or create_default_logger(verbose=config.verbose)
        self.scanner = ArchiveScanner()

    def validate_archive(self) -> AuditSummary:
        """
        設定されたすべてのサブディレクトリを順に検証

        あるサブディレクトリの検証に失敗しても、fail_fast が指定されていなければ
        次のサブディレクトリの検証を続けます。

        Returns:
            全バッチの検証結果

        Raises:
            ValidationError: カタログディレクトリまたはサブディレクトリが無効な場合
        """
        batches = self.config.subdirectories or self.scanner.list_batches(self.config.catalog_dir)
        directories = self.scanner.resolve_batches(self.config.catalog_dir, batches)

        self.progress_logger.log_processing_start(self.config.catalog_dir, batches)
        summary = AuditSummary()

        for batch, directory in zip(batches, directories):
            report = BatchReport(batch=batch, directory=directory)
            summary.reports.append(report)

            try:
                self._validate_batch(report)
            except BatchAbortedError:
                pass  # 違反内容はreportとログに記録済み
            except ProcessingError as e:
                report.failure = str(e)
                self.progress_logger.log_error(report.directory, "バッチ処理エラー", e)

            if not report.succeeded and self.config.fail_fast:
                self.progress_logger.log_warning("fail-fast が指定されているため残りのサブディレクトリをスキップします")
                break

        self.progress_logger.log_processing_complete(summary)
        return summary

    def validate_batch(self, batch: str) -> BatchReport:
        """
        1つのサブディレクトリを検証

        Args:
            batch: カタログディレクトリ直下のサブディレクトリ名

        Returns:
            バッチの検証結果

        Raises:
            BatchAbortedError: 命名規則違反が見つかった場合
            ExifReadError: メタデータの取得に失敗した場合
            ExifWriteError: メタデータの修正またはバックアップ削除に失敗した場合
        """
        report = BatchReport(batch=batch, directory=self.config.catalog_dir / batch)
        self._validate_batch(report)
        return report

    def _validate_batch(self, report: BatchReport) -> None:
        """バッチを検証し、結果をreportに記録"""
        self.progress_logger.log_batch_start(report.batch)
        start_time = time.time()

        try:
            records = self.provider.read_batch(report.directory)
            report.records_read = len(records)
            self.progress_logger.log_batch_read(report.batch, len(records))

            for i, record in enumerate(records):
                self.progress_logger.log_record_progress(len(records), i, record.file_name)

                outcome = self.checker.check(record)

                if isinstance(outcome, Violation):
                    if outcome.correction is not None:
                        self._apply_correction(report, outcome.correction, record.file_name)
                    self.progress_logger.log_violation(
                        report.batch, outcome.kind.value, outcome.file_name, outcome.detail
                    )
                    raise BatchAbortedError(report.batch, outcome.to_error())

                if isinstance(outcome, CorrectionNeeded):
                    self._apply_correction(report, outcome, record.file_name)
                elif record.file_type == FileType.JPEG.value:
                    report.jpeg_skipped += 1
                else:
                    report.records_passed += 1

            if self.config.cleanup and not self.config.dry_run:
                self.writer.delete_originals(report.directory)
                report.cleanup_done = True

        except ProcessingError as e:
            report.failure = str(e)
            raise
        finally:
            self.progress_logger.log_batch_complete(report, time.time() - start_time)

    def _apply_correction(self, report: BatchReport, correction: CorrectionNeeded, file_name: str) -> None:
        """PreservedFileNameの修正を外部ツールに依頼"""
        report.corrections.append(correction)
        self.progress_logger.log_correction(correction, file_name, dry_run=self.config.dry_run)

        if self.config.dry_run:
            return

        self.writer.write_preserved_file_name(
            correction.source_file_path, correction.expected_preserved_file_name
        )
        report.corrections_applied += 1
