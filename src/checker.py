"""
整合性チェックモジュール

ExifToolが報告したメタデータと、ファイル名から読み取れる情報との整合性を検証します。
1件のメタデータに対して以下の規則を順に適用し、最初の違反で評価を打ち切ります。

1. FileType が DNG / TIFF / JPEG のいずれかであること
2. JPEG は検証対象外（即座に成功）
3. ファイル名が書式に適合していること
4. PreservedFileName が元RAWファイル名と一致すること（不一致は修正対象であり致命的ではない）
   以降の規則で違反が見つかった場合も、修正内容は違反に添えて返す
5. HDR合成画像のファイル名に '-HDR' が付いていること
6. パノラマ合成画像のファイル名に '-Pano' が付いていること
7. TIFF画像は拡張子 'tif' かつ '-Edit' が付いていること
"""

import logging
from typing import Optional

from .filename_parser import FilenameParser
from .models import (
    CorrectionNeeded, FileType, MetadataRecord, Pass, ProcessedExtension,
    ValidationOutcome, Violation, ViolationKind
)


class ConsistencyChecker:
    """メタデータとファイル名の整合性を検証するクラス"""

    def __init__(self, parser: Optional[FilenameParser] = None):
        """
        ConsistencyCheckerを初期化

        Args:
            parser: ファイル名パーサー（省略時は既定のレジストリを使うもの）
        """
        self.parser = parser if parser is not None else FilenameParser()
        self.logger = logging.getLogger(__name__)

    def check(self, record: MetadataRecord) -> ValidationOutcome:
        """
        1件のメタデータを検証

        Args:
            record: 検証対象のメタデータ

        Returns:
            Pass、Violation、CorrectionNeeded のいずれか
        """
        file_name = record.file_name

        try:
            file_type = FileType(record.file_type)
        except ValueError:
            return Violation(
                ViolationKind.UNEXPECTED_FILE_TYPE, file_name,
                f"想定外のFileTypeです ({record.file_type})"
            )

        # JPEGは命名規則の対象外
        if file_type is FileType.JPEG:
            return Pass()

        parsed = self.parser.parse(file_name)
        if parsed is None:
            return Violation(
                ViolationKind.INVALID_FILE_NAME_FORMAT, file_name,
                "ファイル名の書式が不正です"
            )

        correction = None
        expected = parsed.expected_preserved_file_name
        if record.preserved_file_name != expected:
            self.logger.debug(
                f"PreservedFileName不一致: {file_name} "
                f"({record.preserved_file_name} -> {expected})"
            )
            correction = CorrectionNeeded(
                source_file_path=record.source_file_path,
                expected_preserved_file_name=expected,
                current_preserved_file_name=record.preserved_file_name,
            )

        # 逆方向（サフィックスはあるがフラグがない）は検証しない
        if record.is_merged_hdr and not parsed.is_merged_hdr:
            return Violation(
                ViolationKind.MISSING_HDR_SUFFIX, file_name,
                "HDR画像に '-HDR' サフィックスがありません",
                correction=correction,
            )

        if record.is_merged_panorama and not parsed.is_merged_panorama:
            return Violation(
                ViolationKind.MISSING_PANO_SUFFIX, file_name,
                "パノラマ画像に '-Pano' サフィックスがありません",
                correction=correction,
            )

        if file_type is FileType.TIFF and not (
            parsed.extension is ProcessedExtension.TIF and parsed.is_edit
        ):
            return Violation(
                ViolationKind.MISSING_EDIT_MARKER, file_name,
                "TIFF画像に '-Edit' サフィックスまたは 'tif' 拡張子がありません",
                correction=correction,
            )

        # TODO: ファイル名の日付・時刻と撮影日時の照合
        return correction if correction is not None else Pass()
