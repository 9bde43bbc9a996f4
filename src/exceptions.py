"""
カスタム例外クラス定義

Photo Archive Auditorで使用する例外クラスを定義します。
命名規則違反は NamingViolationError のサブクラスとして表現され、
バッチ（アーカイブのサブディレクトリ）単位の中断は BatchAbortedError で通知されます。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """入力検証エラー"""
    pass


class ExifReadError(ProcessingError):
    """ExifTool によるメタデータ読取エラー"""
    pass


class ExifWriteError(ProcessingError):
    """ExifTool によるメタデータ書込・クリーンアップエラー"""
    pass


class NamingViolationError(ProcessingError):
    """命名規則違反（致命的エラー）の基底クラス"""

    kind = 'NamingViolation'

    def __init__(self, file_name: str, detail: str):
        super().__init__(f"{detail}: {file_name}")
        self.file_name = file_name
        self.detail = detail


class UnexpectedFileTypeError(NamingViolationError):
    """想定外のFileType"""
    kind = 'UnexpectedFileType'


class InvalidFileNameFormatError(NamingViolationError):
    """ファイル名の書式違反"""
    kind = 'InvalidFileNameFormat'


class MissingHDRSuffixError(NamingViolationError):
    """HDR画像に '-HDR' サフィックスがない"""
    kind = 'MissingHDRSuffix'


class MissingPanoSuffixError(NamingViolationError):
    """パノラマ画像に '-Pano' サフィックスがない"""
    kind = 'MissingPanoSuffix'


class MissingEditMarkerError(NamingViolationError):
    """TIFF画像に '-Edit' サフィックスまたは 'tif' 拡張子がない"""
    kind = 'MissingEditMarker'


class BatchAbortedError(ProcessingError):
    """命名規則違反によりバッチ処理が中断されたことを示すエラー"""

    def __init__(self, batch: str, violation: NamingViolationError):
        super().__init__(
            f"バッチ '{batch}' の検証を中断しました "
            f"[{violation.kind}] {violation.detail}: {violation.file_name}"
        )
        self.batch = batch
        self.violation = violation
