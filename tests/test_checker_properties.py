"""
ConsistencyCheckerのプロパティベーステスト

Property 5: 検証結果の冪等性
Property 6: JPEGの除外
Property 7: 規則の適用順序
を検証します。
"""

from hypothesis import given, strategies as st
from hypothesis import settings

from src.checker import ConsistencyChecker
from src.exceptions import MissingEditMarkerError, MissingHDRSuffixError
from src.models import (
    CorrectionNeeded, MetadataRecord, Pass, Violation, ViolationKind
)


def make_record(file_name: str, file_type: str = 'DNG', hdr: bool = False,
                pano: bool = False, preserved: str = None) -> MetadataRecord:
    """テスト用のMetadataRecordを作成"""
    return MetadataRecord(
        source_file_path=f"/Volumes/LaCie/Pictures/2021/{file_name}",
        file_name=file_name,
        file_type=file_type,
        is_merged_hdr=hdr,
        is_merged_panorama=pano,
        preserved_file_name=preserved,
    )


@st.composite
def metadata_record_strategy(draw):
    """様々な組み合わせのMetadataRecordを生成するストラテジー"""
    origin = draw(st.sampled_from(['DSC04521', '_DSC1234', 'IMG_1234', '1D9A0001', 'QQQQ1234']))
    suffixes = draw(st.sampled_from(['', '-HDR', '-Pano', '-Edit', '-HDR-Pano', '-HDR-Pano-Edit']))
    ext = draw(st.sampled_from(['dng', 'tif']))
    file_type = draw(st.sampled_from(['DNG', 'TIFF', 'JPEG', 'XMP', 'PNG']))
    preserved = draw(st.one_of(
        st.none(),
        st.sampled_from(['DSC04521.ARW', 'IMG_1234.CR2', '_DSC1234.ARW', 'DSC04521.ARW2']),
    ))
    return make_record(
        f"20210615_143200_{origin}{suffixes}.{ext}",
        file_type=file_type,
        hdr=draw(st.booleans()),
        pano=draw(st.booleans()),
        preserved=preserved,
    )


class TestConsistencyCheckerProperties:
    """ConsistencyCheckerのプロパティテスト"""

    def setup_method(self):
        self.checker = ConsistencyChecker()

    @settings(max_examples=200)
    @given(metadata_record_strategy())
    def test_check_idempotence_property(self, record):
        """
        **Property 5: 検証結果の冪等性**

        同じメタデータを再度検証した場合、同じ結果が返されるべきである。
        """
        first = self.checker.check(record)
        second = self.checker.check(record)

        assert first == second
        assert isinstance(first, (Pass, Violation, CorrectionNeeded))

    @settings(max_examples=100)
    @given(st.text(max_size=40), st.booleans(), st.booleans(), st.one_of(st.none(), st.text(max_size=20)))
    def test_jpeg_always_passes_property(self, file_name, hdr, pano, preserved):
        """
        **Property 6: JPEGの除外**

        FileTypeがJPEGのメタデータは、ファイル名や他のフラグに関係なく成功すべきである。
        """
        record = make_record(file_name, 'JPEG', hdr=hdr, pano=pano, preserved=preserved)
        assert self.checker.check(record) == Pass()

    @settings(max_examples=100)
    @given(st.text(min_size=1, max_size=10).filter(lambda t: t not in ('DNG', 'TIFF', 'JPEG')))
    def test_unexpected_file_type_property(self, file_type):
        """
        **Property 7: 規則の適用順序**

        DNG / TIFF / JPEG 以外のFileTypeは、ファイル名が正しくても
        UnexpectedFileType として扱われるべきである。
        """
        record = make_record('20210615_143200_DSC04521.dng', file_type, preserved='DSC04521.ARW')
        outcome = self.checker.check(record)

        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.UNEXPECTED_FILE_TYPE


class TestConsistencyCheckerExamples:
    """具体例による整合性チェックテスト"""

    def setup_method(self):
        self.checker = ConsistencyChecker()

    def test_example_pass(self):
        record = make_record('20210615_143200_DSC04521.dng', preserved='DSC04521.ARW')
        assert self.checker.check(record) == Pass()

    def test_example_correction_needed(self):
        record = make_record('20210615_143200_DSC04521.dng', preserved='DSC04521.ARW2')
        outcome = self.checker.check(record)

        assert isinstance(outcome, CorrectionNeeded)
        assert outcome.expected_preserved_file_name == 'DSC04521.ARW'
        assert outcome.source_file_path == record.source_file_path
        assert outcome.current_preserved_file_name == 'DSC04521.ARW2'

    def test_missing_preserved_file_name_needs_correction(self):
        record = make_record('20210615_143200_IMG_1234.dng', preserved=None)
        outcome = self.checker.check(record)

        assert isinstance(outcome, CorrectionNeeded)
        assert outcome.expected_preserved_file_name == 'IMG_1234.CR2'

    def test_example_hdr_pass(self):
        record = make_record('20210615_143200_IMG_1234-HDR.dng', hdr=True, preserved='IMG_1234.CR2')
        assert self.checker.check(record) == Pass()

    def test_example_missing_hdr_suffix(self):
        record = make_record('20210615_143200_IMG_1234.dng', hdr=True, preserved='IMG_1234.CR2')
        outcome = self.checker.check(record)

        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.MISSING_HDR_SUFFIX
        assert outcome.file_name == record.file_name
        assert isinstance(outcome.to_error(), MissingHDRSuffixError)

    def test_hdr_suffix_without_flag_is_not_flagged(self):
        record = make_record('20210615_143200_IMG_1234-HDR.dng', hdr=False, preserved='IMG_1234.CR2')
        assert self.checker.check(record) == Pass()

    def test_missing_pano_suffix(self):
        record = make_record('20210615_143200_DSC04521-HDR.dng', hdr=True, pano=True, preserved='DSC04521.ARW')
        outcome = self.checker.check(record)

        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.MISSING_PANO_SUFFIX

    def test_hdr_checked_before_pano(self):
        record = make_record('20210615_143200_DSC04521.dng', hdr=True, pano=True, preserved='DSC04521.ARW')
        assert self.checker.check(record).kind is ViolationKind.MISSING_HDR_SUFFIX

    def test_example_tiff_edit(self):
        ok = make_record('20210615_143200_DSC04521-Edit.tif', 'TIFF', preserved='DSC04521.ARW')
        assert self.checker.check(ok) == Pass()

        missing = make_record('20210615_143200_DSC04521.tif', 'TIFF', preserved='DSC04521.ARW')
        outcome = self.checker.check(missing)
        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.MISSING_EDIT_MARKER
        assert isinstance(outcome.to_error(), MissingEditMarkerError)

    def test_tiff_with_dng_extension(self):
        record = make_record('20210615_143200_DSC04521-Edit.dng', 'TIFF', preserved='DSC04521.ARW')
        assert self.checker.check(record).kind is ViolationKind.MISSING_EDIT_MARKER

    def test_dng_without_edit_rule(self):
        record = make_record('20210615_143200_DSC04521.tif', 'DNG', preserved='DSC04521.ARW')
        assert self.checker.check(record) == Pass()

    def test_example_invalid_file_name(self):
        outcome = self.checker.check(make_record('badname.dng', preserved='DSC04521.ARW'))

        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.INVALID_FILE_NAME_FORMAT
        assert outcome.file_name == 'badname.dng'

    def test_unknown_origin_is_invalid_format(self):
        outcome = self.checker.check(make_record('20210615_143200_QQQQ1234.dng'))
        assert outcome.kind is ViolationKind.INVALID_FILE_NAME_FORMAT

    def test_violation_carries_pending_correction(self):
        record = make_record('20210615_143200_IMG_1234.dng', hdr=True, preserved='wrong.CR2')
        outcome = self.checker.check(record)

        assert isinstance(outcome, Violation)
        assert outcome.kind is ViolationKind.MISSING_HDR_SUFFIX
        assert outcome.correction == CorrectionNeeded(
            source_file_path=record.source_file_path,
            expected_preserved_file_name='IMG_1234.CR2',
            current_preserved_file_name='wrong.CR2',
        )

    def test_violation_without_stale_name_has_no_correction(self):
        record = make_record('20210615_143200_IMG_1234.tif', 'TIFF', preserved='IMG_1234.CR2')
        outcome = self.checker.check(record)

        assert outcome.kind is ViolationKind.MISSING_EDIT_MARKER
        assert outcome.correction is None

    def test_format_violation_never_carries_correction(self):
        outcome = self.checker.check(make_record('badname.dng', preserved='wrong.ARW'))

        assert outcome.kind is ViolationKind.INVALID_FILE_NAME_FORMAT
        assert outcome.correction is None
