"""
FilenameParserのプロパティベーステスト

Property 3: ファイル名解析の可逆性
Property 4: 未知の元ファイル名の拒否
を検証します。
"""

from hypothesis import given, strategies as st
from hypothesis import settings

from src.filename_parser import FilenameParser
from src.models import ProcessedExtension, RawExtension
from src.pattern_registry import PatternRegistry, SequencePattern


digits_strategy = lambda n: st.text(alphabet='0123456789', min_size=n, max_size=n)


@st.composite
def valid_filename_strategy(draw):
    """既知の元ファイル名を含む、書式に適合したファイル名を生成するストラテジー"""
    date = draw(digits_strategy(8))
    time = draw(digits_strategy(6))
    prefix = draw(st.sampled_from(['_DSC', '_7R3', '_7R4', 'DSC0', 'IMG_', '1D9A']))
    origin = prefix + draw(digits_strategy(4))
    hdr = draw(st.booleans())
    pano = draw(st.booleans())
    edit = draw(st.booleans())
    ext = draw(st.sampled_from(['dng', 'tif']))

    tail = origin + ('-HDR' if hdr else '') + ('-Pano' if pano else '') + ('-Edit' if edit else '') + '.' + ext
    return {
        'file_name': f"{date}_{time}_{tail}",
        'tail': tail,
        'origin': origin,
        'hdr': hdr,
        'pano': pano,
        'edit': edit,
        'ext': ext,
    }


@st.composite
def unknown_origin_filename_strategy(draw):
    """構文上は正しいが、元ファイル名がどのパターンにも一致しないファイル名"""
    date = draw(digits_strategy(8))
    time = draw(digits_strategy(6))
    prefix = draw(st.text(alphabet='QWXYZqwxyz', min_size=4, max_size=4))
    origin = prefix + draw(digits_strategy(4))
    suffixes = ''.join(draw(st.sampled_from([[], ['-HDR'], ['-Pano'], ['-HDR', '-Pano', '-Edit']])))
    ext = draw(st.sampled_from(['dng', 'tif']))
    return f"{date}_{time}_{origin}{suffixes}.{ext}"


class TestFilenameParserProperties:
    """FilenameParserのプロパティテスト"""

    def setup_method(self):
        """各テストメソッドの前に実行される初期化"""
        self.parser = FilenameParser()

    @settings(max_examples=200)
    @given(valid_filename_strategy())
    def test_parse_round_trip_property(self, scenario):
        """
        **Property 3: ファイル名解析の可逆性**

        書式に適合し既知の元ファイル名を含む任意のファイル名に対して、
        解析結果から日付・時刻以外の部分を完全に再構成できるべきである。
        """
        parsed = self.parser.parse(scenario['file_name'])

        assert parsed is not None
        assert parsed.original_base_name == scenario['origin']
        assert parsed.is_merged_hdr == scenario['hdr']
        assert parsed.is_merged_panorama == scenario['pano']
        assert parsed.is_edit == scenario['edit']
        assert parsed.extension.value == scenario['ext']
        assert parsed.tail == scenario['tail']

    @settings(max_examples=200)
    @given(unknown_origin_filename_strategy())
    def test_unknown_origin_rejected_property(self, file_name):
        """
        **Property 4: 未知の元ファイル名の拒否**

        構文上は正しくても元ファイル名が既知のパターンに一致しない場合、
        解析結果はNoneになるべきである。
        """
        assert self.parser.scan(file_name) is not None
        assert self.parser.parse(file_name) is None

    @settings(max_examples=100)
    @given(valid_filename_strategy(), st.sampled_from(['.bak', '_original', 'x', '.dng']))
    def test_trailing_text_rejected_property(self, scenario, trailer):
        """拡張子の後に余分な文字列があるファイル名は不適合とすべきである"""
        assert self.parser.parse(scenario['file_name'] + trailer) is None


class TestFilenameParserExamples:
    """具体例による解析テスト"""

    def setup_method(self):
        self.parser = FilenameParser()

    def test_sony_dng(self):
        parsed = self.parser.parse('20210615_143200_DSC04521.dng')

        assert parsed is not None
        assert parsed.original_base_name == 'DSC04521'
        assert parsed.raw_extension is RawExtension.ARW
        assert parsed.extension is ProcessedExtension.DNG
        assert not (parsed.is_merged_hdr or parsed.is_merged_panorama or parsed.is_edit)
        assert parsed.expected_preserved_file_name == 'DSC04521.ARW'

    def test_canon_hdr(self):
        parsed = self.parser.parse('20210615_143200_IMG_1234-HDR.dng')

        assert parsed is not None
        assert parsed.raw_extension is RawExtension.CR2
        assert parsed.is_merged_hdr
        assert not parsed.is_merged_panorama
        assert parsed.expected_preserved_file_name == 'IMG_1234.CR2'

    def test_all_suffixes(self):
        parsed = self.parser.parse('20210615_143200_DSC04521-HDR-Pano-Edit.tif')

        assert parsed is not None
        assert parsed.is_merged_hdr and parsed.is_merged_panorama and parsed.is_edit
        assert parsed.extension is ProcessedExtension.TIF

    def test_each_suffix_independent(self):
        assert self.parser.parse('20210615_143200_DSC04521-Pano.dng').is_merged_panorama
        assert self.parser.parse('20210615_143200_DSC04521-Edit.tif').is_edit
        assert not self.parser.parse('20210615_143200_DSC04521-Edit.tif').is_merged_hdr

    def test_suffix_order_is_fixed(self):
        assert self.parser.parse('20210615_143200_DSC04521-Pano-HDR.dng') is None
        assert self.parser.parse('20210615_143200_DSC04521-Edit-HDR.tif') is None

    def test_invalid_names(self):
        for name in [
            'badname.dng',
            '',
            '20210615_143200_DSC04521.jpg',
            '20210615_143200_DSC04521.DNG',
            '2021061_143200_DSC04521.dng',
            '20210615-143200_DSC04521.dng',
            '20210615_14320_DSC04521.dng',
            '20210615_143200_DSC0452.dng',
            '20210615_143200_DSC04521-hdr.dng',
            '20210615_143200_DSC04521',
        ]:
            assert self.parser.parse(name) is None, name

    def test_scan_keeps_date_and_time(self):
        structure = self.parser.scan('20210615_143200_QQQQ1234-HDR.dng')

        assert structure is not None
        assert structure.date == '20210615'
        assert structure.time == '143200'
        assert structure.origin_code == 'QQQQ1234'
        assert structure.has_hdr

    def test_custom_registry(self):
        registry = PatternRegistry([SequencePattern('QQQQ', RawExtension.CR2)])
        parser = FilenameParser(registry)

        parsed = parser.parse('20210615_143200_QQQQ1234.dng')
        assert parsed is not None
        assert parsed.expected_preserved_file_name == 'QQQQ1234.CR2'
        assert parser.parse('20210615_143200_DSC04521.dng') is None
