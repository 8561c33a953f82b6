import os
import pytest

from pathlib import Path

import afmparse
from afmparse.reader import AfmReader, plain
from afmparse.records import Array, Boolean, Integer, Name, Number, String

TEST_DIR = Path(os.path.abspath(__file__)).parent
SAMPLE_AFM = Path(TEST_DIR, 'data/Sample.afm')


@pytest.fixture
def metrics():
    return AfmReader().read_afm(str(SAMPLE_AFM))


def test_header_values(metrics):
    assert metrics.get('FontName') == 'Sample-Bold'
    assert metrics.get('FullName') == 'Sample Bold'
    assert metrics.get('Weight') == 'Bold'
    assert metrics.get('ItalicAngle') == 0
    assert metrics.get('IsFixedPitch') is False
    assert metrics.get('Version') == 1.004
    assert metrics.get('Descender') == -217
    assert metrics.get('Missing', 'default') == 'default'


def test_header_text(metrics):
    assert metrics.get_text('Notice') == 'Copyright (c) 2023 Nobody'
    assert metrics.get_text('Version') == '001.004'
    assert metrics.comments == ['Generated for tests']


def test_font_bbox(metrics):
    assert metrics.font_bbox == (-168.0, -218.0, 1000.0, 935.0)


def test_char_metrics(metrics):
    assert len(metrics.chars) == 4
    assert sorted(metrics.by_code()) == [32, 65, 102]
    assert sorted(metrics.by_name()) == ['A', 'f', 'fi', 'space']
    assert metrics.by_name()['f'].ligatures == (('i', 'fi'), ('l', 'fl'))


def test_widths(metrics):
    widths = metrics.widths()
    assert len(widths) == 256
    assert widths[32] == 250.0
    assert widths[65] == 722.0
    assert widths[66] is None


def test_kerns(metrics):
    assert metrics.kerns == [('A', 'space', -55.0), ('f', 'fi', 10.0)]
    assert metrics.kern_codes() == [(65, 32, -55.0)]


def test_not_an_afm_file():
    with pytest.raises(afmparse.AFMFormatError):
        AfmReader().read_bytes(b'FontName Sample\n')


def test_kern_pair_glyph_names():
    data = (b'StartFontMetrics 4.1\nStartCharMetrics 2\n'
            b'C 65 ; WX 722 ; N uni0041 ;\nC -1 ; WX 500 ; N a.sc ;\nEndCharMetrics\n'
            b'StartKernPairs 3\nKPX uni0041 a.sc -40\nKPX f_f one.oldstyle 12.5\nKPX uni0041 uni0041 0\n'
            b'EndKernPairs\nEndFontMetrics\n')
    metrics = AfmReader().read_bytes(data)
    assert metrics.kerns == [('uni0041', 'a.sc', -40.0), ('f_f', 'one.oldstyle', 12.5), ('uni0041', 'uni0041', 0.0)]
    assert sorted(metrics.by_name()) == ['a.sc', 'uni0041']
    assert metrics.kern_codes() == [(65, 65, 0.0)]


@pytest.mark.parametrize('kpx', [b'KPX A 5', b'KPX A B C', b'KPX A B 5 6'])
def test_malformed_kern_pair_fields(kpx):
    data = b'StartFontMetrics 4.1\n' + kpx + b'\nEndFontMetrics\n'
    with pytest.raises(afmparse.AFMFormatError):
        AfmReader().read_bytes(data)


def test_malformed_kern_pair():
    data = b'StartFontMetrics 4.1\nStartKernPairs 1\nKPX A 5\nEndFontMetrics\n'
    with pytest.raises(afmparse.AFMFormatError):
        AfmReader().read_bytes(data)
    assert AfmReader(strict=False).read_bytes(data).kerns == []


def test_lenient_reader_reports(capsys):
    data = b'StartFontMetrics 4.1\nStartCharMetrics 1\nC 65 ; WX 722 ; N A ; XX 1 ;\nEndCharMetrics\n'
    with pytest.raises(afmparse.AFMSubfieldError):
        AfmReader().read_bytes(data)

    metrics = AfmReader(strict=False, verbose=True).read_bytes(data)
    assert metrics.by_code()[65].extra == (('XX', '1'),)
    assert 'sub-field XX 1 ignored' in capsys.readouterr().out


@pytest.mark.parametrize('value, expected', [
    (String('a b'), 'a b'),
    (Name('A'), 'A'),
    (Number('2.5'), 2.5),
    (Integer(-3), -3),
    (Boolean(True), True),
    (Array((Integer(1), Array((Name('x'),)))), [1, ['x']]),
])
def test_plain(value, expected):
    assert plain(value) == expected
