import pytest
from click.testing import CliRunner

from wavebank.catalog import get_shape
from wavebank.info import main, describe_bands, top_harmonic
from wavebank.synth import synthesize, generate, BankConfig
from wavebank.util.math import freq2midi


def test_top_harmonic():
    bands = synthesize(get_shape('Square')).bands
    # Even harmonics are silent, so the top harmonic is the odd one below each limit.
    assert [top_harmonic(band) for band in bands] == [1, 1, 3, 7, 15, 31, 63, 127]

    assert top_harmonic(bands[0] * 0) == 0


def test_describe_bands():
    bands = synthesize(get_shape('Pulse'), BankConfig(nband=4)).bands
    infos = describe_bands(bands, 32000)

    assert [info.limit for info in infos] == [1, 2, 4, 8]
    for info in infos:
        assert info.dc == pytest.approx(-0.4 * 2 ** -0.5)
        assert info.top == info.limit
        assert info.max_note == pytest.approx(freq2midi(16000 / info.top))
        assert 0 < info.peak < 1


def test_main(tmp_path):
    path = tmp_path / 'Sine.wav'
    assert generate(path, get_shape('Sine'), BankConfig(nband=2))

    result = CliRunner().invoke(main, [str(path), '--rate', '48000'])
    assert result.exit_code == 0, result.output
    assert str(path) in result.output
    assert '2 bands x 8 samples' in result.output


def test_main_bad_nsamp(tmp_path):
    path = tmp_path / 'Sine.wav'
    assert generate(path, get_shape('Sine'), BankConfig(nband=2))

    result = CliRunner().invoke(main, [str(path), '--nsamp', '5'])
    assert result.exit_code == 1
