import wave

import numpy as np
import pytest

from wavebank.dsp.wave_util import to_pcm, from_pcm, pcm_dtype
from wavebank.inputs.wave import load_bank
from wavebank.outputs.wave import WaveWriter


# PCM conversion

def test_to_pcm_16():
    pcm = to_pcm([0, 0.5, -0.5, -1, 1, 2, -2], 16)
    assert pcm.dtype == np.int16
    np.testing.assert_array_equal(pcm, [0, 16384, -16384, -32768, 32767, 32767, -32768])


def test_to_pcm_8():
    pcm = to_pcm([-1, 0, 0.5, 0.99], 8)
    assert pcm.dtype == np.uint8
    np.testing.assert_array_equal(pcm, [0, 128, 192, 255])


@pytest.mark.parametrize('bits', [8, 16, 32])
def test_pcm_roundtrip(bits):
    ys = np.linspace(-1, 0.99, 101)
    np.testing.assert_allclose(from_pcm(to_pcm(ys, bits)), ys, atol=2 ** -(bits - 1))


def test_pcm_invalid():
    with pytest.raises(ValueError):
        pcm_dtype(24)
    with pytest.raises(ValueError):
        from_pcm(np.zeros(4, dtype=np.float32))


# WaveWriter

NSAMP = 64
SAMPLES = 0.7 * np.sin(2 * np.pi * np.arange(4 * NSAMP) / NSAMP)


def test_writer_header(tmp_path):
    """ Files are readable by the standard library wave module. """
    path = tmp_path / 'bank.wav'
    with WaveWriter.open(path, 16, rate=NSAMP) as writer:
        assert writer.write(SAMPLES) == len(SAMPLES) * 2

    with wave.open(str(path), 'rb') as wav:
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 2
        assert wav.getframerate() == NSAMP
        assert wav.getnframes() == len(SAMPLES)
        frames = np.frombuffer(wav.readframes(len(SAMPLES)), dtype='<i2')

    np.testing.assert_allclose(frames / 2 ** 15, SAMPLES, atol=2 ** -15)


@pytest.mark.parametrize('bits', [8, 16, 32])
def test_writer_roundtrip(tmp_path, bits):
    path = tmp_path / 'bank.wav'
    with WaveWriter.open(path, bits, rate=NSAMP) as writer:
        nbyte = writer.write(SAMPLES)
    assert nbyte == len(SAMPLES) * bits // 8

    sr, bands = load_bank(path)
    assert sr == NSAMP
    assert bands.shape == (4, NSAMP)
    np.testing.assert_allclose(bands.reshape(-1), SAMPLES, atol=2 ** -(bits - 1))


def test_writer_once(tmp_path):
    with WaveWriter.open(tmp_path / 'bank.wav') as writer:
        writer.write(SAMPLES)
        with pytest.raises(ValueError):
            writer.write(SAMPLES)


def test_writer_odd_size(tmp_path):
    with WaveWriter.open(tmp_path / 'bank.wav', 8, rate=3) as writer:
        assert writer.write([0, 0.5, -0.5]) == 3


def truncated_write(file, rate, data):
    """ Writes a header followed by only part of the data. """
    file.write(bytes(44))
    file.write(data.tobytes()[:10])


def test_writer_short_write(tmp_path, monkeypatch):
    monkeypatch.setattr('scipy.io.wavfile.write', truncated_write)
    with WaveWriter.open(tmp_path / 'bank.wav', 16, rate=NSAMP) as writer:
        assert writer.write(SAMPLES) == 10


def test_writer_open_error(tmp_path):
    with pytest.raises(OSError):
        WaveWriter.open(tmp_path / 'missing' / 'bank.wav')

    path = tmp_path / 'bank.wav'
    with pytest.raises(ValueError):
        WaveWriter.open(path, bits=12)


# load_bank

def test_load_bank_nsamp(tmp_path):
    path = tmp_path / 'bank.wav'
    with WaveWriter.open(path, rate=44100) as writer:
        writer.write(SAMPLES)

    sr, bands = load_bank(path, nsamp=NSAMP)
    assert sr == 44100
    assert bands.shape == (4, NSAMP)

    with pytest.raises(ValueError):
        load_bank(path)
    with pytest.raises(ValueError):
        load_bank(path, nsamp=100)


def test_load_bank_stereo(tmp_path):
    path = tmp_path / 'stereo.wav'
    with WaveWriter.open(path, nchan=2, rate=NSAMP) as writer:
        writer.write(SAMPLES)

    with pytest.raises(ValueError):
        load_bank(path)
