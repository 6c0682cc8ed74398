import os
from pathlib import Path
from typing import BinaryIO, Union

from scipy.io import wavfile

from wavebank.dsp.wave_util import to_pcm, pcm_dtype

# RIFF, fmt (PCM) and data chunk headers
PCM_HEADER_SIZE = 44


class WaveWriter:
    """ Writes one block of float samples to a linear PCM WAV file.

    with WaveWriter.open('Square.wav', 16, rate=256) as writer:
        nbyte = writer.write(samples)
    """

    def __init__(self, file: BinaryIO, bits: int = 16, nchan: int = 1, rate: int = 44100):
        pcm_dtype(bits)
        if nchan < 1:
            raise ValueError(f'invalid nchan {nchan}')

        self.file = file
        self.bits = bits
        self.nchan = nchan
        self.rate = rate
        self.nbyte = None

    @classmethod
    def open(cls, path: Union[Path, str], bits: int = 16, nchan: int = 1,
             rate: int = 44100) -> 'WaveWriter':
        """ Raises OSError if path cannot be created. """
        file = Path(path).open('wb')
        try:
            return cls(file, bits, nchan, rate)
        except ValueError:
            file.close()
            raise

    def write(self, samples) -> int:
        """ Writes interleaved samples, returns the number of data bytes written.

        The RIFF header holds the data size, so a file takes exactly one write.
        """
        if self.nbyte is not None:
            raise ValueError('WaveWriter.write() may only be called once')

        data = to_pcm(samples, self.bits)
        if self.nchan > 1:
            if len(data) % self.nchan:
                raise ValueError(
                    f'{len(data)} samples is not a multiple of nchan={self.nchan}')
            data = data.reshape(-1, self.nchan)

        start = self.file.tell()
        wavfile.write(self.file, self.rate, data)
        # wavfile.write() rewinds file objects it did not open.
        end = self.file.seek(0, os.SEEK_END)

        # An odd-sized data chunk is followed by a pad byte.
        self.nbyte = min(end - start - PCM_HEADER_SIZE, data.nbytes)
        return self.nbyte

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
