from typing import List, NamedTuple, Optional, Sequence

import click
import numpy as np

from wavebank.dsp.fourier import harmonic_amplitudes
from wavebank.inputs.wave import load_bank
from wavebank.util.math import band_limits, freq2midi

WavFile = click.Path(exists=True, dir_okay=False)

# Harmonics quieter than this (relative to full scale) are ignored.
FLOOR_DB = -96


class BandInfo(NamedTuple):
    limit: int          # nominal harmonic limit
    dc: float
    peak: float
    top: int            # highest harmonic above FLOOR_DB, 0 if none
    max_note: Optional[float]   # highest MIDI note that plays without aliasing


def top_harmonic(wave: np.ndarray, floor_db: float = FLOOR_DB) -> int:
    amplitudes = harmonic_amplitudes(wave)
    audible = np.flatnonzero(amplitudes[1:] > 10 ** (floor_db / 20))
    if not len(audible):
        return 0
    return int(audible[-1]) + 1


def describe_bands(bands: np.ndarray, rate: float) -> List[BandInfo]:
    """ Summarizes each band. `rate` is the playback sample rate in Hz. """
    out = []
    for limit, wave in zip(band_limits(len(bands)), bands):
        top = top_harmonic(wave)
        max_note = float(freq2midi(rate / 2 / top)) if top else None
        out.append(BandInfo(
            limit=limit,
            dc=float(np.mean(wave)),
            peak=float(np.amax(np.abs(wave))),
            top=top,
            max_note=max_note,
        ))
    return out


@click.command()
@click.argument('FILES', type=WavFile, nargs=-1, required=True)
@click.option('--nsamp', type=int, help="Samples per band (default: the file's sample rate).")
@click.option('--rate', type=float, default=44100, show_default=True,
              help='Playback sample rate (Hz), for the highest alias-free note.')
def main(files: Sequence[str], nsamp: Optional[int], rate: float):
    """Prints the harmonic content of each band of wavetable bank files."""
    for path in files:
        try:
            _, bands = load_bank(path, nsamp)
        except ValueError as e:
            raise click.ClickException(str(e))

        print(f'{path}: {len(bands)} bands x {bands.shape[1]} samples')
        print('  band  limit      dc    peak   top  max note')
        for i, info in enumerate(describe_bands(bands, rate)):
            note = '-' if info.max_note is None else f'{info.max_note:.1f}'
            print(f'  {i:4}  {info.limit:5}  {info.dc:+.4f}  {info.peak:.4f}  '
                  f'{info.top:4}  {note:>8}')


if __name__ == '__main__':
    main()
