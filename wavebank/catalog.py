import math
from typing import Dict, List, Optional

from dataclasses import dataclass

from wavebank.dsp.shapes import Series, get_series


@dataclass(frozen=True)
class WaveShape:
    """ A named waveform: a Fourier series plus its parameter.

    `param=None` selects the series' default. `phase` shifts the time origin,
    in cycles. `smooth` enables the sigma window.
    """
    name: str
    series: str
    param: Optional[float] = None
    phase: float = 0.0
    smooth: bool = True

    def __post_init__(self):
        param = self.func.validate(self.param)
        object.__setattr__(self, 'param', param)

        if not math.isfinite(self.phase):
            raise ValueError(f'{self.name}: invalid phase {self.phase}')

    @property
    def func(self) -> Series:
        return get_series(self.series)

    @property
    def filename(self) -> str:
        return self.name + '.wav'


PRESETS: List[WaveShape] = [
    WaveShape('Circle', 'circ'),
    WaveShape('Combo Organ', 'combo', 3),
    WaveShape('Cycloid', 'cycloid'),
    WaveShape('Filtered Square', 'lpsqr', math.sqrt(2)),
    WaveShape('Full Organ', 'ham', 9),
    WaveShape('Full-Wave Rectified Sine', 'full'),
    WaveShape('Half-Wave Rectified Sine', 'half'),
    WaveShape('Hammond', 'ham', 3),
    WaveShape('Modified Square', 'sqr2', 0.25),
    WaveShape('Modified Triangle', 'tri2', 0.3),
    WaveShape('Narrow Pulse', 'rect', 0.1),
    WaveShape('Pulse', 'rect', 0.3),
    WaveShape('Sawtooth', 'saw'),
    WaveShape('Sine', 'sine', smooth=False),
    WaveShape('Square', 'sqr'),
    WaveShape('Staircase', 'stairs', 0.25),
    WaveShape('Trapezoid', 'trap', 1 / 3),
    WaveShape('Triangle', 'tri'),
    WaveShape('Triangular Pulse', 'trip', 0.5),
]

CATALOG: Dict[str, WaveShape] = {shape.name: shape for shape in PRESETS}


def get_shape(name: str) -> WaveShape:
    try:
        return CATALOG[name]
    except KeyError:
        raise ValueError(f'invalid preset {name!r} not in {sorted(CATALOG)}')
