import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

import click
from dataclasses import dataclass
from ruamel.yaml import YAML

from wavebank.catalog import PRESETS, WaveShape
from wavebank.synth import BankConfig, generate
from wavebank.util.config import Alias, ConfigMixin
from wavebank.util.parsing import safe_eval

Folder = click.Path(exists=True, file_okay=False)
CfgFile = click.Path(exists=True, dir_okay=False)
WAV_EXT = '.wav'
yaml = YAML()


@click.command()
@click.argument('DEST_DIR', type=Folder)
@click.argument('NAMES', nargs=-1)
@click.option('-c', '--config', 'cfg_path', type=CfgFile,
              help='YAML file of bank settings and presets (default: built-in presets).')
@click.option('--nband', type=int, help='Number of bands per bank.')
@click.option('--nsamp', type=int, help='Samples per band (default: 4 << (nband-1)).')
@click.option('--bits', type=click.Choice(['8', '16', '32']), help='PCM bit depth.')
@click.option('-j', '--workers', type=int, default=1, show_default=True,
              help='Threads used to synthesize bands.')
def main(dest_dir: str, names: Sequence[str], cfg_path: Optional[str],
         nband: Optional[int], nsamp: Optional[int], bits: Optional[str], workers: int):
    """Writes band-limited wavetable banks, one .wav file per preset.

    DEST_DIR: Location where .wav files are written.
    NAMES: Only generate these presets (default: all).

    presets.yaml is a YAML file:

    \b
    nband: 8                # Bands 1, 2, 4 ... 128 harmonics
    nsamp: 256              # Samples per band
    bits: 16
    gain: sqrt(1/2)
    presets:
    - file: Pulse.wav
      shape: rect           # Fourier series, see wavebank.dsp.shapes
      param: 0.3            # [optional] defaults per series
      phase: 0              # [optional] time offset, in cycles
      smooth: true          # [optional] sigma window
    """
    dest_dir = Path(dest_dir)

    overrides = dict(nband=nband, nsamp=nsamp, bits=bits and int(bits))
    try:
        file_cfg = recursive_load_yaml(cfg_path) if cfg_path else {}
        file_cfg.update({k: v for k, v in overrides.items() if v is not None})

        cfg = GeneratorConfig.new(file_cfg)
        shapes = select_shapes(cfg.shapes(), names)
    except (ValueError, TypeError) as e:
        raise click.ClickException(str(e))

    failed = generate_all(dest_dir, shapes, cfg, workers)
    if failed:
        raise click.ClickException(f'failed to write {", ".join(failed)}')


def recursive_load_yaml(cfg_path, parents=None) -> dict:
    if parents is None:
        parents = []

    cfg_path = Path(cfg_path).resolve()
    if cfg_path in parents:
        raise ValueError(f'infinite recursion detected: {parents} -> {cfg_path}')
    parents.append(cfg_path)

    file_cfg: dict = dict(yaml.load(cfg_path) or {})

    # Inheritance, relative to the including file
    if 'include' in file_cfg:
        include = file_cfg['include']
        del file_cfg['include']

        include_cfg = recursive_load_yaml(cfg_path.parent / include, parents)
        for k, v in include_cfg.items():
            file_cfg.setdefault(k, v)

    return file_cfg


@dataclass
class PresetConfig(ConfigMixin):
    """ A single output file. """
    file: str
    shape: str
    series = Alias('shape')
    param: Union[float, str, None] = None
    width = Alias('param')
    phase: Union[float, str] = 0.0
    smooth: bool = True

    def __post_init__(self):
        self.param = safe_eval(self.param)
        self.phase = float(safe_eval(self.phase))

    @property
    def name(self) -> str:
        if self.file.lower().endswith(WAV_EXT):
            return self.file[:-len(WAV_EXT)]
        return self.file

    def to_shape(self) -> WaveShape:
        return WaveShape(self.name, self.shape, self.param, self.phase, bool(self.smooth))


@dataclass
class GeneratorConfig(BankConfig):
    presets: Optional[List[Union[dict, PresetConfig]]] = None

    def __post_init__(self):
        super().__post_init__()
        if self.presets is not None:
            self.presets = [PresetConfig.new(preset) for preset in self.presets]

    def shapes(self) -> List[WaveShape]:
        if self.presets is None:
            return list(PRESETS)
        return [preset.to_shape() for preset in self.presets]


def select_shapes(shapes: List[WaveShape], names: Sequence[str]) -> List[WaveShape]:
    """ Picks `names` from shapes, in the order given. No names picks every shape. """
    if not names:
        return shapes

    by_name = {shape.name: shape for shape in shapes}
    missing = [name for name in names if name not in by_name]
    if missing:
        raise ValueError(f'invalid presets {missing} not in {sorted(by_name)}')
    return [by_name[name] for name in names]


def generate_all(dest_dir: Path, shapes: Sequence[WaveShape], cfg: BankConfig,
                 workers: int = 1) -> List[str]:
    """ Generates every bank, even after failures. Returns names of failed banks. """
    failed = []
    for shape in shapes:
        path = dest_dir / shape.filename
        if generate(path, shape, cfg, workers):
            print(path)
        else:
            print(f'error writing {path}', file=sys.stderr)
            failed.append(shape.name)
    return failed


if __name__ == '__main__':
    main()
