import numpy as np


class LowPass1:
    def __init__(self, f_c, phase_delay=False):
        """ One-pole low-pass, f and f_c in harmonics of the fundamental. """
        self.f_c = f_c
        self.phase_delay = phase_delay

    def __call__(self, f):
        transfer = 1 / (1 + 1j*f/self.f_c)
        if self.phase_delay:
            return transfer
        else:
            return np.abs(transfer)
