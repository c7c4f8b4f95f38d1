"""DSP routines for complex baseband signals: mixers, oscillators, carriers, CIC and fast convolution."""

__version__ = "1.0.0"
__all__ = ["mixer", "oscillator", "carrier", "cic", "sizes", "fastconv"]