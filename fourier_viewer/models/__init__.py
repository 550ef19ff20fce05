from .signals import ModulatedSignal, SampledSignal
from .spectrum import FourierSpectrum, Spectrogram
from .profile import ViewerProfile

__all__ = [
    "SampledSignal",
    "ModulatedSignal",
    "FourierSpectrum",
    "Spectrogram",
    "ViewerProfile",
]
