"""GUI package - interactive ipywidgets interface.

Entry point:
    from fourier_viewer.gui.app import build_gui
    gui = build_gui()

The panel shows the time-domain curve, then either the centred spectrum
(Transform) or the carrier-modulated signal, and optionally a spectrogram.

Design principles:
- Recompute on every change: nothing is cached between refreshes
- Errors and evaluator warnings go to the log; they never blank the notebook
"""
