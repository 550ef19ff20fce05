from __future__ import annotations

import html
from dataclasses import dataclass, replace
from typing import Optional

import ipywidgets as w
from IPython.display import display
import matplotlib.pyplot as plt

from fourier_viewer.analysis.view import ViewResult, compute_view
from fourier_viewer.errors import ExpressionParseError
from fourier_viewer.expression import ExpressionEvaluator
from fourier_viewer.gui.log_view import HtmlLog
from fourier_viewer.gui.spectrum_plot import draw_curve, draw_spectrogram, draw_transform
from fourier_viewer.models.profile import ViewerProfile, snap_to_power_of_two


# Keep a single active GUI instance per kernel to avoid duplicated callbacks / stacked widgets.
_ACTIVE_GUI: Optional[w.Widget] = None


@dataclass
class ViewerState:
    profile: ViewerProfile
    result: Optional[ViewResult] = None
    busy: bool = False
    n_refresh: int = 0


def _close_all_figures() -> None:
    try:
        plt.close("all")
    except Exception:
        pass


def render_result(result: ViewResult):
    """Build the figure for one refresh: curve, then spectrum or modulated signal, then spectrogram."""
    p = result.profile
    has_pane = result.spectrum is not None or result.modulated is not None
    n_rows = 1 + int(has_pane) + int(result.spectrogram is not None)
    fig, grid = plt.subplots(n_rows, 1, figsize=(10, 3.2 * n_rows), constrained_layout=True, squeeze=False)
    axes = list(grid[:, 0])

    window = (p.center - p.range, p.center + p.range)
    shade = window if (p.display_mode == "transform" and p.show_range) else None
    ax = axes.pop(0)
    draw_curve(ax, result.curve, p.func_color, highlight=shade, highlight_color=p.range_color)
    ax.set_title(f"f(x) = {p.expression}")

    if result.spectrum is not None:
        ax = axes.pop(0)
        draw_transform(ax, result.spectrum, p.spectrum_color)
        ax.set_title(f"|F(w)|, N={p.n_samples}, window [{window[0]:.3g}, {window[1]:.3g})")
    elif result.modulated is not None:
        ax = axes.pop(0)
        draw_curve(ax, result.modulated, p.spectrum_color)
        ax.set_title(f"Modulated signal ({p.mode})")

    if result.spectrogram is not None:
        ax = axes.pop(0)
        draw_spectrogram(ax, result.spectrogram, p.sample_rate)
        ax.set_title(f"STFT |X|, M={p.frame_size}, H={p.hop}, Fs={p.sample_rate:g} Hz")

    return fig


def build_gui(profile: Optional[ViewerProfile] = None, *, auto_refresh: bool = True) -> w.Widget:
    """
    Interactive viewer (Jupyter / VSCode notebooks).

    Every control change recomputes the view from scratch. Errors and evaluator
    warnings go to the log; the previous plot stays visible on error.
    """
    global _ACTIVE_GUI

    if _ACTIVE_GUI is not None:
        try:
            _ACTIVE_GUI.close()
        except Exception:
            pass
        _ACTIVE_GUI = None

    state = ViewerState(profile=profile or ViewerProfile())
    evaluator = ExpressionEvaluator()
    p0 = state.profile

    # Function
    expr = w.Text(value=p0.expression, description="f(x)", placeholder="e.g. sin(x)",
                  continuous_update=False, layout=w.Layout(width="420px"))
    expr_error = w.HTML("")
    n_samples = w.BoundedIntText(value=p0.n_samples, min=2, max=16384, step=1, description="Samples (N)",
                                 style={"description_width": "initial"}, layout=w.Layout(width="200px"))
    btn_snap = w.Button(description="Snap N to 2^k", tooltip="Higher N = finer spectrum. Use power of two for FFT.")
    x_min = w.FloatText(value=p0.x_min, description="x min", layout=w.Layout(width="180px"))
    x_max = w.FloatText(value=p0.x_max, description="x max", layout=w.Layout(width="180px"))
    func_color = w.ColorPicker(value=p0.func_color, description="Color", concise=True)

    # Fourier
    cb_spectrum = w.Checkbox(value=p0.show_spectrum, description="Enable spectrum", indent=False)
    spectrum_color = w.ColorPicker(value=p0.spectrum_color, description="Spectrum color", concise=True,
                                   style={"description_width": "initial"})
    cb_range = w.Checkbox(value=p0.show_range, description="Show range", indent=False)
    range_color = w.ColorPicker(value=p0.range_color, description="Range color", concise=True,
                                style={"description_width": "initial"})
    dd_display = w.Dropdown(options=[("Transform", "transform"), ("Modulated signal", "modulated")],
                            value=p0.display_mode, description="Display")
    dd_mode = w.Dropdown(options=[("Magnitude", "magnitude"), ("Real", "real"), ("Imaginary", "imag")],
                         value=p0.mode, description="Component")
    center = w.FloatText(value=p0.center, description="Center", layout=w.Layout(width="180px"))
    half_range = w.FloatText(value=p0.range, description="Range (±)", layout=w.Layout(width="180px"))
    dd_method = w.Dropdown(options=[("direct", "direct"), ("fft", "fft"), ("auto", "auto")],
                           value=p0.dft_method, description="DFT")

    # STFT
    cb_stft = w.Checkbox(value=p0.show_spectrogram, description="Show spectrogram", indent=False)
    sample_rate = w.BoundedFloatText(value=p0.sample_rate, min=0.0, max=1e9, description="Fs [Hz]",
                                     layout=w.Layout(width="180px"))
    frame_size = w.BoundedIntText(value=p0.frame_size, min=1, max=16384, description="Frame M",
                                  layout=w.Layout(width="180px"))
    hop = w.BoundedIntText(value=p0.hop, min=1, max=16384, description="Hop H", layout=w.Layout(width="180px"))
    cb_dc = w.Checkbox(value=p0.remove_dc, description="Remove DC", indent=False)

    btn_refresh = w.Button(description="Refresh", button_style="primary")
    btn_table = w.Button(description="Show table")
    status = w.HTML("<b>Status:</b> idle")

    out = w.Output(layout=w.Layout(border="1px solid #ddd", padding="8px"))
    out_table = w.Output()
    log = HtmlLog(title="Log", height_px=140)

    def _set_status(s: str) -> None:
        status.value = f"<b>Status:</b> {s}"

    def _profile_from_widgets() -> ViewerProfile:
        return replace(
            state.profile,
            expression=expr.value,
            n_samples=int(n_samples.value),
            x_min=float(x_min.value),
            x_max=float(x_max.value),
            display_mode=dd_display.value,
            mode=dd_mode.value,
            center=float(center.value),
            range=float(half_range.value),
            dft_method=dd_method.value,
            show_spectrogram=bool(cb_stft.value),
            sample_rate=float(sample_rate.value),
            frame_size=int(frame_size.value),
            hop=int(hop.value),
            remove_dc=bool(cb_dc.value),
            show_spectrum=bool(cb_spectrum.value),
            show_range=bool(cb_range.value),
            func_color=func_color.value,
            spectrum_color=spectrum_color.value,
            range_color=range_color.value,
        )

    def _sync_visibility(_change=None) -> None:
        is_transform = dd_display.value == "transform"
        dd_mode.layout.display = "none" if is_transform else None
        center.layout.display = None if is_transform else "none"
        half_range.layout.display = None if is_transform else "none"
        cb_range.layout.display = None if is_transform else "none"
        range_color.layout.display = None if (is_transform and cb_range.value) else "none"
        for ctl in (spectrum_color, dd_display, dd_mode, dd_method, center, half_range, cb_range, range_color):
            ctl.disabled = not cb_spectrum.value

    def _refresh(_=None) -> None:
        if state.busy:
            return
        state.busy = True
        _set_status("computing…")
        try:
            prof = _profile_from_widgets()
            try:
                result = compute_view(prof, evaluator)
            except ExpressionParseError as exc:
                expr_error.value = f"<span style='color:#b00020'>{html.escape(str(exc))}</span>"
                log.exception(exc)
                _set_status("expression error")
                return
            except ValueError as exc:
                log.exception(exc)
                _set_status("invalid parameters")
                return

            expr_error.value = ""
            state.profile = prof
            state.result = result
            state.n_refresh += 1
            log.report(result.warnings)

            with out:
                out.clear_output(wait=True)
                _close_all_figures()
                render_result(result)
                plt.show()
            _set_status(f"ok (refresh #{state.n_refresh})")
        except Exception as exc:
            log.exception(exc)
            _set_status("error")
        finally:
            state.busy = False

    def _on_snap(_) -> None:
        n_samples.value = snap_to_power_of_two(n_samples.value, minimum=64)

    def _on_table(_) -> None:
        with out_table:
            out_table.clear_output(wait=True)
            res = state.result
            if res is None:
                print("Refresh first.")
                return
            if res.spectrum is not None:
                display(res.spectrum.to_frame())
            if res.spectrogram is not None:
                display(res.spectrogram.to_frame(res.profile.sample_rate))
            if res.spectrum is None and res.spectrogram is None:
                print("No spectrum in the current view.")

    btn_refresh.on_click(_refresh)
    btn_snap.on_click(_on_snap)
    btn_table.on_click(_on_table)
    for ctl in (dd_display, cb_spectrum, cb_range):
        ctl.observe(_sync_visibility, names="value")
    if auto_refresh:
        for ctl in (expr, func_color, n_samples, x_min, x_max, cb_spectrum, spectrum_color, dd_display, dd_mode,
                    cb_range, range_color, center, half_range, dd_method,
                    cb_stft, sample_rate, frame_size, hop, cb_dc):
            ctl.observe(_refresh, names="value")
    _sync_visibility()

    sec_function = w.VBox([w.HBox([expr, func_color, expr_error]), w.HBox([n_samples, btn_snap, x_min, x_max])])
    sec_fourier = w.VBox([
        w.HBox([cb_spectrum, spectrum_color]),
        w.HBox([dd_display, dd_mode, dd_method]),
        w.HBox([cb_range, range_color, center, half_range]),
    ])
    sec_stft = w.HBox([cb_stft, sample_rate, frame_size, hop, cb_dc])
    controls = w.Accordion(children=[sec_function, sec_fourier, sec_stft])
    for i, title in enumerate(("Function", "Fourier", "Spectrogram")):
        controls.set_title(i, title)
    controls.selected_index = 0

    gui = w.VBox([controls, w.HBox([btn_refresh, btn_table, status]), out, log.panel, out_table])
    gui._viewer_state = state  # type: ignore[attr-defined]

    _ACTIVE_GUI = gui
    return gui
