"""Shared UI widgets: float-valued slider helpers and the physics panel."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QGridLayout, QSlider, QLabel

from simulation import PhysicalParams


# ---------------------------------------------------------------------------
# Slider helpers
# ---------------------------------------------------------------------------

def make_slider(minimum, maximum, value, resolution=100):
    """Create an integer QSlider that maps to float values.

    The slider range is [minimum*resolution, maximum*resolution].
    """
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(int(minimum * resolution))
    slider.setMaximum(int(maximum * resolution))
    slider.setValue(int(value * resolution))
    slider.resolution = resolution
    return slider


def slider_value(slider):
    """Read the float value from a slider created by make_slider."""
    return slider.value() / slider.resolution


def add_slider_row(layout, row, label_text, slider, unit=""):
    """Place label, slider and a live value readout on one grid row."""
    label = QLabel(label_text)
    value_label = QLabel()
    value_label.setMinimumWidth(55)
    value_label.setAlignment(
        Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
    )
    layout.addWidget(label, row, 0)
    layout.addWidget(slider, row, 1)
    layout.addWidget(value_label, row, 2)

    def _update(_val, vl=value_label, sl=slider, u=unit):
        vl.setText(f"{slider_value(sl):.2f}{u}")

    slider.valueChanged.connect(_update)
    _update(slider.value())
    return value_label


# ---------------------------------------------------------------------------
# PhysicsParamsWidget
# ---------------------------------------------------------------------------

class PhysicsParamsWidget(QWidget):
    """Grouped sliders for the physics parameters (m1, m2, l1, l2, g).

    Slider minimums are positive so get_params() always validates.
    The parent can connect slider.valueChanged to detect changes.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        defaults = PhysicalParams()
        self.m1_slider = make_slider(0.1, 5.0, defaults.m1)
        self.m2_slider = make_slider(0.1, 5.0, defaults.m2)
        self.l1_slider = make_slider(0.1, 3.0, defaults.l1)
        self.l2_slider = make_slider(0.1, 3.0, defaults.l2)
        self.gravity_slider = make_slider(0.5, 30.0, defaults.gravity)

        add_slider_row(layout, 0, "m₁", self.m1_slider, " kg")
        add_slider_row(layout, 1, "m₂", self.m2_slider, " kg")
        add_slider_row(layout, 2, "l₁", self.l1_slider, " m")
        add_slider_row(layout, 3, "l₂", self.l2_slider, " m")
        add_slider_row(layout, 4, "g", self.gravity_slider, " m/s²")

    @property
    def sliders(self):
        return [
            self.m1_slider, self.m2_slider,
            self.l1_slider, self.l2_slider,
            self.gravity_slider,
        ]

    def get_params(self):
        """Return a PhysicalParams from the current slider values."""
        return PhysicalParams(
            l1=slider_value(self.l1_slider),
            l2=slider_value(self.l2_slider),
            m1=slider_value(self.m1_slider),
            m2=slider_value(self.m2_slider),
            gravity=slider_value(self.gravity_slider),
        )
