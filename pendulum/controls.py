"""Pendulum control panel: initial angles, parameters, and playback."""

import math

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QHBoxLayout,
    QLabel, QPushButton, QComboBox, QGroupBox,
)

from state import State
from simulation import DEFAULT_INITIAL_STATE
from ui_common import make_slider, slider_value, add_slider_row, PhysicsParamsWidget


class PendulumControls(QWidget):
    """Sliders for initial conditions, system parameters, and playback."""

    SPEEDS = ["0.25x", "0.5x", "1x", "2x", "4x"]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._building = True
        self._init_ui()
        self._building = False

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Initial Conditions ---
        ic_group = QGroupBox("Initial Conditions")
        ic_layout = QGridLayout()
        ic_group.setLayout(ic_layout)

        self.theta1_slider = make_slider(
            -math.pi, math.pi, DEFAULT_INITIAL_STATE.theta_1
        )
        self.theta2_slider = make_slider(
            -math.pi, math.pi, DEFAULT_INITIAL_STATE.theta_2
        )
        add_slider_row(ic_layout, 0, "θ1₀", self.theta1_slider, " rad")
        add_slider_row(ic_layout, 1, "θ2₀", self.theta2_slider, " rad")
        main_layout.addWidget(ic_group)

        # --- System Parameters ---
        sys_group = QGroupBox("System Parameters")
        sys_layout = QVBoxLayout()
        sys_group.setLayout(sys_layout)
        self.physics_params = PhysicsParamsWidget()
        sys_layout.addWidget(self.physics_params)
        main_layout.addWidget(sys_group)

        for sl in [self.theta1_slider, self.theta2_slider, *self.physics_params.sliders]:
            sl.valueChanged.connect(
                lambda _val: self._on_param_changed() if not self._building else None
            )

        # --- Playback ---
        pb_group = QGroupBox("Playback")
        pb_layout = QHBoxLayout()
        pb_group.setLayout(pb_layout)

        self.play_btn = QPushButton("Play")
        self.reset_btn = QPushButton("Reset")
        self.speed_combo = QComboBox()
        self.speed_combo.addItems(self.SPEEDS)
        self.speed_combo.setCurrentIndex(2)

        pb_layout.addWidget(self.play_btn)
        pb_layout.addWidget(self.reset_btn)
        pb_layout.addWidget(QLabel("Speed:"))
        pb_layout.addWidget(self.speed_combo)

        main_layout.addWidget(pb_group)
        main_layout.addStretch()

    # -- Public accessors --

    def get_initial_state(self):
        """Initial angles from the sliders, released from rest."""
        return State(
            theta_1=slider_value(self.theta1_slider),
            theta_2=slider_value(self.theta2_slider),
        )

    def get_params(self):
        return self.physics_params.get_params()

    def get_speed(self):
        text = self.speed_combo.currentText().replace("x", "")
        return float(text)

    # -- Callbacks (wired by PendulumView) --

    def _on_param_changed(self):
        """Called when any parameter slider changes. Override in parent."""
        pass
