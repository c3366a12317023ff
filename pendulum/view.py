"""Pendulum view: drives the simulation in real time and renders it.

Each timer tick measures the wall-clock time since the previous tick,
scales it by the playback speed, and advances the Simulation by exactly
that much with one RK4 step.
"""

import logging

from PyQt6.QtCore import Qt, QTimer, QElapsedTimer
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QSplitter, QLabel

from simulation import Simulation
from pendulum.canvas import PendulumCanvas
from pendulum.controls import PendulumControls

logger = logging.getLogger(__name__)


class PendulumView(QWidget):
    """Complete pendulum mode: canvas + controls + simulation wiring."""

    FPS = 60

    def __init__(self, parent=None):
        super().__init__(parent)

        self.canvas = PendulumCanvas()
        self.controls = PendulumControls()

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.controls)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(splitter)

        # Status bar labels (the main window places these in a status bar)
        self.time_label = QLabel()
        self.energy_label = QLabel()
        self.drift_label = QLabel()

        self.simulation = Simulation(
            self.controls.get_params(), self.controls.get_initial_state(),
        )
        self.initial_energy = 0.0
        self.playing = False

        self.timer = QTimer()
        self.timer.setInterval(int(1000 / self.FPS))
        self.timer.timeout.connect(self._on_timer)
        self._clock = QElapsedTimer()

        self.controls._on_param_changed = self._reset
        self.controls.play_btn.clicked.connect(self._toggle_play)
        self.controls.reset_btn.clicked.connect(self._reset)

        self._reset()

    # -- Playback --

    def _toggle_play(self):
        if self.playing:
            self.playing = False
            self.timer.stop()
            self.controls.play_btn.setText("Play")
        else:
            self.playing = True
            self._clock.start()
            self.timer.start()
            self.controls.play_btn.setText("Pause")

    def _on_timer(self):
        dt = self._clock.restart() / 1000.0 * self.controls.get_speed()
        self.simulation.advance(dt)

        if not self.simulation.is_finite():
            logger.warning(
                "Simulation diverged at t=%.3f s (dt=%.4f); pausing",
                self.simulation.elapsed, dt,
            )
            self._toggle_play()
            return

        self._update_display()

    def _reset(self):
        if self.playing:
            self._toggle_play()
        params = self.controls.get_params()
        self.simulation.reset(self.controls.get_initial_state(), params)
        self.initial_energy = self.simulation.energy()
        self.canvas.clear_trail()
        self.canvas.set_state(self.simulation.state, params, append_trail=False)
        self._update_labels()
        logger.debug("Reset to %s with %s", self.simulation.state, params)

    def _update_display(self):
        self.canvas.set_state(self.simulation.state, self.simulation.params)
        self._update_labels()

    def _update_labels(self):
        energy = self.simulation.energy()
        drift = energy - self.initial_energy
        self.time_label.setText(f"  t = {self.simulation.elapsed:.3f} s  ")
        self.energy_label.setText(f"  E = {energy:.4f} J  ")
        self.drift_label.setText(f"  ΔE = {drift:+.6f} J  ")
