"""
The main window for the toolpath viewer.
"""
import logging

from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                               QPushButton, QFileDialog, QTextEdit, QSplitter,
                               QLabel, QComboBox, QCheckBox, QSlider, QLineEdit)
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from .editor import Editor
from .viewport import Viewport
from toolpath_processor import ToolpathProcessor
from config.viewer_config import ConfigManager
from core.view import ViewTransform
from utils.errors import RenderSurfaceError

logger = logging.getLogger(__name__)

# Slider positions are tenths of a millimetre
SLIDER_SCALE = 10


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("G-Code Toolpath Viewer")
        self.setGeometry(100, 100, 1400, 900)

        self.processor = ToolpathProcessor()
        self.transform = ViewTransform.identity()

        self.setup_ui()
        self.connect_signals()
        self.load_sample_gcode()

    def setup_ui(self):
        """Set up the user interface."""
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        toolbar_layout = QHBoxLayout()
        self.load_button = QPushButton("Load G-Code File")
        self.clear_button = QPushButton("Clear")
        self.process_button = QPushButton("Process")
        self.travel_checkbox = QCheckBox("Draw travel moves")
        self.travel_checkbox.setChecked(self.processor.draw_travel_moves)
        self.preset_selector = QComboBox()
        self.preset_selector.addItems(ConfigManager.preset_names())
        self.status_label = QLabel("Ready")

        toolbar_layout.addWidget(self.load_button)
        toolbar_layout.addWidget(self.clear_button)
        toolbar_layout.addWidget(self.process_button)
        toolbar_layout.addWidget(self.travel_checkbox)
        toolbar_layout.addStretch()
        toolbar_layout.addWidget(QLabel("Colours:"))
        toolbar_layout.addWidget(self.preset_selector)
        toolbar_layout.addWidget(self.status_label)
        main_layout.addLayout(toolbar_layout)

        main_splitter = QSplitter(Qt.Vertical)
        main_layout.addWidget(main_splitter)

        workspace_splitter = QSplitter(Qt.Horizontal)
        self.editor = Editor()
        workspace_splitter.addWidget(self.editor)

        view_pane = QWidget()
        view_layout = QVBoxLayout(view_pane)
        view_layout.setContentsMargins(0, 0, 0, 0)
        self.viewport = Viewport()
        view_layout.addWidget(self.viewport, stretch=1)

        layer_layout = QHBoxLayout()
        layer_layout.addWidget(QLabel("Z layer"))
        self.z_slider = QSlider(Qt.Horizontal)
        self.z_slider.setRange(0, 100 * SLIDER_SCALE)
        layer_layout.addWidget(self.z_slider, stretch=1)
        self.z_input = QLineEdit(f"{self.processor.display_z:g}")
        self.z_input.setMaximumWidth(70)
        layer_layout.addWidget(self.z_input)
        view_layout.addLayout(layer_layout)
        workspace_splitter.addWidget(view_pane)

        self.stats_label = QLabel("Statistics:\nNo G-code processed")
        self.stats_label.setFont(QFont("Courier", 9))
        self.stats_label.setAlignment(Qt.AlignTop)
        workspace_splitter.addWidget(self.stats_label)

        console_splitter = QSplitter(Qt.Horizontal)
        self.error_console = QTextEdit()
        self.error_console.setReadOnly(True)
        self.console = QTextEdit()
        self.console.setReadOnly(True)
        console_splitter.addWidget(self._labelled("Errors and Warnings:", self.error_console))
        console_splitter.addWidget(self._labelled("Console Output:", self.console))

        main_splitter.addWidget(workspace_splitter)
        main_splitter.addWidget(console_splitter)

        workspace_splitter.setSizes([400, 800, 200])
        main_splitter.setSizes([750, 150])

    def _labelled(self, title, widget):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel(title))
        layout.addWidget(widget)
        return container

    def connect_signals(self):
        """Connect all signal handlers."""
        self.load_button.clicked.connect(self.load_gcode_file)
        self.clear_button.clicked.connect(self.clear)
        self.process_button.clicked.connect(self.process_gcode)
        self.travel_checkbox.toggled.connect(self.on_travel_toggled)
        self.preset_selector.currentTextChanged.connect(self.change_preset)
        self.z_slider.valueChanged.connect(self.on_slider_moved)
        self.z_input.editingFinished.connect(self.on_z_text_entered)
        self.viewport.viewTransformChanged.connect(self.on_view_changed)
        self.viewport.surfaceReady.connect(self.redraw)
        self.editor.selectionChangedSignal.connect(self.viewport.highlight_lines)

    def load_sample_gcode(self):
        """Load a sample program for demonstration."""
        sample_gcode = """G90 ; absolute positioning
G0 X-20 Y-20 Z0 ; travel to start
G1 X20 Y-20 E1 ; extrude square
G1 X20 Y20 E2
G1 X-20 Y20 E3
G1 X-20 Y-20 E4
G1 E-1 ; retract
G0 X0 Y-10
G3 X0 Y-10 I0 J10 E5 ; full circle
G2 X10 Y0 R10 E6 ; quarter arc in R form
G91 ; relative positioning
G1 X5 Y5 E0.5
G90
G0 Z1 X0 Y0 ; next layer
G1 X10 Y10 E7"""
        self.editor.setPlainText(sample_gcode)

    def load_gcode_file(self):
        """Load G-code from a file."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open G-Code File", "",
            "G-Code Files (*.gcode *.ngc *.nc *.txt);;All Files (*)"
        )

        if file_path:
            with open(file_path, 'r') as f:
                content = f.read()
            self.editor.setPlainText(content)
            self.console.append(f"Loaded: {file_path}")
            self.process_gcode()

    def clear(self):
        """Clear the program and reset the view."""
        self.editor.clear()
        self.transform = ViewTransform.identity()
        self.redraw()

    def change_preset(self, preset):
        self.viewport.set_config(ConfigManager.get_config(preset))
        self.console.append(f"Switched to {preset} colours")

    def process_gcode(self):
        """Process the current G-code with the view reset."""
        self.transform = ViewTransform.identity()
        self.redraw()
        stats = self.processor.get_statistics()
        self.console.append(
            f"Processed {stats['processing']['total_commands']} commands, "
            f"{stats['geometry']['total_segments']} segments, "
            f"{stats['processing']['dropped_arcs']} arcs dropped"
        )

    def on_travel_toggled(self, checked):
        self.processor.set_draw_travel_moves(checked)
        self.redraw()

    def on_slider_moved(self, value):
        z = value / SLIDER_SCALE
        self.z_input.setText(f"{z:g}")
        self.processor.set_display_z(z)
        self.redraw()

    def on_z_text_entered(self):
        text = self.z_input.text()
        if not self.processor.set_display_z(text):
            self.status_label.setText(f"Invalid Z layer: {text!r}")
            self.console.append(f"Rejected Z layer {text!r}, keeping Z={self.processor.display_z:g}")
            self.z_input.setText(f"{self.processor.display_z:g}")
            return

        self.z_slider.blockSignals(True)
        self.z_slider.setValue(round(self.processor.display_z * SLIDER_SCALE))
        self.z_slider.blockSignals(False)
        self.redraw()

    def on_view_changed(self, transform):
        self.transform = transform
        self.redraw()

    def redraw(self):
        """Run a full pass and hand the result to the viewport."""
        try:
            self.processor.redraw(self.editor.toPlainText(), self.transform, self.viewport)
        except RenderSurfaceError as e:
            logger.debug("Redraw skipped: %s", e)
            self.status_label.setText("Viewport not ready")
            return

        layers = self.processor.collection.get_statistics()['layers']
        if layers and self.processor.clamp_display_z(min(layers), max(layers)):
            self.z_input.setText(f"{self.processor.display_z:g}")
            self.console.append(f"Z layer moved to {self.processor.display_z:g}, the nearest layer in range")
            self.redraw()
            return

        self.update_error_display()
        self.update_statistics()
        stats = self.processor.get_statistics()
        self.status_label.setText(
            f"{stats['geometry']['visible_segments']} of "
            f"{stats['geometry']['total_segments']} segments on Z={self.processor.display_z:g}"
        )

    def update_error_display(self):
        """Update the error console with current errors."""
        errors = self.processor.get_all_errors()

        if not errors:
            self.error_console.setText("No errors found.")
            self.editor.clear_error_highlights()
            return

        error_text = []
        error_lines = set()
        for error in errors:
            severity = error.severity.value.upper()
            error_text.append(f"Line {error.line_number}: [{severity}] {error.message}")
            error_lines.add(error.line_number)

        self.error_console.setText("\n".join(error_text))
        self.editor.highlight_error_lines(list(error_lines))

    def update_statistics(self):
        """Update the statistics display."""
        stats = self.processor.get_statistics()
        geometry = stats['geometry']
        layers = geometry['layers']

        if layers:
            self.z_slider.blockSignals(True)
            self.z_slider.setRange(round(min(layers) * SLIDER_SCALE),
                                   round(max(layers) * SLIDER_SCALE))
            self.z_slider.setValue(round(self.processor.display_z * SLIDER_SCALE))
            self.z_slider.blockSignals(False)

        x, y, z = stats['machine_state']['position']
        self.stats_label.setText(f"""Statistics:
Lines: {stats['processing']['total_lines']}
Commands: {stats['processing']['total_commands']}
Dropped arcs: {stats['processing']['dropped_arcs']}
Warnings: {stats['processing']['warnings']}

Segments: {geometry['total_segments']}
Visible: {geometry['visible_segments']}
Extrude: {geometry['extrude_segments']}
Travel: {geometry['travel_segments']}
Retract: {geometry['retract_segments']}
Length: {geometry['total_length']:.2f}
Layers: {len(layers)}

End position:
X{x:.3f} Y{y:.3f} Z{z:.3f}
Mode: {stats['machine_state']['positioning_mode']}""")
