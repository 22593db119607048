"""
OpenGL viewport that renders draw segments in 2D.
"""
from PySide6.QtOpenGLWidgets import QOpenGLWidget
from PySide6.QtCore import Qt, Signal
from OpenGL.GL import *
from core.geometry import ArcSegment, LineSegment, arc_points
from core.view import ViewTransform
from config.viewer_config import ConfigManager

HIGHLIGHT_COLOR = (1.0, 0.8, 0.0)


class Viewport(QOpenGLWidget):
    """Top-down view of the toolpath. Pan with the left button, zoom with the wheel."""

    viewTransformChanged = Signal(object)
    surfaceReady = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)

        self.segments = []
        self.transform = ViewTransform.identity()
        self.config = ConfigManager.get_config("light")
        self.highlighted_lines = set()

        self._gl_ready = False
        self._drag_origin = None  # (QPoint, ViewTransform)

    # Rendering backend interface

    def is_ready(self):
        """True once the GL context exists and segments can be drawn."""
        return self._gl_ready and self.isValid()

    def render(self, segments, transform):
        """Replace the displayed segments and schedule a repaint."""
        self.segments = list(segments)
        self.transform = transform
        self.update()

    def set_config(self, config):
        self.config = config
        if self._gl_ready:
            self.makeCurrent()
            glClearColor(*self.config.background, 1.0)
            self.doneCurrent()
        self.update()

    def highlight_lines(self, line_numbers):
        """Highlight segments from specific G-code lines."""
        self.highlighted_lines = set(line_numbers) if line_numbers else set()
        self.update()

    # GL callbacks

    def initializeGL(self):
        """Setup OpenGL context."""
        glClearColor(*self.config.background, 1.0)
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_LINE_SMOOTH)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        self._gl_ready = True
        self.surfaceReady.emit()

    def resizeGL(self, w, h):
        """Pixel-space projection with Y pointing up."""
        glViewport(0, 0, w, h)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, max(w, 1), 0, max(h, 1), -1, 1)

    def paintGL(self):
        """Main render loop."""
        glClear(GL_COLOR_BUFFER_BIT)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

        w, h = self.width(), self.height()
        dx, dy = self.transform.translate

        # Screen drags are Y-down, the projection is Y-up
        glTranslatef(dx, -dy, 0)
        self.draw_crosshair(w, h)

        glTranslatef(w / 2.0, h / 2.0, 0)
        glScalef(self.transform.zoom, self.transform.zoom, 1.0)

        # glLineWidth is in pixels, so strokes stay the same width at any zoom
        glLineWidth(self.config.line_width)
        for segment in self.segments:
            if segment.visible:
                self.draw_segment(segment)

    def draw_crosshair(self, w, h):
        """Dashed axis lines through the model origin."""
        on, off = self.config.crosshair_dash
        pattern = int('1' * on + '0' * off, 2)
        repeat = max(1, 16 // (on + off))
        pattern_bits = 0
        for _ in range(repeat):
            pattern_bits = (pattern_bits << (on + off)) | pattern

        glLineWidth(1.0)
        glColor3f(*self.config.crosshair_color)
        glLineStipple(1, pattern_bits & 0xFFFF)
        glEnable(GL_LINE_STIPPLE)

        glBegin(GL_LINES)
        glVertex2f(-w, h / 2.0)
        glVertex2f(2 * w, h / 2.0)
        glVertex2f(w / 2.0, -h)
        glVertex2f(w / 2.0, 2 * h)
        glEnd()

        glDisable(GL_LINE_STIPPLE)

    def draw_segment(self, segment):
        if segment.line_number in self.highlighted_lines:
            glColor3f(*HIGHLIGHT_COLOR)
        else:
            glColor3f(*self.config.color_for(segment.color))

        if isinstance(segment, LineSegment):
            glBegin(GL_LINES)
            glVertex2f(segment.start.x, segment.start.y)
            glVertex2f(segment.end.x, segment.end.y)
            glEnd()
        elif isinstance(segment, ArcSegment):
            glBegin(GL_LINE_STRIP)
            for point in arc_points(segment, self.config.arc_step_degrees):
                glVertex2f(point.x, point.y)
            glEnd()

    # Navigation

    def mousePressEvent(self, event):
        if event.buttons() & Qt.LeftButton:
            self._drag_origin = (event.position().toPoint(), self.transform)

    def mouseMoveEvent(self, event):
        if self._drag_origin is None or not event.buttons() & Qt.LeftButton:
            return
        start, start_transform = self._drag_origin
        pos = event.position().toPoint()
        delta = pos - start
        self.viewTransformChanged.emit(start_transform.panned(delta.x(), delta.y()))

    def mouseReleaseEvent(self, event):
        self._drag_origin = None

    def wheelEvent(self, event):
        # One wheel notch (120) is one zoom step
        notches = event.angleDelta().y() / 120.0
        wheel_delta = -notches * self.config.wheel_divisor
        self.viewTransformChanged.emit(
            self.transform.zoomed(wheel_delta, self.config.zoom_step, self.config.wheel_divisor)
        )
