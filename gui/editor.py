"""
G-code editor widget with syntax highlighting, line numbers and error marks.
"""
import re
from PySide6.QtWidgets import QPlainTextEdit, QWidget, QTextEdit
from PySide6.QtGui import (QColor, QTextFormat, QPainter, QFont, QSyntaxHighlighter,
                           QTextCharFormat)
from PySide6.QtCore import Qt, QRect, Signal, QSize


def _char_format(color, bold=False, italic=False):
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    if bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    fmt.setFontItalic(italic)
    return fmt


class ToolpathHighlighter(QSyntaxHighlighter):
    """Colours motion commands and the words the viewer reads."""

    WORD_PATTERN = re.compile(r'([A-Za-z])\s*([+-]?(?:\d+\.?\d*|\.\d+))')

    def __init__(self, document):
        super().__init__(document)

        self.linear_format = _char_format('#2f9e44', bold=True)   # G0/G1
        self.arc_format = _char_format('#e67700', bold=True)      # G2/G3
        self.mode_format = _char_format('#1971c2', bold=True)     # G90/G91
        self.gcode_format = _char_format('#1c7ed6')
        self.mcode_format = _char_format('#c2255c')
        self.xy_format = _char_format('#c92a2a')
        self.z_format = _char_format('#5f3dc4')
        self.e_format = _char_format('#0b7285')
        self.arc_param_format = _char_format('#862e9c')           # I/J/R
        self.other_format = _char_format('#868e96')
        self.comment_format = _char_format('#6c757d', italic=True)

    def highlightBlock(self, text):
        """Apply syntax highlighting to a block of text."""
        comment_start = len(text)
        semicolon = text.find(';')
        if semicolon >= 0:
            comment_start = semicolon
            self.setFormat(semicolon, len(text) - semicolon, self.comment_format)

        for match in re.finditer(r'\([^)]*\)?', text[:comment_start]):
            self.setFormat(match.start(), match.end() - match.start(), self.comment_format)

        code = re.sub(r'\([^)]*\)?', lambda m: ' ' * len(m.group(0)), text[:comment_start])
        for match in self.WORD_PATTERN.finditer(code):
            self.setFormat(match.start(), match.end() - match.start(),
                           self._format_for(match.group(1).upper(), match.group(2)))

    def _format_for(self, letter, value):
        if letter == 'G':
            try:
                number = float(value)
            except ValueError:
                return self.gcode_format
            if number in (0, 1):
                return self.linear_format
            if number in (2, 3):
                return self.arc_format
            if number in (90, 91):
                return self.mode_format
            return self.gcode_format
        if letter == 'M':
            return self.mcode_format
        if letter in 'XY':
            return self.xy_format
        if letter == 'Z':
            return self.z_format
        if letter == 'E':
            return self.e_format
        if letter in 'IJR':
            return self.arc_param_format
        return self.other_format


class LineNumberArea(QWidget):
    """Line number area widget for the editor."""

    def __init__(self, editor):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return QSize(self.editor.lineNumberAreaWidth(), 0)

    def paintEvent(self, event):
        self.editor.lineNumberAreaPaintEvent(event)


class Editor(QPlainTextEdit):
    """G-code editor that reports which lines are selected."""

    selectionChangedSignal = Signal(list)

    def __init__(self, parent=None):
        super().__init__(parent)

        self.lineNumberArea = LineNumberArea(self)
        self.error_lines = set()

        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setPlaceholderText("Enter G-code here")
        font = QFont("Courier New", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        self.setFont(font)

        self.highlighter = ToolpathHighlighter(self.document())

        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.update_extra_selections)
        self.selectionChanged.connect(self.on_selection_changed)
        self.updateLineNumberAreaWidth(0)

    def highlight_error_lines(self, lines):
        """Highlight lines with errors."""
        self.error_lines = set(lines) if lines else set()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def clear_error_highlights(self):
        self.highlight_error_lines([])

    def update_extra_selections(self):
        """Update current-line and error-line backgrounds."""
        selections = []

        cursor = self.textCursor()
        if not cursor.hasSelection():
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor('#f1f3f5'))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = cursor
            selections.append(selection)

        for line_num in self.error_lines:
            block = self.document().findBlockByNumber(line_num - 1)
            if line_num > 0 and block.isValid():
                selection = QTextEdit.ExtraSelection()
                selection.format.setBackground(QColor('#ffe3e3'))
                selection.format.setProperty(QTextFormat.FullWidthSelection, True)
                selection.cursor = self.textCursor()
                selection.cursor.setPosition(block.position())
                selections.append(selection)

        self.setExtraSelections(selections)

    def on_selection_changed(self):
        """Emit the 1-based line numbers covered by the selection."""
        cursor = self.textCursor()
        if not cursor.hasSelection():
            self.selectionChangedSignal.emit([])
            return

        start_block = self.document().findBlock(cursor.selectionStart())
        end_pos = cursor.selectionEnd()
        end_block = self.document().findBlock(end_pos)

        # Selection ending at the start of a line does not include that line
        if end_pos == end_block.position() and end_block.previous().isValid():
            end_block = end_block.previous()

        lines = list(range(start_block.blockNumber() + 1, end_block.blockNumber() + 2))
        self.selectionChangedSignal.emit(lines)

    # Line number area methods
    def lineNumberAreaWidth(self):
        digits = len(str(max(1, self.blockCount())))
        return 6 + self.fontMetrics().horizontalAdvance('9') * digits

    def updateLineNumberAreaWidth(self, _):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

    def updateLineNumberArea(self, rect, dy):
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height()))

    def lineNumberAreaPaintEvent(self, event):
        """Paint the line number area."""
        painter = QPainter(self.lineNumberArea)
        painter.fillRect(event.rect(), QColor('#e9ecef'))

        block = self.firstVisibleBlock()
        block_number = block.blockNumber()
        top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
        bottom = top + self.blockBoundingRect(block).height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                if (block_number + 1) in self.error_lines:
                    painter.setPen(QColor('#e03131'))
                else:
                    painter.setPen(QColor('#868e96'))
                painter.drawText(0, int(top), self.lineNumberArea.width() - 3,
                                 self.fontMetrics().height(), Qt.AlignRight, str(block_number + 1))

            block = block.next()
            top = bottom
            bottom = top + self.blockBoundingRect(block).height()
            block_number += 1
        painter.end()
