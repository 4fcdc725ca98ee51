"""
Control UI Module for AI Puzzle Suite

Provides a PyQt5-based window for picking a puzzle, editing its board,
running the solver and stepping through the solution.
"""

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout,
    QComboBox, QGridLayout
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from puzzle_suite.puzzles import PuzzleId, get_puzzle_info
from puzzle_suite.search import Solved
from puzzle_suite.session import AppState, SessionState


class ControlWindow(QMainWindow):
    """
    Main window of the AI Puzzle Suite.

    Board edits go straight to the active session. Solving is delegated to
    the application through solve_requested so it can run on a worker.
    """

    # Signals for worker thread communication
    solve_requested = pyqtSignal()
    stop_requested = pyqtSignal()
    shutdown_requested = pyqtSignal()
    puzzle_changed = pyqtSignal(str)  # Emits puzzle id when changed

    def __init__(self, app_state: AppState):
        super().__init__()
        self.app_state = app_state
        self._is_solving = False
        self._selected_cell = 0
        self._cell_buttons = []
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("AI Puzzle Suite")
        self.setMinimumSize(420, 560)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(20, 20, 20, 20)
        central_widget.setLayout(layout)

        # Puzzle selector
        puzzle_layout = QHBoxLayout()
        puzzle_label = QLabel("Puzzle:")
        puzzle_label.setFont(QFont("", 9))
        puzzle_layout.addWidget(puzzle_label)

        self.puzzle_combo = QComboBox()
        for info in get_puzzle_info():
            self.puzzle_combo.addItem(info["name"], info["id"])
        puzzle_layout.addWidget(self.puzzle_combo, 1)
        layout.addLayout(puzzle_layout)

        self.summary_label = QLabel("")
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        # Board area, rebuilt whenever the puzzle changes
        self.board_widget = QWidget()
        self.board_layout = QGridLayout()
        self.board_layout.setSpacing(4)
        self.board_widget.setLayout(self.board_layout)
        layout.addWidget(self.board_widget, 1)

        # Command buttons
        button_layout = QHBoxLayout()
        self.solve_button = QPushButton("Solve")
        self.step_button = QPushButton("Step")
        self.shuffle_button = QPushButton("Shuffle")
        self.reset_button = QPushButton("Reset")
        self.mode_button = QPushButton("")
        for button, handler in (
            (self.solve_button, self._on_solve_clicked),
            (self.step_button, self._on_step_clicked),
            (self.shuffle_button, self._on_shuffle_clicked),
            (self.reset_button, self._on_reset_clicked),
            (self.mode_button, self._on_mode_clicked),
        ):
            button.setMinimumHeight(35)
            button.clicked.connect(handler)
            button_layout.addWidget(button)
        layout.addLayout(button_layout)

        # Status and statistics
        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        status_font = QFont()
        status_font.setPointSize(10)
        status_font.setBold(True)
        self.status_label.setFont(status_font)
        layout.addWidget(self.status_label)

        self.cost_label = QLabel("Cost:     --")
        self.expanded_label = QLabel("Expanded: --")
        self.visited_label = QLabel("Visited:  --")
        self.time_label = QLabel("Time:     --")

        info_font = QFont()
        info_font.setPointSize(9)
        for label in [self.cost_label, self.expanded_label, self.visited_label, self.time_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        self._apply_styles()
        self._select_combo(self.app_state.active)
        self.puzzle_combo.currentIndexChanged.connect(self._on_puzzle_changed)
        self.refresh()

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #4CAF50;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 6px;
            }
            QPushButton:hover {
                background-color: #45a049;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    def _select_combo(self, puzzle_id: PuzzleId):
        for i in range(self.puzzle_combo.count()):
            if self.puzzle_combo.itemData(i) == puzzle_id.value:
                self.puzzle_combo.setCurrentIndex(i)
                return

    # -- Board rendering -------------------------------------------------

    def _clear_board(self):
        while self.board_layout.count():
            item = self.board_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._cell_buttons = []

    def _add_cell(self, row: int, col: int, text: str, handler, highlighted: bool = False):
        button = QPushButton(text)
        button.setMinimumSize(40, 40)
        button.setFont(QFont("", 14))
        color = "#1976d2" if highlighted else "#607d8b"
        button.setStyleSheet(f"QPushButton {{ background-color: {color}; color: white; }}")
        button.clicked.connect(handler)
        self.board_layout.addWidget(button, row, col)
        self._cell_buttons.append(button)

    def _render_board(self):
        self._clear_board()
        session = self.app_state.session
        state = session.state
        puzzle = self.app_state.active

        if puzzle == PuzzleId.EIGHT_PUZZLE:
            tiles = state.goal if session.editing_goal else state.tiles
            for idx, tile in enumerate(tiles):
                self._add_cell(idx // 3, idx % 3, "" if tile == 0 else str(tile),
                               lambda _=False, i=idx: self._on_cell_clicked(i),
                               highlighted=idx == self._selected_cell)
        elif puzzle == PuzzleId.XOR_TIC_TAC_TOE:
            for idx, cell in enumerate(state.cells):
                self._add_cell(idx // 3, idx % 3, cell.value if cell else "",
                               lambda _=False, i=idx: self._on_cell_clicked(i))
        elif puzzle == PuzzleId.EIGHT_QUEENS:
            for row in range(8):
                for col in range(8):
                    self._add_cell(row, col, "Q" if state.queens[row] == col else "",
                                   lambda _=False, r=row, c=col: self._on_square_clicked(r, c),
                                   highlighted=(row + col) % 2 == 0)
        elif puzzle == PuzzleId.MISSIONARIES_CANNIBALS:
            river = QLabel(state.render())
            river.setFont(QFont("Monospace", 10))
            self.board_layout.addWidget(river, 0, 0, 1, 2)
            for idx, move in enumerate(session.valid_moves()):
                self._add_cell(1 + idx // 2, idx % 2, f"Send {move.describe()}",
                               lambda _=False, m=move: self._on_boat_clicked(m))

    def refresh(self):
        """Redraw the board, status and statistics from the active session."""
        session = self.app_state.session
        info = {i["id"]: i for i in get_puzzle_info()}[self.app_state.active.value]
        self.summary_label.setText(info["summary"])
        self._render_board()
        self.status_label.setText(session.status)

        if self.app_state.active == PuzzleId.EIGHT_PUZZLE:
            self.mode_button.setText("Edit Start" if session.editing_goal else "Edit Goal")
            self.mode_button.setVisible(True)
        elif self.app_state.active == PuzzleId.XOR_TIC_TAC_TOE:
            self.mode_button.setText("Game Mode" if session.setup_mode else "Setup Mode")
            self.mode_button.setVisible(True)
        else:
            self.mode_button.setVisible(False)

        self.step_button.setEnabled(session.session_state == SessionState.REPLAYING)
        self.set_stats(session.outcome)

    def set_stats(self, outcome):
        """
        Update the statistics labels.

        Args:
            outcome: Solved, Exhausted or None
        """
        if outcome is None:
            self.cost_label.setText("Cost:     --")
            self.expanded_label.setText("Expanded: --")
            self.visited_label.setText("Visited:  --")
            self.time_label.setText("Time:     --")
            return
        stats = outcome.stats
        cost = str(outcome.cost) if isinstance(outcome, Solved) else "unsolved"
        self.cost_label.setText(f"Cost:     {cost}")
        self.expanded_label.setText(f"Expanded: {stats.expanded}")
        self.visited_label.setText(f"Visited:  {stats.visited}")
        self.time_label.setText(f"Time:     {stats.computation_time_ms:.1f} ms")

    def set_progress(self, expanded: int, frontier_size: int):
        self.status_label.setText(f"Solving... {expanded} expanded, {frontier_size} in frontier")

    def set_solving(self, is_solving: bool):
        """
        Lock editing controls while a search runs.

        Args:
            is_solving: True while the worker is busy
        """
        self._is_solving = is_solving
        self.solve_button.setText("Stop" if is_solving else "Solve")
        for widget in [self.puzzle_combo, self.shuffle_button, self.reset_button,
                       self.mode_button, self.step_button, self.board_widget]:
            widget.setEnabled(not is_solving)
        if not is_solving:
            self.refresh()

    # -- Event handlers --------------------------------------------------

    def _on_puzzle_changed(self, index: int):
        puzzle_id = self.puzzle_combo.itemData(index)
        if puzzle_id:
            self.app_state.select_puzzle(puzzle_id)
            self._selected_cell = 0
            self.puzzle_changed.emit(puzzle_id)
            self.refresh()

    def _on_cell_clicked(self, index: int):
        session = self.app_state.session
        if self.app_state.active == PuzzleId.EIGHT_PUZZLE:
            self._selected_cell = index
            session.status = f"Selected cell {index + 1}. Type 0-8 to place a number."
        else:
            session.place_cell(index)
        self.refresh()

    def _on_square_clicked(self, row: int, col: int):
        self.app_state.session.toggle_queen(row, col)
        self.refresh()

    def _on_boat_clicked(self, move):
        self.app_state.session.apply_move(move)
        self.refresh()

    def _on_solve_clicked(self):
        if self._is_solving:
            self.stop_requested.emit()
        else:
            self.solve_requested.emit()

    def _on_step_clicked(self):
        self.app_state.session.advance_solution()
        self.refresh()

    def _on_shuffle_clicked(self):
        self.app_state.session.shuffle()
        self.refresh()

    def _on_reset_clicked(self):
        self.app_state.session.reset()
        self.refresh()

    def _on_mode_clicked(self):
        session = self.app_state.session
        if self.app_state.active == PuzzleId.EIGHT_PUZZLE:
            session.toggle_editing_goal()
        elif self.app_state.active == PuzzleId.XOR_TIC_TAC_TOE:
            session.toggle_setup_mode()
        self.refresh()

    def keyPressEvent(self, event):
        """Digits edit the selected 8-Puzzle cell; Space steps the solution."""
        if self._is_solving:
            return
        text = event.text()
        if self.app_state.active == PuzzleId.EIGHT_PUZZLE and text.isdigit() and int(text) <= 8:
            self.app_state.session.place_number(self._selected_cell, int(text))
            self.refresh()
        elif event.key() == Qt.Key_Space:
            self._on_step_clicked()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested signal before closing to allow
        graceful cleanup of worker threads.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
