# Tkinter front end: draws the board and drives SnakeGame.tick on a timer.
from __future__ import annotations

import tkinter as tk
from tkinter import messagebox

# Support both package imports and running this file directly.
try:
    from .game_logic import (
        MAX_CELL_SIZE,
        MAX_SPEED_MS,
        MIN_CELL_SIZE,
        MIN_SPEED_MS,
        ConfigurationError,
        SnakeConfig,
        SnakeGame,
    )
except ImportError:
    from game_logic import (
        MAX_CELL_SIZE,
        MAX_SPEED_MS,
        MIN_CELL_SIZE,
        MIN_SPEED_MS,
        ConfigurationError,
        SnakeConfig,
        SnakeGame,
    )


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    UI_SCALE = 1.35
    BG = "#2C3E50"
    BOARD_BG = "#2C3E50"
    SIDEBAR_BG = "#22313f"
    GRID_COLOR = "#34495E"
    SNAKE_HEAD = "#2ECC71"
    SNAKE_BODY = "#27AE60"
    FOOD_COLOR = "#E74C3C"
    TEXT_PRIMARY = "#ECF0F1"
    TEXT_MUTED = "#BDC3C7"
    ACCENT = "#3498DB"
    BORDER_COLOR = "#7f8b99"

    GRID_PRESETS = {
        "Small (10x10)": 10,
        "Classic (15x15)": 15,
        "Medium (20x20)": 20,
        "Large (30x30)": 30,
    }
    MODES = ("Autopilot", "Manual")

    def __init__(self, root: tk.Tk, config: SnakeConfig | None = None) -> None:
        self.root = root
        self.root.title("Snake Autopilot")
        self.root.configure(bg=self.BG)
        self.root.tk.call("tk", "scaling", self.UI_SCALE)

        self.config = config if config is not None else SnakeConfig()
        self.game = SnakeGame(self.config)
        self.after_id: str | None = None  # Tkinter timer id for the game loop

        self._build_layout()
        self._bind_keys()
        self._apply_canvas_size()
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.draw()

    def _s(self, value: int) -> int:
        """Scale pixel/font values for better readability."""
        return int(round(value * self.UI_SCALE))

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar panels."""
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        container = tk.Frame(self.root, bg=self.BG)
        container.grid(row=0, column=0, sticky="nsew", padx=self._s(16), pady=self._s(16))
        container.columnconfigure(0, weight=1)
        container.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(container, bg=self.BOARD_BG, highlightthickness=0, bd=0)
        self.canvas.grid(row=0, column=0, sticky="nsew", padx=(0, self._s(16)))

        self.sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=self._s(340))
        self.sidebar.grid(row=0, column=1, sticky="ns")
        self.sidebar.grid_propagate(False)

        tk.Label(
            self.sidebar,
            text="Snake Autopilot",
            fg=self.FOOD_COLOR,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", self._s(16), "bold"),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(16), self._s(14)))

        self._build_status()
        self._build_controls()
        self._build_buttons()

    def _build_status(self) -> None:
        """Score/length/run-state labels."""
        frame = self._section("Status")
        self.score_var = tk.StringVar()
        self.length_var = tk.StringVar()
        self.state_var = tk.StringVar(value="State: Ready")

        for var in (self.score_var, self.length_var, self.state_var):
            tk.Label(
                frame,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", self._s(11)),
                anchor="w",
            ).pack(fill="x", padx=self._s(10), pady=self._s(4))

    def _build_controls(self) -> None:
        """Settings that rebuild the game state when applied."""
        frame = self._section("Settings")

        preset = next(
            (name for name, size in self.GRID_PRESETS.items() if size == self.config.grid_size),
            "Medium (20x20)",
        )
        self.grid_size_var = tk.StringVar(value=preset)
        self.cell_size_var = tk.StringVar(value=str(self.config.cell_size))
        self.speed_var = tk.StringVar(value=str(self.config.speed_ms))
        self.mode_var = tk.StringVar(value=self.MODES[0] if self.config.autopilot else self.MODES[1])

        self._add_labeled_dropdown(frame, "Mode", self.mode_var, list(self.MODES))
        self._add_labeled_dropdown(frame, "Grid Size", self.grid_size_var, list(self.GRID_PRESETS.keys()))
        self._add_labeled_spinbox(frame, "Cell Size", self.cell_size_var)
        self._add_labeled_spinbox(frame, "Speed (ms)", self.speed_var)

    def _section(self, title: str) -> tk.LabelFrame:
        frame = tk.LabelFrame(
            self.sidebar,
            text=title,
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            bd=1,
            font=("Helvetica", self._s(10), "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(14)))
        return frame

    def _add_labeled_spinbox(self, parent: tk.Widget, label: str, var: tk.StringVar) -> None:
        row = tk.Frame(parent, bg=self.SIDEBAR_BG)
        row.pack(fill="x", padx=self._s(10), pady=self._s(4))
        tk.Label(row, text=label, fg=self.TEXT_PRIMARY, bg=self.SIDEBAR_BG, font=("Helvetica", self._s(10))).pack(
            side="left"
        )
        tk.Spinbox(
            row,
            from_=0,
            to=999,
            textvariable=var,
            width=8,
            justify="center",
            bd=0,
            relief="flat",
            font=("Helvetica", self._s(10)),
        ).pack(side="right")

    def _add_labeled_dropdown(self, parent: tk.Widget, label: str, var: tk.StringVar, options: list[str]) -> None:
        row = tk.Frame(parent, bg=self.SIDEBAR_BG)
        row.pack(fill="x", padx=self._s(10), pady=self._s(4))
        tk.Label(row, text=label, fg=self.TEXT_PRIMARY, bg=self.SIDEBAR_BG, font=("Helvetica", self._s(10))).pack(
            side="left"
        )
        dropdown = tk.OptionMenu(row, var, *options)
        dropdown.config(width=14, bd=0, highlightthickness=0, font=("Helvetica", self._s(10)))
        dropdown.pack(side="right")

    def _build_buttons(self) -> None:
        """Action buttons for start/pause/reset/apply."""
        frame = tk.Frame(self.sidebar, bg=self.SIDEBAR_BG)
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(10)))

        for text, command in (
            ("Start", self.start_game),
            ("Pause", self.toggle_pause),
            ("Play Again", self.reset_game),
            ("Apply Settings", self.apply_settings),
        ):
            tk.Button(
                frame,
                text=text,
                command=command,
                fg="white",
                bg=self.ACCENT,
                activebackground="#5dade2",
                bd=0,
                relief="flat",
                font=("Helvetica", self._s(11), "bold"),
                pady=self._s(9),
                cursor="hand2",
            ).pack(fill="x", pady=self._s(4))

        self.hint_var = tk.StringVar()
        tk.Label(
            self.sidebar,
            textvariable=self.hint_var,
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", self._s(10)),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(4), self._s(10)))

    def _bind_keys(self) -> None:
        """Arrow keys / WASD steer in manual mode; spacebar pauses."""
        for keys, name in (
            (("<Up>", "w"), "up"),
            (("<Down>", "s"), "down"),
            (("<Left>", "a"), "left"),
            (("<Right>", "d"), "right"),
        ):
            for key in keys:
                self.root.bind(key, lambda _e, n=name: self.game.queue_direction(n))
        self.root.bind("<space>", lambda _e: self.toggle_pause())

    def _parse_int(self, raw: str, low: int, high: int, label: str) -> int:
        """Parse and range-check integer settings with a clear error message."""
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{label} must be an integer.")
        if not (low <= value <= high):
            raise ValueError(f"{label} must be between {low} and {high}.")
        return value

    def apply_settings(self) -> None:
        """Validate sidebar values, then rebuild the game with new config."""
        try:
            grid_size = self.GRID_PRESETS[self.grid_size_var.get()]
            cell_size = self._parse_int(self.cell_size_var.get(), MIN_CELL_SIZE, MAX_CELL_SIZE, "Cell size")
            speed_ms = self._parse_int(self.speed_var.get(), MIN_SPEED_MS, MAX_SPEED_MS, "Speed")
            autopilot = self.mode_var.get() == "Autopilot"
            config = SnakeConfig.centered(grid_size, cell_size=cell_size, speed_ms=speed_ms, autopilot=autopilot)
            game = SnakeGame(config)
        except (ValueError, KeyError) as exc:
            # ConfigurationError is a ValueError.
            messagebox.showerror("Invalid Setting", str(exc))
            return

        self._cancel_loop()
        self.config = config
        self.game = game
        self._apply_canvas_size()
        self.state_var.set("State: Ready")
        self.draw()

    def _apply_canvas_size(self) -> None:
        side_pixels = self.config.grid_size * self.config.cell_size
        self.canvas.configure(width=side_pixels, height=side_pixels)

    def _cancel_loop(self) -> None:
        """Cancel scheduled tick callback if one exists."""
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None

    def start_game(self) -> None:
        """Start or resume live ticking from current state."""
        if self.game.is_terminal():
            self.game.reset()
        self.game.running = True
        self.state_var.set("State: Running")
        self.tick()

    def toggle_pause(self) -> None:
        """Pause/resume without losing current board state."""
        if self.game.is_terminal():
            return
        self.game.running = not self.game.running
        if self.game.running:
            self.state_var.set("State: Running")
            self.tick()
        else:
            self.state_var.set("State: Paused")
            self._cancel_loop()

    def reset_game(self) -> None:
        """Reset state using current config values."""
        self._cancel_loop()
        try:
            self.game.reset()
        except ConfigurationError as exc:
            messagebox.showerror("Invalid Setting", str(exc))
            return
        self.state_var.set("State: Ready")
        self.draw()

    def tick(self) -> None:
        """Single frame of the game loop; reschedules itself only after finishing."""
        self._cancel_loop()
        if not self.game.running:
            return

        if not self.game.tick():
            self.state_var.set("State: You Win" if self.game.won else "State: Game Over")
            self.draw()
            return

        self.draw()
        self.after_id = self.root.after(self.config.speed_ms, self.tick)

    def close(self) -> None:
        self._cancel_loop()
        self.root.destroy()

    def draw(self) -> None:
        """Render grid, food, snake, status labels, and game-over overlay."""
        snap = self.game.snapshot()
        self.canvas.delete("all")
        size = self.config.grid_size
        cell = self.config.cell_size
        side = size * cell

        for i in range(size + 1):
            pos = i * cell
            self.canvas.create_line(0, pos, side, pos, fill=self.GRID_COLOR)
            self.canvas.create_line(pos, 0, pos, side, fill=self.GRID_COLOR)
        self.canvas.create_rectangle(1, 1, side - 1, side - 1, outline=self.BORDER_COLOR, width=2)

        if snap.food is not None:
            x, y = snap.food
            inset = cell // 6
            self.canvas.create_oval(
                x * cell + inset, y * cell + inset, (x + 1) * cell - inset, (y + 1) * cell - inset,
                fill=self.FOOD_COLOR, outline="",
            )

        for idx, (x, y) in enumerate(snap.snake):
            color = self.SNAKE_HEAD if idx == 0 else self.SNAKE_BODY
            self.canvas.create_rectangle(
                x * cell + 2, y * cell + 2, (x + 1) * cell - 2, (y + 1) * cell - 2, fill=color, outline=""
            )

        self.score_var.set(f"Score: {snap.score}")
        self.length_var.set(f"Length: {len(snap.snake)}")
        self.hint_var.set(
            "AI is controlling the snake" if self.config.autopilot else "Move: Arrow keys / WASD"
        )

        if snap.terminal:
            self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")
            self.canvas.create_text(
                side // 2,
                side // 2 - 12,
                text="Board Full!" if snap.won else "Game Over!",
                fill=self.FOOD_COLOR,
                font=("Helvetica", 22, "bold"),
            )
            self.canvas.create_text(
                side // 2,
                side // 2 + 20,
                text="Press Play Again or Start",
                fill=self.TEXT_MUTED,
                font=("Helvetica", 12),
            )


def run_player_gui(config: SnakeConfig | None = None) -> None:
    """Launch the Snake window (autopilot by default)."""
    root = tk.Tk()
    SnakeApp(root, config)
    root.mainloop()


def run_classic_gui() -> None:
    """Launch the keyboard-driven 15x15 variant."""
    run_player_gui(SnakeConfig.classic())


if __name__ == "__main__":
    run_player_gui()
