"""Full-screen timer UI and its event loop."""

import time
from datetime import datetime
from typing import Protocol

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.table import Table
from rich.text import Text

from pom_cli.utils.durations import format_clock, format_duration

from .controller import TimerController
from .state import Intent, SessionSummary

TICK_SECONDS = 1.0
BAR_WIDTH = 40

HELP_TEXT = (
    "Shortcuts:\n"
    "  [space/p] Pause / Resume\n"
    "  [r]       Rename Session\n"
    "  [?]       Hide Help\n"
    "  [q]       Quit"
)
HELP_HINT = "[?] show help • [q] quit"


class Clock(Protocol):
    def now(self) -> datetime: ...

    def monotonic(self) -> float: ...


class KeySource(Protocol):
    def read_key(self, timeout: float) -> str | None: ...


class IntentSink(Protocol):
    def dispatch(self, intents: list[Intent]) -> None: ...


class RealClock:
    """Wall clock for timestamps, monotonic clock for tick scheduling."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def monotonic(self) -> float:
        return time.monotonic()


def bar_width(console_width: int) -> int:
    """Shrink the bar on terminals narrower than BAR_WIDTH plus a margin."""
    return max(1, min(BAR_WIDTH, console_width - 10))


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, controller: TimerController, now: datetime) -> Layout:
        """Create the timer layout with all components."""
        state = controller.state
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=8),
        )

        title = "🍅 Pomodoro Timer"
        if state.label:
            title += f" - {state.label}"
        header_text = Text(title, style="bold magenta", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(controller, now), vertical="middle")
        )
        layout["footer"].update(Align.center(self._create_footer_content(controller)))
        return layout

    def _create_body_content(self, controller: TimerController, now: datetime) -> Group:
        state = controller.state

        status = Text("Status: ", justify="center")
        status.append(state.phase.label, style="blue")
        if state.is_paused:
            status.append(" (PAUSED)", style="yellow")

        remaining = controller.remaining_at(now)
        timer_color = "yellow" if state.is_paused else "cyan"
        timer_text = Text("Time: ", justify="center")
        timer_text.append(format_clock(remaining), style=f"bold {timer_color}")

        fraction = controller.progress(now)
        bar = Text(justify="center")
        bar.append(progress_bar(fraction, bar_width(self.console.width)), style="green")
        bar.append(f"  {int(fraction * 100)}%", style="dim")

        sessions = Text(
            f"Sessions Completed: {state.completed_focus_count}", justify="center"
        )

        return Group(status, timer_text, Text(""), bar, Text(""), sessions)

    def _create_footer_content(self, controller: TimerController) -> Group:
        state = controller.state
        if state.is_renaming:
            prompt = Text("Rename Session:\n", justify="center")
            prompt.append(f"> {state.edit_buffer}", style="bold")
            prompt.append("█", style="blink")
            hint = Text("(Enter to save, Esc to cancel)", style="dim", justify="center")
            return Group(prompt, Text(""), hint)
        if state.show_help:
            return Group(Text(HELP_TEXT, style="dim"))
        return Group(Text(HELP_HINT, style="dim", justify="center"))

    def run(
        self,
        controller: TimerController,
        dispatcher: IntentSink,
        keyboard: KeySource | None = None,
        clock: Clock | None = None,
        screen: bool = True,
    ) -> SessionSummary:
        """
        Run the timer until the user quits.

        One event is handled at a time: either a keypress or, when the wait
        for input times out, the 1 Hz tick. Intents returned by the
        controller go to ``dispatcher`` without waiting for them.
        """
        clock = clock or RealClock()
        own_keyboard = keyboard is None
        if keyboard is None:
            from .keyboard import KeyboardHandler

            keyboard = KeyboardHandler()

        try:
            with Live(
                self.render(controller, clock.now()),
                console=self.console,
                auto_refresh=False,
                screen=screen,
            ) as live:
                next_tick = clock.monotonic() + TICK_SECONDS
                while not controller.quitting:
                    key = keyboard.read_key(max(0.0, next_tick - clock.monotonic()))
                    now = clock.now()
                    intents: list[Intent] = []
                    if key is not None:
                        intents.extend(controller.on_key(key, now))

                    current = clock.monotonic()
                    if current >= next_tick:
                        intents.extend(controller.on_tick(now))
                        # Skip ticks missed while suspended.
                        while next_tick <= current:
                            next_tick += TICK_SECONDS

                    if intents:
                        dispatcher.dispatch(intents)
                    live.update(self.render(controller, now), refresh=True)
        except KeyboardInterrupt:
            controller.on_quit(clock.now())
        finally:
            if own_keyboard:
                keyboard.stop()

        return controller.summary(clock.now())


def summary_table(summary: SessionSummary) -> Table:
    """Key/value table printed when ``pom start`` exits."""
    table = Table(title="🍅 Session Summary", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    if summary.name:
        table.add_row("Name", summary.name)
    table.add_row("Completed Sessions", str(summary.completed_sessions))
    table.add_row("Started", summary.start_time.strftime("%Y-%m-%d %H:%M:%S"))
    table.add_row("Ended", summary.end_time.strftime("%Y-%m-%d %H:%M:%S"))
    table.add_row("Elapsed", format_duration(summary.end_time - summary.start_time))
    return table


def show_summary(summary: SessionSummary, console: Console | None = None):
    """Print the exit summary."""
    console = console or Console()
    console.print(summary_table(summary))
